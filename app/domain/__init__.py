"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import HierarchyLevel, WebAppRole
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CascadeException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects import IdListDiff, ImageContentType, StorageKey

__all__ = [
    # Enums
    "HierarchyLevel",
    "WebAppRole",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "CascadeException",
    "ResourceNotFoundException",
    "ValidationException",
    # Value objects
    "IdListDiff",
    "ImageContentType",
    "StorageKey",
]
