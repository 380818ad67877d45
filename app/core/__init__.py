"""Core: config, constants, logging and application bootstrap.

Single place for settings and shared constants.
"""

from app.core.config import get_settings

__all__ = ["get_settings"]
