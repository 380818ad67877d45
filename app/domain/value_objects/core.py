"""Domain value objects for the Cascade application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class IdListDiff:
    """Difference between the current and the desired list of ids.

    Used for the diff-based updates of supervision edges and role occupants:
    only changed entries are touched. Order of first appearance is kept.
    """

    added: tuple[str, ...]
    removed: tuple[str, ...]

    @classmethod
    def between(cls, current: Iterable[str], desired: Iterable[str]) -> IdListDiff:
        current_ids = list(dict.fromkeys(current))
        desired_ids = list(dict.fromkeys(desired))
        current_set = set(current_ids)
        desired_set = set(desired_ids)
        return cls(
            added=tuple(i for i in desired_ids if i not in current_set),
            removed=tuple(i for i in current_ids if i not in desired_set),
        )

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.removed


@dataclass(frozen=True)
class StorageKey:
    """Object storage key of a file attached to a record: "{owner_id}/{file_name}".

    file_name must be a plain name (no path separators, not "." or "..").
    """

    owner_id: str
    file_name: str

    def __post_init__(self) -> None:
        if not self.owner_id:
            raise ValueError("Storage key owner must be a non-empty string")
        if not self.file_name or self.file_name in {".", ".."}:
            raise ValueError("File name must be a non-empty string")
        if "/" in self.file_name or "\\" in self.file_name:
            raise ValueError("File name must not contain path separators")

    @property
    def value(self) -> str:
        return f"{self.owner_id}/{self.file_name}"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ImageContentType:
    """Content type accepted for profile images."""

    ALLOWED: ClassVar[dict[str, str]] = {
        "image/jpeg": "jpg",
        "image/png": "png",
    }

    value: str

    def __post_init__(self) -> None:
        if self.value not in self.ALLOWED:
            raise ValueError("Only JPEG and PNG images are allowed.")

    @property
    def extension(self) -> str:
        return self.ALLOWED[self.value]
