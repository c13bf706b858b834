"""Value types: Principal and FileStatus."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .permissions import PermissionBits


@dataclass(frozen=True)
class Principal:
    """The identity on whose behalf file operations are performed."""

    name: str
    primary_group: str
    groups: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # A bare string is one group name, not an iterable of characters.
        groups = {self.groups} if isinstance(self.groups, str) else self.groups
        object.__setattr__(self, "groups", frozenset(groups))

    def is_member_of(self, group: str | None) -> bool:
        """True if *group* is the primary group or one of the supplementary groups."""
        if group is None:
            return False
        return group == self.primary_group or group in self.groups


@dataclass(frozen=True)
class FileStatus:
    """Status record returned by the remote filesystem for one path."""

    path: str
    is_directory: bool
    owner: str
    group: str
    permission: PermissionBits
    size: int = 0
    modification_time: int = 0  # epoch millis

    @property
    def is_file(self) -> bool:
        return not self.is_directory
