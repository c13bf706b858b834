"""POSIX permission bits and the owner/group/other access evaluator.

Exactly one identity class applies to a principal for a given object:
the owner class if the principal owns it, otherwise the group class if
the principal belongs to the object's group, otherwise the other class.
Only that class's bit is consulted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .metadata import fetch_status
from .utils import parent_path

if TYPE_CHECKING:
    from .protocol import RemoteFileSystemClient
    from .types import FileStatus, Principal

logger = logging.getLogger(__name__)


class Access(str, Enum):
    """Kind of access being requested."""

    READ = "read"
    WRITE = "write"
    EXECUTE = "execute"


class IdentityClass(str, Enum):
    """Which permission triple applies to a principal."""

    OWNER = "user"
    GROUP = "group"
    OTHER = "others"


# =============================================================================
# Permission bits
# =============================================================================


@dataclass(frozen=True)
class PermissionTriple:
    """One r/w/x triple."""

    read: bool = False
    write: bool = False
    execute: bool = False

    @classmethod
    def from_octal(cls, digit: int) -> PermissionTriple:
        return cls(read=bool(digit & 4), write=bool(digit & 2), execute=bool(digit & 1))

    def to_octal(self) -> int:
        return (4 if self.read else 0) | (2 if self.write else 0) | (1 if self.execute else 0)

    def allows(self, access: Access) -> bool:
        if access is Access.READ:
            return self.read
        if access is Access.WRITE:
            return self.write
        return self.execute

    def __str__(self) -> str:
        return (
            ("r" if self.read else "-")
            + ("w" if self.write else "-")
            + ("x" if self.execute else "-")
        )


@dataclass(frozen=True)
class PermissionBits:
    """A 9-bit owner/group/other permission set.

    Examples:
        PermissionBits.from_mode(0o640).group_read -> True
        str(PermissionBits.from_symbolic("rwxr-x---")) -> "rwxr-x---"
    """

    owner: PermissionTriple = PermissionTriple()
    group: PermissionTriple = PermissionTriple()
    other: PermissionTriple = PermissionTriple()

    @classmethod
    def from_mode(cls, mode: int) -> PermissionBits:
        """Build from an integer mode; only the low 9 bits are used."""
        return cls(
            owner=PermissionTriple.from_octal((mode >> 6) & 7),
            group=PermissionTriple.from_octal((mode >> 3) & 7),
            other=PermissionTriple.from_octal(mode & 7),
        )

    @classmethod
    def from_symbolic(cls, text: str) -> PermissionBits:
        """Build from a 9-character ``rwxrwxrwx`` string (``-`` for unset).

        A leading file-type character (``d``, ``-``) of a 10-character
        ``ls``-style string is ignored.
        """
        if len(text) == 10:
            text = text[1:]
        if len(text) != 9:
            raise ValueError(f"Invalid permission string: {text!r}")

        triples = []
        for i in range(3):
            chunk = text[i * 3 : i * 3 + 3]
            for pos, (flag, allowed) in enumerate(zip(chunk, "rwx", strict=True)):
                if flag not in (allowed, "-"):
                    raise ValueError(
                        f"Invalid permission string: {text!r} (bad character at {i * 3 + pos})"
                    )
            triples.append(
                PermissionTriple(
                    read=chunk[0] == "r",
                    write=chunk[1] == "w",
                    execute=chunk[2] == "x",
                )
            )
        return cls(owner=triples[0], group=triples[1], other=triples[2])

    def to_mode(self) -> int:
        return (self.owner.to_octal() << 6) | (self.group.to_octal() << 3) | self.other.to_octal()

    def for_class(self, identity: IdentityClass) -> PermissionTriple:
        if identity is IdentityClass.OWNER:
            return self.owner
        if identity is IdentityClass.GROUP:
            return self.group
        return self.other

    @property
    def owner_read(self) -> bool:
        return self.owner.read

    @property
    def owner_write(self) -> bool:
        return self.owner.write

    @property
    def owner_execute(self) -> bool:
        return self.owner.execute

    @property
    def group_read(self) -> bool:
        return self.group.read

    @property
    def group_write(self) -> bool:
        return self.group.write

    @property
    def group_execute(self) -> bool:
        return self.group.execute

    @property
    def other_read(self) -> bool:
        return self.other.read

    @property
    def other_write(self) -> bool:
        return self.other.write

    @property
    def other_execute(self) -> bool:
        return self.other.execute

    def __str__(self) -> str:
        return f"{self.owner}{self.group}{self.other}"


# =============================================================================
# Evaluation
# =============================================================================


def identity_class(principal: Principal, owner: str | None, group: str | None) -> IdentityClass:
    """Pick the single identity class that applies to *principal*."""
    if principal.name == owner:
        return IdentityClass.OWNER
    if principal.is_member_of(group):
        return IdentityClass.GROUP
    return IdentityClass.OTHER


def check_access(principal: Principal, status: FileStatus, access: Access) -> bool:
    """Decide *access* for *principal* against an already fetched status.

    The first matching identity class is final: an owner denied by the
    owner bits is denied even if the group or other bits would allow.
    """
    identity = identity_class(principal, status.owner, status.group)
    allowed = status.permission.for_class(identity).allows(access)
    if allowed:
        logger.debug(
            "PERMISSIONS: %s - %s allowed for %s", status.path, access.value, identity.value
        )
    else:
        logger.debug("PERMISSIONS: %s - %s denied", status.path, access.value)
    return allowed


class PermissionEvaluator:
    """Fetches remote status and evaluates POSIX-style access for a principal.

    Stateless apart from the injected client; every call goes back to
    the remote filesystem.
    """

    def __init__(self, client: RemoteFileSystemClient) -> None:
        self._client = client

    def can_read(self, principal: Principal, path: str) -> bool:
        """Read check.  A path whose status cannot be fetched is unreadable."""
        status = fetch_status(self._client, path)
        if status is None:
            logger.debug("PERMISSIONS: %s - read denied (no status)", path)
            return False
        return check_access(principal, status, Access.READ)

    def can_write(self, principal: Principal, path: str) -> bool:
        """Write check.

        If the status of *path* cannot be fetched, the check is made
        against the nearest ancestor whose status can be fetched, so
        that creating a new object is allowed in a writable directory.
        An explicit deny never falls back.
        """
        current = path
        while True:
            status = fetch_status(self._client, current)
            if status is not None:
                return check_access(principal, status, Access.WRITE)
            if current == "/":
                logger.debug("PERMISSIONS: %s - write denied (root unavailable)", path)
                return False
            current = parent_path(current)
            logger.debug("PERMISSIONS: %s - checking write on parent %s", path, current)

    def can_delete(self, principal: Principal, path: str) -> bool:
        return self.can_write(principal, path)
