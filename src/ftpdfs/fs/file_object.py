"""VirtualFile — one remote path as seen by the file-transfer server.

A ``VirtualFile`` is a view, not a snapshot: every attribute and
permission query goes back to the remote filesystem.  Remote failures
are logged and turned into ``False``/``0``/``None``; only the two
stream-opening methods raise, because a caller cannot proceed without
a stream.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, BinaryIO

from .exceptions import REMOTE_ERRORS, AccessDeniedError, StorageError
from .metadata import fetch_status
from .permissions import PermissionEvaluator
from .utils import normalize_path, parent_path, short_name

if TYPE_CHECKING:
    from .permissions import PermissionBits
    from .protocol import RemoteFileSystemClient
    from .types import Principal

logger = logging.getLogger(__name__)

DIRECTORY_LINK_COUNT = 3
FILE_LINK_COUNT = 1


class VirtualFile:
    """Protocol-facing handle for a single path on the remote filesystem.

    Usage::

        f = VirtualFile("/data/report.csv", principal, client)
        if f.can_read():
            with f.open_for_read() as src:
                ...
    """

    def __init__(
        self,
        path: str,
        principal: Principal,
        client: RemoteFileSystemClient,
        *,
        evaluator: PermissionEvaluator | None = None,
    ) -> None:
        self._path = normalize_path(path)
        self._principal = principal
        self._client = client
        self._evaluator = evaluator or PermissionEvaluator(client)

    # =========================================================================
    # Identity
    # =========================================================================

    @property
    def path(self) -> str:
        return self._path

    @property
    def principal(self) -> Principal:
        return self._principal

    @property
    def name(self) -> str:
        return short_name(self._path)

    def full_name(self) -> str:
        return self._path

    def short_name(self) -> str:
        return short_name(self._path)

    def absolute_path(self) -> str | None:
        """Not supported; always ``None``."""
        return None

    def is_hidden(self) -> bool:
        """The distributed filesystem has no hidden objects."""
        return False

    def parent(self) -> VirtualFile:
        return self._sibling(parent_path(self._path))

    def _sibling(self, path: str, *, trusted: bool = False) -> VirtualFile:
        child = VirtualFile(path, self._principal, self._client, evaluator=self._evaluator)
        if trusted:
            # Paths returned by the remote name real objects; keep them verbatim.
            child._path = path
        return child

    # =========================================================================
    # Attributes
    # =========================================================================

    def exists(self) -> bool:
        return fetch_status(self._client, self._path) is not None

    def is_directory(self) -> bool:
        logger.debug("is directory? : %s", self._path)
        status = fetch_status(self._client, self._path)
        return status is not None and status.is_directory

    def is_file(self) -> bool:
        status = fetch_status(self._client, self._path)
        return status is not None and status.is_file

    def owner(self) -> str | None:
        status = fetch_status(self._client, self._path)
        return status.owner if status is not None else None

    def group(self) -> str | None:
        status = fetch_status(self._client, self._path)
        return status.group if status is not None else None

    def permission(self) -> PermissionBits | None:
        status = fetch_status(self._client, self._path)
        return status.permission if status is not None else None

    def size(self) -> int:
        """Size in bytes, ``0`` if unavailable."""
        status = fetch_status(self._client, self._path)
        if status is None:
            return 0
        logger.info("size(): %s : %d", self._path, status.size)
        return status.size

    def last_modified(self) -> int:
        """Modification time in epoch milliseconds, ``0`` if unavailable."""
        status = fetch_status(self._client, self._path)
        return status.modification_time if status is not None else 0

    def set_last_modified(self, time: int) -> bool:
        """Not supported; always ``False``."""
        return False

    def link_count(self) -> int:
        return DIRECTORY_LINK_COUNT if self.is_directory() else FILE_LINK_COUNT

    # =========================================================================
    # Permissions
    # =========================================================================

    def can_read(self) -> bool:
        return self._evaluator.can_read(self._principal, self._path)

    def can_write(self) -> bool:
        return self._evaluator.can_write(self._principal, self._path)

    def can_delete(self) -> bool:
        return self._evaluator.can_delete(self._principal, self._path)

    # =========================================================================
    # Mutations
    # =========================================================================

    def create_directory(self) -> bool:
        """Create this path as a directory owned by the principal."""
        if not self.can_write():
            logger.debug("No write permission : %s", self._path)
            return False

        try:
            self._client.mkdirs(self._path)
            self._client.set_owner(
                self._path, self._principal.name, self._principal.primary_group
            )
        except REMOTE_ERRORS as e:
            logger.error("Mkdir failed for %s: %s", self._path, e, exc_info=True)
            return False

        logger.info("Created directory %s for %s", self._path, self._principal.name)
        return True

    def delete(self) -> bool:
        """Recursively delete this path.  Callers check ``can_delete()`` first."""
        try:
            self._client.delete(self._path, True)
        except REMOTE_ERRORS as e:
            logger.error("Delete failed for %s: %s", self._path, e, exc_info=True)
            return False

        logger.info("Deleted %s", self._path)
        return True

    def rename(self, to: VirtualFile | str) -> bool:
        """Move this path to *to* (a ``VirtualFile`` or an absolute path)."""
        dest = to.path if isinstance(to, VirtualFile) else normalize_path(to)
        try:
            self._client.rename(self._path, dest)
        except REMOTE_ERRORS as e:
            logger.error("Move failed for %s -> %s: %s", self._path, dest, e, exc_info=True)
            return False

        logger.info("Renamed %s -> %s", self._path, dest)
        return True

    # =========================================================================
    # Listing
    # =========================================================================

    def list_children(self) -> list[VirtualFile] | None:
        """Children of this directory in remote order.

        Returns ``None`` when the directory is unreadable or the listing
        fails, which is distinct from ``[]`` for an empty directory.
        """
        if not self.can_read():
            logger.debug("No read permission : %s", self._path)
            return None

        try:
            entries = self._client.list_entries(self._path)
        except REMOTE_ERRORS as e:
            logger.debug("List dir failed for %s: %s", self._path, e, exc_info=True)
            return None

        return [self._sibling(entry, trusted=True) for entry in entries]

    # =========================================================================
    # Streams
    # =========================================================================

    def open_for_write(self, offset: int = 0) -> BinaryIO:
        """Open a byte sink, creating or truncating the file.

        *offset* is accepted for protocol compatibility and ignored.

        Raises:
            AccessDeniedError: the principal may not write here.
            StorageError: the remote filesystem failed.
        """
        if not self.can_write():
            raise AccessDeniedError(f"No write permission : {self._path}")

        try:
            out = self._client.open_output(self._path)
        except REMOTE_ERRORS as e:
            logger.error("Open for write failed for %s: %s", self._path, e, exc_info=True)
            raise StorageError(f"Cannot open {self._path} for writing: {e}") from e

        try:
            self._client.set_owner(
                self._path, self._principal.name, self._principal.primary_group
            )
        except REMOTE_ERRORS as e:
            logger.error("Set owner failed for %s: %s", self._path, e, exc_info=True)
            out.close()
            raise StorageError(f"Cannot set owner of {self._path}: {e}") from e

        logger.info("Opened %s for writing as %s", self._path, self._principal.name)
        return out

    def open_for_read(self, offset: int = 0) -> BinaryIO:
        """Open a byte source.  *offset* is accepted and ignored.

        Raises:
            AccessDeniedError: the principal may not read here.
            StorageError: the remote filesystem failed.
        """
        if not self.can_read():
            raise AccessDeniedError(f"No read permission : {self._path}")

        try:
            src = self._client.open_input(self._path)
        except REMOTE_ERRORS as e:
            logger.error("Open for read failed for %s: %s", self._path, e, exc_info=True)
            raise StorageError(f"Cannot open {self._path} for reading: {e}") from e

        logger.info("Opened %s for reading as %s", self._path, self._principal.name)
        return src

    # =========================================================================
    # Dunder
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VirtualFile):
            return NotImplemented
        return self._path == other._path and self._principal == other._principal

    def __hash__(self) -> int:
        return hash((self._path, self._principal))

    def __repr__(self) -> str:
        return f"VirtualFile({self._path!r}, principal={self._principal.name!r})"
