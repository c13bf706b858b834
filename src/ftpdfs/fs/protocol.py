"""RemoteFileSystemClient protocol — the distributed filesystem's RPC surface.

ftpdfs does not implement a filesystem client.  Any object with these
blocking methods can be injected into ``VirtualFile``,
``FileSystemView`` or ``FileSystemFactory``.

Error contract:

- a missing object raises ``PathNotFoundError``;
- any other remote failure raises ``StorageError`` or an ``OSError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .types import FileStatus


@runtime_checkable
class RemoteFileSystemClient(Protocol):
    """Path-keyed metadata, mutation, and stream primitives."""

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def status(self, path: str) -> FileStatus:
        """Status of *path*.  Raises ``PathNotFoundError`` if absent."""
        ...

    def list_entries(self, path: str) -> Sequence[str]:
        """Absolute paths of the direct children of directory *path*."""
        ...

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def mkdirs(self, path: str) -> None:
        """Create *path* and any missing ancestors."""
        ...

    def set_owner(self, path: str, user: str, group: str) -> None: ...

    def delete(self, path: str, recursive: bool) -> None: ...

    def rename(self, src: str, dst: str) -> None: ...

    # ------------------------------------------------------------------
    # Streams
    # ------------------------------------------------------------------

    def open_input(self, path: str) -> BinaryIO: ...

    def open_output(self, path: str) -> BinaryIO:
        """Create (or truncate) *path* and return a sink for its bytes."""
        ...
