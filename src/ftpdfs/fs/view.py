"""FileSystemView — per-session home and working directory tracking.

The view is where relative paths sent by a client are turned into the
absolute, normalized paths that ``VirtualFile`` expects.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import InvalidPathError
from .file_object import VirtualFile
from .permissions import PermissionEvaluator
from .utils import normalize_path, resolve_path, validate_path

if TYPE_CHECKING:
    from .protocol import RemoteFileSystemClient
    from .types import Principal

logger = logging.getLogger(__name__)


class FileSystemView:
    """Hands out ``VirtualFile`` objects for one principal's session."""

    def __init__(
        self,
        client: RemoteFileSystemClient,
        principal: Principal,
        home_directory: str = "/",
    ) -> None:
        self._client = client
        self._principal = principal
        self._evaluator = PermissionEvaluator(client)
        self._home = normalize_path(home_directory)
        self._cwd = self._home

    @property
    def principal(self) -> Principal:
        return self._principal

    def _file(self, path: str) -> VirtualFile:
        return VirtualFile(path, self._principal, self._client, evaluator=self._evaluator)

    def home_directory(self) -> VirtualFile:
        return self._file(self._home)

    def working_directory(self) -> VirtualFile:
        return self._file(self._cwd)

    def resolve(self, path: str) -> str:
        """Absolute, normalized form of *path* relative to the working directory.

        ``~`` and ``~/...`` are taken relative to the home directory.
        Surrounding whitespace is part of the name and is kept.
        """
        if not path or path == ".":
            return self._cwd
        if path == "~":
            return self._home
        if path.startswith("~/"):
            return resolve_path(self._home, path[2:])
        return resolve_path(self._cwd, path)

    def get_file(self, path: str) -> VirtualFile:
        """``VirtualFile`` for *path*.

        Raises:
            InvalidPathError: *path* contains NUL or control characters, or is too long.
        """
        valid, error = validate_path(path)
        if not valid:
            raise InvalidPathError(f"{error}: {path!r}")
        return self._file(self.resolve(path))

    def change_working_directory(self, path: str) -> bool:
        """Move to *path* if it is an existing directory the principal can read."""
        valid, error = validate_path(path)
        if not valid:
            logger.debug("Rejected working directory %r: %s", path, error)
            return False

        target = self.get_file(path)
        if not target.is_directory():
            logger.debug("Not a directory: %s", target.path)
            return False
        if not target.can_read():
            logger.debug("No read permission : %s", target.path)
            return False

        self._cwd = target.path
        return True

    def is_random_accessible(self) -> bool:
        """Stream offsets are ignored, so resume is not supported."""
        return False

    def dispose(self) -> None:
        pass
