"""FileSystemFactory — builds per-principal views over one remote filesystem."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ftpdfs.fs.exceptions import PathNotFoundError, PrincipalNotFoundError
from ftpdfs.fs.metadata import fetch_status
from ftpdfs.fs.utils import normalize_path
from ftpdfs.fs.view import FileSystemView

if TYPE_CHECKING:
    from sqlmodel import Session

    from ftpdfs.fs.principals import PrincipalService
    from ftpdfs.fs.protocol import RemoteFileSystemClient
    from ftpdfs.fs.types import Principal

logger = logging.getLogger(__name__)


@dataclass
class FileSystemConfig:
    """Settings shared by every view the factory creates."""

    home_directory: str = "/"
    """Home directory for new views.  ``{user}`` expands to the principal's name."""

    check_home_exists: bool = False
    """If True, refuse to create a view whose home directory is missing."""

    def __post_init__(self) -> None:
        self.home_directory = normalize_path(self.home_directory)

    def home_for(self, principal: Principal) -> str:
        return normalize_path(self.home_directory.replace("{user}", principal.name))


class FileSystemFactory:
    """Entry point for a file-transfer server.

    The remote client is injected once and shared by every view; the
    factory itself holds no per-session state.

    Usage::

        factory = FileSystemFactory(client, FileSystemConfig(home_directory="/user/{user}"))
        view = factory.create_view(Principal("alice", "eng"))
        for child in view.working_directory().list_children() or []:
            print(child.name, child.size())
    """

    def __init__(
        self,
        client: RemoteFileSystemClient,
        config: FileSystemConfig | None = None,
        *,
        principals: PrincipalService | None = None,
    ) -> None:
        self._client = client
        self._config = config or FileSystemConfig()
        self._principals = principals

    @property
    def config(self) -> FileSystemConfig:
        return self._config

    def create_view(self, principal: Principal) -> FileSystemView:
        home = self._config.home_for(principal)
        if self._config.check_home_exists and fetch_status(self._client, home) is None:
            raise PathNotFoundError(f"Home directory not found: {home}")
        logger.debug("Creating view for %s at %s", principal.name, home)
        return FileSystemView(self._client, principal, home_directory=home)

    def create_view_for(self, session: Session, name: str) -> FileSystemView:
        """Look up *name* through the principal service and create its view."""
        if self._principals is None:
            raise PrincipalNotFoundError("No principal service configured")
        principal = self._principals.get_principal(session, name)
        if principal is None:
            raise PrincipalNotFoundError(f"Unknown principal: {name!r}")
        return self.create_view(principal)
