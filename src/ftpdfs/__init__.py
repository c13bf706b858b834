"""ftpdfs: serve a distributed filesystem to file-transfer servers.

Virtual files, POSIX owner/group/other permissions, and per-session views over an injected remote filesystem client.
"""

__version__ = "0.1.0"

from ftpdfs._factory import FileSystemConfig, FileSystemFactory
from ftpdfs.fs.exceptions import (
    AccessDeniedError,
    FtpDfsError,
    InvalidPathError,
    PathNotFoundError,
    PrincipalNotFoundError,
    StorageError,
)
from ftpdfs.fs.file_object import VirtualFile
from ftpdfs.fs.permissions import PermissionBits, PermissionEvaluator
from ftpdfs.fs.principals import PrincipalService
from ftpdfs.fs.protocol import RemoteFileSystemClient
from ftpdfs.fs.types import FileStatus, Principal
from ftpdfs.fs.view import FileSystemView

__all__ = [
    "AccessDeniedError",
    "FileStatus",
    "FileSystemConfig",
    "FileSystemFactory",
    "FileSystemView",
    "FtpDfsError",
    "InvalidPathError",
    "PathNotFoundError",
    "PermissionBits",
    "PermissionEvaluator",
    "Principal",
    "PrincipalNotFoundError",
    "PrincipalService",
    "RemoteFileSystemClient",
    "StorageError",
    "VirtualFile",
    "__version__",
]
