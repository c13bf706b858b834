"""Filesystem layer — virtual files, permissions, path handling, client protocol."""

from ftpdfs.fs.exceptions import (
    AccessDeniedError,
    FtpDfsError,
    InvalidPathError,
    PathNotFoundError,
    PrincipalNotFoundError,
    StorageError,
)
from ftpdfs.fs.file_object import VirtualFile
from ftpdfs.fs.metadata import fetch_status
from ftpdfs.fs.permissions import (
    Access,
    IdentityClass,
    PermissionBits,
    PermissionEvaluator,
    PermissionTriple,
    check_access,
    identity_class,
)
from ftpdfs.fs.principals import PrincipalService
from ftpdfs.fs.protocol import RemoteFileSystemClient
from ftpdfs.fs.types import FileStatus, Principal
from ftpdfs.fs.utils import normalize_path, parent_path, resolve_path, short_name
from ftpdfs.fs.view import FileSystemView

__all__ = [
    "Access",
    "AccessDeniedError",
    "FileStatus",
    "FileSystemView",
    "FtpDfsError",
    "IdentityClass",
    "InvalidPathError",
    "PathNotFoundError",
    "PermissionBits",
    "PermissionEvaluator",
    "PermissionTriple",
    "Principal",
    "PrincipalNotFoundError",
    "PrincipalService",
    "RemoteFileSystemClient",
    "StorageError",
    "VirtualFile",
    "check_access",
    "fetch_status",
    "identity_class",
    "normalize_path",
    "parent_path",
    "resolve_path",
    "short_name",
]
