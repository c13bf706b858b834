"""Custom exception hierarchy for the ftpdfs filesystem layer."""


class FtpDfsError(Exception):
    """Base exception for all ftpdfs filesystem errors."""


class PathNotFoundError(FtpDfsError):
    """Raised when a file or directory path does not exist on the remote filesystem."""


class StorageError(FtpDfsError):
    """Raised on remote filesystem failures (RPC errors, unavailable nodes, etc.)."""


class AccessDeniedError(FtpDfsError, PermissionError):
    """Raised when a stream is requested for a path the principal may not access."""


class InvalidPathError(FtpDfsError, ValueError):
    """Raised when a path contains characters the remote filesystem must never see."""


class PrincipalNotFoundError(FtpDfsError):
    """Raised when no enabled principal matches the given name."""


REMOTE_ERRORS: tuple[type[BaseException], ...] = (FtpDfsError, OSError)
"""Errors a remote filesystem client may raise; caught at the adapter boundary."""
