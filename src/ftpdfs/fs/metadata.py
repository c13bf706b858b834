"""Metadata lookup — best-effort status fetching from the remote filesystem."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import REMOTE_ERRORS, PathNotFoundError

if TYPE_CHECKING:
    from .protocol import RemoteFileSystemClient
    from .types import FileStatus

logger = logging.getLogger(__name__)


def fetch_status(client: RemoteFileSystemClient, path: str) -> FileStatus | None:
    """Return the remote status of *path*, or ``None`` if it cannot be fetched.

    A missing object is an expected outcome and only logged at DEBUG.
    Any other client failure is logged with its traceback.  Nothing is
    raised: callers ask "does this exist?" without handling errors.
    """
    try:
        return client.status(path)
    except PathNotFoundError:
        logger.debug("No such path: %s", path)
        return None
    except REMOTE_ERRORS as e:
        logger.error("Status lookup failed for %s: %s", path, e, exc_info=True)
        return None
