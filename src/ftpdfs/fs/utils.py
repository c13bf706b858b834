"""Path utilities: short names, parents, normalization, validation."""

from __future__ import annotations

import posixpath

MAX_PATH_LENGTH = 4096
MAX_NAME_LENGTH = 255


# =============================================================================
# Path Resolution
# =============================================================================


def short_name(path: str) -> str:
    """Return the last segment of an absolute path.

    Examples:
        short_name("/") -> "/"
        short_name("/a") -> "a"
        short_name("/a/b/c.txt") -> "c.txt"
    """
    if path == "/":
        return "/"
    return path[path.rfind("/") + 1 :]


def parent_path(path: str) -> str:
    """Return the parent of an absolute path. The root is its own parent.

    Examples:
        parent_path("/a/b/c") -> "/a/b"
        parent_path("/a") -> "/"
        parent_path("/") -> "/"
    """
    pos = path.rfind("/")
    if pos <= 0:
        return "/"
    return path[:pos]


def normalize_path(path: str) -> str:
    """Normalize a virtual file system path.

    - Ensures leading /
    - Resolves .. and . references
    - Removes double slashes
    - Removes trailing slash (except for root)

    Examples:
        normalize_path("foo.txt") -> "/foo.txt"
        normalize_path("/foo//bar.txt") -> "/foo/bar.txt"
        normalize_path("/foo/../bar.txt") -> "/bar.txt"
        normalize_path("/foo/") -> "/foo"
        normalize_path("") -> "/"

    Whitespace is part of a name and is kept.
    """
    if not path:
        return "/"

    if not path.startswith("/"):
        path = "/" + path

    path = posixpath.normpath(path)

    # posixpath keeps a leading "//" (POSIX allows it to be special)
    if path.startswith("//"):
        path = "/" + path.lstrip("/")

    if path != "/" and path.endswith("/"):
        path = path[:-1]

    return path


def resolve_path(base: str, path: str) -> str:
    """Resolve *path* against the absolute directory *base*.

    Absolute paths ignore *base*.  ``..`` never climbs above the root.

    Examples:
        resolve_path("/data", "f.txt") -> "/data/f.txt"
        resolve_path("/data", "../logs") -> "/logs"
        resolve_path("/data", "/tmp") -> "/tmp"
        resolve_path("/", "../..") -> "/"
    """
    if path.startswith("/"):
        return normalize_path(path)
    return normalize_path(posixpath.join(normalize_path(base), path))


def split_path(path: str) -> tuple[str, str]:
    """Split path into (parent_dir, name).

    Examples:
        split_path("/foo/bar.txt") -> ("/foo", "bar.txt")
        split_path("/foo.txt") -> ("/", "foo.txt")
        split_path("/") -> ("/", "")
    """
    path = normalize_path(path)
    if path == "/":
        return "/", ""
    return parent_path(path), short_name(path)


def validate_path(path: str) -> tuple[bool, str]:
    """Validate a path for safety before it is handed to the remote filesystem.

    Returns:
        (is_valid, error_message) - error_message is empty if valid
    """
    if "\x00" in path:
        return False, "Path contains null bytes"

    for ch in path:
        code = ord(ch)
        if 0x01 <= code <= 0x1F:
            return False, f"Path contains control character: 0x{code:02x}"

    if len(path) > MAX_PATH_LENGTH:
        return False, f"Path too long (max {MAX_PATH_LENGTH} characters)"

    _, name = split_path(path)
    if name and len(name) > MAX_NAME_LENGTH:
        return False, f"Filename too long (max {MAX_NAME_LENGTH} characters)"

    return True, ""
