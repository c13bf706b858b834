"""Shared fixtures for ftpdfs tests."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pytest
from sqlmodel import Session, SQLModel, create_engine

from ftpdfs.fs.exceptions import PathNotFoundError, StorageError
from ftpdfs.fs.permissions import PermissionBits
from ftpdfs.fs.types import FileStatus, Principal
from ftpdfs.fs.utils import parent_path

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Engine


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
def engine() -> Engine:
    """In-memory SQLite engine with all tables created."""
    import ftpdfs.models  # noqa: F401  (registers tables)

    eng = create_engine("sqlite://", echo=False)
    SQLModel.metadata.create_all(eng)
    return eng


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    """SQLModel session bound to the in-memory engine, rolled back after each test."""
    with Session(engine) as s:
        s.begin()
        yield s
        s.rollback()


# ---------------------------------------------------------------------------
# In-memory remote filesystem
# ---------------------------------------------------------------------------


MUTATING_CALLS = {"mkdirs", "set_owner", "delete", "rename", "open_output"}


@dataclass
class _Node:
    is_directory: bool
    owner: str
    group: str
    mode: int
    content: bytes = b""
    mtime: int = 0


class _Sink(io.BytesIO):
    def __init__(self, on_close) -> None:
        super().__init__()
        self._on_close = on_close

    def close(self) -> None:
        if not self.closed:
            self._on_close(self.getvalue())
        super().close()


@dataclass
class InMemoryClient:
    """Dict-backed ``RemoteFileSystemClient`` that records every call."""

    nodes: dict[str, _Node] = field(default_factory=dict)
    calls: list[tuple[str, tuple]] = field(default_factory=list)
    failing: set[str] = field(default_factory=set)
    clock: int = 1_700_000_000_000

    def __post_init__(self) -> None:
        self.nodes.setdefault("/", _Node(True, "hdfs", "supergroup", 0o755))

    # -- test helpers -------------------------------------------------------

    def add_dir(self, path: str, owner: str, group: str, mode: int) -> None:
        self.nodes[path] = _Node(True, owner, group, mode, mtime=self.clock)

    def add_file(
        self, path: str, owner: str, group: str, mode: int, content: bytes = b""
    ) -> None:
        self.nodes[path] = _Node(False, owner, group, mode, content, mtime=self.clock)

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def mutating_calls(self) -> list[str]:
        return [name for name in self.call_names() if name in MUTATING_CALLS]

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, args))
        for arg in args:
            if isinstance(arg, str) and arg in self.failing:
                raise StorageError(f"remote failure on {arg}")

    def _node(self, path: str) -> _Node:
        node = self.nodes.get(path)
        if node is None:
            raise PathNotFoundError(f"File does not exist: {path}")
        return node

    # -- RemoteFileSystemClient ---------------------------------------------

    def status(self, path: str) -> FileStatus:
        self._record("status", path)
        node = self._node(path)
        return FileStatus(
            path=path,
            is_directory=node.is_directory,
            owner=node.owner,
            group=node.group,
            permission=PermissionBits.from_mode(node.mode),
            size=len(node.content),
            modification_time=node.mtime,
        )

    def list_entries(self, path: str) -> list[str]:
        self._record("list_entries", path)
        node = self._node(path)
        if not node.is_directory:
            raise StorageError(f"Not a directory: {path}")
        return sorted(p for p in self.nodes if p != "/" and parent_path(p) == path)

    def mkdirs(self, path: str) -> None:
        self._record("mkdirs", path)
        current = path
        missing = []
        while current not in self.nodes:
            missing.append(current)
            current = parent_path(current)
        for p in reversed(missing):
            self.nodes[p] = _Node(True, "hdfs", "supergroup", 0o755, mtime=self.clock)

    def set_owner(self, path: str, user: str, group: str) -> None:
        self._record("set_owner", path, user, group)
        node = self._node(path)
        node.owner = user
        node.group = group

    def delete(self, path: str, recursive: bool) -> None:
        self._record("delete", path, recursive)
        self._node(path)
        prefix = path.rstrip("/") + "/"
        for p in [p for p in self.nodes if p == path or p.startswith(prefix)]:
            del self.nodes[p]

    def rename(self, src: str, dst: str) -> None:
        self._record("rename", src, dst)
        self._node(src)
        prefix = src + "/"
        for p in [p for p in self.nodes if p == src or p.startswith(prefix)]:
            self.nodes[dst + p[len(src) :]] = self.nodes.pop(p)

    def open_input(self, path: str) -> io.BytesIO:
        self._record("open_input", path)
        return io.BytesIO(self._node(path).content)

    def open_output(self, path: str) -> _Sink:
        self._record("open_output", path)
        self._node(parent_path(path))
        node = self.nodes.get(path)
        if node is None:
            node = _Node(False, "hdfs", "supergroup", 0o644, mtime=self.clock)
            self.nodes[path] = node
        node.content = b""

        def _store(data: bytes) -> None:
            node.content = data

        return _Sink(_store)


@pytest.fixture
def client() -> InMemoryClient:
    """Remote filesystem with the layout used across the tests.

    /data              alice:eng   rwxr-xr-x
    /data/f            bob:eng     rw-r-----
    /data/report.csv   alice:eng   rw-r--r--  (b"a,b\\n1,2\\n")
    /data/empty        alice:eng   rwxr-xr-x  (directory)
    /secret            root:root   rwx------
    /secret/key        root:root   rw-------
    """
    c = InMemoryClient()
    c.add_dir("/data", "alice", "eng", 0o755)
    c.add_file("/data/f", "bob", "eng", 0o640)
    c.add_file("/data/report.csv", "alice", "eng", 0o644, b"a,b\n1,2\n")
    c.add_dir("/data/empty", "alice", "eng", 0o755)
    c.add_dir("/secret", "root", "root", 0o700)
    c.add_file("/secret/key", "root", "root", 0o600, b"k")
    c.calls.clear()
    return c


@pytest.fixture
def alice() -> Principal:
    return Principal("alice", "eng")


@pytest.fixture
def bob() -> Principal:
    return Principal("bob", "staff", {"eng"})


@pytest.fixture
def mallory() -> Principal:
    return Principal("mallory", "guests")
