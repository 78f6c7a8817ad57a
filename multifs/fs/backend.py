from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Protocol

from multifs.errors import InvalidBackend, Unsupported
from multifs.types import DirEntry, FileInfo


class Backend(Protocol):
    def open(self, rel_path: str) -> Any: ...


class Capability(Enum):
    """
    Capability set of a mounted backend. Every backend opens; listing and
    stat are optional and fall back to the open handle when missing.
    """

    OPEN = "open"
    LIST = "open+list"
    STAT = "open+list+stat"
    OPEN_STAT = "open+stat"

    @property
    def can_list(self) -> bool:
        return self in (Capability.LIST, Capability.STAT)

    @property
    def can_stat(self) -> bool:
        return self in (Capability.STAT, Capability.OPEN_STAT)


def _has(obj: Any, name: str) -> bool:
    return callable(getattr(obj, name, None))


def classify(backend: Any) -> Capability:
    if not _has(backend, "open"):
        raise InvalidBackend(f"backend {type(backend).__name__} has no open() method")
    lists = _has(backend, "list_dir")
    stats = _has(backend, "stat")
    if lists and stats:
        return Capability.STAT
    if lists:
        return Capability.LIST
    if stats:
        return Capability.OPEN_STAT
    return Capability.OPEN


def _close(handle: Any) -> None:
    close = getattr(handle, "close", None)
    if callable(close):
        close()


def list_dir(backend: Any, capability: Capability, rel_path: str) -> list[DirEntry]:
    if capability.can_list:
        return list(backend.list_dir(rel_path))

    handle = backend.open(rel_path)
    try:
        read_dir = getattr(handle, "read_dir", None)
        if not callable(read_dir):
            handle_stat = getattr(handle, "stat", None)
            if callable(handle_stat) and not handle_stat().is_dir:
                raise NotADirectoryError(f"Not a directory: {rel_path!r}")
            raise Unsupported(f"{rel_path!r}: backend {type(backend).__name__} cannot list directories")
        entries: Iterable[DirEntry] = read_dir()
        return list(entries)
    finally:
        _close(handle)


def stat(backend: Any, capability: Capability, rel_path: str) -> FileInfo:
    if capability.can_stat:
        return backend.stat(rel_path)

    handle = backend.open(rel_path)
    try:
        handle_stat = getattr(handle, "stat", None)
        if not callable(handle_stat):
            raise Unsupported(f"{rel_path!r}: backend {type(backend).__name__} cannot stat")
        return handle_stat()
    finally:
        _close(handle)
