from __future__ import annotations

from typing import Any, Iterator

from multifs.errors import FileTooLarge, FsError, NotFound
from multifs.fs import backend as caps
from multifs.fs import synth
from multifs.fs.backend import Backend
from multifs.fs.resolver import PathClass, classify_path, resolve
from multifs.fs.table import MountTable
from multifs.locks import RWLock
from multifs.logging.ndjson import log_event
from multifs.paths import absolute, join
from multifs.types import DirEntry, FileInfo


class MultiFS:
    """
    Read-only overlay of several backends, each bound to a path prefix.

        fs = MultiFS()
        fs.mount("/docs", DirectoryBackend("~/docs"))
        fs.mount("/cache", MemoryBackend({"a.txt": b"hi"}))
        fs.list_dir("/")  # -> docs, cache

    Lookups hold the table lock in shared mode for the whole call, including
    the delegated backend call; mount/unmount hold it exclusively. Backends
    are never closed or otherwise touched on unmount.
    """

    def __init__(self) -> None:
        self._table = MountTable()
        self._lock = RWLock()

    def mount(self, prefix: str, backend: Backend) -> None:
        with self._lock.exclusive():
            m = self._table.add(prefix, backend)
        log_event(
            level="info",
            event="fs.mount",
            data={"prefix": m.prefix, "backend": type(backend).__name__, "capability": m.capability.value},
        )

    def unmount(self, prefix: str) -> None:
        with self._lock.exclusive():
            m = self._table.remove(prefix)
        log_event(level="info", event="fs.unmount", data={"prefix": m.prefix})

    def mounts(self) -> list[str]:
        with self._lock.shared():
            return self._table.prefixes()

    def open(self, path: str) -> Any:
        """
        Open `path` on the backend that owns it. The handle belongs to the
        caller; nothing here wraps or tracks it.
        """
        with self._lock.shared():
            res = resolve(self._table, path)
            if res is None:
                raise NotFound(absolute(path))
            handle = res.mount.backend.open(res.rel_path)
        log_event(level="info", event="fs.open", data={"path": path, "mount": res.prefix, "rel": res.rel_path})
        return handle

    def list_dir(self, path: str) -> list[DirEntry]:
        path = absolute(path)
        with self._lock.shared():
            kind, res = classify_path(self._table, path)
            if kind is PathClass.MISSING:
                raise NotFound(path, what="directory")
            if kind is PathClass.ROOT:
                entries = synth.root_entries(self._table)
            elif res is None:
                # above mount points, outside every mount
                entries = synth.ancestor_entries(self._table, path)
            elif kind is PathClass.INSIDE:
                entries = caps.list_dir(res.mount.backend, res.mount.capability, res.rel_path)
            else:
                try:
                    listed = caps.list_dir(res.mount.backend, res.mount.capability, res.rel_path)
                except (FileNotFoundError, NotADirectoryError):
                    if kind is not PathClass.ANCESTOR:
                        raise
                    # the enclosing backend has nothing here; nested mounts alone make it a directory
                    listed = []
                entries = synth.overlay(listed, self._table, path)
        log_event(
            level="info",
            event="fs.list",
            data={"path": path, "class": kind.value, "mount": res.prefix if res else None, "entries": len(entries)},
        )
        return sorted(entries, key=lambda e: e.name)

    def stat(self, path: str) -> FileInfo:
        path = absolute(path)
        with self._lock.shared():
            kind, res = classify_path(self._table, path)
            if kind is PathClass.MISSING:
                raise NotFound(path)
            if res is None or kind is not PathClass.INSIDE:
                # mount points and their ancestors always report as directories
                info = synth.dir_info(path)
            else:
                info = caps.stat(res.mount.backend, res.mount.capability, res.rel_path)
        log_event(level="info", event="fs.stat", data={"path": path, "class": kind.value, "isDir": info.is_dir})
        return info

    def read(self, path: str, *, max_bytes: int = 512_000) -> bytes:
        info = self.stat(path)
        if info.is_dir:
            raise FsError(f"{absolute(path)!r} is a directory")
        if info.size > max_bytes:
            raise FileTooLarge(absolute(path), info.size, max_bytes)

        f = self.open(path)
        try:
            data = f.read(max_bytes)
        finally:
            f.close()
        if isinstance(data, str):
            data = data.encode("utf-8")
        return data

    def walk(self, path: str = "/") -> Iterator[str]:
        """
        Yield the absolute path of every file reachable from `path`, depth
        first. Directories are descended into, not yielded.
        """
        stack = [absolute(path)]
        while stack:
            current = stack.pop()
            for entry in reversed(self.list_dir(current)):
                child = join(current, entry.name)
                if entry.is_dir:
                    stack.append(child)
                else:
                    yield child

    def tree(self, path: str = "/", *, max_depth: int = 8) -> dict[str, Any]:
        path = absolute(path)
        info = self.stat(path)
        node: dict[str, Any] = {
            "name": info.name,
            "path": path,
            "kind": "dir" if info.is_dir else "file",
            "size": None if info.is_dir else info.size,
        }
        if info.is_dir and max_depth > 0:
            node["children"] = [
                self.tree(join(path, e.name), max_depth=max_depth - 1) if e.is_dir else e.to_dict(parent=path)
                for e in self.list_dir(path)
            ]
        return node
