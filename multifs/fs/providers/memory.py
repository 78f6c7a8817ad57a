from __future__ import annotations

import io
import time
from typing import Mapping, Optional, Union

from multifs.paths import clean, segments
from multifs.types import DIR_MODE, DirEntry, FileInfo

FILE_MODE = 0o100444


class MemoryFile(io.BytesIO):
    def __init__(self, name: str, data: bytes, mtime: float):
        super().__init__(data)
        self.name = name
        self._size = len(data)
        self._mtime = mtime

    def stat(self) -> FileInfo:
        return FileInfo(name=self.name, is_dir=False, size=self._size, mode=FILE_MODE, mtime=self._mtime)


class MemoryDir:
    def __init__(self, name: str, entries: list[DirEntry], mtime: float):
        self.name = name
        self._entries = entries
        self._mtime = mtime
        self.closed = False

    def read_dir(self) -> list[DirEntry]:
        return list(self._entries)

    def stat(self) -> FileInfo:
        return FileInfo(name=self.name, is_dir=True, size=0, mode=DIR_MODE, mtime=self._mtime)

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "MemoryDir":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class MemoryBackend:
    """
    Fixed in-memory tree built from {"dir/file.txt": b"..."}. Intermediate
    directories are implied by the file paths.

    Only open() is provided: listing and stat go through the handles it
    returns (MemoryDir.read_dir, *.stat).
    """

    def __init__(self, files: Optional[Mapping[str, Union[bytes, str]]] = None):
        self._files: dict[str, bytes] = {}
        self._dirs: dict[str, dict[str, Optional[int]]] = {".": {}}
        self._mtime = time.time()
        for name, content in (files or {}).items():
            data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
            self._add(name, data)

    def _add(self, name: str, data: bytes) -> None:
        parts = segments(clean(name))
        if not parts:
            raise ValueError(f"invalid file name {name!r}")
        parent = "."
        for part in parts[:-1]:
            child = part if parent == "." else f"{parent}/{part}"
            if child in self._files:
                raise ValueError(f"{child!r} is both a file and a directory")
            self._dirs[parent][part] = None
            self._dirs.setdefault(child, {})
            parent = child
        path = "/".join(parts)
        if path in self._dirs:
            raise ValueError(f"{path!r} is both a file and a directory")
        self._files[path] = data
        self._dirs[parent][parts[-1]] = len(data)

    def open(self, rel_path: str) -> Union[MemoryFile, MemoryDir]:
        key = clean(rel_path).lstrip("/") or "."
        name = segments(key)[-1] if key != "." else "."
        if key in self._files:
            return MemoryFile(name, self._files[key], self._mtime)
        if key in self._dirs:
            entries = [
                DirEntry(name=n, kind="dir" if size is None else "file", size=size)
                for n, size in sorted(self._dirs[key].items())
            ]
            return MemoryDir(name, entries, self._mtime)
        raise FileNotFoundError(f"No such file or directory: {rel_path!r}")
