from __future__ import annotations

import os
import stat as stat_mod
from pathlib import Path
from typing import BinaryIO, Union

from multifs.errors import FsError
from multifs.types import DirEntry, EntryKind, FileInfo


def _info(p: Path, name: str) -> FileInfo:
    st = p.stat()
    return FileInfo(
        name=name,
        is_dir=stat_mod.S_ISDIR(st.st_mode),
        size=st.st_size,
        mode=st.st_mode,
        mtime=st.st_mtime,
    )


class DirHandle:
    """
    What DirectoryBackend.open returns for a directory: no byte stream, but
    enough to list and stat it.
    """

    def __init__(self, path: Path):
        self.path = path

    def read_dir(self) -> list[DirEntry]:
        entries: list[DirEntry] = []
        for child in sorted(self.path.iterdir(), key=lambda c: (not c.is_dir(), c.name.lower())):
            kind: EntryKind = "dir" if child.is_dir() else "file"
            entries.append(
                DirEntry(name=child.name, kind=kind, size=child.stat().st_size if kind == "file" else None)
            )
        return entries

    def stat(self) -> FileInfo:
        return _info(self.path, self.path.name)

    def read(self, size: int = -1) -> bytes:
        raise IsADirectoryError(str(self.path))

    def close(self) -> None:
        pass

    def __enter__(self) -> "DirHandle":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class DirectoryBackend:
    """Read-only view of an OS directory, rooted like a chroot."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).expanduser().resolve()

    def __repr__(self) -> str:
        return f"DirectoryBackend({str(self.root)!r})"

    def _safe_join(self, rel_path: str) -> Path:
        candidate = (self.root / rel_path).resolve()
        try:
            common = os.path.commonpath([str(self.root), str(candidate)])
        except ValueError as e:
            raise FsError(f"Invalid path: {e}") from e
        if Path(common) != self.root:
            raise FsError("Path escapes mount root")
        return candidate

    def open(self, rel_path: str) -> Union[BinaryIO, DirHandle]:
        p = self._safe_join(rel_path)
        if p.is_dir():
            return DirHandle(p)
        return open(p, "rb")

    def list_dir(self, rel_path: str) -> list[DirEntry]:
        p = self._safe_join(rel_path)
        if not p.exists():
            raise FileNotFoundError(f"No such directory: {rel_path!r}")
        if not p.is_dir():
            raise NotADirectoryError(f"Not a directory: {rel_path!r}")
        return DirHandle(p).read_dir()

    def stat(self, rel_path: str) -> FileInfo:
        p = self._safe_join(rel_path)
        return _info(p, p.name)
