from __future__ import annotations

import stat as stat_mod
from dataclasses import dataclass
from typing import Any, Literal, Optional


EntryKind = Literal["file", "dir"]

DIR_MODE = stat_mod.S_IFDIR | 0o555


@dataclass(frozen=True)
class DirEntry:
    name: str
    kind: EntryKind
    size: Optional[int] = None

    @property
    def is_dir(self) -> bool:
        return self.kind == "dir"

    def to_dict(self, *, parent: str) -> dict[str, Any]:
        path = "/" + self.name if parent == "/" else f"{parent}/{self.name}"
        return {"name": self.name, "path": path, "kind": self.kind, "size": self.size}


@dataclass(frozen=True)
class FileInfo:
    name: str
    is_dir: bool
    size: int = 0
    mode: int = 0
    mtime: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "isDir": self.is_dir,
            "size": self.size,
            "mode": self.mode,
            "mtime": self.mtime,
        }


def pseudo_dir_entry(name: str) -> DirEntry:
    return DirEntry(name=name, kind="dir", size=None)


def pseudo_dir_info(name: str) -> FileInfo:
    # Structure implied by mount nesting: no content, no meaningful mtime.
    return FileInfo(name=name, is_dir=True, size=0, mode=DIR_MODE, mtime=None)
