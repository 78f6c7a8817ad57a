from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from multifs.fs.table import Mount, MountTable
from multifs.paths import absolute, is_under, strip_prefix


@dataclass(frozen=True)
class Resolved:
    mount: Mount
    rel_path: str

    @property
    def prefix(self) -> str:
        return self.mount.prefix


class PathClass(Enum):
    ROOT = "root"
    MOUNT = "mount"  # exactly a mount prefix
    ANCESTOR = "ancestor"  # above one or more mount prefixes, not itself mounted
    INSIDE = "inside"  # beneath a mount prefix
    MISSING = "missing"


def resolve(table: MountTable, path: str) -> Optional[Resolved]:
    """
    Longest-prefix match of `path` against the table. Returns None when no
    mount covers the path.
    """
    path = absolute(path)
    for m in table:
        if is_under(path, m.prefix):
            return Resolved(mount=m, rel_path=strip_prefix(path, m.prefix))
    return None


def is_ancestor(table: MountTable, path: str) -> bool:
    return any(m.prefix != path and is_under(m.prefix, path) for m in table)


def classify_path(table: MountTable, path: str) -> tuple[PathClass, Optional[Resolved]]:
    path = absolute(path)
    mount = table.get(path)
    if mount is not None:
        return PathClass.MOUNT, Resolved(mount=mount, rel_path=".")
    if path == "/":
        return PathClass.ROOT, None
    if is_ancestor(table, path):
        # may still lie inside an enclosing mount that has its own entries here
        return PathClass.ANCESTOR, resolve(table, path)

    res = resolve(table, path)
    if res is not None:
        return PathClass.INSIDE, res
    return PathClass.MISSING, None
