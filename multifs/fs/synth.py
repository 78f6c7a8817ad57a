"""
Pseudo-directory synthesis.

Mount prefixes imply directories that no backend owns: the root, and every
path segment above a mount point ("/a" when only "/a/b" and "/a/c" are
mounted). Listings and stat calls on those paths are answered here instead of
by a backend.
"""

from __future__ import annotations

from typing import Iterable

from multifs.fs.table import MountTable
from multifs.paths import basename, is_under, segments
from multifs.types import DirEntry, FileInfo, pseudo_dir_entry, pseudo_dir_info


def child_names(table: MountTable, path: str) -> list[str]:
    """
    Distinct next path segments of every mount prefix strictly beneath
    `path`, in first-seen table order.
    """
    depth = len(segments(path))
    seen: dict[str, None] = {}
    for m in table:
        if m.prefix == path or not is_under(m.prefix, path):
            continue
        parts = segments(m.prefix)
        if len(parts) > depth:
            seen.setdefault(parts[depth], None)
    return list(seen)


def root_entries(table: MountTable) -> list[DirEntry]:
    # one entry per distinct top-level segment; "/foo/bar" contributes "foo"
    return [pseudo_dir_entry(name) for name in child_names(table, "/")]


def ancestor_entries(table: MountTable, path: str) -> list[DirEntry]:
    return [pseudo_dir_entry(name) for name in child_names(table, path)]


def overlay(entries: Iterable[DirEntry], table: MountTable, path: str) -> list[DirEntry]:
    """
    Merge a backend listing of mount point `path` with the mount points nested
    directly beneath it. A nested mount shadows a backend entry of the same
    name.
    """
    nested = child_names(table, path)
    if not nested:
        return list(entries)
    shadowed = set(nested)
    out = [e for e in entries if e.name not in shadowed]
    out.extend(pseudo_dir_entry(name) for name in nested)
    return out


def dir_info(path: str) -> FileInfo:
    return pseudo_dir_info(basename(path))
