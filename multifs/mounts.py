from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from multifs.errors import MountError
from multifs.fs.providers.directory import DirectoryBackend
from multifs.fs.router import MultiFS


@dataclass(frozen=True)
class MountSpec:
    prefix: str
    root: Path


def config_path() -> Optional[Path]:
    p = os.environ.get("MULTIFS_MOUNTS_CONFIG")
    if p:
        return Path(p).expanduser()
    return None


def load_mounts(path: Union[str, Path, None] = None) -> list[MountSpec]:
    """
    Read mount definitions from a JSON file:

        {"mounts": [{"prefix": "/docs", "path": "~/docs"}, ...]}

    Relative `path` values resolve against the config file's directory.
    Entries missing a prefix or a path are skipped. A missing file yields no
    mounts.
    """
    cfg_path = Path(path).expanduser() if path is not None else config_path()
    if cfg_path is None or not cfg_path.exists():
        return []
    try:
        raw = json.loads(cfg_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MountError(f"Invalid mounts config {cfg_path}: {e}") from e

    out: list[MountSpec] = []
    for m in raw.get("mounts") or []:
        prefix = str(m.get("prefix") or "").strip()
        root_s = str(m.get("path") or "").strip()
        if not prefix or not root_s:
            continue
        root = Path(root_s).expanduser()
        if not root.is_absolute():
            root = cfg_path.parent / root
        out.append(MountSpec(prefix=prefix, root=root.resolve()))
    return out


def build_fs(specs: Optional[list[MountSpec]] = None) -> MultiFS:
    fs = MultiFS()
    for spec in load_mounts() if specs is None else specs:
        fs.mount(spec.prefix, DirectoryBackend(spec.root))
    return fs
