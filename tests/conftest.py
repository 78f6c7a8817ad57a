from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from multifs import DirectoryBackend, MultiFS


class RecordingBackend:
    """Open-only backend that remembers every relative path it was asked for."""

    def __init__(self, name: str):
        self.name = name
        self.opened: list[str] = []

    def open(self, rel_path: str) -> Any:
        self.opened.append(rel_path)
        return (self.name, rel_path)


def _write_tree(root: Path, files: dict[str, str]) -> None:
    for rel, content in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")


@pytest.fixture
def recording_backend() -> Callable[[str], RecordingBackend]:
    return RecordingBackend


@pytest.fixture
def write_tree() -> Callable[[Path, dict[str, str]], None]:
    return _write_tree


@pytest.fixture(autouse=True)
def _no_event_log(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MULTIFS_LOG_DIR", raising=False)
    monkeypatch.delenv("MULTIFS_MOUNTS_CONFIG", raising=False)


@pytest.fixture
def quux_corge(tmp_path: Path) -> MultiFS:
    _write_tree(
        tmp_path,
        {
            "foo/1.txt": "1" * 100,
            "foo/2.txt": "2" * 100,
            "bar/a.txt": "a" * 100,
            "bar/b.txt": "b" * 100,
        },
    )
    fs = MultiFS()
    fs.mount("/quux", DirectoryBackend(tmp_path / "foo"))
    fs.mount("/corge", DirectoryBackend(tmp_path / "bar"))
    return fs
