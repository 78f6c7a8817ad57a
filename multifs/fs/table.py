from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional

from multifs.errors import AlreadyMounted, InvalidPrefix, NotMounted
from multifs.fs.backend import Backend, Capability, classify
from multifs.paths import clean


@dataclass(frozen=True)
class Mount:
    prefix: str
    backend: Backend
    capability: Capability


def normalize_prefix(prefix: str) -> str:
    p = clean(prefix)
    if not p.startswith("/"):
        raise InvalidPrefix(p)
    return p


class MountTable:
    """
    Ordered (prefix, backend) bindings. Longer prefixes always come first so
    the first textual match during resolution is the most specific mount.
    Not thread-safe on its own; MultiFS guards it.
    """

    def __init__(self) -> None:
        self._mounts: list[Mount] = []

    def __len__(self) -> int:
        return len(self._mounts)

    def __iter__(self) -> Iterator[Mount]:
        return iter(self._mounts)

    def get(self, prefix: str) -> Optional[Mount]:
        for m in self._mounts:
            if m.prefix == prefix:
                return m
        return None

    def prefixes(self) -> list[str]:
        return [m.prefix for m in self._mounts]

    def add(self, prefix: str, backend: Any) -> Mount:
        prefix = normalize_prefix(prefix)
        if self.get(prefix) is not None:
            raise AlreadyMounted(prefix)
        mount = Mount(prefix=prefix, backend=backend, capability=classify(backend))

        mounts = self._mounts + [mount]
        # longest matches come first; sort is stable so equal lengths keep insertion order
        mounts.sort(key=lambda m: len(m.prefix), reverse=True)
        self._mounts = mounts
        return mount

    def remove(self, prefix: str) -> Mount:
        prefix = normalize_prefix(prefix)
        mount = self.get(prefix)
        if mount is None:
            raise NotMounted(prefix)
        self._mounts = [m for m in self._mounts if m.prefix != prefix]
        return mount
