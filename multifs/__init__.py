"""
multifs: compose several read-only filesystem backends into one namespace
by binding each to a path prefix.
"""

from multifs.errors import (
    AlreadyMounted,
    FileTooLarge,
    FsError,
    InvalidBackend,
    InvalidPrefix,
    MountError,
    NotFound,
    NotMounted,
    Unsupported,
)
from multifs.fs.backend import Capability
from multifs.fs.providers import DirectoryBackend, MemoryBackend
from multifs.fs.router import MultiFS
from multifs.types import DirEntry, FileInfo

__version__ = "0.1.0"

__all__ = [
    "AlreadyMounted",
    "Capability",
    "DirEntry",
    "DirectoryBackend",
    "FileInfo",
    "FileTooLarge",
    "FsError",
    "InvalidBackend",
    "InvalidPrefix",
    "MemoryBackend",
    "MountError",
    "MultiFS",
    "NotFound",
    "NotMounted",
    "Unsupported",
]
