from multifs.fs.providers.directory import DirectoryBackend, DirHandle
from multifs.fs.providers.memory import MemoryBackend, MemoryDir, MemoryFile

__all__ = ["DirectoryBackend", "DirHandle", "MemoryBackend", "MemoryDir", "MemoryFile"]
