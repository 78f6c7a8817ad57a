from __future__ import annotations


class FsError(RuntimeError):
    pass


class MountError(FsError):
    pass


class InvalidPrefix(MountError):
    def __init__(self, prefix: str):
        self.prefix = prefix
        super().__init__(f"invalid prefix (path was normalized to {prefix!r})")


class AlreadyMounted(MountError):
    def __init__(self, prefix: str):
        self.prefix = prefix
        super().__init__(f"prefix {prefix!r} has already been mounted")


class NotMounted(MountError):
    def __init__(self, prefix: str):
        self.prefix = prefix
        super().__init__(f"prefix {prefix!r} has not been mounted")


class InvalidBackend(MountError):
    pass


class NotFound(FsError):
    def __init__(self, path: str, what: str = "file"):
        self.path = path
        super().__init__(f"{what} {path!r} was not found")


class Unsupported(FsError):
    """
    Raised when a backend offers neither a native listing/stat method nor a
    handle that can emulate one.
    """


class FileTooLarge(FsError):
    def __init__(self, path: str, size: int, max_bytes: int):
        self.path = path
        self.size = size
        self.max_bytes = max_bytes
        super().__init__(f"File too large ({size} bytes > {max_bytes})")
