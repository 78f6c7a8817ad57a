from __future__ import annotations


def clean(path: str) -> str:
    """
    Lexical path cleaning: collapse repeated slashes, drop "." segments,
    resolve ".." against the previous segment and strip trailing slashes.
    Never touches the disk.
    """
    rooted = path.startswith("/")
    out: list[str] = []
    for part in path.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if out and out[-1] != "..":
                out.pop()
            elif not rooted:
                # leading ".." survives in a relative path
                out.append(part)
            continue
        out.append(part)

    joined = "/".join(out)
    if rooted:
        return "/" + joined
    return joined or "."


def absolute(path: str) -> str:
    # caller-facing lookups: "." is the root, "a/b" means "/a/b"
    p = clean(path)
    if p == ".":
        return "/"
    if not p.startswith("/"):
        return "/" + p
    return p


def segments(path: str) -> list[str]:
    return [s for s in path.split("/") if s]


def basename(path: str) -> str:
    parts = segments(path)
    return parts[-1] if parts else "/"


def join(prefix: str, name: str) -> str:
    if prefix == "/":
        return "/" + name
    return prefix + "/" + name


def is_under(path: str, prefix: str) -> bool:
    """True if `path` equals `prefix` or lies beneath it."""
    if prefix == "/":
        return path.startswith("/")
    return path == prefix or path.startswith(prefix + "/")


def strip_prefix(path: str, prefix: str) -> str:
    """
    Backend-relative path of `path` inside `prefix`: "." for the mount
    point itself, otherwise the remainder without a leading slash.
    """
    if path == prefix:
        return "."
    if prefix == "/":
        return path[1:] or "."
    return path[len(prefix) + 1 :]
