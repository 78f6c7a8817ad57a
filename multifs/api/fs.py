from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel

from multifs.errors import FsError, NotFound
from multifs.fs.router import MultiFS
from multifs.paths import absolute


router = APIRouter()


class EntryOut(BaseModel):
    name: str
    path: str
    kind: str
    size: Optional[int] = None


class ListResponse(BaseModel):
    path: str
    entries: list[EntryOut]


class StatResponse(BaseModel):
    path: str
    name: str
    isDir: bool
    size: int
    mode: int
    mtime: Optional[float] = None


class ReadResponse(BaseModel):
    path: str
    content: str


def _fs(request: Request) -> MultiFS:
    return request.app.state.fs


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, (NotFound, FileNotFoundError)):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


@router.get("/api/mounts")
def api_mounts(request: Request) -> dict:
    return {"mounts": _fs(request).mounts()}


@router.get("/api/fs/list")
def api_fs_list(request: Request, path: str = Query(...)) -> ListResponse:
    path = absolute(path)
    try:
        entries = _fs(request).list_dir(path)
    except (FsError, OSError) as e:
        raise _http_error(e) from e
    return ListResponse(path=path, entries=[EntryOut(**e.to_dict(parent=path)) for e in entries])


@router.get("/api/fs/stat")
def api_fs_stat(request: Request, path: str = Query(...)) -> StatResponse:
    path = absolute(path)
    try:
        info = _fs(request).stat(path)
    except (FsError, OSError) as e:
        raise _http_error(e) from e
    return StatResponse(path=path, **info.to_dict())


@router.get("/api/fs/read")
def api_fs_read(request: Request, path: str = Query(...), max_bytes: int = Query(512_000, ge=1)) -> ReadResponse:
    try:
        data = _fs(request).read(path, max_bytes=max_bytes)
    except (FsError, OSError) as e:
        raise _http_error(e) from e
    return ReadResponse(path=path, content=data.decode("utf-8", errors="replace"))


@router.get("/api/fs/tree")
def api_fs_tree(request: Request, path: str = Query("/")) -> dict:
    try:
        return {"tree": _fs(request).tree(path)}
    except (FsError, OSError) as e:
        raise _http_error(e) from e
