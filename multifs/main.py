from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from multifs import __version__
from multifs.api.fs import router as fs_router
from multifs.fs.router import MultiFS
from multifs.logging.ndjson import init_logging, log_event
from multifs.mounts import build_fs


def _load_dotenvs() -> None:
    """
    Load environment variables from ./.env, without overriding what is
    already set.
    """
    load_dotenv(Path.cwd() / ".env")


def create_app(fs: Optional[MultiFS] = None) -> FastAPI:
    """
    HTTP surface over one overlay. Without `fs`, the overlay is built from
    MULTIFS_MOUNTS_CONFIG.
    """
    _load_dotenvs()
    init_logging()
    app = FastAPI(title="multifs", version=__version__)
    app.state.fs = fs if fs is not None else build_fs()

    cors_origins = os.environ.get("MULTIFS_CORS_ORIGINS", "http://localhost:5173").split(",")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in cors_origins if o.strip()],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    def health() -> dict:
        return {"ok": True, "mounts": len(app.state.fs.mounts())}

    @app.middleware("http")
    async def log_exceptions(request, call_next):  # type: ignore[no-untyped-def]
        try:
            return await call_next(request)
        except Exception as e:  # noqa: BLE001
            log_event(
                level="error",
                event="api.exception",
                data={"method": request.method, "path": str(request.url.path), "error": str(e)},
            )
            raise

    app.include_router(fs_router)
    log_event(level="info", event="app.startup", data={"mounts": app.state.fs.mounts()})
    return app
