from __future__ import annotations

import json
import os
import threading
import time
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Optional

_lock = threading.Lock()

_MAX_VALUE_LEN = 600
_MAX_ITEMS = 80


def log_dir() -> Optional[Path]:
    # No directory configured means event logging is off.
    p = os.environ.get("MULTIFS_LOG_DIR")
    return Path(p).expanduser() if p else None


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, ""))
    except ValueError:
        return default


def _clip(v: Any) -> Any:
    # event data is flat: paths, counts, flags and the odd list of prefixes
    if isinstance(v, str) and len(v) > _MAX_VALUE_LEN:
        return v[:_MAX_VALUE_LEN] + f"...(+{len(v) - _MAX_VALUE_LEN} chars)"
    if isinstance(v, (list, tuple)):
        items = [_clip(x) for x in v[:_MAX_ITEMS]]
        if len(v) > _MAX_ITEMS:
            items.append({"_truncated_items": len(v) - _MAX_ITEMS})
        return items
    if v is None or isinstance(v, (str, int, float, bool)):
        return v
    return _clip(str(v))


def _log_file(d: Path) -> Path:
    """
    Today's file, or the first numbered sibling still under
    MULTIFS_LOG_MAX_BYTES.
    """
    stem = datetime.now().strftime("multifs-%Y-%m-%d")
    max_b = _env_int("MULTIFS_LOG_MAX_BYTES", 50 * 1024 * 1024)
    for i in range(1000):
        p = d / (f"{stem}.ndjson" if i == 0 else f"{stem}.{i}.ndjson")
        if not p.exists() or p.stat().st_size < max_b:
            return p
    return d / f"{stem}.ndjson"


def _prune(d: Path) -> None:
    cutoff = (datetime.now() - timedelta(days=_env_int("MULTIFS_LOG_RETENTION_DAYS", 7))).timestamp()
    for p in d.glob("multifs-*.ndjson"):
        try:
            if p.stat().st_mtime < cutoff:
                p.unlink(missing_ok=True)
        except OSError:
            continue


def init_logging() -> None:
    d = log_dir()
    if d is None:
        return
    with _lock:
        d.mkdir(parents=True, exist_ok=True)
        _prune(d)


def log_event(*, level: str, event: str, data: Optional[dict[str, Any]] = None) -> None:
    """
    Append one NDJSON record. Callers pass paths and sizes, never file
    contents. Never raises.
    """
    d = log_dir()
    if d is None:
        return
    rec: dict[str, Any] = {"ts": int(time.time() * 1000), "level": level, "event": event}
    if data:
        rec["data"] = {str(k): _clip(v) for k, v in data.items()}

    line = json.dumps(rec, ensure_ascii=False)
    with _lock:
        try:
            d.mkdir(parents=True, exist_ok=True)
            _prune(d)
            with open(_log_file(d), "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError:
            pass
