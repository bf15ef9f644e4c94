# translation_bot/core/logging.py
from __future__ import annotations

import json
import logging
import os
import time
from typing import Any, Dict, Optional

from fastapi import Request, Response


def _render_value(v: Any) -> str:
    if isinstance(v, (dict, list)):
        return json.dumps(v, ensure_ascii=False)
    return str(v)


class JsonFormatter(logging.Formatter):
    def __init__(self, bot: str = "translation-bot") -> None:
        super().__init__()
        self.bot = bot

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        base: Dict[str, Any] = {
            "level": record.levelname,
            "time": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(record.created)),
            "bot": self.bot,
            "logger": record.name,
        }
        msg = record.msg
        if isinstance(msg, dict):
            payload = {**base, **msg}
        else:
            payload = {**base, "message": record.getMessage()}
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class PlainFormatter(logging.Formatter):
    # "INFO  [translation-bot]: 2024-01-01 10:00:00 bot.upstream: key=value ..."
    def __init__(self, bot: str = "translation-bot") -> None:
        super().__init__()
        self.bot = bot

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        ts = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(record.created))
        lvl = record.levelname.ljust(5)
        base = f"{lvl} [{self.bot}]: {ts} {record.name}:"
        msg = record.msg
        if isinstance(msg, dict):
            parts = []
            for k, v in msg.items():
                v_str = _render_value(v)
                if " " in v_str or ";" in v_str:
                    v_str = f'"{v_str}"'
                parts.append(f"{k}={v_str}")
            text = " ".join(parts)
        else:
            text = record.getMessage()
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return f"{base} {text}".rstrip()


def configure_logging(level: str = "INFO", bot: str = "translation-bot") -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())

    handler = logging.StreamHandler()
    fmt = os.getenv("LOG_FORMAT", "json").lower()
    if fmt in ("plain", "text", "human"):
        handler.setFormatter(PlainFormatter(bot))
    else:
        handler.setFormatter(JsonFormatter(bot))

    root.handlers.clear()
    root.addHandler(handler)


async def request_logging_middleware(request: Request, call_next):
    start = time.perf_counter()
    response: Optional[Response] = None
    try:
        response = await call_next(request)
        return response
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        status = response.status_code if response is not None else 500
        logging.getLogger("bot.request").info(
            {
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "trace_id": request.headers.get("x-trace-id"),
            }
        )
