# translation_bot/providers/yandex.py
from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Mapping, Optional

import httpx

from translation_bot.core.errors import (
    UpstreamStatusError,
    UpstreamTimeoutError,
    UpstreamTransportError,
)
from translation_bot.providers.base import USER_AGENT

log = logging.getLogger("bot.upstream")


def _error_message(body: bytes) -> Optional[str]:
    # Yandex APIs answer errors with {"code": 401, "message": "..."}
    try:
        data: Any = json.loads(body)
    except ValueError:
        return None
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return None


class YandexExecutor:
    """Single-attempt form POST raced against a deadline.

    The HTTP call runs in its own task; when the deadline wins the task is
    cancelled and awaited before the timeout error is raised, so nothing is
    left pending.
    """

    def __init__(self, user_agent: str = USER_AGENT) -> None:
        self.headers = {
            "User-Agent": user_agent,
            "Content-Type": "application/x-www-form-urlencoded",
        }

    async def _post(self, url: str, params: Mapping[str, str], timeout: float) -> httpx.Response:
        async with httpx.AsyncClient(timeout=timeout, headers=self.headers) as client:
            return await client.post(url, data=dict(params))

    async def __call__(self, url: str, params: Mapping[str, str], timeout: float) -> bytes:
        start = time.perf_counter()
        task = asyncio.ensure_future(self._post(url, params, timeout))
        try:
            done, _ = await asyncio.wait({task}, timeout=timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise
        if not done:
            task.cancel()
            try:
                await task
            except (asyncio.CancelledError, httpx.HTTPError):
                pass
            log.warning({"event": "upstream.timeout", "url": url, "timeout": timeout})
            raise UpstreamTimeoutError(timeout)

        try:
            resp = task.result()
        except httpx.TimeoutException as e:
            log.warning({"event": "upstream.timeout", "url": url, "timeout": timeout})
            raise UpstreamTimeoutError(timeout) from e
        except httpx.HTTPError as e:
            log.warning({"event": "upstream.transport_error", "url": url, "error": str(e)})
            raise UpstreamTransportError(str(e) or e.__class__.__name__) from e

        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        if resp.status_code != httpx.codes.OK:
            log.warning({"event": "upstream.status", "url": url, "status": resp.status_code, "duration_ms": duration_ms})
            raise UpstreamStatusError(resp.status_code, _error_message(resp.content))
        log.info({"event": "upstream.ok", "url": url, "status": resp.status_code, "duration_ms": duration_ms})
        return resp.content
