# translation_bot/providers/yandex_langs.py
from __future__ import annotations

import asyncio
import logging
from bisect import bisect_left
from typing import Dict, List, Mapping, Optional, Sequence

from translation_bot.core.context import TranslateContext
from translation_bot.providers.base import DEFAULT_URLS, Executor, Service
from translation_bot.providers.yandex import YandexExecutor
from translation_bot.providers.yandex_models import parse_directions

log = logging.getLogger("bot.langs")


def contains_sorted(items: Sequence[str], value: str) -> bool:
    i = bisect_left(items, value)
    return i < len(items) and items[i] == value


def langs_params(service: Service, key: str) -> Dict[str, str]:
    if service is Service.TRANSLATE:
        return {"key": key}
    return {"key": key, "ui": "en"}


class LanguageCatalog:
    """Supported language directions per upstream service.

    Each service list is fetched at most once: the first caller populates it
    under a per-service lock while concurrent callers wait and reuse the
    result. A failed fetch leaves the slot empty so the next call retries.
    """

    def __init__(
        self,
        executor: Optional[Executor] = None,
        urls: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.executor: Executor = executor or YandexExecutor()
        self.urls = dict(urls or DEFAULT_URLS)
        self._langs: Dict[Service, List[str]] = {}
        self._locks: Dict[Service, asyncio.Lock] = {s: asyncio.Lock() for s in Service}

    def loaded(self, service: Service) -> bool:
        return service in self._langs

    def directions(self, service: Service) -> List[str]:
        return list(self._langs.get(service, ()))

    async def load(self, service: Service, ctx: TranslateContext) -> List[str]:
        key = ctx.key_for(service)
        timeout = ctx.require_timeout()
        body = await self.executor(self.urls[service.langs_url_key], langs_params(service, key), timeout)
        return parse_directions(service, body)

    async def ensure(self, service: Service, ctx: TranslateContext) -> List[str]:
        langs = self._langs.get(service)
        if langs is not None:
            return langs
        async with self._locks[service]:
            langs = self._langs.get(service)
            if langs is None:
                langs = await self.load(service, ctx)
                self._langs[service] = langs
                log.info({"event": "langs.loaded", "service": service.value, "count": len(langs)})
        return langs

    def is_known(self, service: Service, direction: str) -> bool:
        return contains_sorted(self._langs.get(service, ()), direction)
