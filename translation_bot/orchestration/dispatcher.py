# translation_bot/orchestration/dispatcher.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional

from translation_bot.core.context import TranslateContext
from translation_bot.core.errors import ConfigMissingError
from translation_bot.providers.base import DEFAULT_URLS, Executor, Service
from translation_bot.providers.yandex import YandexExecutor
from translation_bot.providers.yandex_langs import LanguageCatalog
from translation_bot.providers.yandex_models import render_result

log = logging.getLogger("bot.dispatch")

# Language direction, e.g. "en-ru" or "eng-rus"
LANG_DIRECT = re.compile(r"[a-z]{2,3}-[a-z]{2,3}")


class Intent(str, Enum):
    TRANSLATE = "translate"
    LOOKUP = "lookup"

    @property
    def service(self) -> Service:
        return Service.TRANSLATE if self is Intent.TRANSLATE else Service.DICTIONARY


@dataclass(frozen=True)
class ParsedRequest:
    direction: str
    text: str
    intent: Intent


def parse_request(text: str) -> Optional[ParsedRequest]:
    """Find the first direction token and classify what follows it.

    One word after the direction is a dictionary lookup, several words are
    sent to machine translation. Returns None when no direction is present.
    """
    found = LANG_DIRECT.search(text)
    if found is None:
        return None
    payload = text[found.end():].strip(" ")
    intent = Intent.TRANSLATE if len(payload.split(" ", 1)) > 1 else Intent.LOOKUP
    return ParsedRequest(direction=found.group(0), text=payload, intent=intent)


def content_params(intent: Intent, direction: str, text: str, key: str) -> Dict[str, str]:
    params = {"lang": direction, "text": text, "key": key}
    if intent is Intent.TRANSLATE:
        params["format"] = "plain"
    return params


class Translator:
    def __init__(
        self,
        catalog: Optional[LanguageCatalog] = None,
        executor: Optional[Executor] = None,
        urls: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.urls = dict(urls or DEFAULT_URLS)
        self.executor: Executor = executor or YandexExecutor()
        self.catalog = catalog or LanguageCatalog(self.executor, self.urls)

    async def translate(self, ctx: Optional[TranslateContext], text: str) -> str:
        """Return the display string for a chat message, "" when there is nothing to say."""
        req = parse_request(text or "")
        if req is None:
            return ""
        if not req.text.strip():
            log.info({"event": "dispatch.empty_payload", "direction": req.direction})
            return ""
        if ctx is None:
            raise ConfigMissingError("configuration context not found")

        service = req.intent.service
        await self.catalog.ensure(service, ctx)
        if not self.catalog.is_known(service, req.direction):
            log.info({"event": "dispatch.unknown_direction", "direction": req.direction, "service": service.value})
            return ""
        key = ctx.key_for(service)
        body = await self.executor(
            self.urls[service.content_url_key],
            content_params(req.intent, req.direction, req.text, key),
            ctx.require_timeout(),
        )
        result = render_result(service, body)
        log.info({"event": "dispatch.ok", "intent": req.intent.value, "direction": req.direction, "chars": len(result)})
        return result
