# translation_bot/providers/base.py
from __future__ import annotations

from enum import Enum
from typing import Dict, Mapping, Protocol


# Separator for translation fragments and dictionary lines
STR_SEP = "\n"

# User-Agent header sent with every outbound request
USER_AGENT = "translation-bot"

DEFAULT_URLS: Dict[str, str] = {
    "translate": "https://translate.yandex.net/api/v1.5/tr.json/translate",
    "dictionary": "https://dictionary.yandex.net/api/v1/dicservice.json/lookup",
    "trLangs": "https://translate.yandex.net/api/v1.5/tr.json/getLangs",
    "dictLangs": "https://dictionary.yandex.net/api/v1/dicservice.json/getLangs",
}


class Service(str, Enum):
    TRANSLATE = "translate"
    DICTIONARY = "dictionary"

    @property
    def content_url_key(self) -> str:
        return "translate" if self is Service.TRANSLATE else "dictionary"

    @property
    def langs_url_key(self) -> str:
        return "trLangs" if self is Service.TRANSLATE else "dictLangs"


class Executor(Protocol):
    async def __call__(self, url: str, params: Mapping[str, str], timeout: float) -> bytes:
        """Send one form-encoded POST and return the raw response body.

        Raises UpstreamTimeoutError, UpstreamTransportError or UpstreamStatusError.
        """
        ...
