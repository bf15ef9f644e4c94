# tests/stubs.py
from __future__ import annotations

import asyncio
import json
from typing import Dict, List, Mapping, Union

from translation_bot.providers.base import DEFAULT_URLS

TR_LANGS = {
    "dirs": ["en-ru", "ru-pl", "ru-hu"],
    "langs": {"ru": "русский", "en": "английский", "pl": "польский"},
}
DICT_LANGS = ["ru-ru", "ru-en", "ru-pl", "en-ru", "en-en", "de-en", "tr-ru"]
TR_RESULT = {"code": 200, "lang": "en-ru", "text": ["Hello, World!"]}
DICT_RESULT = {
    "head": {},
    "def": [
        {
            "text": "time",
            "pos": "noun",
            "tr": [
                {
                    "text": "время",
                    "pos": "существительное",
                    "syn": [{"text": "раз"}, {"text": "тайм"}],
                    "mean": [{"text": "timing"}, {"text": "fold"}, {"text": "half"}],
                    "ex": [
                        {"text": "prehistoric time", "tr": [{"text": "доисторическое время"}]},
                        {"text": "hundredth time", "tr": [{"text": "сотый раз"}]},
                    ],
                }
            ],
        }
    ],
}

Answer = Union[bytes, Exception]


def as_body(obj) -> bytes:
    return json.dumps(obj, ensure_ascii=False).encode("utf-8")


def stub_bodies() -> Dict[str, List[Answer]]:
    return {
        DEFAULT_URLS["trLangs"]: [as_body(TR_LANGS)],
        DEFAULT_URLS["dictLangs"]: [as_body(DICT_LANGS)],
        DEFAULT_URLS["translate"]: [as_body(TR_RESULT)],
        DEFAULT_URLS["dictionary"]: [as_body(DICT_RESULT)],
    }


class FakeExecutor:
    """Records calls; answers each URL from a queue, repeating the last answer."""

    def __init__(self, answers: Dict[str, List[Answer]], delay: float = 0.0) -> None:
        self.answers = answers
        self.delay = delay
        self.calls: List[tuple[str, Dict[str, str]]] = []

    def urls_called(self) -> List[str]:
        return [url for url, _ in self.calls]

    async def __call__(self, url: str, params: Mapping[str, str], timeout: float) -> bytes:
        self.calls.append((url, dict(params)))
        if self.delay:
            await asyncio.sleep(self.delay)
        queue = self.answers[url]
        answer = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(answer, Exception):
            raise answer
        return answer


