# tests/conftest.py
from __future__ import annotations

import pytest

from stubs import FakeExecutor, stub_bodies
from translation_bot.core.context import TranslateContext
from translation_bot.providers.base import Service


@pytest.fixture
def ctx() -> TranslateContext:
    return TranslateContext(keys={Service.TRANSLATE: "tkey", Service.DICTIONARY: "dkey"}, timeout=3.0)


@pytest.fixture
def fake_executor() -> FakeExecutor:
    return FakeExecutor(stub_bodies())
