# tests/test_langs.py
from __future__ import annotations

import asyncio

import pytest

from stubs import FakeExecutor, as_body, stub_bodies
from translation_bot.core.context import TranslateContext
from translation_bot.core.errors import ConfigMissingError, UpstreamStatusError
from translation_bot.providers.base import DEFAULT_URLS, Service
from translation_bot.providers.yandex_langs import LanguageCatalog, contains_sorted


@pytest.mark.parametrize(
    "items",
    [[], ["en-ru"], ["de-en", "en-ru", "ru-en"], ["aa-bb", "aa-bc", "ab-aa", "zz-zz"]],
)
def test_contains_sorted_matches_membership(items) -> None:
    for probe in ["aa-bb", "en-ru", "en-r", "en-ruu", "ru-en", "zz-zz", ""]:
        assert contains_sorted(items, probe) == (probe in items)


async def test_translation_directions_loaded_sorted(fake_executor, ctx) -> None:
    catalog = LanguageCatalog(fake_executor)

    langs = await catalog.ensure(Service.TRANSLATE, ctx)

    assert langs == ["en-ru", "ru-hu", "ru-pl"]
    assert fake_executor.calls == [(DEFAULT_URLS["trLangs"], {"key": "tkey"})]
    assert catalog.is_known(Service.TRANSLATE, "ru-hu")
    assert not catalog.is_known(Service.TRANSLATE, "ru-en")


async def test_dictionary_directions_use_dictionary_key_and_ui(fake_executor, ctx) -> None:
    catalog = LanguageCatalog(fake_executor)

    langs = await catalog.ensure(Service.DICTIONARY, ctx)

    assert langs == sorted(langs)
    assert "tr-ru" in langs
    assert fake_executor.calls == [(DEFAULT_URLS["dictLangs"], {"key": "dkey", "ui": "en"})]
    # services are independent
    assert not catalog.loaded(Service.TRANSLATE)
    assert not catalog.is_known(Service.TRANSLATE, "en-ru")


async def test_unloaded_catalog_knows_nothing(fake_executor) -> None:
    catalog = LanguageCatalog(fake_executor)
    assert not catalog.is_known(Service.TRANSLATE, "en-ru")
    assert catalog.directions(Service.DICTIONARY) == []
    assert fake_executor.calls == []


async def test_concurrent_first_access_populates_once(ctx) -> None:
    executor = FakeExecutor(stub_bodies(), delay=0.02)
    catalog = LanguageCatalog(executor)

    results = await asyncio.gather(*(catalog.ensure(Service.DICTIONARY, ctx) for _ in range(20)))

    assert executor.urls_called() == [DEFAULT_URLS["dictLangs"]]
    assert all(r == results[0] for r in results)

    await catalog.ensure(Service.DICTIONARY, ctx)
    assert len(executor.calls) == 1


async def test_failed_population_is_not_cached(ctx) -> None:
    bodies = stub_bodies()
    bodies[DEFAULT_URLS["trLangs"]] = [UpstreamStatusError(503), as_body({"dirs": ["en-ru"], "langs": {}})]
    executor = FakeExecutor(bodies)
    catalog = LanguageCatalog(executor)

    with pytest.raises(UpstreamStatusError):
        await catalog.ensure(Service.TRANSLATE, ctx)
    assert not catalog.loaded(Service.TRANSLATE)

    assert await catalog.ensure(Service.TRANSLATE, ctx) == ["en-ru"]
    assert len(executor.calls) == 2


async def test_missing_key_raises_before_any_call(fake_executor) -> None:
    catalog = LanguageCatalog(fake_executor)
    ctx = TranslateContext(keys={Service.TRANSLATE: "tkey"}, timeout=3.0)

    with pytest.raises(ConfigMissingError):
        await catalog.ensure(Service.DICTIONARY, ctx)
    assert fake_executor.calls == []
