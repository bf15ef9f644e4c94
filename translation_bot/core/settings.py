# translation_bot/core/settings.py
from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from translation_bot.core.context import TranslateContext
from translation_bot.core.errors import ConfigMissingError
from translation_bot.providers.base import DEFAULT_URLS, Service

APP_VERSION = "0.1.0"
DEFAULT_TIMEOUT_SEC = 3.0

# JSON config file keys
_FILE_KEYS = {
    "host": "app_host",
    "port": "app_port",
    "tkey": "translation_key",
    "dkey": "dictionary_key",
    "timeout": "timeout",
}


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore", populate_by_name=True)

    app_env: str = "dev"
    app_name: str = "translation-bot"
    app_host: str = Field(default="127.0.0.1", validation_alias="APP_HOST")
    app_port: int = Field(default=8000, validation_alias="APP_PORT")
    author: str = "thebestzorro@yandex.ru"

    log_level: str = "INFO"
    config_file: Optional[str] = Field(default=None, validation_alias="CONFIG_FILE")

    # Upstream credentials
    translation_key: str = Field(default="", validation_alias="TRANSLATION_KEY")
    dictionary_key: str = Field(default="", validation_alias="DICTIONARY_KEY")
    timeout: float = Field(default=DEFAULT_TIMEOUT_SEC, validation_alias="TIMEOUT")

    # Upstream endpoints
    translate_url: str = Field(default=DEFAULT_URLS["translate"], validation_alias="TRANSLATE_URL")
    dictionary_url: str = Field(default=DEFAULT_URLS["dictionary"], validation_alias="DICTIONARY_URL")
    translate_langs_url: str = Field(default=DEFAULT_URLS["trLangs"], validation_alias="TRANSLATE_LANGS_URL")
    dictionary_langs_url: str = Field(default=DEFAULT_URLS["dictLangs"], validation_alias="DICTIONARY_LANGS_URL")

    @field_validator("timeout")
    @classmethod
    def _default_timeout(cls, v: float) -> float:
        # zero in the config file means "use the default"
        if v <= 0:
            return DEFAULT_TIMEOUT_SEC
        return v

    @property
    def urls(self) -> Dict[str, str]:
        return {
            "translate": self.translate_url,
            "dictionary": self.dictionary_url,
            "trLangs": self.translate_langs_url,
            "dictLangs": self.dictionary_langs_url,
        }

    def context(self) -> TranslateContext:
        return TranslateContext(
            keys={
                Service.TRANSLATE: self.translation_key,
                Service.DICTIONARY: self.dictionary_key,
            },
            timeout=self.timeout,
        )


def _read_config_file(path: str) -> Dict[str, Any]:
    file = Path(path).expanduser()
    try:
        data = json.loads(file.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigMissingError(f"configuration file {file} is not readable: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigMissingError(f"configuration file {file} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigMissingError(f"configuration file {file} must contain a JSON object")
    return {_FILE_KEYS[k]: v for k, v in data.items() if k in _FILE_KEYS}


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    s = AppSettings()
    if not s.config_file:
        return s
    # values from the JSON file win over the environment
    overrides = _read_config_file(s.config_file)
    return AppSettings.model_validate({**s.model_dump(), **overrides})
