# translation_bot/core/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from translation_bot.core.errors import ConfigMissingError
from translation_bot.providers.base import Service


@dataclass(frozen=True)
class TranslateContext:
    """Per-call credentials and timeout handed to the dispatcher.

    Built from settings by the HTTP layer; the core never reads credentials
    from module state.
    """

    keys: Mapping[Service, str] = field(default_factory=dict)
    timeout: float = 0.0

    def key_for(self, service: Service) -> str:
        key = self.keys.get(service)
        if not key:
            raise ConfigMissingError(f"{service.value} API key is not configured")
        return key

    def require_timeout(self) -> float:
        if self.timeout <= 0:
            raise ConfigMissingError("upstream timeout is not configured")
        return self.timeout
