# translation_bot/core/errors.py
from __future__ import annotations

from typing import Optional


class TranslatorError(Exception):
    """Base class for every failure surfaced by the translation core."""


class ConfigMissingError(TranslatorError):
    """Credentials or timeout are not available to the caller."""


class UpstreamTimeoutError(TranslatorError):
    def __init__(self, timeout: float) -> None:
        super().__init__(f"timed out ({timeout:g}s)")
        self.timeout = timeout


class UpstreamTransportError(TranslatorError):
    """Network level failure: DNS, connect, TLS, broken response stream."""


class UpstreamStatusError(TranslatorError):
    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        text = f"wrong response code={status_code}"
        if message:
            text += f": {message}"
        super().__init__(text)
        self.status_code = status_code
        self.message = message


class DecodeError(TranslatorError):
    """Upstream returned a body that does not match the expected JSON shape."""
