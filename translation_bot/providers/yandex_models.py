# translation_bot/providers/yandex_models.py
from __future__ import annotations

from typing import Any, Dict, List, Type, TypeVar, Union

from pydantic import BaseModel, Field, RootModel, ValidationError, field_validator, model_validator

from translation_bot.core.errors import DecodeError
from translation_bot.providers.base import STR_SEP, Service

# Indentation of the second and following translations of a dictionary article
TAB_SYM = f"{STR_SEP}  "


class UpstreamModel(BaseModel):
    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # JSON null means "absent": the field default applies
        if data is None:
            return {}
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


# --- supported directions -------------------------------------------------

class TranslationDirections(UpstreamModel):
    dirs: List[str] = Field(default_factory=list)
    langs: Dict[str, str] = Field(default_factory=dict)

    def content(self) -> List[str]:
        return sorted(set(self.dirs))


class DictionaryDirections(RootModel[List[str]]):
    @field_validator("root", mode="before")
    @classmethod
    def _null_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def content(self) -> List[str]:
        return sorted(set(self.root))


# --- translate endpoint ---------------------------------------------------

class TranslationResult(UpstreamModel):
    code: float = 0
    lang: str = ""
    text: List[str] = Field(default_factory=list)

    def render(self) -> str:
        return STR_SEP.join(self.text)


# --- dictionary lookup endpoint ------------------------------------------

class DictExample(UpstreamModel):
    text: str = ""
    pos: str = ""
    tr: List[Dict[str, Any]] = Field(default_factory=list)


class DictTranslation(UpstreamModel):
    text: str = ""
    pos: str = ""
    syn: List[Dict[str, Any]] = Field(default_factory=list)
    mean: List[Dict[str, Any]] = Field(default_factory=list)
    ex: List[DictExample] = Field(default_factory=list)


class DictArticle(UpstreamModel):
    text: str = ""
    pos: str = ""
    ts: str = ""
    gen: str = ""
    tr: List[DictTranslation] = Field(default_factory=list)

    def render(self) -> str:
        head = self.text
        if self.ts:
            head += f" [{self.ts}] "
        if self.pos:
            head += f"({self.pos})"
        items = TAB_SYM.join(f"{tr.text} ({tr.pos})" for tr in self.tr)
        return f"{head}{STR_SEP}{items}"


class DictionaryResult(UpstreamModel):
    head: Dict[str, Any] = Field(default_factory=dict)
    articles: List[DictArticle] = Field(default_factory=list, alias="def")

    def render(self) -> str:
        return STR_SEP.join(article.render() for article in self.articles)


Directions = Union[TranslationDirections, DictionaryDirections]
Result = Union[TranslationResult, DictionaryResult]

DIRECTIONS_MODELS: Dict[Service, Type[Directions]] = {
    Service.TRANSLATE: TranslationDirections,
    Service.DICTIONARY: DictionaryDirections,
}
RESULT_MODELS: Dict[Service, Type[Result]] = {
    Service.TRANSLATE: TranslationResult,
    Service.DICTIONARY: DictionaryResult,
}

M = TypeVar("M", bound=BaseModel)


def decode(model: Type[M], body: bytes) -> M:
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"unexpected {model.__name__} response: {e.error_count()} error(s)") from e


def parse_directions(service: Service, body: bytes) -> List[str]:
    """Reduce either directions shape to a sorted list of direction codes."""
    return decode(DIRECTIONS_MODELS[service], body).content()


def render_result(service: Service, body: bytes) -> str:
    """Reduce a translate or lookup response to one display string."""
    return decode(RESULT_MODELS[service], body).render()
