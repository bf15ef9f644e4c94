# apps/api/main.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from translation_bot.core.errors import TranslatorError
from translation_bot.core.logging import configure_logging, request_logging_middleware
from translation_bot.core.settings import APP_VERSION, get_settings
from translation_bot.orchestration.dispatcher import Translator

settings = get_settings()
configure_logging(level=settings.log_level, bot=settings.app_name)

app = FastAPI(title=settings.app_name, version=APP_VERSION)
log_event = logging.getLogger("bot.event")

app.middleware("http")(request_logging_middleware)

# One dispatcher per app: its language catalog is filled on first use
translator = Translator(urls=settings.urls)
translate_ctx = settings.context()

# Every failure is answered with 417 Expectation Failed
FAILED = 417
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


class InfoResponse(BaseModel):
    author: str
    info: str
    commands: List[str] = Field(default_factory=list)


class EventRequest(BaseModel):
    text: str = ""
    username: str = ""
    display_name: str = ""


class EventResponse(BaseModel):
    text: str
    bot: str


@app.get("/health")
async def health() -> Dict[str, Any]:
    return {"status": "ok", "time": datetime.now(timezone.utc).isoformat()}


@app.get("/config")
async def config() -> JSONResponse:
    safe_config = {
        "app_name": settings.app_name,
        "version": APP_VERSION,
        "env": settings.app_env,
        "log_level": settings.log_level,
        "timeout": settings.timeout,
        "providers": {
            "translate": {
                "url": settings.translate_url,
                "langs_url": settings.translate_langs_url,
                "key_configured": bool(settings.translation_key),
            },
            "dictionary": {
                "url": settings.dictionary_url,
                "langs_url": settings.dictionary_langs_url,
                "key_configured": bool(settings.dictionary_key),
            },
        },
    }
    return JSONResponse(content=safe_config)


@app.api_route("/info", methods=ALL_METHODS)
async def info(request: Request) -> JSONResponse:
    if request.method != "GET":
        raise HTTPException(status_code=FAILED, detail=f"{request.method} method is not allowed")
    resp = InfoResponse(author=settings.author, info="Radio-t chat yandex translation-bot")
    return JSONResponse(status_code=201, content=resp.model_dump())


@app.api_route("/event", methods=ALL_METHODS)
async def event(request: Request) -> JSONResponse:
    if request.method != "POST":
        raise HTTPException(status_code=FAILED, detail=f"{request.method} method is not allowed")
    raw = await request.body()
    try:
        req = EventRequest.model_validate_json(raw) if raw.strip() else EventRequest()
    except ValidationError as e:
        log_event.error({"event": "event.decode_error", "error": str(e)})
        raise HTTPException(status_code=FAILED, detail="JSON decode error")

    try:
        result = await translator.translate(translate_ctx, req.text)
    except TranslatorError as e:
        log_event.error({"event": "event.translation_error", "username": req.username, "error": str(e)})
        raise HTTPException(status_code=FAILED, detail=str(e))
    if not result:
        raise HTTPException(status_code=FAILED, detail="nothing")

    resp = EventResponse(text=result, bot=settings.app_name)
    return JSONResponse(status_code=201, content=resp.model_dump())
