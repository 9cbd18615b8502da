"""Maps engine errors to plain-text HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from ctr_engine.domain.errors import RequestError, StoreError

logger = logging.getLogger(__name__)


async def _bad_request(request: Request, exc: RequestError) -> PlainTextResponse:
    logger.warning("bad_request %s: %s", request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=400)


async def _server_error(request: Request, exc: StoreError) -> PlainTextResponse:
    logger.error("server_error %s: %s", request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestError, _bad_request)
    app.add_exception_handler(StoreError, _server_error)
