# -*- coding: utf-8 -*-
"""Error envelope: every failure leaves the API as {"error": ..., "details"?: ...}."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings

logger = logging.getLogger(__name__)


def error_body(error: str, details: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": error}
    if details:
        body["details"] = details
    return body


def _field_name(loc: List[Any]) -> str:
    # ("body", "goals", 0, "quantity") -> "goals[0].quantity"
    parts = [p for p in loc if p not in ("body", "query", "path", "header", "cookie")]
    name = ""
    for part in parts:
        if isinstance(part, int):
            name += f"[{part}]"
        else:
            name = f"{name}.{part}" if name else str(part)
    return name or str(loc[0] if loc else "body")


def describe_validation_errors(errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    first = errors[0] if errors else {}
    field = _field_name(list(first.get("loc") or []))
    if first.get("type") == "missing":
        message = f"Missing required field: {field}"
    else:
        message = f"Invalid field: {field} - {first.get('msg', 'invalid value')}"
    details = "; ".join(f"{_field_name(list(e.get('loc') or []))}: {e.get('msg')}" for e in errors)
    return error_body(message, details)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=describe_validation_errors(list(exc.errors())))


async def _integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=400, content=error_body("Duplicate or conflicting record"))


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    details = str(exc) if settings.expose_error_details else None
    return JSONResponse(status_code=500, content=error_body("Internal server error", details))


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(IntegrityError, _integrity_error_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
