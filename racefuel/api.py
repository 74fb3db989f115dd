# -*- coding: utf-8 -*-
"""
RaceFuel API

Race nutrition planning: food items and their nutrients, events with timed
food instances and nutrient goals, connections between athletes and event
sharing.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .auth.api import router as auth_router
from .auth.api import users_router
from .auth.security import get_claims_from_request
from .config import settings
from .connections.api import router as connections_router
from .db import dispose_db, init_db, utc_now
from .errors import error_body, install_error_handlers
from .event_goals.api import router as event_goals_router
from .events.api import router as events_router
from .events.api import triathlon_router
from .favorites.api import router as favorites_router
from .food_instances.api import router as food_instances_router
from .food_items.api import router as food_items_router
from .nutrients.api import router as nutrients_router
from .preferences.api import router as preferences_router
from .preferences.api import user_preferences_router
from .shared_events.api import router as shared_events_router

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


configure_logging()

app = FastAPI(
    title="RaceFuel API",
    description="Race nutrition planning: events, food timelines, goals and sharing",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)


@app.on_event("startup")
def _startup_init_db() -> None:
    init_db()


@app.on_event("shutdown")
def _shutdown_dispose_db() -> None:
    dispose_db()


# Tables exist even when lifespan events are not triggered (e.g. some test clients).
init_db()


_AUTH_EXEMPT_PREFIXES = (
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)


@app.middleware("http")
async def _auth_gate(request: Request, call_next):
    path = request.url.path
    if (
        request.method != "OPTIONS"
        and path.startswith("/api")
        and path != "/api/health"
        and not any(path.startswith(p) for p in _AUTH_EXEMPT_PREFIXES)
    ):
        try:
            get_claims_from_request(request)
        except HTTPException as exc:
            return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)))
    return await call_next(request)


app.include_router(auth_router)
app.include_router(users_router)
app.include_router(nutrients_router)
app.include_router(food_items_router)
app.include_router(events_router)
app.include_router(triathlon_router)
app.include_router(food_instances_router)
app.include_router(event_goals_router)
app.include_router(connections_router)
app.include_router(shared_events_router)
app.include_router(user_preferences_router)
app.include_router(preferences_router)
app.include_router(favorites_router)


@app.get("/api/health")
def health():
    return {"status": "ok", "timestamp": utc_now().isoformat()}


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    uvicorn.run("racefuel.api:app", host=settings.host, port=settings.port, reload=False)
