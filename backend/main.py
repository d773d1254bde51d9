from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backend.db_init import init_db
from backend.routes import history, insights, logs
from backend.settings import get_note_cipher
from daylog.logging_config import configure_logging


def create_app() -> FastAPI:
    configure_logging("BACKEND_LOG_LEVEL")
    app = FastAPI(title="Daylog API", version="0.1.0")

    app.include_router(logs.router)
    app.include_router(history.router)
    app.include_router(insights.router)

    @app.on_event("startup")
    async def _startup():
        get_note_cipher()
        await init_db()

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logging.getLogger("backend").exception("Unhandled exception: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Internal error"})

    @app.get("/health")
    async def health():
        return {"ok": True}

    return app


app = create_app()
