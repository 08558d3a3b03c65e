"""Application factory for the drafting backend.

Builds the FastAPI app, wires CORS and the plain-text error handlers, and
owns the draft store: either the one passed to ``create_app`` or one built
from settings when the app starts.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from drafting import __version__
from drafting.api.draft import router as draft_router
from drafting.config import Settings, load_settings
from drafting.logging_config import setup_logging
from drafting.services.draft_store import DraftStore, build_draft_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    owns_store = app.state.draft_store is None
    if owns_store:
        app.state.draft_store = build_draft_store(settings)
        logger.info("Using %s draft store", settings.store_backend)

    yield

    if owns_store:
        app.state.draft_store.close()
        app.state.draft_store = None


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(
        str(exc.detail), status_code=exc.status_code, headers=exc.headers
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Invalid body on %s %s", request.method, request.url.path)
    return PlainTextResponse("Invalid request body", status_code=400)


def create_app(
    store: Optional[DraftStore] = None, settings: Optional[Settings] = None
) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Drafting API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.draft_store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(draft_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "drafting.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
