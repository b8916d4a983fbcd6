"""
FastAPI application.

Run with: uvicorn src.main:app
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.api.routes import router
from src.core.config import get_settings
from src.core.exceptions import (
    GameError,
    GameStateError,
    IllegalMoveError,
    InvalidFENError,
    InvalidRequestError,
    NotYourTurnError,
    RepositoryError,
)
from src.db.database import init_db

logger = logging.getLogger(__name__)

# Most specific first: the first matching class decides the status code
ERROR_STATUS: dict[type[GameError], int] = {
    RepositoryError: status.HTTP_404_NOT_FOUND,
    NotYourTurnError: status.HTTP_409_CONFLICT,
    GameStateError: status.HTTP_409_CONFLICT,
    IllegalMoveError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidFENError: status.HTTP_400_BAD_REQUEST,
    InvalidRequestError: status.HTTP_400_BAD_REQUEST,
}


def status_for(exc: GameError) -> int:
    return next(
        (code for error, code in ERROR_STATUS.items() if isinstance(exc, error)),
        status.HTTP_400_BAD_REQUEST,
    )


async def handle_game_error(request: Request, exc: Exception) -> JSONResponse:
    code = status_for(exc) if isinstance(exc, GameError) else status.HTTP_400_BAD_REQUEST
    logger.info("%s %s -> %d: %s", request.method, request.url.path, code, exc)
    return JSONResponse(status_code=code, content={"detail": str(exc)})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_db()
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="chess3d", version="0.1.0", lifespan=lifespan)
    app.include_router(router)
    app.add_exception_handler(GameError, handle_game_error)
    return app


app = create_app()
