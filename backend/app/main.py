"""FastAPI application entrypoint for the username checker."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi import HTTPException
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import app.runtime as runtime
from app.api.http import EscapedJSONResponse
from app.api.http import handle_http_exception
from app.api.http import handle_validation_error
from app.api.routers.evaluate import router as evaluate_router
from app.api.routers.session import router as session_router


def startup() -> None:
    """Rebuild settings, store and session service from the environment."""
    runtime.startup()


@asynccontextmanager
async def lifespan(_: FastAPI):
    startup()
    yield


app = FastAPI(title="namecheck", lifespan=lifespan, default_response_class=EscapedJSONResponse)
app.add_middleware(
    CORSMiddleware,
    allow_origins=runtime.settings.cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(evaluate_router)
app.include_router(session_router)


@app.exception_handler(HTTPException)
async def handle_http_exception_route(request: Request, exc: HTTPException) -> JSONResponse:
    """Adapter used by FastAPI exception handling."""
    return await handle_http_exception(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error_route(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await handle_validation_error(request, exc)


def serve() -> None:
    """Run the API with uvicorn using configured host and port."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=runtime.settings.namecheck_app_host,
        port=runtime.settings.namecheck_app_port,
    )


__all__ = [
    "app",
    "serve",
    "startup",
]
