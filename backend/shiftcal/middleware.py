from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi.middleware.cors import CORSMiddleware

from shiftcal.api.deps import USER_ID_HEADER

if TYPE_CHECKING:
    from fastapi import FastAPI

    from shiftcal.config import Settings

# Callers identify themselves by header, never by cookie.
_CORS_METHODS = ["GET", "POST", "PUT", "DELETE"]
_CORS_HEADERS = ["Content-Type", USER_ID_HEADER]


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Allow the calendar frontends in ``cors_origins`` to call the API."""
    app.add_middleware(
        CORSMiddleware,  # ty: ignore[invalid-argument-type]
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=_CORS_METHODS,
        allow_headers=_CORS_HEADERS,
    )
