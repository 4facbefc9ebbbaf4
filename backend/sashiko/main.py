"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sashiko.config import settings
from sashiko.pdf.exporter import ExportError
from sashiko.svg.errors import SvgError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.sashiko_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


async def _svg_error_handler(request: Request, exc: SvgError) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"kind": exc.kind, "message": str(exc)})


async def _export_error_handler(request: Request, exc: ExportError) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"kind": "export", "message": str(exc)})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Sashiko Pattern Designer",
        description="Sashiko tile geometry — SVG transforms, validation and print-ready PDF export",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SvgError, _svg_error_handler)
    app.add_exception_handler(ExportError, _export_error_handler)

    from sashiko.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
