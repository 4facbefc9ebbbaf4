"""POST /api/export/pdf -- render a tiled pattern sheet to PDF."""

from __future__ import annotations

import asyncio
import logging
import re
import time

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from sashiko.dependencies import get_render_config
from sashiko.models.export import PatternExportOptions
from sashiko.pdf.config import RenderConfig
from sashiko.pdf.exporter import export_pattern_pdf

router = APIRouter(prefix="/export")
logger = logging.getLogger(__name__)


def _filename(options: PatternExportOptions) -> str:
    stem = options.pattern_id or re.sub(r"[^a-z0-9]+", "-", options.pattern_name.lower()).strip("-")
    return f"{stem or 'pattern'}.pdf"


@router.post("/pdf")
async def export_pdf(
    options: PatternExportOptions,
    config: RenderConfig = Depends(get_render_config),
) -> Response:
    start = time.monotonic()
    data = await asyncio.to_thread(export_pattern_pdf, options, config)
    logger.info(
        "Exported %s (%d bytes) in %.0f ms",
        options.pattern_name,
        len(data),
        (time.monotonic() - start) * 1000,
    )
    return Response(
        content=data,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{_filename(options)}"'},
    )
