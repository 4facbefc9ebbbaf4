"""Page drawing surface. Coordinates are PDF points, origin bottom-left, Y up.

The renderer and exporter draw through the ``Page`` protocol; ``PdfDocument`` backs
it with a reportlab canvas writing into memory.
"""

from __future__ import annotations

import io
import logging
from typing import Protocol, Sequence

from reportlab.pdfgen import canvas

from sashiko.utils.color import BLACK, RGB

logger = logging.getLogger(__name__)

Point = tuple[float, float]


class Page(Protocol):
    width: float
    height: float

    def draw_line(
        self,
        start: Point,
        end: Point,
        *,
        thickness: float,
        color: RGB,
        dash: tuple[float, float] | None = None,
    ) -> None: ...

    def draw_rectangle(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        fill_color: RGB | None = None,
        border_color: RGB | None = None,
        border_width: float = 0.0,
        dash: tuple[float, float] | None = None,
    ) -> None: ...

    def draw_polygon(self, points: Sequence[Point], *, fill_color: RGB) -> None: ...

    def draw_text(self, text: str, x: float, y: float, *, size: float, font: str = "Helvetica") -> None: ...


class ReportlabPage:
    """``Page`` over the current page of a reportlab canvas."""

    def __init__(self, pdf_canvas: canvas.Canvas, width: float, height: float) -> None:
        self._canvas = pdf_canvas
        self.width = width
        self.height = height

    def _stroke_style(self, color: RGB, thickness: float, dash: tuple[float, float] | None) -> None:
        self._canvas.setStrokeColorRGB(*color)
        self._canvas.setLineWidth(thickness)
        if dash and dash[0] > 0:
            self._canvas.setDash(list(dash), 0)
        else:
            self._canvas.setDash()

    def draw_line(self, start, end, *, thickness, color, dash=None) -> None:
        self._stroke_style(color, thickness, dash)
        self._canvas.line(start[0], start[1], end[0], end[1])

    def draw_rectangle(
        self,
        x,
        y,
        width,
        height,
        *,
        fill_color=None,
        border_color=None,
        border_width=0.0,
        dash=None,
    ) -> None:
        stroke = border_color is not None and border_width > 0
        if fill_color is not None:
            self._canvas.setFillColorRGB(*fill_color)
        if stroke:
            self._stroke_style(border_color, border_width, dash)
        if fill_color is None and not stroke:
            return
        self._canvas.rect(x, y, width, height, stroke=int(stroke), fill=int(fill_color is not None))

    def draw_polygon(self, points, *, fill_color) -> None:
        if len(points) < 3:
            return
        path = self._canvas.beginPath()
        path.moveTo(*points[0])
        for point in points[1:]:
            path.lineTo(*point)
        path.close()
        self._canvas.setFillColorRGB(*fill_color)
        self._canvas.drawPath(path, stroke=0, fill=1)

    def draw_text(self, text, x, y, *, size, font="Helvetica") -> None:
        self._canvas.setFont(font, size)
        self._canvas.setFillColorRGB(*BLACK)
        self._canvas.drawString(x, y, text)


class PdfDocument:
    """A single-page PDF built in memory."""

    def __init__(
        self,
        width: float,
        height: float,
        *,
        title: str = "",
        author: str = "",
        subject: str = "",
    ) -> None:
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=(width, height))
        self._canvas.setCreator("Sashiko Pattern Designer")
        if title:
            self._canvas.setTitle(title)
        if author:
            self._canvas.setAuthor(author)
        if subject:
            self._canvas.setSubject(subject)
        self.page = ReportlabPage(self._canvas, width, height)

    def save(self) -> bytes:
        self._canvas.showPage()
        self._canvas.save()
        data = self._buffer.getvalue()
        logger.debug("PDF document written: %d bytes", len(data))
        return data
