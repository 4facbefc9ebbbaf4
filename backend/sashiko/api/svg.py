"""POST /api/svg/* -- tile validation, sanitizing and geometric transforms.

SvgError raised by the engine is turned into a 422 by the app's exception handler.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from sashiko.models.requests import (
    MirrorRequest,
    SetViewBoxRequest,
    SnapRequest,
    SvgRequest,
    ThreadStyleRequest,
    TileRequest,
)
from sashiko.models.responses import CheckedSvgResponse, IssueResponse, SvgResponse, ValidateResponse
from sashiko.svg import transformer
from sashiko.svg.document import parse_document
from sashiko.svg.validator import (
    CheckedSvg,
    ValidationIssue,
    parse_and_validate,
    sanitize,
    validate,
    validate_and_sanitize,
    validate_full,
)
from sashiko.svg.viewbox import ViewBox, format_viewbox, parse_viewbox

router = APIRouter(prefix="/svg")


def _issue(issue: ValidationIssue) -> IssueResponse:
    return IssueResponse(
        kind=issue.kind.value,
        message=issue.message,
        element=issue.element,
        attribute=issue.attribute,
    )


def _tile_viewbox(req: TileRequest) -> ViewBox:
    return req.resolve_viewbox(parse_document(req.svg).viewbox)


def _checked(result: CheckedSvg) -> CheckedSvgResponse:
    return CheckedSvgResponse(
        ok=result.ok,
        svg=result.svg,
        view_box=format_viewbox(result.viewbox) if result.viewbox else None,
        error=result.error,
    )


@router.post("/validate", response_model=ValidateResponse)
async def validate_svg(req: SvgRequest) -> ValidateResponse:
    first = validate(req.svg)
    report = validate_full(req.svg)
    return ValidateResponse(
        valid=first is None,
        issue=_issue(first) if first else None,
        issues=[_issue(i) for i in report.issues],
        warnings=report.warnings,
    )


@router.post("/sanitize", response_model=SvgResponse)
async def sanitize_svg(req: SvgRequest) -> SvgResponse:
    return SvgResponse(svg=sanitize(req.svg))


@router.post("/validate-and-sanitize", response_model=CheckedSvgResponse)
async def validate_and_sanitize_svg(req: SvgRequest) -> CheckedSvgResponse:
    return _checked(validate_and_sanitize(req.svg))


@router.post("/parse", response_model=CheckedSvgResponse)
async def parse_svg(req: SvgRequest) -> CheckedSvgResponse:
    return _checked(parse_and_validate(req.svg))


@router.post("/mirror", response_model=SvgResponse)
async def mirror(req: MirrorRequest) -> SvgResponse:
    viewbox = _tile_viewbox(req)
    if req.axis == "horizontal":
        result = transformer.mirror_horizontal(req.svg, viewbox)
    else:
        result = transformer.mirror_vertical(req.svg, viewbox)
    return SvgResponse(svg=result, view_box=format_viewbox(viewbox))


@router.post("/rotate", response_model=SvgResponse)
async def rotate(req: TileRequest) -> SvgResponse:
    viewbox = _tile_viewbox(req)
    return SvgResponse(svg=transformer.rotate_90(req.svg, viewbox), view_box=format_viewbox(viewbox))


@router.post("/snap", response_model=SvgResponse)
async def snap(req: SnapRequest) -> SvgResponse:
    viewbox = _tile_viewbox(req)
    result = transformer.snap_to_grid(req.svg, viewbox, req.grid_size_mm)
    return SvgResponse(svg=result, view_box=format_viewbox(viewbox))


@router.post("/thread-style", response_model=SvgResponse)
async def thread_style(req: ThreadStyleRequest) -> SvgResponse:
    viewbox = _tile_viewbox(req)
    style = transformer.ThreadStyle(
        stroke_color=req.stroke_color,
        stroke_width_mm=req.stroke_width_mm,
        stitch_length_mm=req.stitch_length_mm,
        gap_length_mm=req.gap_length_mm,
    )
    return SvgResponse(svg=transformer.apply_thread_style(req.svg, viewbox, style))


@router.post("/thread-style/reset", response_model=SvgResponse)
async def thread_style_reset(req: SvgRequest) -> SvgResponse:
    return SvgResponse(svg=transformer.reset_thread_style(req.svg))


@router.post("/viewbox", response_model=SvgResponse)
async def set_viewbox(req: SetViewBoxRequest) -> SvgResponse:
    viewbox = parse_viewbox(req.view_box)
    if viewbox is None:
        raise HTTPException(status_code=422, detail=f"Invalid viewBox: {req.view_box!r}")
    return SvgResponse(svg=transformer.set_viewbox(req.svg, viewbox), view_box=format_viewbox(viewbox))
