"""POST /api/path/parse -- path data as typed commands."""

from __future__ import annotations

from fastapi import APIRouter

from sashiko.models.requests import PathParseRequest
from sashiko.models.responses import PathCommandResponse, PathParseResponse
from sashiko.svg.path_parser import parse_path, serialize_path, to_absolute

router = APIRouter(prefix="/path")


@router.post("/parse", response_model=PathParseResponse)
async def parse(req: PathParseRequest) -> PathParseResponse:
    commands = parse_path(req.d)
    if req.absolute:
        commands = to_absolute(commands)
    return PathParseResponse(
        commands=[
            PathCommandResponse(command=cmd.letter, args=[float(a) for a in cmd.arguments()])
            for cmd in commands
        ],
        d=serialize_path(commands),
    )
