"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    env: str = "development"
    paper_sizes: list[str] = Field(default_factory=list)


class IssueResponse(BaseModel):
    kind: str
    message: str
    element: str | None = None
    attribute: str | None = None


class ValidateResponse(BaseModel):
    valid: bool
    issue: IssueResponse | None = None
    issues: list[IssueResponse] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class SvgResponse(BaseModel):
    svg: str
    view_box: str | None = None


class CheckedSvgResponse(BaseModel):
    ok: bool
    svg: str | None = None
    view_box: str | None = None
    error: str | None = None


class PathCommandResponse(BaseModel):
    command: str
    args: list[float] = Field(default_factory=list)


class PathParseResponse(BaseModel):
    commands: list[PathCommandResponse] = Field(default_factory=list)
    d: str = ""
