from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field


class ParseResponse(BaseModel):
    filename: Optional[str] = None
    headers: List[str] = Field(default_factory=list)
    rows: List[List[str]] = Field(default_factory=list)
    row_count: int = 0
    column_count: int = 0


class WorkspaceState(BaseModel):
    filename: Optional[str] = None
    headers: List[str] = Field(default_factory=list)
    selected: List[str] = Field(default_factory=list, examples=[["Full Name", "Employer"]])
    row_count: int = 0
    printable: bool = False


class LoadResponse(BaseModel):
    applied: bool = True
    workspace: WorkspaceState


class HealthResponse(BaseModel):
    ok: bool = True
