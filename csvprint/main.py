import logging
from typing import List, Optional

from fastapi import FastAPI, UploadFile, File, Form, HTTPException
from fastapi.responses import HTMLResponse

from . import config
from .models import HealthResponse, LoadResponse, ParseResponse, WorkspaceState
from .parser import decode_csv_bytes, parse_csv_bytes
from .render import PrintSet, build_print_set
from .rules import CSV_CONTENT_TYPES, CSV_EXTENSION
from .workspace import Workspace

logger = logging.getLogger(__name__)

app = FastAPI(
    title="csv-print-set",
    description="Render selected CSV columns into a paginated, print-ready document",
    version="0.1.0",
)

workspace = Workspace(document_title=config.DOCUMENT_TITLE)


def _require_csv(file: UploadFile) -> None:
    filename = (file.filename or "").lower()
    if filename.endswith(CSV_EXTENSION) or file.content_type in CSV_CONTENT_TYPES:
        return
    raise HTTPException(status_code=422, detail="Only CSV files are supported")


async def _read_upload(file: UploadFile) -> bytes:
    _require_csv(file)
    raw = await file.read()
    logger.info("received %s (%d bytes)", file.filename, len(raw))
    return raw


def _print_response(result: PrintSet) -> HTMLResponse:
    if not result.ok:
        raise HTTPException(status_code=422, detail=f"Nothing to print: {result.reason}")
    return HTMLResponse(content=result.document)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/parse", response_model=ParseResponse)
async def parse_csv(file: UploadFile = File(...)):
    table = parse_csv_bytes(await _read_upload(file))
    return ParseResponse(
        filename=file.filename,
        headers=table.headers,
        rows=table.rows,
        row_count=table.row_count,
        column_count=table.column_count,
    )


@app.post("/print-set", response_class=HTMLResponse)
async def print_set(
    file: UploadFile = File(...),
    columns: Optional[List[str]] = Form(None),
    rows: str = Form(""),
):
    table = parse_csv_bytes(await _read_upload(file))
    selected = table.headers if columns is None else columns
    return _print_response(
        build_print_set(table.headers, table.rows, selected, rows, title=config.DOCUMENT_TITLE)
    )


@app.post("/workspace/file", response_model=LoadResponse)
async def load_workspace_file(file: UploadFile = File(...)):
    _require_csv(file)
    token = workspace.begin_load(file.filename)
    raw = await _read_upload(file)
    applied = workspace.complete_load(token, decode_csv_bytes(raw))
    return LoadResponse(applied=applied, workspace=workspace.snapshot())


@app.get("/workspace", response_model=WorkspaceState)
async def get_workspace():
    return workspace.snapshot()


@app.post("/workspace/columns/all", response_model=WorkspaceState)
async def select_all_columns():
    workspace.select_all()
    return workspace.snapshot()


@app.post("/workspace/columns/none", response_model=WorkspaceState)
async def select_no_columns():
    workspace.select_none()
    return workspace.snapshot()


@app.post("/workspace/columns/{name:path}/toggle", response_model=WorkspaceState)
async def toggle_column(name: str):
    try:
        workspace.toggle_column(name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown column: {name}")
    return workspace.snapshot()


@app.post("/workspace/print-set", response_class=HTMLResponse)
async def workspace_print_set(rows: str = Form("")):
    return _print_response(workspace.print_set(rows))
