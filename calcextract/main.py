import logging
from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI, UploadFile, File, Form, HTTPException
from pydantic import TypeAdapter, ValidationError

from .diskmap import build_disk_map
from .exceptions import AmbiguousInputError, ExtractionError, NotFoundError
from .extract import (
    get_db_copies_from_copies_csv,
    get_db_list_from_databases_csv,
    select_server_row,
)
from .logging_config import setup_logging
from .models import (
    DatabaseCopyListResponse,
    DatabaseListResponse,
    DiskMapResponse,
    ErrorResponse,
    HealthResponse,
)
from .reader import read_csv_rows
from .rules import DEFAULT_SETTINGS

logger = logging.getLogger(__name__)

_rules_adapter = TypeAdapter(Dict[str, str])

ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "No row for the server"},
    409: {"model": ErrorResponse, "description": "More than one row for the server"},
    422: {"model": ErrorResponse, "description": "Unusable CSV content"},
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    yield


app = FastAPI(
    title="calc-extract",
    description="Server and database placement extraction from capacity calculator CSV exports",
    version="0.1.0",
    lifespan=lifespan,
)


def _http_error(exc: ExtractionError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        status = 404
    elif isinstance(exc, AmbiguousInputError):
        status = 409
    else:
        status = 422
    logger.warning(f"Extraction failed: {exc}")
    return HTTPException(status_code=status, detail=exc.to_dict())


def _parse_rules(rules: Optional[str]) -> Dict[str, str]:
    if not rules:
        return {}
    try:
        return _rules_adapter.validate_json(rules)
    except ValidationError:
        raise HTTPException(status_code=422, detail="rules must be a JSON object of string to string")


async def _read_rows(file: UploadFile):
    if not file.filename or not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")
    return read_csv_rows(await file.read())


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/diskmap", response_model=DiskMapResponse, responses=ERROR_RESPONSES)
async def disk_map(
    file: UploadFile = File(...),
    server: str = Form(...),
    rules: Optional[str] = Form(None),
):
    replacement_rules = _parse_rules(rules)
    try:
        rows = await _read_rows(file)
        record = select_server_row(rows, server)
        names = record.db_map.split(DEFAULT_SETTINGS.db_map_separator)
        disks = build_disk_map(names, record.db_per_volume, replacement_rules)
    except ExtractionError as exc:
        raise _http_error(exc)

    logger.info(f"{record.server_name}: {len(disks)} disks")
    return DiskMapResponse(server=record.server_name, db_per_volume=record.db_per_volume, disks=disks)


@app.post("/databases", response_model=DatabaseListResponse, responses=ERROR_RESPONSES)
async def databases(
    file: UploadFile = File(...),
    server: str = Form(...),
    rules: Optional[str] = Form(None),
):
    replacement_rules = _parse_rules(rules)
    try:
        rows = await _read_rows(file)
        items = get_db_list_from_databases_csv(rows, server, replacement_rules)
    except ExtractionError as exc:
        raise _http_error(exc)

    logger.info(f"{server}: {len(items)} databases")
    return DatabaseListResponse(server=server, items=items)


@app.post("/copies", response_model=DatabaseCopyListResponse, responses=ERROR_RESPONSES)
async def copies(
    file: UploadFile = File(...),
    server: str = Form(...),
    rules: Optional[str] = Form(None),
):
    replacement_rules = _parse_rules(rules)
    try:
        rows = await _read_rows(file)
        items = get_db_copies_from_copies_csv(rows, server, replacement_rules)
    except ExtractionError as exc:
        raise _http_error(exc)

    logger.info(f"{server}: {len(items)} database copies")
    return DatabaseCopyListResponse(server=server, items=items)
