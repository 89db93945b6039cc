from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field


class ServerRecord(BaseModel):
    server_name: str
    db_per_volume: int = Field(gt=0)
    db_map: str = Field(min_length=1)


class DatabaseRecord(BaseModel):
    name: str
    server: str
    edb_file_path: str
    log_folder_path: Optional[str] = None


class DatabaseCopyRecord(BaseModel):
    database_name: str
    server: str
    activation_preference: int = Field(gt=0)
    replay_lag_time: Optional[str] = None
    truncation_lag_time: Optional[str] = None


class DiskMapResponse(BaseModel):
    server: str
    db_per_volume: int
    disks: List[str] = Field(default_factory=list, examples=[["DB1,DB2", "DB3,DB4"]])


class DatabaseListResponse(BaseModel):
    server: str
    items: List[DatabaseRecord] = Field(default_factory=list)


class DatabaseCopyListResponse(BaseModel):
    server: str
    items: List[DatabaseCopyRecord] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    error_type: str
    message: str
    details: dict = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    detail: ErrorDetail


class HealthResponse(BaseModel):
    ok: bool = True
