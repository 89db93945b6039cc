"""
Extraction rules: column names, aliases and separators.

Defaults match the calculator's CSV exports. Replacement rule sets are not
configured here; callers pass them per call.
"""

from __future__ import annotations

from typing import List, Mapping

from pydantic import BaseModel, Field, field_validator

# Literal substring -> replacement. Keys are case-sensitive and distinct.
ReplacementRules = Mapping[str, str]

SOURCE_ENCODING_FALLBACK = "utf-8"
SNIFF_DELIMITERS = [",", ";", "\t", "|"]
DB_MAP_SEPARATOR = ","


class ExtractionSettings(BaseModel):
    """Column layout of the calculator exports."""

    server_name_column: str = "ServerName"
    db_per_volume_column: str = "DbPerVolume"
    db_map_column: str = "DbMap"
    db_map_separator: str = DB_MAP_SEPARATOR

    database_server_column: str = "Server"
    database_name_column: str = "Name"
    # Tried in order; the legacy export uses DBFilePath.
    edb_file_path_columns: List[str] = Field(default_factory=lambda: ["EdbFilePath", "DBFilePath"])
    log_folder_path_column: str = "LogFolderPath"

    copy_server_column: str = "Server"
    copy_database_column: str = "Name"
    activation_preference_column: str = "ActivationPreference"
    replay_lag_time_column: str = "ReplayLagTime"
    truncation_lag_time_column: str = "TruncationLagTime"

    @field_validator("edb_file_path_columns")
    @classmethod
    def validate_aliases(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("at least one file path column alias is required")
        return v

    @field_validator("db_map_separator")
    @classmethod
    def validate_separator(cls, v: str) -> str:
        if not v:
            raise ValueError("DbMap separator must not be empty")
        return v


DEFAULT_SETTINGS = ExtractionSettings()
