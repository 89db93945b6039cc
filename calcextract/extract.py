"""
Extraction front-end over parsed calculator rows.

Each routine takes rows from one CSV export (mappings of column name to
cell string), selects the rows for a server and turns them into typed
records or disk descriptors. Server names match case-insensitively and may
contain glob wildcards (*, ?, [...]).
"""

from __future__ import annotations

import fnmatch
import logging
from typing import List, Mapping, Optional, Sequence

from .diskmap import build_disk_map
from .exceptions import (
    AmbiguousInputError,
    InvalidConfigurationError,
    MissingColumnError,
    MissingDataError,
    NotFoundError,
)
from .models import DatabaseCopyRecord, DatabaseRecord, ServerRecord
from .normalize import normalize
from .rules import DEFAULT_SETTINGS, ExtractionSettings, ReplacementRules

logger = logging.getLogger(__name__)

Row = Mapping[str, Optional[str]]


def server_matches(value: Optional[str], server: str) -> bool:
    """Case-insensitive glob match of a cell against a server name pattern."""
    if value is None:
        return False
    return fnmatch.fnmatchcase(value.strip().lower(), server.strip().lower())


def filter_rows(rows: Sequence[Row], column: str, server: str) -> List[Row]:
    return [row for row in rows if server_matches(row.get(column), server)]


def _cell(row: Row, column: str) -> str:
    value = row.get(column)
    return value.strip() if value else ""


def _required_cell(row: Row, column: str) -> str:
    value = _cell(row, column)
    if not value:
        raise MissingDataError(f"Required field {column} is empty", field=column)
    return value


def _optional_cell(row: Row, column: str) -> Optional[str]:
    return _cell(row, column) or None


def _positive_int(row: Row, column: str) -> int:
    raw = _cell(row, column)
    if not raw:
        raise InvalidConfigurationError(f"{column} is missing", field=column, value=row.get(column))
    try:
        value = int(raw)
    except ValueError:
        raise InvalidConfigurationError(f"{column} is not a number", field=column, value=raw) from None
    if value <= 0:
        raise InvalidConfigurationError(f"{column} must be a positive integer", field=column, value=raw)
    return value


def resolve_alias(row: Row, aliases: Sequence[str]) -> str:
    """
    Return the first non-empty value among the alias columns, in alias order.

    Raises:
        MissingColumnError: none of the aliases is a column of the row
        MissingDataError: alias columns exist but all are empty
    """
    present = [column for column in aliases if column in row]
    if not present:
        raise MissingColumnError(
            f"None of the columns {', '.join(aliases)} found", aliases=aliases
        )
    for column in present:
        value = _cell(row, column)
        if value:
            return value
    raise MissingDataError(f"Required field {present[0]} is empty", field=present[0])


def select_server_row(
    rows: Sequence[Row],
    server: str,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> ServerRecord:
    """
    Find the single servers-CSV row for a server.

    Raises:
        NotFoundError: no row matches
        AmbiguousInputError: more than one row matches
        InvalidConfigurationError: DbPerVolume missing, non-numeric or not positive
        MissingDataError: DbMap empty
    """
    matches = filter_rows(rows, settings.server_name_column, server)
    if not matches:
        logger.warning(f"No servers row for {server!r} among {len(rows)} rows")
        raise NotFoundError(f"Server {server} not found in servers CSV", server=server)
    if len(matches) > 1:
        logger.warning(f"{len(matches)} servers rows match {server!r}")
        raise AmbiguousInputError(
            f"Server {server} matches more than one row in servers CSV",
            server=server,
            matches=len(matches),
        )

    row = matches[0]
    return ServerRecord(
        server_name=_cell(row, settings.server_name_column),
        db_per_volume=_positive_int(row, settings.db_per_volume_column),
        db_map=_required_cell(row, settings.db_map_column),
    )


def get_db_map_from_servers_csv(
    rows: Sequence[Row],
    server: str,
    rules: Optional[ReplacementRules] = None,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> List[str]:
    """Disk descriptors for one server, disk 0 first."""
    record = select_server_row(rows, server, settings)
    names = record.db_map.split(settings.db_map_separator)
    logger.debug(f"{record.server_name}: {len(names)} databases in DbMap")
    return build_disk_map(names, record.db_per_volume, rules)


def get_db_list_from_databases_csv(
    rows: Sequence[Row],
    server: str,
    rules: Optional[ReplacementRules] = None,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> List[DatabaseRecord]:
    """Database records hosted on a server, in file order."""
    matches = filter_rows(rows, settings.database_server_column, server)
    if not matches:
        logger.warning(f"No database rows for {server!r}")
        raise NotFoundError(f"Server {server} not found in databases CSV", server=server)

    records = []
    for row in matches:
        log_path = _optional_cell(row, settings.log_folder_path_column)
        records.append(DatabaseRecord(
            name=normalize(_required_cell(row, settings.database_name_column), rules),
            server=_cell(row, settings.database_server_column),
            edb_file_path=normalize(resolve_alias(row, settings.edb_file_path_columns), rules),
            log_folder_path=normalize(log_path, rules) if log_path else None,
        ))
    return records


def get_db_copies_from_copies_csv(
    rows: Sequence[Row],
    server: str,
    rules: Optional[ReplacementRules] = None,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> List[DatabaseCopyRecord]:
    """Database copies on a server, ordered by database then activation preference."""
    matches = filter_rows(rows, settings.copy_server_column, server)
    if not matches:
        logger.warning(f"No database copy rows for {server!r}")
        raise NotFoundError(f"Server {server} not found in database copies CSV", server=server)

    copies = [
        DatabaseCopyRecord(
            database_name=normalize(_required_cell(row, settings.copy_database_column), rules),
            server=_cell(row, settings.copy_server_column),
            activation_preference=_positive_int(row, settings.activation_preference_column),
            replay_lag_time=_optional_cell(row, settings.replay_lag_time_column),
            truncation_lag_time=_optional_cell(row, settings.truncation_lag_time_column),
        )
        for row in matches
    ]
    copies.sort(key=lambda c: (c.database_name, c.activation_preference))
    return copies
