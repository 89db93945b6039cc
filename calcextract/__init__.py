from .diskmap import build_disk_map
from .exceptions import (
    AmbiguousInputError,
    ExtractionError,
    InvalidConfigurationError,
    MissingColumnError,
    MissingDataError,
    NotFoundError,
)
from .extract import (
    get_db_copies_from_copies_csv,
    get_db_list_from_databases_csv,
    get_db_map_from_servers_csv,
)
from .normalize import normalize

__all__ = [
    "build_disk_map",
    "normalize",
    "get_db_map_from_servers_csv",
    "get_db_list_from_databases_csv",
    "get_db_copies_from_copies_csv",
    "ExtractionError",
    "NotFoundError",
    "AmbiguousInputError",
    "InvalidConfigurationError",
    "MissingDataError",
    "MissingColumnError",
]
