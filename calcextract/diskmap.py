"""
Database-to-disk distribution.

Splits a server's ordered database list into consecutive groups of
DbPerVolume names. Each group becomes one disk descriptor: the normalized
names joined with ",". Index i of the result is disk i downstream, so order
is never changed.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .exceptions import InvalidConfigurationError, MissingDataError
from .normalize import normalize
from .rules import DB_MAP_SEPARATOR, ReplacementRules

logger = logging.getLogger(__name__)


def build_disk_map(
    database_names: Sequence[str],
    per_volume: int,
    rules: Optional[ReplacementRules] = None,
) -> List[str]:
    """
    Build the ordered list of disk descriptors.

    A final group shorter than per_volume is emitted as is (no padding).

    Raises:
        InvalidConfigurationError: per_volume is not a positive integer
        MissingDataError: database_names is empty
    """
    # bool is an int subclass
    if isinstance(per_volume, bool) or not isinstance(per_volume, int) or per_volume <= 0:
        raise InvalidConfigurationError(
            "Databases per volume must be a positive integer",
            field="DbPerVolume",
            value=per_volume,
        )
    if not database_names:
        raise MissingDataError("Database list is empty", field="DbMap")

    disks = []
    for start in range(0, len(database_names), per_volume):
        group = database_names[start:start + per_volume]
        disks.append(DB_MAP_SEPARATOR.join(normalize(name, rules) for name in group))

    logger.debug(
        f"build_disk_map: {len(database_names)} databases, {per_volume} per volume -> {len(disks)} disks"
    )
    return disks
