"""
Reading calculator CSV exports into row mappings.

Responsibilities:
- encoding detection (charset-normalizer) and BOM handling
- newline normalization
- delimiter detection
- header/row pairing, padding short rows
"""

from __future__ import annotations

import csv
import io
import logging
from typing import Dict, List, Tuple

from charset_normalizer import from_bytes

from .exceptions import MissingDataError
from .rules import SNIFF_DELIMITERS, SOURCE_ENCODING_FALLBACK

logger = logging.getLogger(__name__)


def decode_csv_bytes(raw: bytes) -> Tuple[str, str]:
    """
    Decode CSV bytes to text with LF newlines.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A leading UTF-8 BOM is dropped.
    - If decode fails, fall back to UTF-8, then UTF-8 with replacement characters.

    Returns (text, encoding actually used).
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or SOURCE_ENCODING_FALLBACK
    if raw.startswith(b"\xef\xbb\xbf") and (decode_used.lower().replace("-", "_") in ("utf_8", "utf8")):
        decode_used = "utf-8-sig"

    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        try:
            text = raw.decode("utf-8-sig")
            decode_used = "utf-8-sig"
        except UnicodeDecodeError:
            logger.warning("CSV is not valid UTF-8; undecodable bytes replaced")
            text = raw.decode("utf-8-sig", errors="replace")
            decode_used = "utf-8-sig"

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text, decode_used


def sniff_delimiter(text: str) -> str:
    sample = text[:4096]
    try:
        return csv.Sniffer().sniff(sample, delimiters="".join(SNIFF_DELIMITERS)).delimiter
    except csv.Error:
        return ","


def read_csv_rows(raw: bytes) -> List[Dict[str, str]]:
    """Parse a CSV export into one {header: cell} mapping per data row."""
    text, encoding = decode_csv_bytes(raw)
    delimiter = sniff_delimiter(text)

    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
    rows = list(reader)
    if not rows or not any(cell.strip() for cell in rows[0]):
        raise MissingDataError("CSV has no header row")

    header = [cell.strip() for cell in rows[0]]
    records: List[Dict[str, str]] = []
    for row in rows[1:]:
        if not any(cell.strip() for cell in row):
            continue
        if len(row) < len(header):
            row = row + [""] * (len(header) - len(row))
        # cells beyond the header have no name and are dropped
        records.append(dict(zip(header, row)))

    logger.debug(
        f"read_csv_rows: encoding={encoding} delimiter={delimiter!r} "
        f"columns={len(header)} rows={len(records)}"
    )
    return records
