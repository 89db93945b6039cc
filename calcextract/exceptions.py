"""
Typed errors raised while extracting placement data.

Hierarchy:
    ExtractionError (base)
    ├── NotFoundError              no row matches the requested server
    ├── AmbiguousInputError        more than one server row matches
    ├── InvalidConfigurationError  DbPerVolume / ActivationPreference unusable
    ├── MissingDataError           a required cell is empty or absent
    └── MissingColumnError         none of a field's column aliases exist

Every error aborts the whole extraction. Messages are meant to be shown to
the operator verbatim.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence


class ExtractionError(Exception):
    """
    Base error for all extraction failures.

    Attributes:
        message: human-readable description
        details: extra context (server name, column, value)
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = dict(details or {})
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(ExtractionError):
    """No row matched the requested server name."""

    def __init__(self, message: str, server: Optional[str] = None, details: Optional[dict] = None):
        self.server = server
        details = dict(details or {})
        if server is not None:
            details["server"] = server
        super().__init__(message, details)


class AmbiguousInputError(ExtractionError):
    """More than one server row matched."""

    def __init__(
        self,
        message: str,
        server: Optional[str] = None,
        matches: int = 0,
        details: Optional[dict] = None,
    ):
        self.server = server
        self.matches = matches
        details = dict(details or {})
        if server is not None:
            details["server"] = server
        details["matches"] = matches
        super().__init__(message, details)


class InvalidConfigurationError(ExtractionError):
    """
    A numeric setting read from the CSV is missing, non-numeric or not positive.

    Example:
        raise InvalidConfigurationError("DbPerVolume must be positive", field="DbPerVolume", value="0")
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        details: Optional[dict] = None,
    ):
        self.field = field
        self.value = value
        details = dict(details or {})
        if field is not None:
            details["field"] = field
            details["value"] = value
        super().__init__(message, details)


class MissingDataError(ExtractionError):
    """A required cell is empty or absent."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[dict] = None):
        self.field = field
        details = dict(details or {})
        if field is not None:
            details["field"] = field
        super().__init__(message, details)


class MissingColumnError(ExtractionError):
    """None of the accepted column aliases for a field exist in the row."""

    def __init__(self, message: str, aliases: Sequence[str] = (), details: Optional[dict] = None):
        self.aliases = list(aliases)
        details = dict(details or {})
        if self.aliases:
            details["aliases"] = self.aliases
        super().__init__(message, details)
