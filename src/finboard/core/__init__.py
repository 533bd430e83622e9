"""Core utilities and shared functionality."""

from finboard.core.timezone import (
    now_utc,
    to_utc,
    to_storage,
    from_storage,
    parse_datetime_utc,
    UTC,
)
from finboard.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    NotAuthorizedError,
    QuoteUnavailableError,
    SymbolNotFoundError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "to_storage",
    "from_storage",
    "parse_datetime_utc",
    "UTC",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "NotAuthorizedError",
    "QuoteUnavailableError",
    "SymbolNotFoundError",
]
