"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 500

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class NotAuthorizedError(AppError):
    """Raised when the record exists but belongs to another owner."""

    status_code = 401

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            f"Not authorized to access {resource.lower()} {identifier}",
            code="NOT_AUTHORIZED",
        )


class QuoteUnavailableError(AppError):
    """Raised when the market data provider cannot supply data."""

    status_code = 500

    def __init__(self, symbol: str, reason: str, code: str = "QUOTE_UNAVAILABLE"):
        self.symbol = symbol
        self.reason = reason
        super().__init__(f"Market data unavailable for {symbol}: {reason}", code=code)


class SymbolNotFoundError(QuoteUnavailableError):
    """Raised when the provider answered but has no data for the symbol."""

    status_code = 404

    def __init__(self, symbol: str):
        super().__init__(symbol, "no data returned by provider", code="SYMBOL_NOT_FOUND")
