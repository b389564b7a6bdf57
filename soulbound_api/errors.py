"""
Exception types for the mint API.

`APIError` subclasses are rejected before any minting work starts and are
rendered as `{"error": message}` by the handler in main.py. Everything raised
from inside the minting workflow derives from `MintError`, and the /mint route
reports it (or any SDK/RPC exception) as a 500.
"""

from fastapi import status


class APIError(Exception):
    """Request rejected at the HTTP layer."""

    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class UnauthorizedError(APIError):
    """Missing or wrong API secret (401)."""

    def __init__(self, message: str = "Unauthorized: Invalid or missing API secret."):
        super().__init__(message, status_code=status.HTTP_401_UNAUTHORIZED)


class BadRequestError(APIError):
    """Missing request fields (400)."""

    def __init__(self, message: str = "Missing wallet or itemName in request body."):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)


class MintError(Exception):
    """Minting workflow failure."""


class ConfigurationError(MintError):
    """Required configuration is missing or malformed."""


class UnknownItemError(MintError):
    """Item name matched no catalog prefix."""


class CollectionNotFoundError(MintError):
    """Parent collection account is missing or not a Core collection."""


class TransactionFailedError(MintError):
    """Transaction landed but the program returned an error."""
