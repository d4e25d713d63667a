"""Authorization-aware wrapper around the Google Sheets API v4 client."""

from sheets_api.google import (
    AuthorizationError,
    CredentialsNotFoundError,
    GoogleAuthorize,
    ScopeMismatchError,
    TokenError,
)
from sheets_api.sheets import CollectionResult, SheetsAPI, SheetsClient

__all__ = [
    "SheetsClient",
    "CollectionResult",
    "SheetsAPI",
    "GoogleAuthorize",
    "AuthorizationError",
    "CredentialsNotFoundError",
    "TokenError",
    "ScopeMismatchError",
]
