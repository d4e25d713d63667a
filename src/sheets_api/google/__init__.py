"""Google OAuth authorization for the Sheets API."""

from sheets_api.google.exceptions import (
    AuthorizationError,
    CredentialsNotFoundError,
    ScopeMismatchError,
    TokenError,
)
from sheets_api.google.oauth import SCOPES, GoogleAuthorize

__all__ = [
    "GoogleAuthorize",
    "SCOPES",
    "AuthorizationError",
    "CredentialsNotFoundError",
    "TokenError",
    "ScopeMismatchError",
]
