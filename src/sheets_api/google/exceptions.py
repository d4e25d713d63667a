"""Errors raised while obtaining Sheets API credentials.

SheetsClient.authorize() lets these through untouched.
"""


class AuthorizationError(Exception):
    """Credentials for the requested scopes could not be obtained."""


class CredentialsNotFoundError(AuthorizationError):
    """The OAuth client credentials file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"No OAuth client credentials at {path}. Create an OAuth client in "
            "Google Cloud Console and save its JSON there, or set SHEETS_API_CREDENTIALS."
        )


class TokenError(AuthorizationError):
    """The authorization code exchange or token refresh was rejected."""


class ScopeMismatchError(AuthorizationError):
    """The granted token does not cover every requested scope."""

    def __init__(self, missing_scopes: set[str]):
        self.missing_scopes = missing_scopes
        super().__init__(
            f"Access was not granted for: {', '.join(sorted(missing_scopes))}"
        )
