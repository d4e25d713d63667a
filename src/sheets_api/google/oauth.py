"""Google OAuth authorization using Authlib.

This module provides the authorization collaborator used by SheetsClient:
- Interactive consent flow when no usable token is stored
- Automatic token refresh with scope preservation
- Token storage in the Google ``token.json`` format

Client credentials and tokens default to the working directory:
    credentials.json - OAuth client credentials
    token.json       - OAuth tokens
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from authlib.integrations.requests_client import OAuth2Session
from authlib.oauth2 import OAuth2Error
from google.oauth2.credentials import Credentials as GoogleCredentials

from sheets_api.config import CREDENTIALS_PATH, TOKEN_PATH
from sheets_api.google.exceptions import (
    CredentialsNotFoundError,
    ScopeMismatchError,
    TokenError,
)

logger = logging.getLogger(__name__)


# Scopes relevant to spreadsheet access
SCOPES = {
    "spreadsheets": "https://www.googleapis.com/auth/spreadsheets",
    "spreadsheets.readonly": "https://www.googleapis.com/auth/spreadsheets.readonly",
    "drive": "https://www.googleapis.com/auth/drive",
    "drive.readonly": "https://www.googleapis.com/auth/drive.readonly",
    "drive.file": "https://www.googleapis.com/auth/drive.file",
}


def resolve_scopes(scopes: list[str]) -> list[str]:
    """Resolve scope names to full URLs."""
    resolved = []
    for scope in scopes:
        if scope.startswith("https://"):
            resolved.append(scope)
        elif scope in SCOPES:
            resolved.append(SCOPES[scope])
        else:
            raise ValueError(
                f"Unknown scope: {scope}. Use full URL or one of: {list(SCOPES.keys())}"
            )
    return resolved


def load_client_credentials(credentials_path: Path) -> tuple[str, str]:
    """Load OAuth client ID and secret from a credentials file."""
    if not credentials_path.exists():
        raise CredentialsNotFoundError(str(credentials_path))

    with open(credentials_path) as f:
        creds = json.load(f)

    # Handle both web and installed app credential formats
    if "installed" in creds:
        app_creds = creds["installed"]
    elif "web" in creds:
        app_creds = creds["web"]
    else:
        raise ValueError("Invalid credentials.json format. Expected 'installed' or 'web' key.")

    return app_creds["client_id"], app_creds["client_secret"]


def _expiry_datetime(expires_at: float) -> datetime:
    """Convert an Authlib expiry timestamp to the naive UTC datetime google-auth uses."""
    return datetime.fromtimestamp(expires_at, timezone.utc).replace(tzinfo=None)


class GoogleAuthorize:
    """Obtains authorized Google credentials for a set of scopes.

    Reuses a stored token when it covers the requested scopes, refreshes it
    when expired, and otherwise walks the user through the consent flow.

    Example:
        >>> authorizer = GoogleAuthorize()
        >>> creds = authorizer.authorize(["spreadsheets"], "credentials.json")
    """

    AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"
    REDIRECT_URI = "http://localhost"

    def __init__(
        self,
        token_path: str | Path | None = None,
        prompt: Callable[[str], str] | None = None,
    ):
        """Initialize the authorizer.

        Args:
            token_path: Path to store/load tokens. Defaults to token.json.
            prompt: Shows the consent URL and returns the pasted redirect URL.
                   Defaults to ``input``.
        """
        self.token_path = Path(token_path) if token_path else TOKEN_PATH
        self._prompt = prompt or input

        self.last_refresh: datetime | None = None
        self.refresh_count = 0

    def authorize(
        self,
        scopes: list[str],
        credentials_path: str | Path | None = None,
    ) -> GoogleCredentials:
        """Return credentials authorized for the given scopes.

        Args:
            scopes: Scope names (e.g., ["spreadsheets"]) or full URLs.
            credentials_path: OAuth client credentials file. Defaults to
                credentials.json.

        Returns:
            Google Credentials object usable by API client libraries.

        Raises:
            CredentialsNotFoundError: If the credentials file is missing.
            TokenError: If the token exchange or refresh fails.
            ScopeMismatchError: If the granted token lacks required scopes.
        """
        required_scopes = resolve_scopes(scopes)
        path = Path(credentials_path) if credentials_path else CREDENTIALS_PATH
        client_id, client_secret = load_client_credentials(path)

        def update_token(token, refresh_token=None, access_token=None):
            self._save_token(
                token,
                required_scopes,
                client_id,
                client_secret,
                refresh_token=refresh_token,
                access_token=access_token,
            )

        session = OAuth2Session(
            client_id=client_id,
            client_secret=client_secret,
            scope=" ".join(required_scopes),
            redirect_uri=self.REDIRECT_URI,
            token=self._load_token(required_scopes),
            update_token=update_token,
            token_endpoint=self.TOKEN_URL,
            token_endpoint_auth_method="client_secret_post",
        )

        token = session.token
        if not token:
            token = self._request_consent(session, client_secret)
            update_token(token)
        elif token.get("expires_at") and token["expires_at"] < datetime.now().timestamp():
            logger.info("Token expired, refreshing...")
            try:
                token = session.refresh_token(
                    self.TOKEN_URL,
                    refresh_token=token.get("refresh_token"),
                )
            except OAuth2Error as e:
                raise TokenError(f"Failed to refresh token: {e}") from e

        expires_at = token.get("expires_at")
        return GoogleCredentials(
            token=token["access_token"],
            refresh_token=token.get("refresh_token"),
            token_uri=self.TOKEN_URL,
            client_id=client_id,
            client_secret=client_secret,
            scopes=required_scopes,
            expiry=_expiry_datetime(expires_at) if expires_at else None,
        )

    def _request_consent(self, session: OAuth2Session, client_secret: str) -> dict[str, Any]:
        """Run the interactive consent flow and fetch a token."""
        authorization_url, _state = session.create_authorization_url(
            self.AUTHORIZE_URL,
            access_type="offline",
            prompt="consent",
            include_granted_scopes="true",
        )

        redirect_url = self._prompt(
            f"Authorize this app by visiting this url:\n{authorization_url}\n"
            "Paste the full redirect URL here: "
        )

        try:
            return session.fetch_token(
                self.TOKEN_URL,
                authorization_response=redirect_url.strip(),
                client_secret=client_secret,
            )
        except OAuth2Error as e:
            raise TokenError(f"Failed to fetch token: {e}") from e

    def _load_token(self, required_scopes: list[str]) -> dict[str, Any] | None:
        """Load a stored token covering the required scopes."""
        if not self.token_path.exists():
            logger.info("No existing token found")
            return None

        try:
            with open(self.token_path) as f:
                token_data = json.load(f)

            # Stored expiry is ISO 8601 in UTC; older files may hold a timestamp
            expiry = token_data.get("expiry")
            if expiry and isinstance(expiry, str):
                dt = datetime.fromisoformat(expiry.rstrip("Z"))
                expires_at = dt.replace(tzinfo=timezone.utc).timestamp()
            else:
                expires_at = expiry

            current_scopes = set(token_data.get("scopes", []))
            if not set(required_scopes).issubset(current_scopes):
                missing = set(required_scopes) - current_scopes
                logger.warning(f"Token missing required scopes: {missing}")
                return None

            # Convert Google token format to Authlib format
            authlib_token = {
                "access_token": token_data["token"],
                "refresh_token": token_data.get("refresh_token"),
                "token_type": token_data.get("type", "Bearer"),
                "expires_at": expires_at,
                "scope": " ".join(current_scopes),
            }

        except (OSError, ValueError, TypeError, KeyError, AttributeError) as e:
            logger.error(f"Failed to load token: {e}")
            return None

        logger.info(f"Loaded token with scopes: {current_scopes}")
        return authlib_token

    def _save_token(
        self,
        token: dict[str, Any],
        required_scopes: list[str],
        client_id: str,
        client_secret: str,
        refresh_token: str | None = None,
        access_token: str | None = None,
    ):
        """Save token to storage (also used as the Authlib update callback)."""
        if access_token:
            token["access_token"] = access_token
        if refresh_token and not token.get("refresh_token"):
            token["refresh_token"] = refresh_token

        token_scopes = set(token.get("scope", "").split())
        if not set(required_scopes).issubset(token_scopes):
            raise ScopeMismatchError(set(required_scopes) - token_scopes)

        expires_at = token.get("expires_at")

        # Google token format, readable by Credentials.from_authorized_user_file
        google_token = {
            "token": token["access_token"],
            "refresh_token": token.get("refresh_token"),
            "token_uri": self.TOKEN_URL,
            "client_id": client_id,
            "client_secret": client_secret,
            "scopes": sorted(token_scopes),
            "type": token.get("token_type", "Bearer"),
            "expiry": _expiry_datetime(expires_at).isoformat() + "Z" if expires_at else None,
        }

        with open(self.token_path, "w") as f:
            json.dump(google_token, f, indent=2)

        self.last_refresh = datetime.now()
        self.refresh_count += 1

        logger.info(f"Token saved with scopes: {token_scopes}")
