"""Google Sheets API client implementation."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from sheets_api.google import GoogleAuthorize
from sheets_api.sheets.api import SheetsAPI
from sheets_api.sheets.callbacks import from_callback

logger = logging.getLogger(__name__)


class Authorizer(Protocol):
    """Anything that can produce an authorization handle for a set of scopes."""

    def authorize(self, scopes: list[str], credentials_path: str | Path | None) -> Any: ...


@dataclass(frozen=True)
class CollectionResult:
    """Response of a collection call, with the handle it was made with.

    This is the ``{"auth": ..., "response": ...}`` pair as attributes; use
    ``dataclasses.asdict`` for the mapping form.
    """

    auth: Any
    response: Any


class SheetsClient:
    """Google Sheets API v4 client that handles the authorization part of each request.

    Call ``authorize`` to get the authorization handle, then pass it to the
    collection methods. Each collection method names a method of the matching
    Sheets API collection (``values`` maps to ``spreadsheets.values``) and a
    payload of request parameters.

    Usage:
        client = SheetsClient("credentials.json")
        auth = await client.authorize()

        result = await client.values(
            "get", auth, {"spreadsheetId": sheet_id, "range": "Sheet1!A1:C10"}
        )
        rows = result.response.get("values", [])

        # Chain further calls with the same handle
        await client.spreadsheets("get", result.auth, {"spreadsheetId": sheet_id})

    Note:
        The payload is modified in place: its ``"auth"`` entry is set to the
        handle unless the caller already provided one.
    """

    scopes = ("spreadsheets",)

    def __init__(
        self,
        credentials_path: str | Path | None = None,
        authorizer: Authorizer | None = None,
        api: Any = None,
    ) -> None:
        """Initialize Sheets client.

        Args:
            credentials_path: OAuth client credentials file, passed as-is to
                the authorizer. Defaults to the authorizer's own default.
            authorizer: Authorization collaborator. Defaults to GoogleAuthorize.
            api: Object exposing the ``spreadsheets``, ``sheets`` and
                ``values`` collections. Defaults to SheetsAPI.
        """
        self.credentials_path = credentials_path
        self._authorizer = authorizer or GoogleAuthorize()
        self.api = api or SheetsAPI()

    async def authorize(self) -> Any:
        """Obtain the authorization handle used to make requests.

        Raises:
            AuthorizationError: If the authorizer cannot obtain credentials.
        """
        return await asyncio.to_thread(
            self._authorizer.authorize, list(self.scopes), self.credentials_path
        )

    async def _collection(
        self, collection: Any, method: str, auth: Any, payload: dict
    ) -> CollectionResult:
        if not payload.get("auth"):
            payload["auth"] = auth

        logger.debug(f"Calling {method} on {collection!r}")
        response = await from_callback(getattr(collection, method), payload)
        return CollectionResult(auth=auth, response=response)

    async def spreadsheets(self, method: str, auth: Any, payload: dict) -> CollectionResult:
        """Call a method of the ``spreadsheets`` collection (e.g. "get", "batchUpdate")."""
        return await self._collection(self.api.spreadsheets, method, auth, payload)

    async def sheets(self, method: str, auth: Any, payload: dict) -> CollectionResult:
        """Call a method of the ``spreadsheets.sheets`` collection (e.g. "copyTo")."""
        return await self._collection(self.api.sheets, method, auth, payload)

    async def values(self, method: str, auth: Any, payload: dict) -> CollectionResult:
        """Call a method of the ``spreadsheets.values`` collection (e.g. "get", "append")."""
        return await self._collection(self.api.values, method, auth, payload)
