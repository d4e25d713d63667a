"""Callback-style surface over the Google Sheets API v4 client."""

from __future__ import annotations

import functools
from typing import Any, Callable

from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import build_http

Callback = Callable[[Any, Any], None]


class Collection:
    """A Sheets API collection whose methods take ``(payload, callback)``.

    ``collection.get(payload, callback)`` calls the discovery method ``get``
    with the payload as keyword arguments. The ``"auth"`` entry is not sent
    as a parameter; it supplies the credentials the request executes with.
    """

    def __init__(self, resource: Any) -> None:
        self._resource = resource

    def __getattr__(self, name: str) -> Callable[[dict, Callback], None]:
        if name.startswith("_"):
            raise AttributeError(name)
        method = getattr(self._resource, name)
        return functools.partial(self._call, method)

    def _call(self, method: Callable[..., Any], payload: dict, callback: Callback) -> None:
        params = dict(payload)
        auth = params.pop("auth", None)
        http = AuthorizedHttp(auth, http=build_http()) if auth else None

        try:
            response = method(**params).execute(http=http)
        except HttpError as error:
            callback(error, None)
        else:
            callback(None, response)


class SheetsAPI:
    """The ``spreadsheets``, ``sheets`` and ``values`` collections of Sheets v4."""

    def __init__(self, version: str = "v4", service: Any = None) -> None:
        # Credentials are supplied per request, so build without any.
        self.service = service or build(
            "sheets", version, http=build_http(), cache_discovery=False
        )
        spreadsheets = self.service.spreadsheets()
        self.spreadsheets = Collection(spreadsheets)
        self.sheets = Collection(spreadsheets.sheets())
        self.values = Collection(spreadsheets.values())
