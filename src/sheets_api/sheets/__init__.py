"""Google Sheets API client with OAuth authorization.

Usage:
    from sheets_api.sheets import SheetsClient

    client = SheetsClient()
    auth = await client.authorize()

    # Read values
    result = await client.values(
        "get", auth, {"spreadsheetId": sheet_id, "range": "Sheet1!A1:C10"}
    )

    # Append rows
    await client.values(
        "append",
        auth,
        {
            "spreadsheetId": sheet_id,
            "range": "Sheet1!A1",
            "valueInputOption": "USER_ENTERED",
            "body": {"values": [["Bob", 25]]},
        },
    )

OAuth Setup:
    1. Download OAuth credentials from Google Cloud Console
    2. Save them as credentials.json (or set SHEETS_API_CREDENTIALS)
    3. The first authorize() call prints a consent URL to visit
"""

from __future__ import annotations

from sheets_api.sheets.api import Collection, SheetsAPI
from sheets_api.sheets.callbacks import from_callback
from sheets_api.sheets.client import CollectionResult, SheetsClient

__all__ = ["SheetsClient", "CollectionResult", "SheetsAPI", "Collection", "from_callback"]
