"""Tests for the callback-style Sheets API surface."""

from unittest.mock import Mock, patch

import httplib2
import pytest
from googleapiclient.errors import HttpError

from sheets_api.sheets import Collection, SheetsAPI


@pytest.fixture
def transport():
    """Patch out HTTP construction."""
    with (
        patch("sheets_api.sheets.api.build_http") as build_http,
        patch("sheets_api.sheets.api.AuthorizedHttp") as authorized_http,
    ):
        yield build_http, authorized_http


class TestCollection:
    """Test dispatch of (payload, callback) calls."""

    def test_success_reports_response(self, transport):
        """Should execute with authorized HTTP and report the response."""
        build_http, authorized_http = transport
        resource = Mock()
        resource.get.return_value.execute.return_value = {"values": [[1, 2]]}
        creds = object()
        callback = Mock()

        Collection(resource).get({"spreadsheetId": "abc", "auth": creds}, callback)

        resource.get.assert_called_once_with(spreadsheetId="abc")
        authorized_http.assert_called_once_with(creds, http=build_http.return_value)
        resource.get.return_value.execute.assert_called_once_with(
            http=authorized_http.return_value
        )
        callback.assert_called_once_with(None, {"values": [[1, 2]]})

    def test_payload_left_intact(self, transport):
        """Should not remove auth from the caller's payload."""
        resource = Mock()
        payload = {"spreadsheetId": "abc", "auth": object()}

        Collection(resource).get(payload, Mock())

        assert "auth" in payload

    def test_without_auth_uses_default_http(self, transport):
        """Should execute with the service's own HTTP when no handle is given."""
        _build_http, authorized_http = transport
        resource = Mock()

        Collection(resource).get({"spreadsheetId": "abc"}, Mock())

        authorized_http.assert_not_called()
        resource.get.return_value.execute.assert_called_once_with(http=None)

    def test_http_error_reported(self, transport):
        """Should report API errors through the callback."""
        error = HttpError(
            httplib2.Response({"status": "404"}),
            b'{"error": {"message": "not found"}}',
        )
        resource = Mock()
        resource.get.return_value.execute.side_effect = error
        callback = Mock()

        Collection(resource).get({"spreadsheetId": "abc", "auth": object()}, callback)

        callback.assert_called_once_with(error, None)

    def test_unknown_method(self):
        """Should raise AttributeError for methods the resource lacks."""
        collection = Collection(Mock(spec=["get"]))
        with pytest.raises(AttributeError):
            collection.frobnicate


class TestSheetsAPI:
    """Test collection wiring."""

    def test_collections_from_service(self):
        """Should wrap spreadsheets, sheets and values resources."""
        service = Mock()
        api = SheetsAPI(service=service)

        spreadsheets = service.spreadsheets.return_value
        assert api.spreadsheets._resource is spreadsheets
        assert api.sheets._resource is spreadsheets.sheets.return_value
        assert api.values._resource is spreadsheets.values.return_value

    def test_builds_sheets_v4(self):
        """Should build the Sheets service from the bundled discovery document."""
        api = SheetsAPI()

        assert callable(api.values.get)
        assert callable(api.spreadsheets.batchUpdate)
        assert callable(api.sheets.copyTo)
        with pytest.raises(AttributeError):
            api.values.frobnicate
