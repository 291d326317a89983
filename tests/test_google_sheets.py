"""
Tests for the Google Sheets export, with the API client mocked out.
"""

from unittest.mock import MagicMock, patch

import pytest

from export.google_sheets import (
    PLACEMENT_HEADER,
    SHEET_HEADER,
    GoogleSheetsExporter,
    build_placement_rows,
    build_sheet_rows,
)
from models.errors import ExportError
from models.part import Component, LayoutState, Sheet
from packing.engine import place


@pytest.fixture
def layout():
    state = LayoutState(
        sheets=(Sheet(100, 100, 18),),
        components=(Component(50, 60), Component(50, 60)),
        tolerance=10
    )
    return state, place(state.sheets, state.components, state.tolerance)


@pytest.fixture
def sheets_service():
    service = MagicMock()
    service.spreadsheets().create().execute.return_value = {
        'spreadsheetId': 'abc123',
        'sheets': [{'properties': {'sheetId': 7}}]
    }
    return service


class TestRows:
    """Table contents."""

    def test_sheet_rows(self, layout):
        state, result = layout
        rows = build_sheet_rows(state, result)
        assert len(rows) == 1
        assert rows[0][:5] == ["Sheet 1", "100", "100", "18", "1"]
        assert rows[0][5] == "30.00%"
        assert rows[0][6] == "70.00%"
        assert len(rows[0]) == len(SHEET_HEADER)

    def test_placement_rows_include_unplaced(self, layout):
        state, result = layout
        rows = build_placement_rows(state, result)
        assert rows[0] == ["Component 1", "Sheet 1", "50", "60", "0.0", "0.0"]
        assert rows[1][:2] == ["Component 2", "Not placed"]
        assert all(len(row) == len(PLACEMENT_HEADER) for row in rows)


class TestExporter:
    """Calls made against the Sheets API."""

    def test_export_layout(self, layout, sheets_service):
        state, result = layout
        exporter = GoogleSheetsExporter("unused.json")
        exporter.service = sheets_service
        assert exporter.export_layout(state, result, filename="Plan") == 'abc123'
        update = sheets_service.spreadsheets().values().update
        assert update.call_count == 2
        first_values = update.call_args_list[0].kwargs['body']['values']
        assert first_values[0] == SHEET_HEADER
        second_values = update.call_args_list[1].kwargs['body']['values']
        assert second_values[0] == PLACEMENT_HEADER
        assert len(second_values) == 3

    def test_api_failure_raises_export_error(self, layout, sheets_service):
        state, result = layout
        sheets_service.spreadsheets().create().execute.side_effect = RuntimeError("quota")
        exporter = GoogleSheetsExporter("unused.json")
        exporter.service = sheets_service
        with pytest.raises(ExportError, match="quota"):
            exporter.export_layout(state, result)

    def test_authentication_failure(self, layout):
        state, result = layout
        with patch("export.google_sheets.service_account.Credentials.from_service_account_file",
                   side_effect=FileNotFoundError("missing.json")):
            with pytest.raises(ExportError, match="Authentication failed"):
                GoogleSheetsExporter("missing.json").export_layout(state, result)

    def test_authenticate_builds_service(self):
        with patch("export.google_sheets.service_account.Credentials.from_service_account_file") as creds, \
                patch("export.google_sheets.build") as build:
            exporter = GoogleSheetsExporter("sa.json")
            exporter.authenticate()
        creds.assert_called_once()
        build.assert_called_once_with('sheets', 'v4', credentials=creds.return_value)
        assert exporter.service is build.return_value

    def test_share_failure_is_not_fatal(self, layout, sheets_service):
        state, result = layout
        exporter = GoogleSheetsExporter("unused.json", share_publicly=True)
        exporter.service = sheets_service
        with patch("export.google_sheets.build", side_effect=RuntimeError("drive down")):
            assert exporter.export_layout(state, result) == 'abc123'
