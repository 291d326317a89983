"""
Google Sheets export logic for the sheet layout planner.
"""
import logging
import time
from typing import List, Optional, Sequence

from google.oauth2 import service_account
from googleapiclient.discovery import build

from config import GOOGLE_SCOPES
from models.errors import ExportError
from models.part import LayoutState, PlacementResult
from packing.engine import calculate_sheet_efficiency

log = logging.getLogger(__name__)

SHEET_HEADER = ["Sheet #", "Length (mm)", "Width (mm)", "Thickness (mm)",
                "Parts", "Efficiency", "Waste %"]
PLACEMENT_HEADER = ["Component #", "Sheet #", "Length (mm)", "Width (mm)",
                    "X Position", "Y Position"]


def build_sheet_rows(state: LayoutState, result: PlacementResult) -> List[List[str]]:
    rows = []
    for i, sheet in enumerate(state.sheets):
        eff = calculate_sheet_efficiency(sheet, state.components, result.placements_on(i))
        rows.append([
            f"Sheet {i + 1}",
            str(sheet.length),
            str(sheet.width),
            str(sheet.thickness),
            str(eff['parts']),
            f"{eff['coverage'] * 100:.2f}%",
            f"{eff['waste_percent'] * 100:.2f}%"
        ])
    return rows


def build_placement_rows(state: LayoutState, result: PlacementResult) -> List[List[str]]:
    rows = []
    for placement in result.placements:
        component = state.components[placement.component_index]
        rows.append([
            f"Component {placement.component_index + 1}",
            f"Sheet {placement.sheet_index + 1}",
            str(component.length),
            str(component.width),
            str(placement.x),
            str(placement.y)
        ])
    for index in result.unplaced:
        component = state.components[index]
        rows.append([
            f"Component {index + 1}",
            "Not placed",
            str(component.length),
            str(component.width),
            "",
            ""
        ])
    return rows


def _header_format_request(sheet_id: int, row: int) -> dict:
    return {
        "repeatCell": {
            "range": {
                "sheetId": sheet_id,
                "startRowIndex": row,
                "endRowIndex": row + 1
            },
            "cell": {"userEnteredFormat": {
                "textFormat": {"bold": True},
                "backgroundColor": {"red": 0.9, "green": 0.9, "blue": 0.9}
            }},
            "fields": "userEnteredFormat"
        }
    }


class GoogleSheetsExporter:
    def __init__(self, service_account_file: str, share_publicly: bool = False):
        self.service_account_file = service_account_file
        self.share_publicly = share_publicly
        self.credentials = None
        self.service = None

    def authenticate(self):
        try:
            self.credentials = service_account.Credentials.from_service_account_file(
                self.service_account_file,
                scopes=GOOGLE_SCOPES
            )
            self.service = build('sheets', 'v4', credentials=self.credentials)
        except Exception as e:
            raise ExportError(f"Authentication failed: {e}") from e

    def export_layout(self, state: LayoutState, result: PlacementResult,
                      filename: Optional[str] = None) -> str:
        """Write the layout to a new spreadsheet and return its id."""
        if self.service is None:
            self.authenticate()
        current_date = time.strftime("%d-%m-%Y")
        if filename is None:
            filename = "Sheet_Layout_" + current_date
        sheet_rows = build_sheet_rows(state, result)
        placement_rows = build_placement_rows(state, result)
        try:
            spreadsheet = self.service.spreadsheets().create(
                body={'properties': {'title': filename}}
            ).execute()
            spreadsheet_id = spreadsheet['spreadsheetId']
            first_sheet_id = spreadsheet['sheets'][0]['properties']['sheetId']
            self.service.spreadsheets().batchUpdate(
                spreadsheetId=spreadsheet_id,
                body={'requests': [{
                    "updateSheetProperties": {
                        "properties": {"sheetId": first_sheet_id, "title": current_date},
                        "fields": "title"
                    }
                }]}
            ).execute()
            self._write_table(spreadsheet_id, f"'{current_date}'!A1", SHEET_HEADER, sheet_rows)
            placement_row = len(sheet_rows) + 2
            self._write_table(spreadsheet_id, f"'{current_date}'!A{placement_row + 1}",
                              PLACEMENT_HEADER, placement_rows)
            self.service.spreadsheets().batchUpdate(
                spreadsheetId=spreadsheet_id,
                body={"requests": [
                    _header_format_request(first_sheet_id, 0),
                    _header_format_request(first_sheet_id, placement_row),
                    {"autoResizeDimensions": {"dimensions": {
                        "dimension": "COLUMNS", "sheetId": first_sheet_id}}}
                ]}
            ).execute()
        except Exception as e:
            raise ExportError(f"Export failed: {e}") from e
        if self.share_publicly:
            self._share(spreadsheet_id)
        log.info("Exported layout to spreadsheet %s", spreadsheet_id)
        return spreadsheet_id

    def _write_table(self, spreadsheet_id: str, cell_range: str, header: Sequence[str],
                     rows: List[List[str]]):
        self.service.spreadsheets().values().update(
            spreadsheetId=spreadsheet_id,
            range=cell_range,
            valueInputOption="RAW",
            body={'values': [list(header), *rows]}
        ).execute()

    def _share(self, spreadsheet_id: str):
        try:
            drive_service = build('drive', 'v3', credentials=self.credentials)
            drive_service.permissions().create(
                fileId=spreadsheet_id,
                body={'type': 'anyone', 'role': 'reader'},
                fields='id',
            ).execute()
        except Exception:
            # The spreadsheet exists at this point; sharing is best effort.
            log.warning("Failed to set public permission on %s", spreadsheet_id, exc_info=True)
