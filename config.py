"""
Configuration and constants for the sheet layout planner.
"""
import os

DEFAULT_TOLERANCE = 0.0
STORAGE_KEY = "knapsackData"
STATE_FILE = os.environ.get(
    "SHEET_LAYOUT_STATE_FILE",
    os.path.join(os.path.expanduser("~"), ".sheet_layout", "state.json")
)
SERVICE_ACCOUNT_FILE = os.environ.get("SHEET_LAYOUT_SERVICE_ACCOUNT", "service_account.json")
GOOGLE_SCOPES = [
    'https://www.googleapis.com/auth/drive',
    'https://www.googleapis.com/auth/spreadsheets'
]

COLORS = {
    'SHEET': "#cccccc",
    'COMPONENT': "#0000ff",
    'OUTLINE': "#000000",
    'LABEL': "#ffffff",
    'TOLERANCE': "#ffa500"
}
TOLERANCE_STIPPLE = "gray25"
LABEL_FONT = ("Arial", 16, "bold")
CANVAS_SCALE = 0.5
ZOOM_LIMITS = (0.1, 5.0)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVEL = os.environ.get("SHEET_LAYOUT_LOG_LEVEL", "INFO")
