import os

APP_NAME = "Attendance Tracker"
APP_VERSION = "2.0"

STORAGE_MODE = os.environ.get("ATTENDANCE_STORAGE", "file")
PROGRAM_STORAGE = "data"
DATA_FILE = os.environ.get("ATTENDANCE_DATA_FILE", f"{PROGRAM_STORAGE}/attendance.json")
STORAGE_KEY = "attendanceSubjects"
RECORDS_FOLDER = os.environ.get("ATTENDANCE_RECORDS_FOLDER", "records")
LOGO_FILE = "logo.png"

STATUS_SCHEME = os.environ.get("ATTENDANCE_STATUS_SCHEME", "standard")
# (minimum percentage, tier) pairs, highest first
STATUS_SCHEMES = {
    "standard": [(75.0, "safe"), (65.0, "caution"), (0.0, "danger")],
    "lenient": [(75.0, "safe"), (50.0, "caution"), (0.0, "danger")],
}

LOG_LEVEL = os.environ.get("ATTENDANCE_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

ANIMATION_STEPS = 20
ANIMATION_INTERVAL_MS = 50
NOTIFICATION_MS = 3000

WINDOW_WIDTH = 1000
WINDOW_HEIGHT = 720
DEFAULT_FONT = ("Arial", 10)
TITLE_FONT = ("Arial", 18, "bold")
STAT_FONT = ("Arial", 16, "bold")

STATUS_COLORS = {
    "safe": "#22c55e",
    "caution": "#f59e0b",
    "danger": "#ef4444",
}
NOTIFICATION_COLORS = {
    "success": "#16a34a",
    "error": "#dc2626",
    "info": "#2563eb",
    "warning": "#d97706",
}
NOTIFICATION_ICONS = {
    "success": "✅",
    "error": "❌",
    "info": "ℹ️",
    "warning": "⚠️",
}
