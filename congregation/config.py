from __future__ import annotations

import os
from pathlib import Path
from typing import Dict


BASE_DIR = Path(__file__).resolve().parents[1]
OUT_DIR = BASE_DIR / "out"
DB_PATH = OUT_DIR / "congregation.db"

SECRET_KEY = os.environ.get("CONGREGATION_SECRET_KEY", "dev-only-change-me")

# Stored system settings fall back to these when the config table has no row.
SYSTEM_CONFIG_DEFAULTS: Dict[str, str] = {
    "leftX": "20",
    "iFYMonth": "1",
    "iPDFOutputType": "1",
    "sDateFilenameFormat": "%Y%m%d-%H%M%S",
    "sPaperFormat": "Letter",
}

# Classification list and the option ids that never vote.
CLASSIFICATION_LIST_ID = 1
MEMBER_CLASSIFICATION = "Member"
NON_VOTING_CLASS_IDS = (6, 7)
PAYMENT = "Payment"

# Fiscal year ids count from a legacy epoch.
FY_EPOCH_OFFSET = 1995
FY_LABEL_OFFSET = 1996

# Report layout, in millimetres from the top of the page.
REPORT_TOP_Y = 10.0
REPORT_HEADING_GAP = 10.0
REPORT_LINE_HEIGHT = 5.0
REPORT_PAGE_BREAK_Y = 245.0
REPORT_MEMBER_INDENT = 30.0
REPORT_FONT = "Times-Roman"
REPORT_FONT_SIZE = 10

CALENDAR_EVENT_CONTAINER_ID = "calendar-event-react-app"
TWO_FACTOR_CONTAINER_ID = "two-factor-enrollment-react-app"


def set_out_dir(path: Path) -> None:
    global OUT_DIR, DB_PATH
    OUT_DIR = path
    DB_PATH = OUT_DIR / "congregation.db"
