from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Tuple

from ..config import FY_EPOCH_OFFSET, FY_LABEL_OFFSET

logger = logging.getLogger(__name__)


def current_fiscal_year(fy_month: int, today: Optional[date] = None) -> int:
    """
    Fiscal year id for ``today``.

    Ids count from 1996. When the fiscal year does not start in January,
    reaching the start month rolls over to the next id.
    """
    today = today or date.today()
    fy_id = today.year - FY_LABEL_OFFSET
    if fy_month > 1 and today.month >= fy_month:
        fy_id += 1
    return fy_id


def fiscal_year_label(fy_id: int, fy_month: int) -> str:
    year = FY_LABEL_OFFSET + fy_id
    if fy_month == 1:
        return str(year)
    return f"{year - 1}/{str(year)[2:4]}"


def fiscal_calendar_year(fy_id: int) -> int:
    return fy_id + FY_EPOCH_OFFSET


def donation_window(fy_id: int, required_years: int, fy_month: int) -> Tuple[date, date]:
    """Half-open ``[start, end)`` window that payments must fall into."""
    year = fiscal_calendar_year(fy_id)
    start = date(year - required_years, fy_month, 1)
    end = date(year + 1, fy_month, 1)
    return start, end


def parse_fiscal_year(raw, fy_month: int, today: Optional[date] = None) -> int:
    try:
        fy_id = int(str(raw).strip())
    except (TypeError, ValueError):
        fy_id = 0
    if not fy_id:
        fy_id = current_fiscal_year(fy_month, today=today)
        logger.info("No usable fiscal year in %r, using current id %s", raw, fy_id)
    return fy_id


def parse_int(raw, default: int = 0) -> int:
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return default
