from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Protocol

from ..config import REPORT_LINE_HEIGHT, REPORT_PAGE_BREAK_Y, REPORT_TOP_Y


class PageWriter(Protocol):
    def write_at(self, x: float, y: float, text: str) -> None: ...

    def add_page(self) -> None: ...


@dataclass(frozen=True)
class ReportCursor:
    """Vertical position on the current page, measured down from the top edge."""

    y: float = REPORT_TOP_Y
    top_y: float = REPORT_TOP_Y
    break_y: float = REPORT_PAGE_BREAK_Y
    line_height: float = REPORT_LINE_HEIGHT
    page: int = 1

    def advance(self, amount: float | None = None) -> "ReportCursor":
        step = self.line_height if amount is None else amount
        return replace(self, y=self.y + step)

    def needs_break(self) -> bool:
        return self.y > self.break_y

    def new_page(self) -> "ReportCursor":
        return replace(self, y=self.top_y, page=self.page + 1)


def write_line(
    writer: PageWriter,
    cursor: ReportCursor,
    text: str,
    x: float,
    advance: bool = True,
) -> ReportCursor:
    writer.write_at(x, cursor.y, text)
    return cursor.advance() if advance else cursor


def maybe_break(writer: PageWriter, cursor: ReportCursor) -> ReportCursor:
    if not cursor.needs_break():
        return cursor
    writer.add_page()
    return cursor.new_page()
