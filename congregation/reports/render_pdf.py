from __future__ import annotations

import io
from typing import Dict, Tuple

from reportlab.lib.pagesizes import A4, LEGAL, LETTER
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from ..config import REPORT_FONT, REPORT_FONT_SIZE


PAPER_SIZES: Dict[str, Tuple[float, float]] = {
    "Letter": LETTER,
    "Legal": LEGAL,
    "A4": A4,
}


def paper_size(name: str) -> Tuple[float, float]:
    return PAPER_SIZES.get(str(name).strip(), LETTER)


class CanvasPageWriter:
    """
    Draws report lines on a ReportLab canvas.

    Callers work in millimetres measured down from the top edge; ReportLab
    measures points up from the bottom, so every position is flipped here.
    Pages are append-only: nothing already drawn is ever rolled back.
    """

    def __init__(
        self,
        canv: canvas.Canvas,
        page_size: Tuple[float, float],
        font_name: str = REPORT_FONT,
        font_size: float = REPORT_FONT_SIZE,
    ) -> None:
        self.canv = canv
        self.page_w, self.page_h = page_size
        self.font_name = font_name
        self.font_size = font_size
        self.page_count = 1
        self._apply_font()

    def _apply_font(self) -> None:
        # showPage() resets the graphics state, font included.
        self.canv.setFont(self.font_name, self.font_size)

    def write_at(self, x: float, y: float, text: str) -> None:
        self.canv.drawString(x * mm, self.page_h - y * mm, text)

    def add_page(self) -> None:
        self.canv.showPage()
        self.page_count += 1
        self._apply_font()

    def finish(self) -> None:
        self.canv.showPage()
        self.canv.save()


def open_pdf(paper: str, title: str) -> Tuple[io.BytesIO, CanvasPageWriter]:
    buffer = io.BytesIO()
    size = paper_size(paper)
    canv = canvas.Canvas(buffer, pagesize=size)
    canv.setTitle(title)
    return buffer, CanvasPageWriter(canv, size)
