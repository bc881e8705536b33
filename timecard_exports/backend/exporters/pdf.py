"""Paginated PDF export of a job's weekly timecards.

The document is a simple text report, not a table grid: a header block, then
for each employee a pipe-delimited header row, one row per line and a totals
line. The canvas writes the finished document into `PdfChunkStream` when it
is saved; the stream is only readable once the renderer has closed it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, letter
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas as rl_canvas

from ..config import ExportSettings
from ..errors import PdfExportError
from ..fields import resolve_field
from ..parsers import format_week_label
from ..utils import safe_text
from .cells import REPORT_COLUMNS, line_cells, timecard_totals

logger = logging.getLogger(__name__)

PAGE_SIZES = {"LETTER": letter, "A4": A4}

REGULAR = "Helvetica"
BOLD = "Helvetica-Bold"

# Space that must remain on the page before each block is drawn.
EMPLOYEE_BLOCK_HEIGHT = 48
HEADER_ROW_HEIGHT = 24
DATA_ROW_HEIGHT = 14
SUMMARY_HEIGHT = 18


class PdfChunkStream:
    """Write-only byte sink for the PDF canvas.

    reportlab writes the whole document in one call on save. `close()` is the
    completion signal; reading before it raises.
    """

    def __init__(self) -> None:
        self._chunks: list[bytes] = []
        self._done = False

    def write(self, data: bytes) -> int:
        if self._done:
            raise PdfExportError("PDF stream already closed")
        self._chunks.append(bytes(data))
        return len(data)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        self._done = True

    @property
    def closed(self) -> bool:
        return self._done

    def getvalue(self) -> bytes:
        if not self._done:
            raise PdfExportError("PDF stream did not finish")
        return b"".join(self._chunks)


class _PageWriter:
    """Top-down text cursor over a reportlab canvas."""

    def __init__(self, c: rl_canvas.Canvas, page_size: tuple[float, float], margin: float) -> None:
        self.c = c
        self.width, self.height = page_size
        self.margin = margin
        self.y = margin
        self._font = (REGULAR, 10.0)

    @property
    def printable_width(self) -> float:
        return self.width - 2 * self.margin

    def set_font(self, name: str, size: float) -> None:
        self._font = (name, size)
        self.c.setFont(name, size)

    def ensure_space(self, needed: float = HEADER_ROW_HEIGHT) -> None:
        if self.y + needed > self.height - self.margin:
            self.c.showPage()
            self.y = self.margin
            # A new page starts with a fresh graphics state.
            self.c.setFont(*self._font)

    def text(self, value: str, advance: float) -> None:
        name, size = self._font
        line = _fit(value, name, size, self.printable_width)
        self.c.drawString(self.margin, self.height - self.y - size, line)
        self.y += advance

    def rule(self, color: str) -> None:
        y = self.height - self.y
        self.c.setStrokeColor(colors.HexColor(color))
        self.c.line(self.margin, y, self.width - self.margin, y)


def render_pdf(payload: Mapping[str, Any], settings: ExportSettings | None = None) -> bytes:
    """Render the timecards PDF synchronously and return its bytes."""
    settings = settings or ExportSettings()
    stream = PdfChunkStream()
    try:
        _draw(stream, payload, settings)
    except PdfExportError:
        logger.error("PDF stream failed", exc_info=True)
        raise
    except Exception as exc:
        logger.error("Failed to render timecard PDF", exc_info=True)
        raise PdfExportError(f"Failed to render timecard PDF: {exc}") from exc
    return stream.getvalue()


async def build_pdf(payload: Mapping[str, Any], settings: ExportSettings | None = None) -> bytes:
    """Render the timecards PDF off the event loop.

    Resolves with the complete document or raises `PdfExportError`.
    """
    return await asyncio.to_thread(render_pdf, payload, settings)


def _draw(stream: PdfChunkStream, payload: Mapping[str, Any], settings: ExportSettings) -> None:
    page_size = PAGE_SIZES.get(settings.page_size.upper(), letter)
    c = rl_canvas.Canvas(stream, pagesize=page_size, invariant=1)
    c.setTitle("Timecards This Week")
    w = _PageWriter(c, page_size, settings.pdf_margin)

    job_number = payload.get("jobNumber")
    w.set_font(BOLD, 14)
    w.text("Timecards This Week", 20)
    w.set_font(REGULAR, 10)
    w.text(f"Job: {safe_text(payload.get('jobName'))}{f' (#{job_number})' if job_number else ''}", 14)
    w.text(f"Week: {format_week_label(payload.get('weekStart'))}", 14)
    w.text(f"Submitted By: {safe_text(payload.get('submittedBy'))}", 18)

    timecards = payload.get("timecards")
    timecards = timecards if isinstance(timecards, list) else []
    if not timecards:
        w.set_font(REGULAR, 10)
        w.text("No submitted timecards found.", 14)
    for tc in timecards:
        tc = tc if isinstance(tc, Mapping) else {}
        _draw_timecard(w, tc, settings)

    c.save()
    stream.close()


def _draw_timecard(w: _PageWriter, tc: Mapping[str, Any], settings: ExportSettings) -> None:
    w.ensure_space(EMPLOYEE_BLOCK_HEIGHT)
    w.set_font(BOLD, 11)
    w.text(f"Employee: {safe_text(tc.get('employeeName'))}", 14)
    w.set_font(REGULAR, 9)
    w.text(f"Employee Code: {safe_text(resolve_field(tc, 'employeeCode'))}", 12)

    w.ensure_space(HEADER_ROW_HEIGHT)
    w.set_font(BOLD, 8)
    w.text(" | ".join(REPORT_COLUMNS), 12)
    w.set_font(REGULAR, 8)

    lines = tc.get("lines")
    for line in lines if isinstance(lines, list) else []:
        w.ensure_space(DATA_ROW_HEIGHT)
        w.text(" | ".join(line_cells(line)), 11)

    totals = timecard_totals(tc)
    w.ensure_space(SUMMARY_HEIGHT)
    w.set_font(BOLD, 9)
    w.text(
        f"Totals - Hours: {totals['hoursTotal']}"
        f" | Production: {totals['productionTotal']}"
        f" | Line Total: {totals['lineTotal']}",
        18,
    )
    w.rule(settings.divider_color)
    w.y += 12
    w.set_font(REGULAR, 9)
    w.c.setFillColor(colors.black)


def _fit(text: str, font: str, size: float, width: float) -> str:
    if stringWidth(text, font, size) <= width:
        return text
    ellipsis = "..."
    while text and stringWidth(text + ellipsis, font, size) > width:
        text = text[:-1]
    return text + ellipsis
