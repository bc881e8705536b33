"""Exceptions raised by the export pipeline.

Data-shape problems never raise; these cover requests that cannot be served
and failures of the PDF render itself.
"""

from __future__ import annotations


class TimecardExportError(Exception):
    """Base class for export failures."""


class ExportRequestError(TimecardExportError):
    """The export request is missing required fields."""

    def __init__(self, problems: list[str]) -> None:
        super().__init__("; ".join(problems))
        self.problems = problems


class TimecardNotFoundError(TimecardExportError):
    """None of the requested timecards could be loaded."""


class PdfExportError(TimecardExportError):
    """The PDF document could not be rendered or its stream failed."""
