"""Assemble the weekly timecards email: body plus CSV and PDF attachments.

This mirrors what the timecard-email callable does once the caller is
authenticated: load each requested timecard, normalize, render the three
outputs and hand back a message ready for the mail transport. Sending is
left to the caller.
"""

from __future__ import annotations

import base64
import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from .config import ExportSettings
from .errors import ExportRequestError, TimecardNotFoundError
from .exporters.csv import build_csv
from .exporters.html import build_timecards_email
from .exporters.pdf import build_pdf
from .filenames import build_csv_filename, build_pdf_filename
from .forms import ExportPayload, ExportRequest, validate_request
from .normalize import normalize_all
from .utils import normalize_recipients

logger = logging.getLogger(__name__)

TimecardFetcher = Callable[[str, str, str], "Mapping[str, Any] | None | Awaitable[Mapping[str, Any] | None]"]


@dataclass
class Attachment:
    """A file attachment with base64-encoded content."""

    name: str
    content_type: str
    content_bytes: str

    @classmethod
    def from_bytes(cls, name: str, content_type: str, data: bytes) -> Attachment:
        return cls(name=name, content_type=content_type, content_bytes=base64.b64encode(data).decode("ascii"))


@dataclass
class TimecardEmail:
    to: list[str]
    subject: str
    html: str
    attachments: list[Attachment] = field(default_factory=list)


async def assemble_timecard_email(
    request: ExportRequest,
    fetch_timecard: TimecardFetcher,
    *,
    job: Mapping[str, Any] | None = None,
    submitted_by: str | None = None,
    default_recipients: list[str] | None = None,
    settings: ExportSettings | None = None,
) -> TimecardEmail:
    """Build the email for one job-week of timecards.

    Args:
        request: Which job, week and timecards to send, and to whom.
        fetch_timecard: Called as (job_id, week_start, timecard_id); returns the
            stored record or None. May be a coroutine function.
        job: Optional job details with `name` and `number`.
        submitted_by: Display name of the requesting user.
        default_recipients: Configured recipients merged ahead of the request's.
        settings: Export settings; defaults when omitted.

    Raises:
        ExportRequestError: required request fields are missing.
        TimecardNotFoundError: none of the requested timecards exist.
        PdfExportError: the PDF attachment could not be rendered.
    """
    settings = settings or ExportSettings()
    recipients = normalize_recipients(default_recipients, request.recipients)
    request = replace(request, recipients=recipients)
    problems = validate_request(request)
    if problems:
        raise ExportRequestError(problems)

    timecards: list[Mapping[str, Any]] = []
    missing: list[str] = []
    for tc_id in request.timecard_ids:
        logger.debug("Fetching timecard %s for job %s week %s", tc_id, request.job_id, request.week_start)
        result = fetch_timecard(request.job_id, request.week_start, tc_id)
        if inspect.isawaitable(result):
            result = await result
        if result is not None:
            timecards.append(result)
        else:
            missing.append(tc_id)
            logger.warning("Timecard not found: job=%s week=%s id=%s", request.job_id, request.week_start, tc_id)

    if not timecards:
        raise TimecardNotFoundError(f"Timecard not found: {', '.join(missing) or 'none found'}")

    job = job or {}
    payload: ExportPayload = {
        "jobName": job.get("name"),
        "jobNumber": job.get("number"),
        "submittedBy": submitted_by,
        "weekStart": request.week_start,
        "timecards": normalize_all(timecards),
    }

    html = build_timecards_email(payload, settings)
    csv_text = build_csv(payload["timecards"], request.week_start)
    pdf_bytes = await build_pdf(payload, settings)

    attachments = [
        Attachment.from_bytes(
            build_csv_filename(request.week_start, job.get("number")), "text/csv", csv_text.encode("utf-8")
        ),
        Attachment.from_bytes(
            build_pdf_filename(request.week_start, job.get("number")), "application/pdf", pdf_bytes
        ),
    ]
    subject = f"{settings.subject_prefix} - {len(timecards)} timecard(s) - Week of {request.week_start}"
    logger.info("Prepared %d timecard(s) for %s", len(timecards), ", ".join(recipients))
    return TimecardEmail(to=recipients, subject=subject, html=html, attachments=attachments)
