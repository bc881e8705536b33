"""HTML email body summarizing a job's submitted timecards."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from jinja2 import Environment, select_autoescape

from ..config import ExportSettings
from ..fields import resolve_field
from ..parsers import format_week_label
from ..utils import safe_text
from .cells import REPORT_COLUMNS, line_cells, timecard_totals

_env = Environment(autoescape=select_autoescape(default=True, default_for_string=True))

TIMECARDS_EMAIL = _env.from_string("""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>Timecards Submitted</title>
  <style>
    .email-container { font-family: Arial, sans-serif; background-color: #f5f5f5; padding: 20px; }
    .header { background-color: #007bff; color: white; padding: 20px; text-align: center; border-radius: 4px 4px 0 0; }
    .header h1 { margin: 0; font-size: 24px; }
    .content { background-color: white; padding: 20px; line-height: 1.6; }
    .footer { background-color: #f0f0f0; padding: 15px; text-align: center; font-size: 12px; color: #666; border-radius: 0 0 4px 4px; }
    .footer p { margin: 0; }
    table { border: 1px solid #ddd; border-collapse: collapse; width: 100%; margin-top: 10px; }
    th, td { border: 1px solid #ddd; padding: 6px; text-align: left; }
    th { background-color: #f0f0f0; font-weight: bold; }
    td.num, th.num { text-align: right; }
    tr.totals td { font-weight: bold; background-color: #fafafa; }
  </style>
</head>
<body>
<div class="email-container">
  <div class="header">
    <h1>Timecards Submitted</h1>
  </div>
  <div class="content">
    <p><strong>Job:</strong> {{ job_name }}{% if job_number %} (#{{ job_number }}){% endif %}</p>
    <p><strong>Week:</strong> {{ week_label }}</p>
    <p><strong>Submitted By:</strong> {{ submitted_by }}</p>
    {% if not timecards %}
    <p><em>No submitted timecards found.</em></p>
    {% endif %}
    {% for tc in timecards %}
    <h3>{{ tc.employee_name }} <small>({{ tc.employee_code }})</small></h3>
    <table>
      <thead>
        <tr>
          {% for col in columns %}<th{% if loop.index > 4 %} class="num"{% endif %}>{{ col }}</th>{% endfor %}
        </tr>
      </thead>
      <tbody>
        {% for cells in tc.rows %}
        <tr>
          {% for cell in cells %}<td{% if loop.index > 4 %} class="num"{% endif %}>{{ cell }}</td>{% endfor %}
        </tr>
        {% else %}
        <tr><td colspan="{{ columns|length }}"><em>No entries</em></td></tr>
        {% endfor %}
        <tr class="totals">
          <td colspan="{{ columns|length - 3 }}">Totals</td>
          <td class="num" data-total="hours">{{ tc.totals.hoursTotal }}</td>
          <td class="num" data-total="production">{{ tc.totals.productionTotal }}</td>
          <td class="num" data-total="line">{{ tc.totals.lineTotal }}</td>
        </tr>
      </tbody>
    </table>
    {% endfor %}
  </div>
  <div class="footer">
    <p>&copy; {{ year }} {{ brand_name }}. All rights reserved.</p>
  </div>
</div>
</body>
</html>
""")


def build_timecards_email(payload: Mapping[str, Any], settings: ExportSettings | None = None) -> str:
    """Render the email body from normalized timecards.

    Totals are read from each timecard as normalized, never recomputed, so
    they match the CSV and PDF attachments.
    """
    settings = settings or ExportSettings()
    timecards = payload.get("timecards")
    timecards = timecards if isinstance(timecards, list) else []
    views = []
    for tc in timecards:
        tc = tc if isinstance(tc, Mapping) else {}
        lines = tc.get("lines")
        views.append(
            {
                "employee_name": safe_text(tc.get("employeeName")),
                "employee_code": safe_text(resolve_field(tc, "employeeCode")),
                "rows": [line_cells(line) for line in (lines if isinstance(lines, list) else [])],
                "totals": timecard_totals(tc),
            }
        )
    return TIMECARDS_EMAIL.render(
        job_name=str(payload.get("jobName") or "").strip() or "N/A",
        job_number=payload.get("jobNumber"),
        week_label=format_week_label(payload.get("weekStart")),
        submitted_by=safe_text(payload.get("submittedBy")),
        timecards=views,
        columns=REPORT_COLUMNS,
        brand_name=settings.brand_name,
        year=date.today().year,
    )
