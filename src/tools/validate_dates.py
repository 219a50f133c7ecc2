"""validate_dates: sanity-check a task's start / end / due dates.

Dates are ISO 8601 ("2025-03-01" or full timestamps). Naive values are
taken as UTC. Output dates are YYYY-MM-DD.

  unparseable          -> error
  before today (UTC)   -> warning
  start > end          -> error
  start > due          -> error
  end > due            -> warning
"""

from datetime import datetime, time, timezone
from typing import Optional

from src.schemas.tools import ValidateDatesRequest, ValidateDatesResult


def parse_date(value: str) -> Optional[datetime]:
    """Parse an ISO date/datetime into a naive UTC datetime, or None."""
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _today_utc() -> datetime:
    return datetime.combine(datetime.now(timezone.utc).date(), time.min)


def validate_dates(params: ValidateDatesRequest) -> ValidateDatesResult:
    errors: list[str] = []
    warnings: list[str] = []
    today = _today_utc()

    parsed: dict[str, Optional[datetime]] = {}
    for label, raw in (("start", params.start_date), ("end", params.end_date), ("due", params.due_date)):
        parsed[label] = None
        if not raw:
            continue
        value = parse_date(raw)
        if value is None:
            errors.append(f"Invalid {label} date format: {raw}")
            continue
        if value < today:
            warnings.append(f"{label.capitalize()} date is in the past")
        parsed[label] = value

    start, end, due = parsed["start"], parsed["end"], parsed["due"]
    if start and end and start > end:
        errors.append("Start date cannot be after end date")
    if start and due and start > due:
        errors.append("Start date cannot be after due date")
    if end and due and end > due:
        warnings.append("End date is after due date")

    return ValidateDatesResult(
        is_valid=not errors,
        start_date=start.date().isoformat() if start else None,
        end_date=end.date().isoformat() if end else None,
        due_date=due.date().isoformat() if due else None,
        errors=errors,
        warnings=warnings,
    )
