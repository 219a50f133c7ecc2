"""Tests for the deterministic tools (title, effort, dates)."""

from datetime import datetime, timedelta, timezone

import pytest

from src.schemas.tools import EstimateEffortRequest, NormalizeTitleRequest, ValidateDatesRequest
from src.tools.estimate_effort import estimate_effort
from src.tools.normalize_title import normalize_title
from src.tools.validate_dates import validate_dates


def _day(offset: int) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=offset)).date().isoformat()


# =============================================================================
# normalize_title
# =============================================================================

def test_normalize_title():
    result = normalize_title(NormalizeTitleRequest(title="  Fix   the   login bug!!!  "))
    assert result.normalized == "Fix the login bug"
    assert result.original_length == 28
    assert result.was_truncated is False


def test_normalize_title_truncates():
    result = normalize_title(NormalizeTitleRequest(title="a" * 120))
    assert len(result.normalized) == 80
    assert result.was_truncated is True


# =============================================================================
# estimate_effort
# =============================================================================

@pytest.mark.parametrize("title, complexity, hours", [
    ("Implement login", None, 8),
    ("Implement login", "HIGH", 24),
    ("Implement login", "LOW", 3),
    ("Setup CI pipeline", "MEDIUM", 4),
    ("Fix flaky test", "LOW", 2),
    ("Research vendors", "HIGH", 9),
    ("Write release notes", "MEDIUM", 2),
])
def test_estimate_effort_hours(title, complexity, hours):
    result = estimate_effort(EstimateEffortRequest(title=title, complexity=complexity))
    assert result.estimated_hours == hours


def test_estimate_effort_confidence_and_reasoning():
    high = estimate_effort(EstimateEffortRequest(title="Build API", complexity="HIGH"))
    assert high.confidence == "LOW"
    assert high.reasoning == 'Based on "Build API" (HIGH complexity): 16h base × 1.5 multiplier'

    medium = estimate_effort(EstimateEffortRequest(title="Build API"))
    assert medium.confidence == "MEDIUM"


def test_estimate_effort_uses_description():
    result = estimate_effort(EstimateEffortRequest(title="Auth", description="configure the SSO provider"))
    assert result.estimated_hours == 4


# =============================================================================
# validate_dates
# =============================================================================

def test_valid_dates():
    result = validate_dates(ValidateDatesRequest(start_date=_day(1), end_date=_day(7), due_date=_day(30)))
    assert result.is_valid is True
    assert (result.start_date, result.end_date, result.due_date) == (_day(1), _day(7), _day(30))
    assert result.errors == []
    assert result.warnings == []


def test_invalid_formats():
    result = validate_dates(ValidateDatesRequest(start_date="invalid-date", end_date="2025-13-45",
                                                 due_date="not-a-date"))
    assert result.is_valid is False
    assert "Invalid start date format: invalid-date" in result.errors
    assert "Invalid end date format: 2025-13-45" in result.errors
    assert "Invalid due date format: not-a-date" in result.errors
    assert result.start_date is None


def test_past_date_warns():
    result = validate_dates(ValidateDatesRequest(start_date=_day(-1), end_date=_day(7)))
    assert result.is_valid is True
    assert "Start date is in the past" in result.warnings
    assert result.start_date == _day(-1)


def test_date_ordering():
    result = validate_dates(ValidateDatesRequest(start_date=_day(30), end_date=_day(7), due_date=_day(1)))
    assert result.is_valid is False
    assert "Start date cannot be after end date" in result.errors
    assert "Start date cannot be after due date" in result.errors
    assert "End date is after due date" in result.warnings


def test_full_timestamps_are_formatted():
    start = (datetime.now(timezone.utc) + timedelta(days=1)).isoformat().replace("+00:00", "Z")
    result = validate_dates(ValidateDatesRequest(start_date=start))
    assert result.is_valid is True
    assert result.start_date == _day(1)


def test_empty_input():
    result = validate_dates(ValidateDatesRequest())
    assert result.is_valid is True
    assert result.errors == [] and result.warnings == []
