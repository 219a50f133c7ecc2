"""estimate_effort: keyword heuristic for task effort in hours.

  base hours   by the first keyword family found in title + description
  multiplier   HIGH 1.5, MEDIUM 1, LOW 0.7
  result       rounded to the nearest half hour, capped at 40h
"""

import math

from src.schemas.tools import EstimateEffortRequest, EstimateEffortResult

MAX_HOURS = 40
DEFAULT_BASE_HOURS = 2

# (keywords, {complexity: base hours}), first match wins
KEYWORD_RULES = [
    (("setup", "configure", "install"), {"HIGH": 8, "MEDIUM": 4, "LOW": 2}),
    (("implement", "develop", "build"), {"HIGH": 16, "MEDIUM": 8, "LOW": 4}),
    (("test", "debug", "fix"), {"HIGH": 12, "MEDIUM": 6, "LOW": 3}),
    (("review", "analyze", "research"), {"HIGH": 6, "MEDIUM": 3, "LOW": 1.5}),
]

MULTIPLIERS = {"HIGH": 1.5, "MEDIUM": 1, "LOW": 0.7}


def _base_hours(text: str, complexity: str) -> float:
    for keywords, hours in KEYWORD_RULES:
        if any(keyword in text for keyword in keywords):
            return hours[complexity]
    return DEFAULT_BASE_HOURS


def _hours_text(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def estimate_effort(params: EstimateEffortRequest) -> EstimateEffortResult:
    complexity = params.complexity or "MEDIUM"
    text = f"{params.title} {params.description or ''}".lower()

    base = _base_hours(text, complexity)
    multiplier = MULTIPLIERS[complexity]
    hours = math.floor(base * multiplier * 2 + 0.5) / 2

    reasoning = (
        f'Based on "{params.title}" ({complexity} complexity): '
        f"{_hours_text(base)}h base × {_hours_text(multiplier)} multiplier"
    )
    return EstimateEffortResult(
        estimated_hours=min(hours, MAX_HOURS),
        confidence="LOW" if complexity == "HIGH" else "MEDIUM",
        reasoning=reasoning[:200],
    )
