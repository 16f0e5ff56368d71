"""Reusable rule evaluators shared by every document scorer.

Contains the declarative rule types (FieldSpec, SectionSpec, GradeBand,
CompositionThresholds) and the functions that turn them into points and
Metric details.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Optional

from models.quality import Metric
from models.shared import MetricCategory


SectionFallback = Callable[[str, str], bool]


@dataclass(frozen=True)
class FieldSpec:
    """Required frontmatter key and the points it is worth."""
    name: str
    points: int


@dataclass(frozen=True)
class SectionSpec:
    """Required body pattern (regex, case-insensitive unless ``ignore_case`` is off) and its points."""
    pattern: str
    name: str
    points: int
    ignore_case: bool = True


@dataclass(frozen=True)
class GradeBand:
    """One rung of a graded ladder: values >= minimum earn points."""
    minimum: int
    points: int
    note: str


@dataclass(frozen=True)
class CompositionThresholds:
    """Size breakpoints for the 10/8/6/3/0 composition ladder.

    Each bound is inclusive. Values above ``over_limit`` earn nothing and
    get ``fat_note``.
    """
    excellent: int
    excellent_note: str
    good: int
    good_note: str
    ok: int
    ok_note: str
    over_limit: int
    over_limit_note: str
    fat_note: str
    name: str = "Line count"


@lru_cache(maxsize=None)
def compile_pattern(pattern: str, ignore_case: bool = True) -> re.Pattern[str]:
    """Compile a rule pattern once per process."""
    flags = re.MULTILINE | (re.IGNORECASE if ignore_case else 0)
    return re.compile(pattern, flags)


def count_lines(content: str) -> int:
    return content.count("\n") + 1


def text_value(frontmatter: dict[str, Any], key: str) -> str:
    """Return a string field, treating missing or non-string values as empty."""
    value = frontmatter.get(key)
    return value if isinstance(value, str) else ""


def has_text(frontmatter: dict[str, Any], key: str) -> bool:
    return text_value(frontmatter, key) != ""


def check_metric(
    category: MetricCategory,
    name: str,
    passed: bool,
    points: int,
    note: str = "",
) -> tuple[int, Metric]:
    """Score an all-or-nothing check."""
    earned = points if passed else 0
    return earned, Metric(
        category=category,
        name=name,
        points=earned,
        max_points=points,
        passed=passed,
        note=note,
    )


def grade(value: int, bands: list[GradeBand], fallback_note: str) -> tuple[int, str]:
    """Return (points, note) for the first band whose minimum ``value`` reaches.

    Bands must be ordered from the highest minimum to the lowest.
    """
    for band in bands:
        if value >= band.minimum:
            return band.points, band.note
    return 0, fallback_note


def score_required_fields(
    frontmatter: dict[str, Any],
    specs: list[FieldSpec],
) -> tuple[int, list[Metric]]:
    """Award each field's points when its key is present in the frontmatter.

    Presence only: the value's type and emptiness are not inspected.
    """
    total = 0
    details: list[Metric] = []
    for spec in specs:
        points, metric = check_metric(
            MetricCategory.STRUCTURAL,
            f"Has {spec.name}",
            spec.name in frontmatter,
            spec.points,
        )
        total += points
        details.append(metric)
    return total, details


def score_sections(
    body: str,
    specs: list[SectionSpec],
    category: MetricCategory = MetricCategory.STRUCTURAL,
) -> tuple[int, list[Metric]]:
    """Award each section's points when its pattern matches the body once."""
    return score_sections_with_fallback(body, specs, None, category=category)


def score_sections_with_fallback(
    body: str,
    specs: list[SectionSpec],
    fallback: Optional[SectionFallback],
    category: MetricCategory = MetricCategory.STRUCTURAL,
) -> tuple[int, list[Metric]]:
    """Like score_sections, but consult ``fallback(body, name)`` on a miss."""
    total = 0
    details: list[Metric] = []
    for spec in specs:
        matched = compile_pattern(spec.pattern, spec.ignore_case).search(body) is not None
        if not matched and fallback is not None:
            matched = fallback(body, spec.name)
        points, metric = check_metric(category, spec.name, matched, spec.points)
        total += points
        details.append(metric)
    return total, details


def score_composition(size: int, thresholds: CompositionThresholds) -> tuple[int, Metric]:
    """Grade a line count (or byte size) on the 10/8/6/3/0 ladder."""
    if size <= thresholds.excellent:
        points, note, passed = 10, thresholds.excellent_note, True
    elif size <= thresholds.good:
        points, note, passed = 8, thresholds.good_note, True
    elif size <= thresholds.ok:
        points, note, passed = 6, thresholds.ok_note, True
    elif size <= thresholds.over_limit:
        points, note, passed = 3, thresholds.over_limit_note, False
    else:
        points, note, passed = 0, thresholds.fat_note, False

    return points, Metric(
        category=MetricCategory.COMPOSITION,
        name=thresholds.name,
        points=points,
        max_points=10,
        passed=passed,
        note=note,
    )


def score_description(
    frontmatter: dict[str, Any],
    bands: list[GradeBand],
    pass_at: int,
    fallback_note: str = "Missing",
) -> tuple[int, Metric]:
    """Grade the frontmatter description by character length (5 points max)."""
    length = len(text_value(frontmatter, "description"))
    points, note = grade(length, bands, fallback_note)
    return points, Metric(
        category=MetricCategory.DOCUMENTATION,
        name="Description quality",
        points=points,
        max_points=5,
        passed=length >= pass_at,
        note=note,
    )


# Description ladders shared across document types
DESCRIPTION_BANDS_LONG = [
    GradeBand(200, 5, "Comprehensive"),
    GradeBand(100, 3, "Adequate"),
    GradeBand(1, 1, "Brief"),
]

DESCRIPTION_BANDS_SHORT = [
    GradeBand(50, 5, "Clear"),
    GradeBand(20, 3, "Brief"),
    GradeBand(1, 1, "Minimal"),
]

DESCRIPTION_BANDS_MEDIUM = [
    GradeBand(100, 5, "Comprehensive"),
    GradeBand(50, 3, "Adequate"),
    GradeBand(1, 1, "Brief"),
]
