"""Slash-command scorer.

Commands are graded as thin dispatchers: they should declare their tools,
delegate real work through Task() calls and stay under ~50 lines.
"""
from __future__ import annotations

import re

from models.quality import Metric
from models.shared import MetricCategory
from scoring.combiner import ScorerComponent, ScoringInput
from scoring.primitives import (
    DESCRIPTION_BANDS_SHORT,
    CompositionThresholds,
    FieldSpec,
    check_metric,
    score_composition,
    score_description,
    score_required_fields,
)


COMMAND_FIELDS = [
    FieldSpec("allowed-tools", 10),
    FieldSpec("description", 10),
    FieldSpec("argument-hint", 10),
]

TASK_DELEGATION_RE = re.compile(r"Task\([^)]+\)")
SUCCESS_CRITERIA_RE = re.compile(r"Success criteria|^\s*- \[ \]", re.IGNORECASE | re.MULTILINE)
FLAGS_RE = re.compile(r"## Flags|--\w+", re.IGNORECASE)

COMMAND_COMPOSITION = CompositionThresholds(
    excellent=30, excellent_note="Excellent: ≤30 lines",
    good=45, good_note="Good: ≤45 lines",
    ok=55, ok_note="OK: ≤55 lines (50±10%)",
    over_limit=65, over_limit_note="Over limit: >55 lines",
    fat_note="Fat command: >65 lines",
)


def pluralize(count: int, singular: str) -> str:
    """Render "1 Task() call" / "3 Task() calls"."""
    if count == 1:
        return f"1 {singular}"
    return f"{count} {singular}s"


class CommandScorer(ScorerComponent):
    """Scores command files on a 0-100 scale."""

    def score_structural(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        points, details = score_required_fields(doc.frontmatter, COMMAND_FIELDS)

        has_delegation = TASK_DELEGATION_RE.search(doc.body) is not None
        earned, metric = check_metric(
            MetricCategory.STRUCTURAL, "Task() delegation", has_delegation, 10
        )
        return points + earned, details + [metric]

    def score_practices(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        task_count = doc.body.count("Task(")
        checks = [
            ("Success criteria", SUCCESS_CRITERIA_RE.search(doc.body) is not None, 15, ""),
            ("Task delegation", task_count >= 1, 15, pluralize(task_count, "Task() call")),
            ("Flags documented", FLAGS_RE.search(doc.body) is not None, 10, ""),
        ]

        points = 0
        details: list[Metric] = []
        for name, passed, max_points, note in checks:
            earned, metric = check_metric(MetricCategory.PRACTICES, name, passed, max_points, note)
            points += earned
            details.append(metric)
        return points, details

    def score_composition(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        points, metric = score_composition(doc.lines, COMMAND_COMPOSITION)
        return points, [metric]

    def score_documentation(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        desc_points, desc_metric = score_description(
            doc.frontmatter, DESCRIPTION_BANDS_SHORT, pass_at=20
        )
        code_points, code_metric = check_metric(
            MetricCategory.DOCUMENTATION, "Code examples", "```" in doc.body, 5
        )
        return desc_points + code_points, [desc_metric, code_metric]
