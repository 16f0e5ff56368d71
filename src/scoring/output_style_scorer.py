"""Output style scorer."""
from __future__ import annotations

from models.quality import Metric
from models.shared import MetricCategory
from scoring.combiner import ScorerComponent, ScoringInput
from scoring.primitives import (
    DESCRIPTION_BANDS_MEDIUM,
    CompositionThresholds,
    check_metric,
    has_text,
    score_composition,
    score_description,
)


OUTPUT_STYLE_COMPOSITION = CompositionThresholds(
    excellent=50, excellent_note="Concise: ≤50 lines",
    good=100, good_note="Good: ≤100 lines",
    ok=200, ok_note="OK: ≤200 lines",
    over_limit=500, over_limit_note="Large: ≤500 lines",
    fat_note="Too large: >500 lines",
    name="File size",
)

SUBSTANTIAL_BODY_CHARS = 50


def body_length_note(length: int) -> str:
    if length >= 200:
        return "Rich content"
    if length >= SUBSTANTIAL_BODY_CHARS:
        return "Adequate content"
    if length > 0:
        return "Minimal content"
    return "No content"


def has_markdown_formatting(body: str) -> bool:
    return "#" in body or "- " in body or "```" in body


class OutputStyleScorer(ScorerComponent):
    """Scores output style files on a 0-100 scale."""

    def score_structural(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        checks = [
            ("Has frontmatter", doc.content.strip().startswith("---"), 10),
            ("Has name", has_text(doc.frontmatter, "name"), 15),
            ("Has description", has_text(doc.frontmatter, "description"), 15),
        ]
        total = 0
        details: list[Metric] = []
        for name, passed, max_points in checks:
            earned, metric = check_metric(MetricCategory.STRUCTURAL, name, passed, max_points)
            total += earned
            details.append(metric)
        return total, details

    def score_practices(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        body_len = len(doc.body.strip())

        body_points, body_metric = check_metric(
            MetricCategory.PRACTICES, "Has body content", body_len > 0, 20
        )
        keep_points, keep_metric = check_metric(
            MetricCategory.PRACTICES,
            "Has keep-coding-instructions",
            "keep-coding-instructions" in doc.frontmatter,
            10,
        )
        length_points, length_metric = check_metric(
            MetricCategory.PRACTICES,
            "Substantial body content",
            body_len >= SUBSTANTIAL_BODY_CHARS,
            10,
            note=body_length_note(body_len),
        )
        return (
            body_points + keep_points + length_points,
            [body_metric, keep_metric, length_metric],
        )

    def score_composition(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        points, metric = score_composition(doc.lines, OUTPUT_STYLE_COMPOSITION)
        return points, [metric]

    def score_documentation(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        desc_points, desc_metric = score_description(
            doc.frontmatter, DESCRIPTION_BANDS_MEDIUM, pass_at=50
        )
        format_points, format_metric = check_metric(
            MetricCategory.DOCUMENTATION,
            "Uses markdown formatting",
            has_markdown_formatting(doc.body),
            5,
        )
        return desc_points + format_points, [desc_metric, format_metric]
