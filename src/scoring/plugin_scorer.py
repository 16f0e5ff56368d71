"""Plugin manifest scorer.

Plugins are graded on their parsed JSON manifest rather than frontmatter
plus body; the body is ignored and composition looks at the raw manifest
size in bytes.
"""
from __future__ import annotations

from typing import Any

from models.quality import Metric
from models.shared import MetricCategory
from scoring.combiner import ScorerComponent, ScoringInput
from scoring.primitives import (
    CompositionThresholds,
    GradeBand,
    check_metric,
    has_text,
    score_composition,
    score_description,
)


PLUGIN_REQUIRED_FIELDS = ["name", "description", "version"]
PLUGIN_PRACTICE_FIELDS = ["homepage", "repository", "license"]

PLUGIN_COMPOSITION = CompositionThresholds(
    excellent=1000, excellent_note="Excellent: ≤1KB",
    good=2000, good_note="Good: ≤2KB",
    ok=5000, ok_note="OK: ≤5KB",
    over_limit=10000, over_limit_note="Large: ≤10KB",
    fat_note="Too large: >10KB",
    name="File size",
)

PLUGIN_DESCRIPTION_BANDS = [
    GradeBand(100, 5, "Comprehensive"),
    GradeBand(50, 3, "Adequate"),
    GradeBand(20, 1, "Brief"),
]


def has_author_name(manifest: dict[str, Any]) -> bool:
    author = manifest.get("author")
    return isinstance(author, dict) and has_text(author, "name")


def has_keywords(manifest: dict[str, Any]) -> bool:
    keywords = manifest.get("keywords")
    return isinstance(keywords, list) and len(keywords) > 0


def manifest_size(content: str) -> int:
    return len(content.encode("utf-8"))


class PluginScorer(ScorerComponent):
    """Scores plugin manifests on a 0-100 scale."""

    def score_structural(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        checks = [(f"Has {key}", has_text(doc.frontmatter, key)) for key in PLUGIN_REQUIRED_FIELDS]
        checks.append(("Has author.name", has_author_name(doc.frontmatter)))
        return self._score_checks(MetricCategory.STRUCTURAL, checks, 10)

    def score_practices(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        checks = [(f"Has {key}", has_text(doc.frontmatter, key)) for key in PLUGIN_PRACTICE_FIELDS]
        checks.append(("Has keywords", has_keywords(doc.frontmatter)))
        return self._score_checks(MetricCategory.PRACTICES, checks, 10)

    def score_composition(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        points, metric = score_composition(manifest_size(doc.content), PLUGIN_COMPOSITION)
        return points, [metric]

    def score_documentation(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        desc_points, desc_metric = score_description(
            doc.frontmatter, PLUGIN_DESCRIPTION_BANDS, pass_at=50, fallback_note="Too short"
        )
        readme_points, readme_metric = check_metric(
            MetricCategory.DOCUMENTATION, "Has readme", has_text(doc.frontmatter, "readme"), 5
        )
        return desc_points + readme_points, [desc_metric, readme_metric]

    @staticmethod
    def _score_checks(
        category: MetricCategory,
        checks: list[tuple[str, bool]],
        points_each: int,
    ) -> tuple[int, list[Metric]]:
        total = 0
        details: list[Metric] = []
        for name, passed in checks:
            earned, metric = check_metric(category, name, passed, points_each)
            total += earned
            details.append(metric)
        return total, details
