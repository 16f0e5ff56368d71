"""Shared aggregation for every document scorer.

Each document type implements the four category methods of
ScorerComponent; compute_combined_score runs them in a fixed order
(structural, practices, composition, documentation) and folds the
results into a QualityScore.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import structlog

from models.quality import Metric, QualityScore, new_quality_score
from scoring.primitives import count_lines

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ScoringInput:
    """Everything a category method may look at for one document."""
    content: str
    frontmatter: dict[str, Any]
    body: str
    lines: int


class ScorerComponent(ABC):
    """Capability set implemented by each document type.

    Implementations carry no instance state, so one instance can be shared
    freely across threads.
    """

    @abstractmethod
    def score_structural(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        ...

    @abstractmethod
    def score_practices(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        ...

    @abstractmethod
    def score_composition(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        ...

    @abstractmethod
    def score_documentation(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        ...

    def score(
        self,
        content: str,
        frontmatter: dict[str, Any] | None,
        body: str,
    ) -> QualityScore:
        """Grade one parsed document on the 0-100 scale."""
        return compute_combined_score(content, frontmatter, body, self)


def compute_combined_score(
    content: str,
    frontmatter: dict[str, Any] | None,
    body: str,
    component: ScorerComponent,
) -> QualityScore:
    """Run the four category methods of ``component`` and build the score."""
    doc = ScoringInput(
        content=content or "",
        frontmatter=dict(frontmatter or {}),
        body=body or "",
        lines=count_lines(content or ""),
    )

    structural, structural_details = component.score_structural(doc)
    practices, practice_details = component.score_practices(doc)
    composition, composition_details = component.score_composition(doc)
    documentation, doc_details = component.score_documentation(doc)

    score = new_quality_score(
        structural,
        practices,
        composition,
        documentation,
        structural_details + practice_details + composition_details + doc_details,
    )
    logger.debug(
        "score_computed",
        component=type(component).__name__,
        lines=doc.lines,
        overall=score.overall,
        tier=score.tier.value,
    )
    return score
