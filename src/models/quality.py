"""Quality score models produced by the scoring engine."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from models.shared import MetricCategory, Tier, TIER_THRESHOLDS


class Metric(BaseModel):
    """A single graded check and the points it earned."""
    model_config = ConfigDict(frozen=True)

    category: MetricCategory
    name: str
    points: int = Field(ge=0)
    max_points: int = Field(ge=0)
    passed: bool
    note: str = ""

    @model_validator(mode="after")
    def check_points_within_max(self) -> Metric:
        if self.points > self.max_points:
            raise ValueError(f"{self.name}: points {self.points} exceed max {self.max_points}")
        return self


class QualityScore(BaseModel):
    """Overall 0-100 quality score with its category breakdown.

    overall = structural + practices + composition + documentation,
    which is also the sum of points across ``details``.
    """
    model_config = ConfigDict(frozen=True)

    overall: int
    tier: Tier
    structural: int
    practices: int
    composition: int
    documentation: int
    details: list[Metric] = Field(default_factory=list)

    def metric(self, name: str) -> Metric | None:
        """Return the first metric with the given name, if any."""
        for detail in self.details:
            if detail.name == name:
                return detail
        return None

    def failed_checks(self) -> list[Metric]:
        return [d for d in self.details if not d.passed]


def tier_from_score(score: int) -> Tier:
    """Map an overall score onto its letter tier."""
    for threshold, tier in TIER_THRESHOLDS:
        if score >= threshold:
            return tier
    return Tier.F


def new_quality_score(
    structural: int,
    practices: int,
    composition: int,
    documentation: int,
    details: list[Metric],
) -> QualityScore:
    """Build a QualityScore, summing the categories into ``overall``."""
    overall = structural + practices + composition + documentation
    return QualityScore(
        overall=overall,
        tier=tier_from_score(overall),
        structural=structural,
        practices=practices,
        composition=composition,
        documentation=documentation,
        details=list(details),
    )
