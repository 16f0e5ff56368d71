"""Data models for the docgrade scoring engine."""
from models.shared import (
    ComponentType,
    MetricCategory,
    Tier,
    CATEGORY_MAX_POINTS,
)
from models.quality import (
    Metric,
    QualityScore,
    new_quality_score,
    tier_from_score,
)
from models.input import ParsedDocument

__all__ = [
    "ComponentType",
    "MetricCategory",
    "Tier",
    "CATEGORY_MAX_POINTS",
    "Metric",
    "QualityScore",
    "new_quality_score",
    "tier_from_score",
    "ParsedDocument",
]
