"""Shared enum definitions for the docgrade scoring engine.

This module contains the canonical vocabularies used by every scorer and by
the loader/CLI collaborators.

Usage:
    from models.shared import ComponentType, MetricCategory, Tier
"""
from __future__ import annotations

from enum import Enum


class MetricCategory(str, Enum):
    """Category a single scoring metric contributes to."""
    STRUCTURAL = "structural"
    PRACTICES = "practices"
    COMPOSITION = "composition"
    DOCUMENTATION = "documentation"


class Tier(str, Enum):
    """Letter grade derived from the overall score.

    - A: overall >= 85
    - B: overall >= 70
    - C: overall >= 50
    - D: overall >= 30
    - F: everything below
    """
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class ComponentType(str, Enum):
    """Kinds of configuration documents that can be graded."""
    AGENT = "agent"
    COMMAND = "command"
    SKILL = "skill"
    PLUGIN = "plugin"
    OUTPUT_STYLE = "output-style"


# Lower bound (inclusive) of each tier, checked top-down
TIER_THRESHOLDS: list[tuple[int, Tier]] = [
    (85, Tier.A),
    (70, Tier.B),
    (50, Tier.C),
    (30, Tier.D),
]


# Maximum points per category
CATEGORY_MAX_POINTS: dict[MetricCategory, int] = {
    MetricCategory.STRUCTURAL: 40,
    MetricCategory.PRACTICES: 40,
    MetricCategory.COMPOSITION: 10,
    MetricCategory.DOCUMENTATION: 10,
}
