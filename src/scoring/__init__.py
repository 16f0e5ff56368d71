"""Quality scoring engine for agent, command, skill, plugin and output-style documents.

This package contains:
- primitives.py: Rule types and reusable rule evaluators
- combiner.py: ScorerComponent contract and the shared aggregation
- thin_router.py: Thin-router classification for skills
- *_scorer.py: Per-document-type rule tables
- registry.py: Scorer lookup by component type
"""
from scoring.primitives import (
    CompositionThresholds,
    FieldSpec,
    GradeBand,
    SectionSpec,
    score_composition,
    score_required_fields,
    score_sections,
    score_sections_with_fallback,
)
from scoring.combiner import (
    ScorerComponent,
    ScoringInput,
    compute_combined_score,
)
from scoring.thin_router import (
    ThinRouterSignals,
    collect_signals,
    is_methodology_skill,
    is_thin_router,
)
from scoring.agent_scorer import AgentScorer
from scoring.command_scorer import CommandScorer
from scoring.skill_scorer import SkillScorer
from scoring.plugin_scorer import PluginScorer
from scoring.output_style_scorer import OutputStyleScorer
from scoring.registry import get_scorer

__all__ = [
    # Primitives
    "CompositionThresholds",
    "FieldSpec",
    "GradeBand",
    "SectionSpec",
    "score_composition",
    "score_required_fields",
    "score_sections",
    "score_sections_with_fallback",
    # Combiner
    "ScorerComponent",
    "ScoringInput",
    "compute_combined_score",
    # Thin router
    "ThinRouterSignals",
    "collect_signals",
    "is_methodology_skill",
    "is_thin_router",
    # Scorers
    "AgentScorer",
    "CommandScorer",
    "SkillScorer",
    "PluginScorer",
    "OutputStyleScorer",
    "get_scorer",
]
