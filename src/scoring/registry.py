"""Lookup of the scorer for each component type."""
from __future__ import annotations

from models.shared import ComponentType
from scoring.agent_scorer import AgentScorer
from scoring.combiner import ScorerComponent
from scoring.command_scorer import CommandScorer
from scoring.output_style_scorer import OutputStyleScorer
from scoring.plugin_scorer import PluginScorer
from scoring.skill_scorer import SkillScorer
from utils.error_handler import UnknownComponentTypeError


# Scorers are stateless, so one shared instance per type is enough
SCORERS: dict[ComponentType, ScorerComponent] = {
    ComponentType.AGENT: AgentScorer(),
    ComponentType.COMMAND: CommandScorer(),
    ComponentType.SKILL: SkillScorer(),
    ComponentType.PLUGIN: PluginScorer(),
    ComponentType.OUTPUT_STYLE: OutputStyleScorer(),
}


def get_scorer(component_type: ComponentType | str) -> ScorerComponent:
    """Return the scorer for ``component_type`` (enum or its string value)."""
    try:
        key = ComponentType(component_type)
    except ValueError:
        raise UnknownComponentTypeError(component_type=str(component_type)) from None
    return SCORERS[key]
