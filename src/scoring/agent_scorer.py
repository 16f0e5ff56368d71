"""Agent definition scorer.

Category budget:
- Structural (35): name/description/model/tools fields + four body sections
- Practices (35): skill references, anti-patterns, expected output,
  HARD GATE markers, third-person description, WHEN triggers
- Composition (10): line count against a 200-line budget (±10%)
- Documentation (10): description length + section heading count
"""
from __future__ import annotations

from models.quality import Metric
from models.shared import MetricCategory
from scoring.combiner import ScorerComponent, ScoringInput
from scoring.primitives import (
    DESCRIPTION_BANDS_LONG,
    CompositionThresholds,
    FieldSpec,
    GradeBand,
    SectionSpec,
    check_metric,
    compile_pattern,
    grade,
    score_composition,
    score_description,
    score_required_fields,
    score_sections,
    text_value,
)


AGENT_FIELDS = [
    FieldSpec("name", 5),
    FieldSpec("description", 5),
    FieldSpec("model", 5),
    FieldSpec("tools", 5),
]

AGENT_SECTIONS = [
    SectionSpec(r"## Foundation", "Foundation section", 5),
    SectionSpec(r"### Phase", "Phase workflow", 4),
    SectionSpec(r"## Success Criteria", "Success Criteria", 3),
    SectionSpec(r"## Edge Cases", "Edge Cases", 3),
]

# Skill: foo, **Skill**: foo, Skill(foo), Skills: followed by a list
SKILL_REFERENCE_PATTERNS = [
    compile_pattern(r"Skill:\s*\S+"),
    compile_pattern(r"\*\*Skill\*\*:\s*\S+"),
    compile_pattern(r"Skill\(\s*[\"']?[a-z0-9-]+"),
    compile_pattern(r"Skills:\s*\n"),
]

AGENT_PRACTICE_SECTIONS = [
    SectionSpec(r"## Anti-Patterns", "Anti-Patterns section", 5),
    SectionSpec(r"## Expected Output", "Expected Output section", 5),
    SectionSpec(r"HARD GATE", "HARD GATE markers", 5),
]

AGENT_COMPOSITION = CompositionThresholds(
    excellent=120, excellent_note="Excellent: ≤120 lines",
    good=180, good_note="Good: ≤180 lines",
    ok=220, ok_note="OK: ≤220 lines (200±10%)",
    over_limit=275, over_limit_note="Over limit: >220 lines",
    fat_note="Fat agent: >275 lines",
)

HEADING_BANDS = [
    GradeBand(6, 5, "Well-structured"),
    GradeBand(4, 3, "Adequate structure"),
    GradeBand(2, 1, "Minimal structure"),
]


def is_third_person(description: str) -> bool:
    """A description counts as third person when non-empty and not starting with "I "."""
    return description != "" and not description.strip().startswith("I ")


def has_when_triggers(description: str) -> bool:
    lowered = description.lower()
    return (
        "PROACTIVELY" in description.upper()
        or "use when" in lowered
        or "when user" in lowered
    )


class AgentScorer(ScorerComponent):
    """Scores agent files on a 0-100 scale."""

    def score_structural(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        field_points, details = score_required_fields(doc.frontmatter, AGENT_FIELDS)
        section_points, section_details = score_sections(doc.body, AGENT_SECTIONS)
        return field_points + section_points, details + section_details

    def score_practices(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        has_skill_ref = any(p.search(doc.body) for p in SKILL_REFERENCE_PATTERNS)
        points, skill_metric = check_metric(
            MetricCategory.PRACTICES, "Skill: reference", has_skill_ref, 10
        )
        details = [skill_metric]

        section_points, section_details = score_sections(
            doc.body, AGENT_PRACTICE_SECTIONS, category=MetricCategory.PRACTICES
        )
        points += section_points
        details.extend(section_details)

        desc = text_value(doc.frontmatter, "description")
        for name, passed in (
            ("Third-person description", is_third_person(desc)),
            ("WHEN triggers in description", has_when_triggers(desc)),
        ):
            earned, metric = check_metric(MetricCategory.PRACTICES, name, passed, 5)
            points += earned
            details.append(metric)

        return points, details

    def score_composition(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        points, metric = score_composition(doc.lines, AGENT_COMPOSITION)
        return points, [metric]

    def score_documentation(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        desc_points, desc_metric = score_description(
            doc.frontmatter, DESCRIPTION_BANDS_LONG, pass_at=100
        )

        heading_count = doc.body.count("## ")
        heading_points, heading_note = grade(heading_count, HEADING_BANDS, "Poor structure")
        heading_metric = Metric(
            category=MetricCategory.DOCUMENTATION,
            name="Section structure",
            points=heading_points,
            max_points=5,
            passed=heading_count >= 4,
            note=heading_note,
        )

        return desc_points + heading_points, [desc_metric, heading_metric]
