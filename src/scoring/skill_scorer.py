"""Skill document scorer.

Skills are graded by one of two mutually exclusive rule sets chosen by the
thin-router classifier before scoring starts:

- Standard: methodology skills (workflow/phase markers) must carry Quick
  Reference, Workflow, Anti-Patterns and Success Criteria sections;
  reference/pattern-library skills trade Workflow and Success Criteria
  for a Patterns/Templates/Examples section.
- Thin router: skills that dispatch to references/ files are graded on
  their routing tables and cross-links instead.

Both paths share the 40/40 point budgets, the 500-line composition policy
and the documentation rules, so scores compare across skill kinds.
"""
from __future__ import annotations

from abc import abstractmethod
from functools import lru_cache
from typing import Any

from models.quality import Metric, QualityScore
from models.shared import MetricCategory
from scoring.combiner import ScorerComponent, ScoringInput, compute_combined_score
from scoring.primitives import (
    DESCRIPTION_BANDS_LONG,
    CompositionThresholds,
    FieldSpec,
    GradeBand,
    SectionSpec,
    count_lines,
    grade,
    score_composition,
    score_description,
    score_required_fields,
    score_sections,
    score_sections_with_fallback,
)
from scoring.thin_router import is_methodology_skill, is_thin_router


SKILL_FIELDS = [
    FieldSpec("name", 10),
    FieldSpec("description", 10),
]

ANTI_PATTERNS_PATTERN = r"(## Anti-Patterns?|### Anti-Patterns?|\| Anti-Pattern)"

METHODOLOGY_SECTIONS = [
    SectionSpec(r"## Quick Reference", "Quick Reference", 8),
    SectionSpec(r"## Workflow", "Workflow section", 6),
    SectionSpec(ANTI_PATTERNS_PATTERN, "Anti-Patterns section", 4),
    SectionSpec(r"## Success Criteria", "Success Criteria", 2),
]

# Success Criteria is optional for reference skills
REFERENCE_SECTIONS = [
    SectionSpec(r"## Quick Reference", "Quick Reference", 10),
    SectionSpec(r"(## Patterns?|## Templates?|## Examples?)", "Pattern/Template section", 6),
    SectionSpec(ANTI_PATTERNS_PATTERN, "Anti-Patterns section", 4),
]

STANDARD_PRACTICES = [
    SectionSpec(r"\|.*User Question.*\|.*Action.*\|", "Semantic routing table", 10, ignore_case=False),
    SectionSpec(r"### Phase \d", "Phase-based workflow", 8),
    SectionSpec(
        r"\|.*Anti-Pattern.*\|.*Problem.*\|.*Fix.*\|",
        "Anti-patterns table format",
        6,
        ignore_case=False,
    ),
    SectionSpec(r"HARD GATE", "HARD GATE markers", 4),
    SectionSpec(r"- \[ \]", "Success criteria checkboxes", 4),
    SectionSpec(r"references/\w+\.md", "References to references/", 4, ignore_case=False),
    SectionSpec(r"(score\s*=|scoring formula)", "Scoring formula", 4),
]

THIN_ROUTER_SECTIONS = [
    SectionSpec(r"\|[^\n]*Read\(references/", "Routing table to references", 10),
    SectionSpec(r"references/[\w./-]+\.md", "Reference file mentions", 5),
    SectionSpec(
        r"^\s*\|\s*(User Question|Intent|When|Situation|Decision|Goal)\s*\|",
        "Decision table",
        5,
    ),
]

THIN_ROUTER_PRACTICES = [
    SectionSpec(r"Read\(references/[^)]+\)", "Reference routing pattern", 15),
    SectionSpec(r"(#+ Related Skills|See also|Related:)", "Related skills / cross-links", 10),
    SectionSpec(r"degeneraliz", "Degeneralization notes", 5),
    SectionSpec(ANTI_PATTERNS_PATTERN, "Anti-Patterns section", 5),
    SectionSpec(r"(#+ Success Criteria|^\s*- \[ \])", "Success criteria", 5),
]

SKILL_COMPOSITION = CompositionThresholds(
    excellent=250, excellent_note="Excellent: ≤250 lines",
    good=400, good_note="Good: ≤400 lines",
    ok=550, ok_note="OK: ≤550 lines (500±10%)",
    over_limit=660, over_limit_note="Over limit: >550 lines",
    fat_note="Fat skill: >660 lines",
)

# Counts fence markers, not blocks: one block contributes two
CODE_FENCE_BANDS = [
    GradeBand(6, 5, "Rich examples"),
    GradeBand(3, 3, "Adequate examples"),
    GradeBand(1, 1, "Few examples"),
]


def anti_patterns_fallback(body: str, section_name: str) -> bool:
    """A "## Best Practices" section with a "### Don't" subsection counts as Anti-Patterns."""
    if section_name != "Anti-Patterns section":
        return False
    return "## Best Practices" in body and "### don't" in body.lower()


class _SkillRules(ScorerComponent):
    """Composition and documentation rules common to both skill paths."""

    def score_structural(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        field_points, field_details = score_required_fields(doc.frontmatter, SKILL_FIELDS)
        section_points, section_details = self.score_body_structure(doc)
        return field_points + section_points, field_details + section_details

    @abstractmethod
    def score_body_structure(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        ...

    def score_composition(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        points, metric = score_composition(doc.lines, SKILL_COMPOSITION)
        return points, [metric]

    def score_documentation(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        desc_points, desc_metric = score_description(
            doc.frontmatter, DESCRIPTION_BANDS_LONG, pass_at=100
        )

        fence_count = doc.body.count("```")
        code_points, code_note = grade(fence_count, CODE_FENCE_BANDS, "No examples")
        code_metric = Metric(
            category=MetricCategory.DOCUMENTATION,
            name="Code examples",
            points=code_points,
            max_points=5,
            passed=fence_count >= 3,
            note=code_note,
        )
        return desc_points + code_points, [desc_metric, code_metric]


class StandardSkillRules(_SkillRules):
    """Rules for methodology and reference/pattern-library skills."""

    def score_body_structure(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        specs = METHODOLOGY_SECTIONS if is_methodology_skill(doc.body) else REFERENCE_SECTIONS
        return score_sections_with_fallback(doc.body, specs, anti_patterns_fallback)

    def score_practices(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        return score_sections(doc.body, STANDARD_PRACTICES, category=MetricCategory.PRACTICES)


class ThinRouterSkillRules(_SkillRules):
    """Rules for skills that route to references/ files."""

    def score_body_structure(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        return score_sections(doc.body, THIN_ROUTER_SECTIONS)

    def score_practices(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        return score_sections(doc.body, THIN_ROUTER_PRACTICES, category=MetricCategory.PRACTICES)


STANDARD_RULES = StandardSkillRules()
THIN_ROUTER_RULES = ThinRouterSkillRules()


@lru_cache(maxsize=128)
def select_rules(body: str, lines: int) -> _SkillRules:
    """Classify a skill once per (body, line count) and return its rule set."""
    if is_thin_router(body, lines):
        return THIN_ROUTER_RULES
    return STANDARD_RULES


class SkillScorer(ScorerComponent):
    """Scores skill files on a 0-100 scale."""

    def rules_for(self, body: str, lines: int) -> _SkillRules:
        return select_rules(body, lines)

    def score(
        self,
        content: str,
        frontmatter: dict[str, Any] | None,
        body: str,
    ) -> QualityScore:
        rules = self.rules_for(body or "", count_lines(content or ""))
        return compute_combined_score(content, frontmatter, body, rules)

    def score_structural(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        return self.rules_for(doc.body, doc.lines).score_structural(doc)

    def score_practices(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        return self.rules_for(doc.body, doc.lines).score_practices(doc)

    def score_composition(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        return STANDARD_RULES.score_composition(doc)

    def score_documentation(self, doc: ScoringInput) -> tuple[int, list[Metric]]:
        return STANDARD_RULES.score_documentation(doc)
