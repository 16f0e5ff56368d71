"""Tests for SkillScorer and its two rule sets."""
from __future__ import annotations

import pytest

from models.shared import Tier
from scoring.combiner import compute_combined_score
from scoring.skill_scorer import (
    STANDARD_RULES,
    THIN_ROUTER_RULES,
    SkillScorer,
    anti_patterns_fallback,
    select_rules,
)


LONG_DESCRIPTION = (
    "Test-driven development workflow for Python services. Use when writing new "
    "features or fixing bugs: write a failing test, make it pass with the smallest "
    "change, then refactor. Covers fixtures, parametrization and coverage targets."
)

METHODOLOGY_BODY = """
## Quick Reference

| User Question | Action |
|---------------|--------|
| How do I start? | Write a failing test |

## Workflow

### Phase 1: Red
Write the test first.

```python
def test_add():
    assert add(1, 2) == 3
```

### Phase 2: Green
HARD GATE: the test must fail before any production code is written.

```python
def add(a, b):
    return a + b
```

### Phase 3: Refactor
Keep score = passing tests / total tests at 1.0.

```bash
pytest -q
```

See references/fixtures.md for fixture patterns.

## Anti-Patterns

| Anti-Pattern | Problem | Fix |
|--------------|---------|-----|
| Testing internals | Brittle | Test behaviour |

## Success Criteria
- [ ] Every change starts with a failing test
"""

REFERENCE_BODY = """
## Quick Reference
Common pytest fixtures at a glance.

## Patterns
Use tmp_path for filesystem tests.

## Best Practices

### Don't
Share mutable state between tests.
"""

THIN_ROUTER_BODY = """
## Routing

| When | Action |
|------|--------|
| Planning a test suite | Read(references/planning.md) |
| Writing fixtures | Read(references/fixtures.md) |

Degeneralization: project names removed from references.

See also: python-packaging

## Anti-Patterns
- Inlining reference content here

- [ ] Request routed to exactly one reference
"""


@pytest.fixture
def scorer() -> SkillScorer:
    return SkillScorer()


class TestStandardSkill:
    """Methodology and reference skills."""

    def test_complete_methodology_skill(self, scorer, make_content) -> None:
        frontmatter = {"name": "tdd", "description": LONG_DESCRIPTION}
        content = make_content(frontmatter, METHODOLOGY_BODY)

        score = scorer.score(content, frontmatter, METHODOLOGY_BODY)

        assert score.structural == 40
        assert score.practices == 40
        assert score.composition == 10
        assert score.documentation == 10
        assert score.overall == 100
        assert score.tier == Tier.A
        assert score.metric("Workflow section").passed
        assert score.metric("Reference routing pattern") is None

    def test_reference_skill_uses_pattern_section(self, scorer) -> None:
        frontmatter = {"name": "pytest-fixtures", "description": "Fixture catalogue"}

        score = scorer.score(REFERENCE_BODY, frontmatter, REFERENCE_BODY)

        assert score.metric("Workflow section") is None
        assert score.metric("Quick Reference").points == 10
        assert score.metric("Pattern/Template section").passed
        # Best Practices + Don't stands in for an Anti-Patterns section
        assert score.metric("Anti-Patterns section").passed
        assert score.structural == 40

    def test_no_code_fences(self, scorer) -> None:
        score = scorer.score(REFERENCE_BODY, {}, REFERENCE_BODY)
        metric = score.metric("Code examples")
        assert metric.points == 0
        assert metric.note == "No examples"
        assert not metric.passed

    @pytest.mark.parametrize(
        "fences,points,note",
        [(6, 5, "Rich examples"), (3, 3, "Adequate examples"), (2, 1, "Few examples")],
    )
    def test_fence_markers_counted(self, scorer, fences: int, points: int, note: str) -> None:
        body = "```\n" * fences
        metric = scorer.score(body, {}, body).metric("Code examples")
        assert metric.points == points
        assert metric.note == note

    def test_fat_skill(self, scorer) -> None:
        content = "\n".join("x" for _ in range(661))
        score = scorer.score(content, {}, content)
        assert score.composition == 0
        assert score.metric("Line count").note == "Fat skill: >660 lines"


class TestThinRouterSkill:
    """Skills that dispatch to references/ files."""

    def test_complete_thin_router(self, scorer) -> None:
        frontmatter = {"name": "testing-router", "description": LONG_DESCRIPTION}

        score = scorer.score(THIN_ROUTER_BODY, frontmatter, THIN_ROUTER_BODY)

        assert score.structural == 40
        assert score.practices == 40
        assert score.metric("Routing table to references").passed
        assert score.metric("Decision table").passed
        assert score.metric("Reference routing pattern").points == 15
        assert score.metric("Quick Reference") is None

    def test_rule_selection(self, scorer) -> None:
        assert scorer.rules_for(THIN_ROUTER_BODY, 20) is THIN_ROUTER_RULES
        assert scorer.rules_for(METHODOLOGY_BODY, 60) is STANDARD_RULES
        assert scorer.rules_for(REFERENCE_BODY, 15) is STANDARD_RULES

    def test_same_composition_and_documentation_rules(self, scorer) -> None:
        frontmatter = {"name": "x", "description": LONG_DESCRIPTION}
        thin = scorer.score(THIN_ROUTER_BODY, frontmatter, THIN_ROUTER_BODY)
        standard = STANDARD_RULES.score(THIN_ROUTER_BODY, frontmatter, THIN_ROUTER_BODY)
        assert thin.composition == standard.composition
        assert thin.documentation == standard.documentation


@pytest.mark.parametrize(
    "body,name,expected",
    [
        ("## Best Practices\n### Don't\n", "Anti-Patterns section", True),
        ("## Best Practices\n### DON'T\n", "Anti-Patterns section", True),
        ("## Best Practices\n", "Anti-Patterns section", False),
        ("## Best Practices\n### Don't\n", "Quick Reference", False),
    ],
)
def test_anti_patterns_fallback(body: str, name: str, expected: bool) -> None:
    assert anti_patterns_fallback(body, name) is expected


class TestCaseSensitivePractices:
    """Table and reference-path practices match their exact spelling."""

    @pytest.mark.parametrize(
        "body,metric,expected",
        [
            ("| User Question | Action |", "Semantic routing table", True),
            ("| user question | action |", "Semantic routing table", False),
            ("| Anti-Pattern | Problem | Fix |", "Anti-patterns table format", True),
            ("| anti-pattern | problem | fix |", "Anti-patterns table format", False),
            ("See references/fixtures.md", "References to references/", True),
            ("See REFERENCES/fixtures.md", "References to references/", False),
            ("hard gate: tests first", "HARD GATE markers", True),
        ],
    )
    def test_standard_practice_casing(self, scorer, body: str, metric: str, expected: bool) -> None:
        score = scorer.score(body, {}, body)
        assert score.metric(metric).passed is expected


class TestClassificationOnce:
    """A skill body is classified once however it is scored."""

    def test_combiner_path_classifies_once(self, scorer, monkeypatch) -> None:
        calls: list[int] = []

        def counting_is_thin_router(body: str, lines: int) -> bool:
            calls.append(lines)
            return False

        monkeypatch.setattr("scoring.skill_scorer.is_thin_router", counting_is_thin_router)
        select_rules.cache_clear()
        body = "## Quick Reference\nclassified once\n"

        compute_combined_score(body, {}, body, scorer)
        scorer.score(body, {}, body)

        assert calls == [3]
        select_rules.cache_clear()
