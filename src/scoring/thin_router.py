"""Thin-router classification for skill documents.

A thin router keeps almost no methodology inline and dispatches to files
under references/. It is graded with its own structural and practices
rules, so it has to be recognised before those categories are scored.

Decision:
1. Any full-methodology marker (## Workflow, ### Phase N, ## Algorithm,
   ## Process, ### Step N) rules it out.
2. Otherwise at least 2 of these 4 indicators must hold:
   - body mentions "references/"
   - body mentions "degeneralized" or "Degeneralization"
   - fewer than 150 lines and a Read(references/ call
   - a table row ending in a Read(references/ cell
"""
from __future__ import annotations

import re
from dataclasses import dataclass

import structlog

logger = structlog.get_logger(__name__)


METHODOLOGY_PATTERNS = [
    re.compile(r"## Workflow", re.IGNORECASE),
    re.compile(r"### Phase \d", re.IGNORECASE),
    re.compile(r"## Algorithm", re.IGNORECASE),
    re.compile(r"## Process", re.IGNORECASE),
    re.compile(r"### Step \d", re.IGNORECASE),
]

TABLE_READ_REFERENCE_RE = re.compile(r"\|[^\n]*\|\s*Read\(references/")

SHORT_SKILL_LINES = 150
QUORUM = 2


def is_methodology_skill(body: str) -> bool:
    """True when the skill carries inline workflow/phase methodology."""
    return any(p.search(body) for p in METHODOLOGY_PATTERNS)


@dataclass(frozen=True)
class ThinRouterSignals:
    """Evidence gathered for the thin-router decision."""
    methodology: bool = False
    references_dir: bool = False
    degeneralized: bool = False
    short_with_read_refs: bool = False
    table_read_refs: bool = False

    @property
    def indicator_count(self) -> int:
        return sum((
            self.references_dir,
            self.degeneralized,
            self.short_with_read_refs,
            self.table_read_refs,
        ))

    @property
    def is_thin_router(self) -> bool:
        return not self.methodology and self.indicator_count >= QUORUM


def collect_signals(body: str, lines: int) -> ThinRouterSignals:
    return ThinRouterSignals(
        methodology=is_methodology_skill(body),
        references_dir="references/" in body,
        degeneralized="degeneralized" in body or "Degeneralization" in body,
        short_with_read_refs=lines < SHORT_SKILL_LINES and "Read(references/" in body,
        table_read_refs=TABLE_READ_REFERENCE_RE.search(body) is not None,
    )


def is_thin_router(body: str, lines: int) -> bool:
    """Classify a skill body as a thin router (see module docstring)."""
    signals = collect_signals(body, lines)
    logger.debug(
        "skill_classified",
        thin_router=signals.is_thin_router,
        methodology=signals.methodology,
        indicators=signals.indicator_count,
    )
    return signals.is_thin_router
