from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Callable

# Add src directory to path immediately on import - MUST be before any other imports
_src_dir = Path(__file__).resolve().parents[1] / "src"
_src_str = str(_src_dir)
if _src_str not in sys.path:
    sys.path.insert(0, _src_str)

import pytest
import structlog
import yaml


def pytest_configure(config: pytest.Config) -> None:
    """Ensure src is importable and keep library logs quiet and off stdout."""
    if _src_str not in sys.path:
        sys.path.insert(0, _src_str)
    structlog.configure(
        processors=[structlog.processors.KeyValueRenderer(key_order=["event"])],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def render_document(frontmatter: dict[str, Any], body: str) -> str:
    """Render frontmatter + body the way a markdown component file looks on disk."""
    if not frontmatter:
        return body
    header = yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True)
    return f"---\n{header}---\n{body}"


@pytest.fixture
def make_content() -> Callable[[dict[str, Any], str], str]:
    return render_document
