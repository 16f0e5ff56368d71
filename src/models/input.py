from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from models.shared import ComponentType


class ParsedDocument(BaseModel):
    """A document split into metadata and body, ready for scoring."""
    path: Path
    component_type: ComponentType
    content: str
    frontmatter: dict[str, Any] = Field(default_factory=dict)
    body: str = ""
