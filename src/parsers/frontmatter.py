from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog
import yaml

from models.input import ParsedDocument
from models.shared import ComponentType
from utils.error_handler import (
    DocumentNotFoundError,
    FrontmatterParseError,
    ManifestParseError,
    UnknownComponentTypeError,
)

logger = structlog.get_logger(__name__)


_DIRECTORY_TYPES = {
    "agents": ComponentType.AGENT,
    "commands": ComponentType.COMMAND,
    "output-styles": ComponentType.OUTPUT_STYLE,
}


def split_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split a markdown document into its YAML frontmatter map and body.

    Documents without a pair of ``---`` markers have no frontmatter; the
    whole content is the body.
    """
    parts = content.split("---", 2)
    if len(parts) < 3:
        return {}, content

    try:
        data = yaml.safe_load(parts[1])
    except yaml.YAMLError as exc:
        raise FrontmatterParseError(str(exc)) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterParseError(f"expected a mapping, got {type(data).__name__}")
    return {str(key): value for key, value in data.items()}, parts[2]


def parse_manifest(content: str) -> dict[str, Any]:
    """Decode a plugin manifest; the whole file is the metadata block."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ManifestParseError(str(exc)) from exc
    if not isinstance(data, dict):
        raise ManifestParseError(f"expected an object, got {type(data).__name__}")
    return data


def detect_component_type(path: Path) -> ComponentType | None:
    """Infer the component type from the file name or its parent directories."""
    if path.name.lower() == "skill.md":
        return ComponentType.SKILL
    if path.name == "plugin.json":
        return ComponentType.PLUGIN
    for parent in path.parents:
        if parent.name in _DIRECTORY_TYPES:
            return _DIRECTORY_TYPES[parent.name]
    return None


def load_document(
    path: str | Path,
    component_type: ComponentType | str | None = None,
) -> ParsedDocument:
    """Read ``path`` and split it into the inputs the scorers expect."""
    file_path = Path(path)
    if not file_path.is_file():
        raise DocumentNotFoundError(str(file_path))

    if component_type is None:
        resolved = detect_component_type(file_path)
        if resolved is None:
            raise UnknownComponentTypeError(path=str(file_path))
    else:
        try:
            resolved = ComponentType(component_type)
        except ValueError:
            raise UnknownComponentTypeError(component_type=str(component_type)) from None

    content = file_path.read_text(encoding="utf-8")
    if resolved == ComponentType.PLUGIN:
        frontmatter, body = parse_manifest(content), ""
    else:
        frontmatter, body = split_frontmatter(content)

    logger.debug(
        "document_loaded",
        path=str(file_path),
        component_type=resolved.value,
        fields=len(frontmatter),
    )
    return ParsedDocument(
        path=file_path,
        component_type=resolved,
        content=content,
        frontmatter=frontmatter,
        body=body,
    )
