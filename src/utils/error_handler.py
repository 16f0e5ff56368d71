"""User-facing errors for loading and grading documents from the CLI.

The scoring engine never raises these: it grades whatever parsed input it
receives. They cover the collaborator layer around it (reading files,
splitting frontmatter, picking a scorer).
"""
from __future__ import annotations

import sys

import structlog

logger = structlog.get_logger(__name__)


class DocgradeError(Exception):
    """Base class for errors with a user-friendly message."""

    def __init__(self, error_type: str, message: str, details: str = ""):
        self.error_type = error_type
        self.message = message
        self.details = details
        super().__init__(self.message)

    def get_user_message(self) -> str:
        """Return a user-friendly error message."""
        msg = f"\nError: {self.message}"
        if self.details:
            msg += f"\n   Details: {self.details}"
        return msg


class DocumentNotFoundError(DocgradeError):
    """Input path does not exist or is not a file."""

    def __init__(self, path: str):
        super().__init__(
            error_type="DOCUMENT_NOT_FOUND",
            message=f"Document not found: {path}",
        )


class FrontmatterParseError(DocgradeError):
    """YAML frontmatter could not be parsed into a mapping."""

    def __init__(self, reason: str):
        super().__init__(
            error_type="FRONTMATTER_PARSE",
            message="Frontmatter is not a valid YAML mapping",
            details=reason,
        )


class ManifestParseError(DocgradeError):
    """Plugin manifest is not a JSON object."""

    def __init__(self, reason: str):
        super().__init__(
            error_type="MANIFEST_PARSE",
            message="Plugin manifest is not a valid JSON object",
            details=reason,
        )


class UnknownComponentTypeError(DocgradeError):
    """No scorer exists for the requested or inferred component type."""

    def __init__(self, component_type: str = "", path: str = ""):
        if component_type:
            details = f"Unsupported type: {component_type}"
        else:
            details = f"Could not infer a type from {path}; pass --type"
        super().__init__(
            error_type="UNKNOWN_COMPONENT_TYPE",
            message="Cannot determine how to grade this document",
            details=details,
        )


def exit_with_error(error: DocgradeError, context: str = "") -> int:
    """Log error and report it to the user; returns the process exit code."""
    logger.error(
        "score_failed",
        error_type=error.error_type,
        message=error.message,
        details=error.details,
        context=context,
    )

    print(error.get_user_message(), file=sys.stderr)
    if context:
        print(f"   File: {context}", file=sys.stderr)
    print("", file=sys.stderr)
    return 1
