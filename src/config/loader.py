"""Configuration loader for the docgrade CLI.

Provides centralized access to CLI defaults. Scoring rule tables are fixed
in the scoring package and are not read from here.
"""
from __future__ import annotations

import os
import yaml
from pathlib import Path
from typing import Any, Optional
import structlog

logger = structlog.get_logger(__name__)

CONFIG_FILE = Path(__file__).parent / "docgrade_config.yaml"
CONFIG_ENV_VAR = "DOCGRADE_CONFIG"


def _config_path() -> Path:
    override = os.getenv(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_FILE


def _read_config(path: Path) -> dict[str, Any]:
    if not path.exists():
        logger.warning("config_file_not_found", path=str(path))
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        data = {}
    logger.info("config_loaded", path=str(path), sections=list(data))
    return data


class ConfigLoader:
    """Process-wide view of the docgrade YAML config."""

    _instance: Optional[ConfigLoader] = None
    _config: Optional[dict[str, Any]] = None

    def __new__(cls) -> ConfigLoader:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if self._config is None:
            self.reload()

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dot-separated key such as ``cli.fail_under``.

        Missing keys, null values and paths that run through a scalar all
        return ``default``.
        """
        node: Any = self._config or {}
        for part in key.split("."):
            if not isinstance(node, dict) or node.get(part) is None:
                return default
            node = node[part]
        return node

    def reload(self) -> None:
        """Re-read the file, honouring the current DOCGRADE_CONFIG."""
        self._config = _read_config(_config_path())


def get_config() -> ConfigLoader:
    """Get the global config instance."""
    return ConfigLoader()


def get_output_format() -> str:
    """Get default CLI output format (text or json)."""
    return get_config().get("cli.format", "text")


def get_fail_under() -> int:
    """Get the overall score below which the CLI exits non-zero (0 disables)."""
    return int(get_config().get("cli.fail_under", 0))


def get_log_level() -> str:
    return get_config().get("cli.log_level", "WARNING")
