from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from cli import build_score_parser, configure_logging, main
from config.loader import CONFIG_ENV_VAR, get_config


AGENT = """---
name: reviewer
description: Reviews code. Use PROACTIVELY after edits.
model: sonnet
tools: Read
---
## Foundation
Skill: review-checklist
"""


@pytest.fixture
def agent_file(tmp_path: Path) -> Path:
    path = tmp_path / "agents" / "reviewer.md"
    path.parent.mkdir()
    path.write_text(AGENT, encoding="utf-8")
    return path


def test_score_parser_builds() -> None:
    args = build_score_parser().parse_args(["a.md", "b.md", "--type", "skill", "--format", "json"])

    assert args.paths == ["a.md", "b.md"]
    assert args.component_type == "skill"
    assert args.output_format == "json"
    assert isinstance(args.fail_under, int)
    assert isinstance(args.log_level, str)


def test_score_json_output(agent_file: Path, tmp_path: Path, capsys) -> None:
    code = main(["score", str(agent_file), "--format", "json", "--dotenv", str(tmp_path / ".env")])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert len(payload) == 1
    assert payload[0]["type"] == "agent"
    score = payload[0]["score"]
    assert score["overall"] == (
        score["structural"] + score["practices"] + score["composition"] + score["documentation"]
    )
    assert score["tier"] in {"A", "B", "C", "D", "F"}


def test_score_text_output(agent_file: Path, tmp_path: Path, capsys) -> None:
    code = main(["score", str(agent_file), "--dotenv", str(tmp_path / ".env")])

    assert code == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith(f"{agent_file}: ")
    assert lines[0].endswith("[agent]")
    assert "structural" in lines[1]
    assert any(line.startswith("  x Success Criteria (0/3)") for line in lines)


def test_fail_under(agent_file: Path, tmp_path: Path, capsys) -> None:
    code = main(["score", str(agent_file), "--fail-under", "101", "--dotenv", str(tmp_path / ".env")])
    assert code == 1


def test_missing_file_reports_error(tmp_path: Path, capsys) -> None:
    code = main(["score", str(tmp_path / "missing.md"), "--dotenv", str(tmp_path / ".env")])

    assert code == 1
    captured = capsys.readouterr()
    assert "Document not found" in captured.err
    assert captured.out == ""


def test_explicit_type(tmp_path: Path, capsys) -> None:
    path = tmp_path / "ship.md"
    path.write_text("---\nallowed-tools: Read\n---\nTask(x)\n", encoding="utf-8")

    code = main(["score", str(path), "--type", "command", "--format", "json", "--dotenv", str(tmp_path / ".env")])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["type"] == "command"
    assert payload[0]["score"]["structural"] == 20


def test_unknown_subcommand(capsys) -> None:
    assert main(["grade"]) == 2
    assert "usage" in capsys.readouterr().err


@pytest.fixture
def restore_logging(monkeypatch):
    root = logging.getLogger()
    previous = root.level
    yield monkeypatch
    configure_logging("WARNING")
    root.setLevel(previous)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    get_config().reload()


@pytest.mark.parametrize(
    "env_level,flag,expected",
    [
        (None, [], logging.DEBUG),
        ("ERROR", [], logging.ERROR),
        ("ERROR", ["--log-level", "INFO"], logging.INFO),
    ],
)
def test_log_level_precedence(
    agent_file: Path, tmp_path: Path, restore_logging, env_level, flag, expected
) -> None:
    config_path = tmp_path / "docgrade.yaml"
    config_path.write_text("cli:\n  log_level: DEBUG\n", encoding="utf-8")
    restore_logging.setenv(CONFIG_ENV_VAR, str(config_path))
    if env_level is None:
        restore_logging.delenv("DOCGRADE_LOG_LEVEL", raising=False)
    else:
        restore_logging.setenv("DOCGRADE_LOG_LEVEL", env_level)
    get_config().reload()

    code = main(["score", str(agent_file), "--dotenv", str(tmp_path / ".env"), *flag])

    assert code == 0
    assert logging.getLogger().level == expected
