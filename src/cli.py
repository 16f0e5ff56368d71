from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Optional

import structlog
from dotenv import load_dotenv

from config.loader import get_fail_under, get_log_level, get_output_format
from models.input import ParsedDocument
from models.quality import QualityScore
from models.shared import ComponentType
from parsers.frontmatter import load_document
from scoring.registry import get_scorer
from utils.error_handler import DocgradeError, exit_with_error


logger = logging.getLogger(__name__)


def build_score_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docgrade score",
        description="Grade agent, command, skill, plugin and output-style files on a 0-100 scale",
    )

    parser.add_argument(
        "paths",
        nargs="+",
        help="Files to grade",
    )
    parser.add_argument(
        "--type",
        dest="component_type",
        choices=[t.value for t in ComponentType],
        default=None,
        help="Component type; inferred from the path when omitted",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["text", "json"],
        default=os.getenv("DOCGRADE_FORMAT", get_output_format()),
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--fail-under",
        dest="fail_under",
        type=int,
        default=int(os.getenv("DOCGRADE_FAIL_UNDER", get_fail_under())),
        help="Exit with status 1 when any overall score is below this value (0 disables)",
    )
    parser.add_argument(
        "--dotenv",
        dest="dotenv_path",
        default=".env",
        help="Path to .env file to load (default: .env)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=os.getenv("DOCGRADE_LOG_LEVEL", get_log_level()),
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    return parser


def configure_logging(log_level: str) -> None:
    level = getattr(logging, str(log_level).upper(), logging.WARNING)
    logging.basicConfig(level=level)
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(level)

    # Route library structlog events through stdlib logging so stdout carries only results.
    structlog.configure(
        processors=[structlog.processors.KeyValueRenderer(key_order=["event"])],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def _category_max(score: QualityScore, category: str) -> int:
    return sum(d.max_points for d in score.details if d.category.value == category)


def format_text(doc: ParsedDocument, score: QualityScore) -> str:
    lines = [
        f"{doc.path}: {score.overall}/100 ({score.tier.value}) [{doc.component_type.value}]",
        "  "
        + "  ".join(
            f"{category} {getattr(score, category)}/{_category_max(score, category)}"
            for category in ("structural", "practices", "composition", "documentation")
        ),
    ]
    for metric in score.failed_checks():
        note = f" - {metric.note}" if metric.note else ""
        lines.append(f"  x {metric.name} ({metric.points}/{metric.max_points}){note}")
    return "\n".join(lines)


def format_json(results: list[tuple[ParsedDocument, QualityScore]]) -> str:
    payload: list[dict[str, Any]] = [
        {
            "path": str(doc.path),
            "type": doc.component_type.value,
            "score": score.model_dump(mode="json"),
        }
        for doc, score in results
    ]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def run_score(
    paths: list[str],
    component_type: Optional[str] = None,
    output_format: str = "text",
    fail_under: int = 0,
) -> int:
    logger.info("[plan] grade %s file(s) format=%s fail_under=%s", len(paths), output_format, fail_under)

    exit_code = 0
    results: list[tuple[ParsedDocument, QualityScore]] = []
    for path in paths:
        try:
            doc = load_document(path, component_type)
        except DocgradeError as exc:
            exit_code = exit_with_error(exc, context=path)
            continue

        score = get_scorer(doc.component_type).score(doc.content, doc.frontmatter, doc.body)
        logger.info("[score] path=%s overall=%s tier=%s", path, score.overall, score.tier.value)
        results.append((doc, score))

        if fail_under and score.overall < fail_under:
            logger.info("[fail_under] path=%s overall=%s < %s", path, score.overall, fail_under)
            exit_code = 1

    if output_format == "json":
        print(format_json(results))
    else:
        for doc, score in results:
            print(format_text(doc, score))

    return exit_code


def main(argv: Optional[list[str]] = None) -> int:
    argv_list = list(argv) if argv is not None else sys.argv[1:]

    if argv_list and argv_list[0] == "score":
        # .env and a provisional log level must be in place before the config loader runs
        pre = argparse.ArgumentParser(add_help=False)
        pre.add_argument("--dotenv", dest="dotenv_path", default=".env")
        pre.add_argument("--log-level", dest="log_level", default=None)
        known, _ = pre.parse_known_args(argv_list[1:])
        load_dotenv(known.dotenv_path)
        configure_logging(known.log_level or os.getenv("DOCGRADE_LOG_LEVEL", "WARNING"))

        parser = build_score_parser()
        args = parser.parse_args(argv_list[1:])
        # final level: --log-level, then DOCGRADE_LOG_LEVEL, then cli.log_level
        configure_logging(args.log_level)

        return run_score(
            paths=args.paths,
            component_type=args.component_type,
            output_format=args.output_format,
            fail_under=int(args.fail_under),
        )

    print("usage: docgrade score PATH [PATH ...] [options]", file=sys.stderr)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
