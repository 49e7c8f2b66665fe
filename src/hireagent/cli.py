"""Command-line scoring of a single application.

Run examples:
  hireagent score data/application.json --application-id 1042
  hireagent score data/application.json --format text
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from hireagent.config import bootstrap_langsmith, configure_logging, get_settings
from hireagent.core.application import ApplicationRecord
from hireagent.orchestration.scoring_pipeline import ScoringPipeline
from hireagent.services.report_service import render_analysis_text


log = logging.getLogger("hireagent.cli")

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_UNAVAILABLE = 2


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="hireagent", description="Multi-agent candidate scoring")
    sub = p.add_subparsers(dest="command", required=True)

    score = sub.add_parser("score", help="Score one application JSON file")
    score.add_argument("path", type=Path, help="Application JSON as submitted by the intake form")
    score.add_argument("--application-id", default=None, help="Correlation id (defaults to the file stem)")
    score.add_argument("--format", choices=["json", "text"], default="json")
    score.add_argument("--log-level", default=None)
    return p


def load_application(path: Path) -> ApplicationRecord:
    data = json.loads(path.read_text(encoding="utf-8"))
    return ApplicationRecord.model_validate(data)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = _build_parser().parse_args(argv)

    settings = get_settings()
    configure_logging(args.log_level)
    bootstrap_langsmith(settings)

    try:
        record = load_application(args.path)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        log.error("Could not load application %s: %s", args.path, e)
        return EXIT_USAGE

    application_id = args.application_id or args.path.stem
    result = ScoringPipeline.from_settings(settings).score_sync(record, application_id)

    if args.format == "text":
        sys.stdout.write(render_analysis_text(result))
    else:
        sys.stdout.write(result.model_dump_json(indent=2) + "\n")
    return EXIT_OK if result.success else EXIT_UNAVAILABLE


if __name__ == "__main__":
    raise SystemExit(main())
