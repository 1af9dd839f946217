"""evaluate_pipeline.py

Decide whether the current CI workflow can be skipped on a pipeline restart.

Reads the CI environment, fetches ``pipeline_info.json`` of the previous run
for the same commit and, if this workflow already passed there, appends
``SKIP_WORKFLOW=true`` to the env file consumed by later pipeline steps.

Environment
-----------
* ``CI_REPO_NAME``, ``CI_COMMIT_SHA``, ``CI_PIPELINE_EVENT`` – locate the info
* ``CI_WORKFLOW_NAME`` – the workflow being evaluated

Example
-------
    python scripts/evaluate_pipeline.py --env-file .woodpecker.env
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from acceptance_helpers.pipeline import PipelineInfoError, evaluate, fetch_pipeline_info
from acceptance_helpers.utils.logging import setup_logging

DEFAULT_ENV_FILE = Path(".woodpecker.env")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[2])
    parser.add_argument("--repo", default=os.getenv("CI_REPO_NAME", ""))
    parser.add_argument("--sha", default=os.getenv("CI_COMMIT_SHA", ""))
    parser.add_argument("--event", default=os.getenv("CI_PIPELINE_EVENT", ""))
    parser.add_argument("--workflow", default=os.getenv("CI_WORKFLOW_NAME", ""))
    parser.add_argument("--env-file", type=Path, default=DEFAULT_ENV_FILE)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    setup_logging("INFO")

    try:
        info = fetch_pipeline_info(args.repo, args.sha, args.event)
    except PipelineInfoError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    if evaluate(info, args.workflow) == "skip":
        with args.env_file.open("a", encoding="utf-8") as fh:
            fh.write("SKIP_WORKFLOW=true\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
