"""Skip CI workflows that already passed for the same commit.

When a pipeline is restarted, only the workflows that failed last time need
to run again.  The previous run publishes ``pipeline_info.json``; this module
fetches it and decides whether the current workflow can be skipped.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

import requests

from acceptance_helpers.constants import HTTP_REQUEST_TIMEOUT

logger = logging.getLogger("acceptance-helpers.pipeline")

INFO_URL_TEMPLATE = (
    "https://s3.ci.opencloud.eu/public/{repo}/pipelines/{sha}-{event}/pipeline_info.json"
)

Decision = Literal["continue", "skip"]


class PipelineInfoError(RuntimeError):
    """The previous pipeline info could not be fetched."""

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(
            f"Failed to fetch previous pipeline info:\n  URL: {url}\n  Status: {status_code}"
        )
        self.url = url
        self.status_code = status_code


def info_url(repo: str, sha: str, event: str) -> str:
    return INFO_URL_TEMPLATE.format(repo=repo, sha=sha, event=event)


def fetch_pipeline_info(
    repo: str,
    sha: str,
    event: str,
    *,
    timeout: float = HTTP_REQUEST_TIMEOUT,
) -> dict[str, Any] | None:
    """Return the previous pipeline info, or ``None`` if there is none (404)."""
    url = info_url(repo, sha, event)
    resp = requests.get(url, timeout=timeout)
    if resp.status_code == 404:
        return None
    if not resp.ok:
        raise PipelineInfoError(url, resp.status_code)
    return resp.json()


def workflow_names(workflows: list[dict[str, Any]]) -> list[str]:
    return [w["name"] for w in workflows]


def failed_workflows(workflows: list[dict[str, Any]]) -> list[str]:
    return [w["name"] for w in workflows if w.get("state") != "success"]


def evaluate(info: dict[str, Any] | None, workflow_name: str) -> Decision:
    """Decide whether *workflow_name* must run again.

    Only a workflow that ran in the previous pipeline and did not fail there
    is skipped; everything else continues.
    """
    if info is None:
        logger.info("No matching previous pipeline found. Continue...")
        return "continue"
    if info.get("status") == "success":
        logger.info("All workflows passed in previous pipeline. Full restart. Continue...")
        return "continue"

    workflows = info.get("workflows") or []
    if workflow_name not in workflow_names(workflows):
        return "continue"
    if workflow_name not in failed_workflows(workflows):
        logger.info("Workflow passed in previous pipeline. Skip...")
        return "skip"
    logger.info("Restarting previously failed workflow. Continue...")
    return "continue"
