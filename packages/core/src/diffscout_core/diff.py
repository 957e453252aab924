"""Choose which diff a change event should be reviewed against."""

from __future__ import annotations

import logging

from diffscout_core.events import ChangeEvent
from diffscout_core.models import DiffResult

logger = logging.getLogger(__name__)


def is_open_for_review(event: ChangeEvent) -> bool:
    return event.state != "closed" and not event.locked


def resolve_diff(event: ChangeEvent, host) -> DiffResult | None:
    """Return the files to evaluate for ``event``, or None for a dead PR.

    The whole PR range (base...head) is compared first. On ``synchronize``
    with at least two known commits the range is narrowed to the last pair,
    so only the newest push is reviewed. Compare errors are not caught.
    """
    if not is_open_for_review(event):
        logger.debug("PR #%d is closed or locked; nothing to review", event.pr_number)
        return None

    files, compare_commits = host.compare(event.base_sha, event.head_sha)
    commit_ids = list(event.commits) or compare_commits
    result = DiffResult(files=files, base=event.base_sha, head=event.head_sha, commit_ids=commit_ids)

    # Pushes of three or more commits only get their last commit reviewed;
    # the intermediate ones are skipped.
    if event.action == "synchronize" and len(commit_ids) >= 2:
        base, head = commit_ids[-2], commit_ids[-1]
        narrowed, _ = host.compare(base, head)
        logger.info("Incremental review of %s...%s (%d file(s))", base[:7], head[:7], len(narrowed))
        result.files = narrowed
        result.base, result.head = base, head

    return result
