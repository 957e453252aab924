"""Core PR review orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape

from diffscout_core.config import ReviewConfig
from diffscout_core.diff import is_open_for_review, resolve_diff
from diffscout_core.events import ChangeEvent
from diffscout_core.gate import filter_admissible
from diffscout_core.gh.pull_request import GitHubHost
from diffscout_core.models import ChangedFile, ReviewComment, ReviewSubmission
from diffscout_core.providers.openai import OpenAIReviewer

console = Console()
logger = logging.getLogger(__name__)

STATUS_NO_CHAT_BOT = "no chat bot"
STATUS_INVALID_PR = "invalid pull request payload"
STATUS_NO_FILES = "no file changes"
STATUS_SUCCESS = "success"

BODY_WITH_COMMENTS = "Review By Bot"
BODY_NO_COMMENTS = "No review, looks good to merge"


@dataclass
class ReviewSummary:
    """What happened to one change event.

    ``status`` is one of the STATUS_* strings. ``submitted`` is False when the
    pipeline stopped early or when posting the review failed.
    """

    status: str
    pr_number: int
    commit_id: str | None = None
    reviewed_files: list[str] = field(default_factory=list)
    skipped_files: list[str] = field(default_factory=list)
    failed_files: list[str] = field(default_factory=list)
    comments: list[ReviewComment] = field(default_factory=list)
    submitted: bool = False


def _get_reviewer(config: ReviewConfig):
    if not config.openai_api_key:
        return None
    return OpenAIReviewer(api_key=config.openai_api_key, model=config.model)


def comment_position(patch: str) -> int:
    """Index of the patch's last line; the comment anchors to the end of the hunk."""
    return patch.count("\n")


def collect_comments(reviewer, files: list[ChangedFile]) -> tuple[list[ReviewComment], list[str], list[str]]:
    """Review each file in order and gather inline comments.

    Returns (comments, reviewed filenames, failed filenames). A failure on
    one file is logged and that file skipped; the rest are still reviewed.
    """
    comments: list[ReviewComment] = []
    reviewed: list[str] = []
    failed: list[str] = []
    total = len(files)

    for i, file in enumerate(files, 1):
        console.print(f"[[{i}/{total}]] Reviewing: {escape(file.filename)}")
        patch = file.patch or ""
        try:
            verdict = reviewer.review(patch)
        except Exception as e:
            logger.error("Review of %s failed: %s", file.filename, e)
            failed.append(file.filename)
            continue

        reviewed.append(file.filename)
        if not verdict.approved and verdict.comment:
            comments.append(ReviewComment(path=file.filename, body=verdict.comment, position=comment_position(patch)))
            logger.debug("Comment queued for %s", file.filename)

    return comments, reviewed, failed


def build_submission(pull_number: int, commit_id: str, comments: list[ReviewComment]) -> ReviewSubmission:
    # Always COMMENT: the bot advises, it never approves or blocks a merge.
    return ReviewSubmission(
        pull_number=pull_number,
        commit_id=commit_id,
        body=BODY_WITH_COMMENTS if comments else BODY_NO_COMMENTS,
        comments=list(comments),
        event="COMMENT",
    )


def publish_review(host, submission: ReviewSubmission) -> bool:
    """Post the review once. Failures are logged, never retried or raised."""
    try:
        host.create_review(submission)
    except Exception as e:
        logger.error("Failed to create a review for PR #%d: %s", submission.pull_number, e)
        return False
    return True


def run_review(
    event: ChangeEvent,
    config: ReviewConfig,
    host=None,
    reviewer=None,
    github_token: str | None = None,
) -> ReviewSummary:
    """Run the review pipeline for one change event.

    ``host`` and ``reviewer`` may be injected; otherwise they are built from
    ``github_token`` and the configured OpenAI key. Errors fetching the diff
    propagate to the caller.
    """
    reviewer = reviewer if reviewer is not None else _get_reviewer(config)
    if reviewer is None:
        logger.error("No OpenAI API key configured; review is disabled")
        return ReviewSummary(status=STATUS_NO_CHAT_BOT, pr_number=event.pr_number)

    if not is_open_for_review(event):
        console.print("[yellow]Pull request is closed or locked. Nothing to do.[/yellow]")
        return ReviewSummary(status=STATUS_INVALID_PR, pr_number=event.pr_number)

    if host is None:
        host = GitHubHost.connect(event.full_repo_name, token=github_token)

    diff = resolve_diff(event, host)
    if diff is None:
        return ReviewSummary(status=STATUS_INVALID_PR, pr_number=event.pr_number)

    admissible = filter_admissible(diff.files, config)
    skipped = [f.filename for f in diff.files if f not in admissible]
    for name in skipped:
        logger.debug("Skipping: %s", name)

    if not admissible:
        console.print("[yellow]No files to review.[/yellow]")
        return ReviewSummary(
            status=STATUS_NO_FILES,
            pr_number=event.pr_number,
            commit_id=diff.latest_commit,
            skipped_files=skipped,
        )

    comments, reviewed, failed = collect_comments(reviewer, admissible)
    submission = build_submission(event.pr_number, diff.latest_commit, comments)
    submitted = publish_review(host, submission)
    if submitted:
        target = event.html_url or event.full_repo_name
        console.print(f"[green]Review posted on {escape(target)}: {len(comments)} comment(s).[/green]")

    return ReviewSummary(
        status=STATUS_SUCCESS,
        pr_number=event.pr_number,
        commit_id=diff.latest_commit,
        reviewed_files=reviewed,
        skipped_files=skipped,
        failed_files=failed,
        comments=comments,
        submitted=submitted,
    )
