"""review command: review the pull request behind a webhook event."""

from __future__ import annotations

import json

import click
from github import GithubException
from rich.console import Console
from rich.markup import escape

from diffscout_core.config import ReviewConfig
from diffscout_core.events import REVIEWABLE_ACTIONS, ChangeEvent
from diffscout_core.exceptions import InvalidEventError
from diffscout_core.reviewer import STATUS_SUCCESS, run_review

console = Console()


def _load_payload(event_path: str) -> dict:
    try:
        with open(event_path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise click.UsageError(f"Could not read event payload {event_path}: {e}")


@click.command("review")
@click.option(
    "--event-path",
    envvar="GITHUB_EVENT_PATH",
    required=True,
    type=click.Path(dir_okay=False),
    help="Path to the webhook event JSON payload.",
)
@click.option(
    "--event-name",
    envvar="GITHUB_EVENT_NAME",
    default="pull_request",
    show_default=True,
    help="Webhook event name. Only pull_request events are reviewed.",
)
@click.option("--action", default=None, help="Override the payload's action (opened, synchronize, reopened).")
@click.option("--include", multiple=True, help="Only review paths matching this pattern. Repeatable.")
@click.option("--exclude", multiple=True, help="Skip paths matching this pattern. Repeatable.")
@click.pass_context
def review_cmd(
    ctx,
    event_path: str,
    event_name: str,
    action: str | None,
    include: tuple[str, ...],
    exclude: tuple[str, ...],
):
    """Review the pull request described by a webhook payload.

    Computes the diff (only the newest push on `synchronize`), reviews each
    admissible file with OpenAI and posts one COMMENT review.

    \b
    Environment variables:
      GITHUB_TOKEN         GitHub token (or GH_TOKEN, or use gh CLI)
      OPENAI_API_KEY       Review is disabled when unset
      INCLUDE_PATTERNS     Comma-separated patterns of paths to review
      IGNORE_PATTERNS      Comma-separated patterns of paths to skip
    """
    from diffscout_cli.auth import resolve_github_token

    config = dict(ctx.obj["config"])
    if include:
        config["include"] = list(include)
    if exclude:
        config["exclude"] = list(exclude)

    if event_name != "pull_request":
        console.print(f"[yellow]Ignoring '{escape(event_name)}' event.[/yellow]")
        return

    try:
        event = ChangeEvent.from_payload(_load_payload(event_path), action=action)
    except InvalidEventError as e:
        raise click.UsageError(str(e))

    if event.action not in REVIEWABLE_ACTIONS:
        console.print(f"[yellow]Ignoring pull_request.{escape(event.action)}.[/yellow]")
        return

    review_config = ReviewConfig.from_mapping(config)
    token = None
    if review_config.openai_api_key:
        token = resolve_github_token()
        if not token:
            raise click.UsageError("No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.")

    try:
        summary = run_review(event, review_config, github_token=token)
    except GithubException as e:
        raise click.ClickException(f"Could not fetch the diff for PR #{event.pr_number}: {e}")

    console.print(f"PR #{summary.pr_number}: {summary.status}")
    if summary.status == STATUS_SUCCESS and not summary.submitted:
        console.print("[red]The review could not be posted; see the log for details.[/red]")
