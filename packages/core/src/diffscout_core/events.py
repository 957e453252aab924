"""Pull request change events.

A ChangeEvent is the normalized view of a GitHub ``pull_request`` webhook
delivery. Only the fields the review pipeline reads are kept.
"""

from __future__ import annotations

from dataclasses import dataclass

from diffscout_core.exceptions import InvalidEventError

REVIEWABLE_ACTIONS = ("opened", "synchronize", "reopened")


@dataclass(frozen=True)
class ChangeEvent:
    action: str
    owner: str
    repo: str
    pr_number: int
    state: str
    locked: bool
    base_sha: str
    head_sha: str
    html_url: str = ""
    # Commit ids of the PR in push order. Webhook payloads do not carry them,
    # so this is usually empty and the diff resolver uses the compare result.
    commits: tuple[str, ...] = ()

    @property
    def full_repo_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_payload(cls, payload: dict, action: str | None = None) -> ChangeEvent:
        """Build an event from a ``pull_request`` webhook payload.

        ``action`` overrides the payload's own ``action`` field.
        """
        try:
            pr = payload["pull_request"]
            repository = payload["repository"]
            return cls(
                action=action or payload["action"],
                owner=repository["owner"]["login"],
                repo=repository["name"],
                pr_number=int(payload.get("number") or pr["number"]),
                state=pr["state"],
                locked=bool(pr.get("locked", False)),
                base_sha=pr["base"]["sha"],
                head_sha=pr["head"]["sha"],
                html_url=pr.get("html_url") or "",
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidEventError(f"Not a pull_request payload: missing or malformed {e}") from e
