from __future__ import annotations

import logging

from github import Github

from diffscout_core.models import ChangedFile, ReviewSubmission

logger = logging.getLogger(__name__)


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def to_changed_file(file) -> ChangedFile:
    """Copy the fields the review pipeline needs off a PyGithub File."""
    return ChangedFile(
        filename=file.filename,
        status=file.status,
        patch=file.patch,
        contents_url=file.contents_url,
    )


class GitHubHost:
    """Diff source and review sink for one repository.

    Wraps a PyGithub Repository. The orchestrator only calls ``compare`` and
    ``create_review``, so tests can substitute any object with those two.
    """

    def __init__(self, repo):
        self.repo = repo

    @classmethod
    def connect(cls, repo_name: str, token: str) -> GitHubHost:
        return cls(get_repo(repo_name, token))

    def compare(self, base: str, head: str) -> tuple[list[ChangedFile], list[str]]:
        """Return (changed files, commit ids) between two commits.

        GithubException propagates: without the file set there is nothing
        meaningful to review.
        """
        comparison = self.repo.compare(base, head)
        files = [to_changed_file(f) for f in comparison.files or []]
        commits = [c.sha for c in comparison.commits or []]
        logger.debug("compare %s...%s: %d file(s), %d commit(s)", base[:7], head[:7], len(files), len(commits))
        return files, commits

    def create_review(self, submission: ReviewSubmission) -> None:
        pr = get_pull(self.repo, submission.pull_number)
        pr.create_review(
            commit=self.repo.get_commit(submission.commit_id),
            body=submission.body,
            event=submission.event,
            comments=[c.to_api() for c in submission.comments],
        )
