"""Review pipeline data models.

Decoupled from PyGithub so the gate, the aggregator and the tests work on
plain values rather than API objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import unquote, urlparse


@dataclass(frozen=True)
class ChangedFile:
    """One file touched by a compare between two commits."""

    filename: str
    status: str  # "added" | "modified" | "removed" | "renamed" | ...
    patch: str | None = None  # None for binary or very large files
    contents_url: str | None = None

    @property
    def match_path(self) -> str:
        """Path that include/ignore patterns are matched against.

        This is the URL path of the contents API link, e.g.
        ``/repos/octo/app/contents/src/a.ts``, so patterns anchored with a
        leading ``/`` work against it. Falls back to the filename.
        """
        if not self.contents_url:
            return self.filename
        return unquote(urlparse(self.contents_url).path)


@dataclass
class DiffResult:
    """The file set chosen for review and the range it came from."""

    files: list[ChangedFile]
    base: str
    head: str
    commit_ids: list[str] = field(default_factory=list)

    @property
    def latest_commit(self) -> str:
        return self.commit_ids[-1] if self.commit_ids else self.head


@dataclass(frozen=True)
class ReviewVerdict:
    approved: bool
    comment: str = ""


@dataclass(frozen=True)
class ReviewComment:
    """An inline comment anchored to the last line of a file's patch."""

    path: str
    body: str
    position: int

    def to_api(self) -> dict:
        return {"path": self.path, "position": self.position, "body": self.body}


@dataclass
class ReviewSubmission:
    pull_number: int
    commit_id: str
    body: str
    comments: list[ReviewComment] = field(default_factory=list)
    event: str = "COMMENT"
