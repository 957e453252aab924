"""Decide which changed files are admissible for review."""

from __future__ import annotations

from typing import Iterable

from diffscout_core.config import ReviewConfig
from diffscout_core.models import ChangedFile
from diffscout_core.patterns import is_path_selected

MAX_PATCH_CHARS = 1500
REVIEWABLE_STATUSES = ("modified", "added")


def is_admissible(
    file: ChangedFile,
    include_patterns: Iterable[str] = (),
    ignore_patterns: Iterable[str] = (),
    max_patch_chars: int = MAX_PATCH_CHARS,
) -> bool:
    """Return True if ``file`` should be sent to the reviewer.

    Removed and renamed files carry no new code to review. Oversized patches
    are skipped rather than truncated.
    """
    if not is_path_selected(file.match_path, include_patterns, ignore_patterns):
        return False
    if file.status not in REVIEWABLE_STATUSES:
        return False
    if not file.patch:
        return False
    return len(file.patch) <= max_patch_chars


def filter_admissible(files: Iterable[ChangedFile], config: ReviewConfig) -> list[ChangedFile]:
    return [
        f
        for f in files
        if is_admissible(f, config.include_patterns, config.ignore_patterns, config.max_patch_chars)
    ]
