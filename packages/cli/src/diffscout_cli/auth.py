"""GitHub token resolution.

Resolution order (stops at first success):
  1. GITHUB_TOKEN (injected automatically in GitHub Actions)
  2. GH_TOKEN (the variable the GitHub CLI itself honours)
  3. `gh auth token` (local session after `gh auth login`)
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

_TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")


def resolve_github_token() -> str | None:
    """Return a GitHub token or None if no source has one. Never raises."""
    for name in _TOKEN_ENV_VARS:
        token = os.environ.get(name)
        if token:
            return token

    try:
        result = subprocess.run(["gh", "auth", "token"], capture_output=True, text=True, timeout=5)
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None

    token = result.stdout.strip() if result.returncode == 0 else ""
    if not token:
        return None
    logger.debug("Using GitHub token from the gh CLI session")
    return token
