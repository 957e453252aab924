"""Base reviewer implementing the Template Method pattern.

The review algorithm is the same whatever SDK sits underneath:
    review() → _build_prompt() → _call_api() → _parse()

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the text of the first choice
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod

from diffscout_core.models import ReviewVerdict

logger = logging.getLogger(__name__)

_MAX_TOKENS = 1500

_INSTRUCTIONS = """Review the following code changes
Provide your feedback and suggestions for the following code changes in this format:
{
   "approved": boolean // true if the code looks good to merge and is up to standards, false if there are issues
   "comment": string // Your review comments on the code, detailed, using markdown where useful
}
Make sure that your response is a valid JSON object with exactly these two fields.
"""


class BaseReviewer(ABC):
    MAX_TOKENS: int = _MAX_TOKENS

    def review(self, patch: str) -> ReviewVerdict:
        """Return the verdict for one file's patch.

        An empty patch is approved without calling the provider. A response
        with no choices is also treated as approved: a missing verdict should
        neither block nor flag the PR. Raises ProviderError if the call fails.
        """
        if not patch:
            return ReviewVerdict(approved=True, comment="")
        raw = self._call_api(self._build_prompt(patch))
        if raw is None:
            return ReviewVerdict(approved=True, comment="")
        return self._parse(raw)

    @abstractmethod
    def _call_api(self, prompt: str) -> str | None:
        """Make a single completion call and return the first choice's text.

        Return None when the provider sent back zero choices. Raise
        ProviderError on failure; there is no retry.
        """

    def _build_prompt(self, patch: str) -> str:
        return f"{_INSTRUCTIONS}{patch}"

    def _parse(self, raw: str) -> ReviewVerdict:
        """Parse the model's text into a verdict.

        Text that is not a JSON object is returned as the comment of a
        non-approved verdict so a human still sees the model's feedback.
        """
        try:
            cleaned = re.sub(r"^```(?:json)?\s*", "", raw.strip())
            cleaned = re.sub(r"\s*```$", "", cleaned.strip())
            data = json.loads(cleaned)
        except json.JSONDecodeError:
            logger.warning("%s: response is not valid JSON: %s", self.__class__.__name__, raw[:200])
            return ReviewVerdict(approved=False, comment=raw)

        if not isinstance(data, dict):
            logger.warning("%s: response is not a JSON object: %s", self.__class__.__name__, raw[:200])
            return ReviewVerdict(approved=False, comment=raw)

        comment = data.get("comment") or ""
        if not isinstance(comment, str):
            comment = json.dumps(comment)
        return ReviewVerdict(approved=data.get("approved") is True, comment=comment)
