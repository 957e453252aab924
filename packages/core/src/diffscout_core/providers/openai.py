from __future__ import annotations

import openai
from openai import OpenAI

from diffscout_core.exceptions import ProviderError
from diffscout_core.providers.base import BaseReviewer


class OpenAIReviewer(BaseReviewer):
    MODEL = "gpt-4o-mini"
    # Low randomness so the JSON verdict stays well-formed between runs.
    TEMPERATURE = 0.5
    TOP_P = 0.3

    def __init__(self, api_key: str, model: str | None = None):
        if not api_key:
            raise ValueError("An OpenAI API key is required.")
        self.client = OpenAI(api_key=api_key)
        self.model = model or self.MODEL

    def _call_api(self, prompt: str) -> str | None:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.TEMPERATURE,
                top_p=self.TOP_P,
                max_completion_tokens=self.MAX_TOKENS,
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as e:
            raise ProviderError(f"OpenAI completion failed: {e}") from e

        if not response.choices:
            return None
        return response.choices[0].message.content or ""
