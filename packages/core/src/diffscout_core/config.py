from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from diffscout_core.patterns import parse_patterns

DEFAULT_CONFIG: dict = {
    "model": "gpt-4o-mini",
    "max_patch_chars": 1500,
    "include": [],  # when non-empty, only matching paths are reviewed and "exclude" is ignored
    "exclude": [],
    "log_level": "INFO",
}


def load_config(config_path: str = ".diffscout.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .diffscout.yml in the current directory
      3. CLI argument overrides
      4. Environment variables (patterns, credentials, log level)
    """
    config = {
        **DEFAULT_CONFIG,
        "include": list(DEFAULT_CONFIG["include"]),
        "exclude": list(DEFAULT_CONFIG["exclude"]),
    }

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Pattern lists from the environment are free-form comma-separated text.
    include_env = parse_patterns(os.environ.get("INCLUDE_PATTERNS"))
    if include_env:
        config["include"] = include_env
    ignore_env = parse_patterns(os.environ.get("IGNORE_PATTERNS"))
    if ignore_env:
        config["exclude"] = ignore_env

    if os.environ.get("LOG_LEVEL"):
        config["log_level"] = os.environ["LOG_LEVEL"]

    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    config["openai_api_key"] = os.environ.get("OPENAI_API_KEY")

    return config


@dataclass(frozen=True)
class ReviewConfig:
    """Read-only settings handed to the orchestrator at construction.

    Built once from the merged config dict so the gate and the matcher never
    read the process environment themselves.
    """

    include_patterns: tuple[str, ...] = ()
    ignore_patterns: tuple[str, ...] = ()
    openai_api_key: str | None = None
    model: str = DEFAULT_CONFIG["model"]
    max_patch_chars: int = DEFAULT_CONFIG["max_patch_chars"]

    @classmethod
    def from_mapping(cls, config: dict) -> ReviewConfig:
        return cls(
            include_patterns=tuple(_as_pattern_list(config.get("include"))),
            ignore_patterns=tuple(_as_pattern_list(config.get("exclude"))),
            openai_api_key=config.get("openai_api_key") or None,
            model=config.get("model") or DEFAULT_CONFIG["model"],
            max_patch_chars=int(config.get("max_patch_chars") or DEFAULT_CONFIG["max_patch_chars"]),
        )


def _as_pattern_list(value) -> list[str]:
    # YAML may hold either a list or a single comma-separated string.
    if not value:
        return []
    if isinstance(value, str):
        return parse_patterns(value)
    return [str(v).strip() for v in value if str(v).strip()]
