"""CLI entry point for diffscout.

Commands:
  review   review the pull request described by a webhook event payload
"""

from __future__ import annotations

import importlib.metadata

import click

from diffscout_cli.commands.review import review_cmd

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.version_option(
    version=importlib.metadata.version("diffscout"),
    prog_name="diffscout",
)
@click.option(
    "--config",
    "config_path",
    default=".diffscout.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="DIFFSCOUT_CONFIG",
)
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging verbosity. Overrides LOG_LEVEL and the config file.",
)
@click.pass_context
def main(ctx: click.Context, config_path: str, log_level: str | None):
    """AI code review for GitHub pull requests."""
    from diffscout_cli.log import setup_logging
    from diffscout_core.config import load_config

    ctx.ensure_object(dict)

    config = load_config(config_path)
    level = str(log_level or config.get("log_level") or "INFO").upper()
    if level not in _LOG_LEVELS:
        raise click.UsageError(f"Unknown log level {level!r}. Choose one of: {', '.join(_LOG_LEVELS)}.")
    setup_logging(level)

    ctx.obj["config"] = config


main.add_command(review_cmd)
