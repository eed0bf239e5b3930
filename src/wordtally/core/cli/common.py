"""Shared setup logic for CLI commands."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from wordtally.core.config import Config
from wordtally.core.exceptions import WordTallyError

WORDTALLY_DIR = Path.home() / ".wordtally"
CONFIG_PATH = WORDTALLY_DIR / "config.yaml"


def load_config(ctx: click.Context) -> Config:
    """Build the Config from global CLI options and set up logging."""
    from wordtally.core.utils.logging import setup_logging_from_config

    options = ctx.find_root().obj or {}
    config_file = options.get("config_file")
    if config_file is None and CONFIG_PATH.exists():
        config_file = str(CONFIG_PATH)

    try:
        config = Config(config_file=config_file, data_dir=options.get("data_dir"))
    except WordTallyError as e:
        raise click.ClickException(str(e)) from e
    setup_logging_from_config(config, level=options.get("log_level"))
    return config


def run_service(config: Config, body, save: bool = True) -> object:
    """Start a TrackerService without timers and run ``body(service)``.

    With ``save`` the service is stopped afterwards, which persists state.

    Returns whatever ``body`` returns. WordTallyError becomes a CLI error.
    """
    from wordtally.tracker.service import TrackerService

    async def _run():
        service = TrackerService(config)
        await service.start(schedule=False)
        try:
            return body(service)
        finally:
            if save:
                await service.stop()

    try:
        return asyncio.run(_run())
    except WordTallyError as e:
        raise click.ClickException(str(e)) from e
