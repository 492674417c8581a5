#!/usr/bin/env python3
"""Main entry point for neon-player."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import logging.config
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from neon_player.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from neon_player.config.settings import Settings

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"


def setup_logging(log_level: str = "INFO") -> None:
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    try:
        with open(_LOGGING_CONFIG_PATH) as f:
            config = json.load(f)
        logging.config.dictConfig(config)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        logging.warning(
            "Could not load %s, falling back to basic config", _LOGGING_CONFIG_PATH
        )
        logging.basicConfig(
            level=resolved_level,
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    logging.getLogger().setLevel(resolved_level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="neon-player",
        description="Cyberpunk playlist player with simulated live channels and chat.",
    )
    parser.add_argument(
        "--playlist",
        metavar="URL_OR_PATH",
        help="Playlist to load at startup (http(s) URL or local JSON file).",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Override LOG_LEVEL from the environment.",
    )
    return parser


async def _run(settings: Settings, playlist_url: str | None) -> None:
    from neon_player.config.container import create_container
    from neon_player.infrastructure.console.app import ConsoleApp

    container = create_container(settings)
    await container.initialize()
    try:
        await ConsoleApp(container).run(playlist_url)
    finally:
        await container.shutdown()


def main(argv: list[str] | None = None) -> int:
    from neon_player.config.settings import get_settings

    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)

    logger = logging.getLogger(__name__)
    logger.info(LogTemplates.APP_STARTING, settings.environment)

    try:
        asyncio.run(_run(settings, args.playlist))
        logger.info(LogTemplates.APP_STOPPED)
        return 0
    except KeyboardInterrupt:
        logger.info(LogTemplates.APP_KEYBOARD_INTERRUPT)
        return 0
    except Exception as e:
        logger.exception(LogTemplates.APP_FATAL_ERROR, e)
        return 1


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
