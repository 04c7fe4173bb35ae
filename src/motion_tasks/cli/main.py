# src/motion_tasks/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console connector in one asyncio loop.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(state: AppState) -> None:
    try:
        await run_console_loop(state)
    finally:
        close = getattr(state.client, "aclose", None)
        if close is not None:
            try:
                await close()
            except Exception:
                logger.debug("HTTP client close failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (log file: %s)...", settings.app_name, log_file)

    try:
        state = create_initial_state(settings=settings)
    except RuntimeError as e:
        logger.error("%s", e)
        sys.exit(2)

    try:
        asyncio.run(_run(state))
    except KeyboardInterrupt:
        pass
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
