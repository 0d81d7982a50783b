# src/ptvd/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the local snapshot, refreshes it
from the remote table once, then runs the console connector.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.flows import start
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)
    asyncio.run(start(state))

    if settings.console_enabled:
        run_console_loop(state)
    else:
        logger.info("Console disabled; startup sync done (%d records).", len(state.records))

    logger.info("Bye.")


if __name__ == "__main__":
    main()
