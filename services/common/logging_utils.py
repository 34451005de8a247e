"""
Shared logging setup for the scraper, calendar sync and entry points.
"""

import logging

import config

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    """
    Configure root logging once using config.LOG_LEVEL (or an explicit level).
    Safe to call multiple times; an already configured root logger is left alone.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    level_name = str(level or config.LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)

    # Playwright and the Google client libraries are chatty at DEBUG
    for noisy in ("googleapiclient.discovery_cache", "urllib3", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
