"""
Browser launch strategies.

Locally we use the Chromium that `playwright install` downloads. On the hosted
(Lambda) runtime a trimmed Chromium build lives at a fixed path and needs
sandbox-less flags. The scraper only ever calls `strategy.launch(playwright)`.
"""

import logging

import config

logger = logging.getLogger(__name__)


class LocalLaunchStrategy:
    name = "local"

    def __init__(self, headless: bool = True):
        self.headless = headless

    def launch(self, playwright):
        logger.debug("Launching local Chromium (headless=%s)", self.headless)
        return playwright.chromium.launch(headless=self.headless)


class HostedLaunchStrategy:
    name = "hosted"

    def __init__(self, executable_path: str, args: list[str] | None = None):
        self.executable_path = executable_path
        self.args = list(args or [])

    def launch(self, playwright):
        logger.debug("Launching hosted Chromium from %s", self.executable_path)
        return playwright.chromium.launch(
            headless=True,
            executable_path=self.executable_path,
            args=self.args,
        )


def get_launch_strategy():
    """Pick the launch strategy for this process from IS_LOCAL."""
    if config.IS_LOCAL:
        return LocalLaunchStrategy()
    return HostedLaunchStrategy(config.CHROMIUM_EXECUTABLE_PATH, config.HOSTED_CHROMIUM_ARGS)
