"""
Common plumbing for council site adapters.
"""

import logging

from playwright.sync_api import Error as PlaywrightError

import config
from services.common.errors import NavigationError, NoResultsError

logger = logging.getLogger(__name__)


class SiteAdapter:
    """
    One council website. Subclasses implement `collect`, which drives an open page
    and returns {waste type: date string}, with date strings in the
    "Thursday 11th September 2025" form.
    """

    name = ""
    url = ""

    def collect(self, page, address: str) -> dict[str, str]:
        raise NotImplementedError

    def open(self, page, url: str | None = None):
        url = url or self.url
        logger.info("Navigating to %s", url)
        response = page.goto(
            url,
            wait_until="domcontentloaded",
            timeout=config.SCRAPER_NAVIGATION_TIMEOUT_MS,
        )
        if response is None or not response.ok:
            status = response.status if response is not None else "No response"
            raise NavigationError(f"Failed to load page: {status}")
        return response

    def wait_for_results(self, page, selector: str, retry, max_attempts: int | None = None):
        """
        Wait for the first element matching `selector` to become visible.

        Each attempt waits up to SCRAPER_RESULTS_TIMEOUT_MS. Between attempts `retry()`
        is called to nudge the site (e.g. re-type the search). Raises NoResultsError
        once all attempts are used.
        """
        max_attempts = max_attempts or config.SCRAPER_MAX_ATTEMPTS
        for attempt in range(1, max_attempts + 1):
            try:
                logger.info("Attempt %s/%s: looking for search results...", attempt, max_attempts)
                page.wait_for_selector(selector, timeout=config.SCRAPER_RESULTS_TIMEOUT_MS)
                first_result = page.locator(selector).first
                first_result.wait_for(state="visible", timeout=5000)
                logger.info("Found search results on attempt %s", attempt)
                return first_result
            except PlaywrightError as e:
                logger.warning("Attempt %s/%s failed: %s", attempt, max_attempts, e)
                if attempt < max_attempts:
                    logger.info("Retrying search...")
                    retry()

        logger.error("All %s attempts exhausted", max_attempts)
        raise NoResultsError(max_attempts)
