"""
Scrape the next collection dates for one address.

Can be run on its own to check the site still works:
    python services/scraper/main.py --address "1 Test St Hitchin SG4 0AB"
"""

import argparse
import datetime
import json
import logging
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path

from playwright.sync_api import sync_playwright

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import config  # noqa: E402
from services.common.errors import ConfigurationError  # noqa: E402
from services.common.logging_utils import setup_logging  # noqa: E402
from services.scraper.browser import get_launch_strategy  # noqa: E402
from services.scraper.sites import SiteAdapter, get_site_adapter  # noqa: E402

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


@dataclass
class ScrapeResult:
    success: bool
    address: str
    collection_data: dict[str, str] = field(default_factory=dict)
    url: str | None = None
    error: str | None = None
    error_type: str | None = None
    timestamp: str = field(default_factory=_now_iso)

    @classmethod
    def failed(cls, address: str, error: Exception) -> "ScrapeResult":
        return cls(
            success=False,
            address=address,
            error=str(error),
            error_type=type(error).__name__,
        )

    def to_dict(self) -> dict:
        return asdict(self)


def _log_failure_context(page) -> None:
    """Log where the browser was when scraping failed; screenshot when local."""
    if page is None:
        return
    try:
        logger.info("Error occurred at URL: %s", page.url)
        logger.info("Page title: %s", page.title())
        if config.IS_LOCAL:
            page.screenshot(path=config.SCRAPER_SCREENSHOT_PATH, full_page=True)
            logger.info("Screenshot saved as %s", config.SCRAPER_SCREENSHOT_PATH)
    except Exception as e:
        logger.warning("Could not take screenshot or get page info: %s", e)


def _release(page, browser, playwright) -> None:
    for name, resource, method in (
        ("page", page, "close"),
        ("browser", browser, "close"),
        ("playwright", playwright, "stop"),
    ):
        if resource is None:
            continue
        try:
            getattr(resource, method)()
        except Exception as e:
            logger.warning("Error closing %s: %s", name, e)


def scrape(address: str, site: SiteAdapter | None = None, launch_strategy=None) -> ScrapeResult:
    """
    Look up collection dates for `address`. Never raises: any failure is returned
    as a ScrapeResult with success=False. Browser resources are always released.
    """
    playwright = None
    browser = None
    page = None
    try:
        site = site or get_site_adapter(config.BINS_SITE)
        launch_strategy = launch_strategy or get_launch_strategy()
        logger.info(
            "Scraping bin collection times for %s (site=%s, browser=%s)",
            address,
            site.name,
            launch_strategy.name,
        )

        playwright = sync_playwright().start()
        browser = launch_strategy.launch(playwright)
        page = browser.new_page()

        collection_data = site.collect(page, address)
        logger.info("Scraping completed successfully at %s", page.url)
        return ScrapeResult(
            success=True,
            address=address,
            collection_data=collection_data,
            url=page.url,
        )
    except Exception as e:
        logger.error("Error during scraping: %s", e, exc_info=True)
        _log_failure_context(page)
        return ScrapeResult.failed(address, e)
    finally:
        _release(page, browser, playwright)


def main():
    """Scrape only (no calendar writes) and print the result as JSON."""
    parser = argparse.ArgumentParser(description="Bin collection scraper")
    parser.add_argument("--address", type=str, default=None, help="Address to look up (default: ADDRESS)")
    parser.add_argument("--site", type=str, default=None, help="Site adapter name (default: BINS_SITE)")
    args = parser.parse_args()

    setup_logging()
    address = args.address or config.ADDRESS
    try:
        site = get_site_adapter(args.site or config.BINS_SITE)
    except ConfigurationError as e:
        result = ScrapeResult.failed(address, e)
    else:
        result = scrape(address, site=site)
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
