"""
WhitespaceWS council portals ("Find my bin" flow).

The portal asks for a property name/number and postcode, lists matching
addresses, and the chosen address page shows `#scheduled-collections` as pairs
of <p> lines: the date (DD/MM/YYYY) then the service name.
"""

import datetime
import logging
import re

import config
from services.common.dates import format_collection_date
from services.common.errors import ConfigurationError
from services.scraper.sites.base import SiteAdapter

logger = logging.getLogger(__name__)

POSTCODE_RE = re.compile(r"([A-Z]{1,2}\d[A-Z\d]?\s*\d[A-Z]{2})\s*$", re.IGNORECASE)
SHORT_DATE_RE = re.compile(r"(\d{1,2})[/-](\d{1,2})[/-](\d{4})")

# Service label on the site -> waste type we report
SERVICES = {
    "Refuse Collection": "Refuse",
    "Recycling Collection": "Recycling",
}

FIND_MY_BIN_SELECTOR = 'a.govuk-link:has-text("Find my bin")'
PROPERTY_INPUT_SELECTOR = 'input[name="address_name_number"]'
POSTCODE_INPUT_SELECTOR = 'input[name="address_postcode"]'
SUBMIT_SELECTOR = 'button[type="submit"], input[type="submit"]'
ADDRESS_LINK_SELECTOR = "a.govuk-link.clicker"
SCHEDULE_LINE_SELECTOR = "#scheduled-collections li p"


def split_address(address: str) -> tuple[str, str]:
    """'12 High Street Hitchin SG4 0AB' -> ('12', 'SG4 0AB')"""
    match = POSTCODE_RE.search(address.strip())
    if not match:
        raise ConfigurationError(f"Address has no UK postcode: {address!r}")
    postcode = match.group(1).upper()
    rest = address[: match.start()].replace(",", " ").split()
    if not rest:
        raise ConfigurationError(f"Address has no property name or number: {address!r}")
    return rest[0], postcode


def parse_schedule_lines(lines: list[str]) -> dict[str, str]:
    """Pair up (date, service) lines and keep the first date per known service."""
    results: dict[str, str] = {}
    for date_line, service_line in zip(lines[0::2], lines[1::2]):
        waste_type = next(
            (name for label, name in SERVICES.items() if label in service_line), None
        )
        if waste_type is None or waste_type in results:
            continue

        match = SHORT_DATE_RE.search(date_line)
        if not match:
            logger.warning("Unrecognised date %r for %s", date_line, waste_type)
            continue
        day, month, year = (int(part) for part in match.groups())
        try:
            results[waste_type] = format_collection_date(datetime.date(year, month, day))
        except ValueError:
            logger.warning("Invalid date %r for %s", date_line, waste_type)
    return results


class WhitespaceAdapter(SiteAdapter):
    name = "whitespace"
    url = "https://uhtn-wrp.whitespacews.com/"

    def collect(self, page, address: str) -> dict[str, str]:
        property_id, postcode = split_address(address)
        self.open(page)

        page.click(FIND_MY_BIN_SELECTOR, timeout=config.SCRAPER_ELEMENT_TIMEOUT_MS)
        page.wait_for_load_state("domcontentloaded")

        def submit_search():
            page.fill(PROPERTY_INPUT_SELECTOR, property_id, timeout=config.SCRAPER_ELEMENT_TIMEOUT_MS)
            page.fill(POSTCODE_INPUT_SELECTOR, postcode, timeout=config.SCRAPER_ELEMENT_TIMEOUT_MS)
            page.click(SUBMIT_SELECTOR)
            page.wait_for_load_state("domcontentloaded")

        logger.info("Searching for property %s, %s", property_id, postcode)
        submit_search()

        def retry():
            page.go_back()
            page.wait_for_timeout(1000)
            submit_search()

        first_address = self.wait_for_results(page, ADDRESS_LINK_SELECTOR, retry)
        first_address.click()
        page.wait_for_load_state("domcontentloaded")

        lines = page.eval_on_selector_all(
            SCHEDULE_LINE_SELECTOR, "els => els.map(el => el.textContent.trim())"
        )
        collection_data = parse_schedule_lines(lines)
        logger.info("Extracted %s collection(s): %s", len(collection_data), collection_data)
        return collection_data
