"""
North Hertfordshire District Council "find your bin collection day" lookup.

The page has a type-ahead address search: typing the address fires an AJAX
search that fills a results list. Picking the first result and submitting the
form shows one `.listing_template_row` per waste stream.
"""

import logging

import config
from services.scraper.sites.base import SiteAdapter

logger = logging.getLogger(__name__)

FORM_SELECTOR = "form.system_form"
ADDRESS_INPUT_SELECTOR = "form.system_form input.relation_path_type_ahead_search"
RESULTS_SELECTOR = "div.relation_path_type_ahead_results_holder li"
SUBMIT_SELECTOR = 'input[type="submit"]'
LISTING_ROW_SELECTOR = ".listing_template_row"
NEXT_COLLECTION_MARKER = "Next collection"


def parse_listing_rows(row_texts: list[str]) -> dict[str, str]:
    """
    Turn listing row texts into {waste type: date string}.

    The first non-empty line of a row names the waste type; the line starting with
    "Next collection" carries the date. Only the first row per waste type counts.
    """
    results: dict[str, str] = {}
    for text in row_texts:
        lines = [line.strip() for line in (text or "").split("\n") if line.strip()]
        if not lines:
            continue

        waste_type = lines[0]
        collection_line = next(
            (line for line in lines if line.startswith(NEXT_COLLECTION_MARKER)), None
        )
        if collection_line is None:
            continue

        if waste_type not in results:
            results[waste_type] = collection_line.replace(NEXT_COLLECTION_MARKER, "", 1).strip()
    return results


class NorthHertsAdapter(SiteAdapter):
    name = "north_herts"
    url = "https://waste.nc.north-herts.gov.uk/w/webpage/find-bin-collection-day-input-address"

    def collect(self, page, address: str) -> dict[str, str]:
        self.open(page)

        page.wait_for_timeout(3000)
        logger.info("Page loaded: %s", page.title())

        page.wait_for_selector(FORM_SELECTOR, timeout=config.SCRAPER_ELEMENT_TIMEOUT_MS)
        address_input = page.wait_for_selector(
            ADDRESS_INPUT_SELECTOR, timeout=config.SCRAPER_ELEMENT_TIMEOUT_MS
        )

        logger.info("Typing address: %s", address)
        address_input.click()
        address_input.fill("")
        address_input.fill(address)
        page.wait_for_timeout(2000)

        typed_value = address_input.input_value()
        if typed_value != address:
            logger.warning("Typed value %r doesn't match expected address %r", typed_value, address)

        def retype():
            address_input.click()
            address_input.fill("")
            page.wait_for_timeout(1000)
            address_input.fill(address)
            page.wait_for_timeout(3000)

        first_result = self.wait_for_results(page, RESULTS_SELECTOR, retype)

        logger.info("Selecting first search result")
        first_result.click()
        page.wait_for_timeout(1000)

        submit_button = page.wait_for_selector(SUBMIT_SELECTOR, timeout=5000)
        submit_button.click()

        page.wait_for_load_state("domcontentloaded")
        page.wait_for_timeout(3000)

        row_texts = page.eval_on_selector_all(
            LISTING_ROW_SELECTOR, "rows => rows.map(row => row.textContent.trim())"
        )
        collection_data = parse_listing_rows(row_texts)
        logger.info("Extracted %s collection(s): %s", len(collection_data), collection_data)
        return collection_data
