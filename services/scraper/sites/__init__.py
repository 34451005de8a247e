"""
Council site adapters, selected by name (config.BINS_SITE).
"""

from services.common.errors import ConfigurationError
from services.scraper.sites.base import SiteAdapter
from services.scraper.sites.north_herts import NorthHertsAdapter
from services.scraper.sites.whitespace import WhitespaceAdapter

SITE_ADAPTERS = {
    NorthHertsAdapter.name: NorthHertsAdapter,
    WhitespaceAdapter.name: WhitespaceAdapter,
}


def get_site_adapter(name: str) -> SiteAdapter:
    try:
        return SITE_ADAPTERS[name]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown site {name!r}; expected one of: {', '.join(sorted(SITE_ADAPTERS))}"
        ) from None


__all__ = ["SiteAdapter", "NorthHertsAdapter", "WhitespaceAdapter", "SITE_ADAPTERS", "get_site_adapter"]
