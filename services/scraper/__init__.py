"""
Scraper for council bin collection lookups

Structure:
- browser.py - Chromium launch strategies (local / hosted)
- sites/     - One adapter per council website
- main.py    - scrape() and the scraper-only CLI
"""

from services.scraper.main import ScrapeResult, scrape

__all__ = ["ScrapeResult", "scrape"]
