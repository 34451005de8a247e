"""
Runtime configuration. Every value can be overridden through environment variables.
"""

import os


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


DEBUG = _env_flag("DEBUG")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO")


ADDRESS = os.getenv("ADDRESS", "123 Some Road Hitchin AB1 2CD")

# Shared secret for the update endpoint; an empty value disables the check.
BINS_ACCESS_CODE = os.getenv("BINS_ACCESS_CODE", "")

# Which council site adapter to use (see services.scraper.sites)
BINS_SITE = os.getenv("BINS_SITE", "north_herts")

DRY_RUN = _env_flag("DRY_RUN")


# Browser launch. IS_LOCAL picks plain Playwright Chromium; otherwise the hosted
# (Lambda) build found at CHROMIUM_EXECUTABLE_PATH is used.
IS_LOCAL = _env_flag("IS_LOCAL")
CHROMIUM_EXECUTABLE_PATH = os.getenv("CHROMIUM_EXECUTABLE_PATH", "/opt/chromium/chromium")
HOSTED_CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--no-first-run",
    "--no-zygote",
    "--single-process",
]

SCRAPER_NAVIGATION_TIMEOUT_MS = 30000
SCRAPER_ELEMENT_TIMEOUT_MS = 10000
SCRAPER_RESULTS_TIMEOUT_MS = 15000
SCRAPER_MAX_ATTEMPTS = 3
SCRAPER_SCREENSHOT_PATH = "error-screenshot.png"


GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
GOOGLE_CALENDAR_SCOPES = ["https://www.googleapis.com/auth/calendar"]
GOOGLE_CALENDAR_TIMEZONE = "Europe/London"
GOOGLE_CALENDAR_EVENT_START_HOUR = 20
GOOGLE_CALENDAR_EVENT_START_MINUTE = 30
GOOGLE_CALENDAR_EVENT_DURATION_MINUTES = 60
GOOGLE_CALENDAR_COLOR_ID = "2"
GOOGLE_CALENDAR_REMINDERS = [
    {"method": "popup", "minutes": 5},
    {"method": "email", "minutes": 60},
]
# Events inside [now, now + N months] are replaced on every sync
GOOGLE_CALENDAR_SYNC_WINDOW_MONTHS = 2

# Text embedded in every event we create; also the free-text query used to find them again.
EVENT_OWNERSHIP_MARKER = "bin collection"


API_PORT = int(os.getenv("API_PORT", "3333"))


def get_service_account_credentials() -> dict | None:
    """
    Service account details from the environment, or None when any piece is missing.
    PRIVATE_KEY is usually stored with escaped newlines.
    """
    client_email = os.getenv("CLIENT_EMAIL", "")
    private_key = os.getenv("PRIVATE_KEY", "")
    calendar_id = os.getenv("CALENDAR_ID", "")
    if not (client_email and private_key and calendar_id):
        return None
    return {
        "client_email": client_email,
        "private_key": private_key.replace("\\n", "\n"),
        "calendar_id": calendar_id,
    }
