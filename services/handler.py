"""
Entry point: scrape the council site, then mirror reminders into Google Calendar.

`handler(event, context)` takes a Lambda-style invocation payload and returns
{"statusCode": int, "body": json string}. The Flask app and the CLI both call it.
"""

import datetime
import json
import logging

import config
from services import calendar_sync
from services.common.logging_utils import setup_logging
from services.scraper import scrape

setup_logging()
logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def _response(status_code: int, body: dict) -> dict:
    return {"statusCode": status_code, "body": json.dumps(body)}


def _error_response(message: str, status_code: int = 500) -> dict:
    return _response(status_code, {"error": message, "timestamp": _timestamp()})


def _request_code(event: dict | None) -> str:
    params = (event or {}).get("queryStringParameters") or {}
    return params.get("code") or ""


def is_authorised(event: dict | None) -> bool:
    """An empty BINS_ACCESS_CODE disables the check."""
    expected = config.BINS_ACCESS_CODE
    if not expected:
        return True
    return _request_code(event) == expected


def run_update(address: str, dry_run: bool = False) -> dict:
    """
    Scrape `address` and sync the calendar into a response dict.
    Calendar errors don't fail the run; they're reported in the body.
    """
    result = scrape(address)
    if not result.success:
        return _error_response(result.error or "Scraping failed")

    body = {
        "address": address,
        "collectionTimes": result.collection_data,
        "timestamp": _timestamp(),
        "calendarEvents": 0,
    }

    credentials = config.get_service_account_credentials()
    if credentials is None:
        logger.info("Google Calendar credentials not provided, skipping calendar integration")
        return _response(200, body)

    try:
        logger.info("Creating Google Calendar events...")
        body["calendarEvents"] = calendar_sync.sync(
            result.collection_data, address, dry_run=dry_run, credentials=credentials
        )
        logger.info("Created %s calendar events", body["calendarEvents"])
    except Exception as e:
        logger.error("Calendar integration failed: %s", e, exc_info=True)
        body["calendarError"] = str(e)

    return _response(200, body)


def handler(event: dict | None = None, context=None) -> dict:
    """Lambda-style entry point. Never raises."""
    try:
        if not is_authorised(event):
            logger.warning("Rejected request with invalid access code")
            return _response(401, {"msg": "Not authorised"})

        address = config.ADDRESS
        logger.info("Checking bin times for: %s", address)
        return run_update(address, dry_run=config.DRY_RUN)
    except Exception as e:
        logger.error("Error in handler: %s", e, exc_info=True)
        return _error_response(str(e))
