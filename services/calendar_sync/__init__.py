"""
Google Calendar sync for bin collection reminders.

Each run replaces our reminder events: everything in [now, now + 2 months] that
matches the ownership marker and the address is deleted, then one reminder per
collection is inserted for the evening before. Re-running with the same data
ends in the same calendar state (same events, new ids).

The ownership marker ("bin collection") is plain text in the event summary and
description. Events are found again through Google's free-text search, so
changing that text orphans events created by older runs.
"""

import datetime
import logging
import time
from dataclasses import asdict, dataclass

import config
from services.calendar_sync.auth import get_access_token
from services.common.calendar_client import (
    delete_event,
    get_google_calendar_service,
    insert_event,
    list_events,
)
from services.common.dates import add_months, reminder_window, require_collection_date
from services.common.errors import CalendarApiError, ConfigurationError, ParseError

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    events_created: int = 0
    events_deleted: int = 0
    skipped: int = 0
    failed: int = 0
    dry_run: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def build_search_query(address: str) -> str:
    return f"{config.EVENT_OWNERSHIP_MARKER} {address}"


def build_reminder_event(
    waste_type: str, collection_date_string: str, collection_date: datetime.date, address: str
) -> dict:
    """Calendar event body for the reminder the evening before a collection."""
    start, end = reminder_window(collection_date)
    return {
        "summary": f"🗑️ Bin Collection Reminder - {waste_type}",
        "description": (
            f"Reminder to put out {waste_type} bin for collection tomorrow.\n\n"
            f"Address: {address}\n"
            f"Collection Date: {collection_date_string}\n\n"
            f"Created by bin times ({config.EVENT_OWNERSHIP_MARKER})"
        ),
        "start": {
            "dateTime": start.isoformat(),
            "timeZone": config.GOOGLE_CALENDAR_TIMEZONE,
        },
        "end": {
            "dateTime": end.isoformat(),
            "timeZone": config.GOOGLE_CALENDAR_TIMEZONE,
        },
        "reminders": {
            "useDefault": False,
            "overrides": [dict(reminder) for reminder in config.GOOGLE_CALENDAR_REMINDERS],
        },
        "colorId": config.GOOGLE_CALENDAR_COLOR_ID,
    }


def remove_existing_events(
    service,
    calendar_id: str,
    address: str,
    now: datetime.datetime | None = None,
    dry_run: bool = False,
) -> int:
    """
    Best-effort delete of our reminder events for `address` in the sync window.
    Listing and deletion errors are logged and never raised.
    """
    now = now or datetime.datetime.now(datetime.timezone.utc)
    window_end = add_months(now, config.GOOGLE_CALENDAR_SYNC_WINDOW_MONTHS)

    try:
        existing = list_events(
            service,
            calendar_id,
            time_min=now.isoformat(),
            time_max=window_end.isoformat(),
            query=build_search_query(address),
        )
    except CalendarApiError as e:
        logger.warning("Could not list existing bin collection events: %s", e)
        return 0

    logger.info("Found %s existing bin collection event(s) to remove", len(existing))
    deleted = 0
    for event in existing:
        if dry_run:
            logger.info("[dry run] Would delete event %s (%s)", event.get("id"), event.get("summary"))
            deleted += 1
            continue
        try:
            delete_event(service, calendar_id, event["id"])
            deleted += 1
        except CalendarApiError as e:
            logger.warning("Could not delete event %s: %s", event.get("id"), e)
    return deleted


def _connect(credentials: dict | None):
    credentials = credentials or config.get_service_account_credentials()
    if not credentials:
        raise ConfigurationError(
            "Google Calendar credentials not configured (CLIENT_EMAIL, PRIVATE_KEY, CALENDAR_ID)"
        )
    logger.info("Setting up Google Calendar authentication...")
    token = get_access_token(credentials, config.GOOGLE_CALENDAR_SCOPES)
    return get_google_calendar_service(token), credentials


def sync_collection_events(
    collection_data: dict[str, str],
    address: str,
    *,
    calendar_id: str | None = None,
    service=None,
    credentials: dict | None = None,
    dry_run: bool = False,
    now: datetime.datetime | None = None,
) -> SyncResult:
    """
    Replace the reminder events for `address` with one per entry in `collection_data`.

    Args:
        collection_data: {waste type: date string as shown on the council site}
        address: household address; part of the search query and event description
        calendar_id: target calendar (defaults to CALENDAR_ID)
        service: pre-built calendar service; when omitted a token is obtained from
            the service account credentials
        credentials: service account details (defaults to the environment)
        dry_run: log deletes/inserts instead of performing them
        now: start of the cleanup window (defaults to the current time)

    Raises:
        ConfigurationError: no credentials or calendar id
        AuthError: token exchange failed
    """
    start_time = time.time()
    result = SyncResult(dry_run=dry_run)

    if service is None:
        service, credentials = _connect(credentials)
    if calendar_id is None:
        credentials = credentials or config.get_service_account_credentials() or {}
        calendar_id = credentials.get("calendar_id")
    if not calendar_id:
        raise ConfigurationError("CALENDAR_ID is not configured")

    logger.info("Removing existing bin collection events...")
    result.events_deleted = remove_existing_events(
        service, calendar_id, address, now=now, dry_run=dry_run
    )

    for waste_type, collection_date_string in collection_data.items():
        try:
            collection_date = require_collection_date(collection_date_string)
        except ParseError as e:
            logger.warning("Skipping %s: %s", waste_type, e)
            result.skipped += 1
            continue

        event = build_reminder_event(waste_type, collection_date_string, collection_date, address)
        if dry_run:
            logger.info("[dry run] Would create reminder for %s at %s", waste_type, event["start"]["dateTime"])
            result.events_created += 1
            continue

        try:
            insert_event(service, calendar_id, event)
        except Exception as e:
            logger.error("Failed to create event for %s: %s", waste_type, e)
            result.failed += 1
            continue

        logger.info("Created reminder for %s at %s", waste_type, event["start"]["dateTime"])
        result.events_created += 1

    logger.debug("Calendar sync took %.2fs: %s", time.time() - start_time, result)
    return result


def sync(collection_data: dict[str, str], address: str, dry_run: bool = False, **kwargs) -> int:
    """Sync reminders and return how many events were created."""
    return sync_collection_events(collection_data, address, dry_run=dry_run, **kwargs).events_created
