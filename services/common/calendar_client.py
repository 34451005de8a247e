"""
Thin Google Calendar v3 helpers for the events collection of a single calendar.
"""

import logging

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from services.common.errors import CalendarApiError
from services.common.throttle import throttle

logger = logging.getLogger(__name__)


def _throttle_calendar() -> None:
    throttle("calendar")


def get_google_calendar_service(access_token: str):
    """
    Calendar service authorised with a bearer token obtained for this run.
    """
    creds = Credentials(token=access_token)
    return build("calendar", "v3", credentials=creds, cache_discovery=False)


def list_events(service, calendar_id: str, time_min: str, time_max: str, query: str) -> list[dict]:
    """
    All single events in [time_min, time_max] matching the free-text query.
    """
    items: list[dict] = []
    page_token = None
    try:
        while True:
            _throttle_calendar()
            response = (
                service.events()
                .list(
                    calendarId=calendar_id,
                    timeMin=time_min,
                    timeMax=time_max,
                    q=query,
                    singleEvents=True,
                    orderBy="startTime",
                    pageToken=page_token,
                )
                .execute()
            )
            items.extend(response.get("items", []))
            page_token = response.get("nextPageToken")
            if not page_token:
                return items
    except HttpError as error:
        raise CalendarApiError("list", error) from error


def insert_event(service, calendar_id: str, body: dict) -> dict:
    try:
        _throttle_calendar()
        return service.events().insert(calendarId=calendar_id, body=body).execute()
    except HttpError as error:
        raise CalendarApiError("insert", error) from error


def delete_event(service, calendar_id: str, event_id: str) -> None:
    try:
        _throttle_calendar()
        service.events().delete(calendarId=calendar_id, eventId=event_id).execute()
    except HttpError as error:
        raise CalendarApiError("delete", error) from error
