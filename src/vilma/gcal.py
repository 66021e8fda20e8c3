from datetime import datetime, time, timedelta

import pytz
from googleapiclient.discovery import build
from pydantic import ValidationError

from vilma.config import Settings
from vilma.errors import API_ERRORS, DeleteError, FetchError
from vilma.models.Event import Event


class GCal:
    def __init__(self, settings: Settings, service=None) -> None:
        self.service = service

        self.calendar_id = settings.calendar_id
        self.tz = settings.timezone
        self.print_events = settings.print_events

    def authenticate_service(self, creds) -> None:
        """Build the calendar service."""
        self.service = build("calendar", "v3", credentials=creds)

    def get_upcoming_events(self, num_events: int = 10, time_from: datetime = None) -> list:
        """Prints the start and name of the next 'num_events' on the user's calendar."""
        if not time_from:
            time_from = datetime.now(pytz.utc)
        print(f"...getting the upcoming {num_events} events")
        try:
            events_result = (
                self.service.events()
                .list(
                    calendarId=self.calendar_id,
                    timeMin=time_from.isoformat(),
                    maxResults=num_events,
                    singleEvents=True,
                    orderBy="startTime",
                )
                .execute()
            )
        except API_ERRORS as error:
            raise FetchError(f"could not list events: {error}") from error
        events = events_result.get("items", [])
        if not events:
            print("No upcoming events found.")
        for event in events:
            start = event["start"].get("dateTime", event["start"].get("date"))
            print(f"     {start} {event.get('summary')}: {event['id']}")
        return events

    def get_event_by_id(self, event_id: str) -> Event:
        if self.print_events:
            print(f"...getting event by id: '{event_id}'")
        try:
            item = (
                self.service.events()
                .get(calendarId=self.calendar_id, eventId=event_id)
                .execute()
            )
        except API_ERRORS as error:
            raise FetchError(f"could not get event '{event_id}': {error}") from error
        if not item:
            raise FetchError(f"event '{event_id}' not found")
        return GCal.to_event(item)

    def get_event_in_window(self, time_min: datetime, time_max: datetime) -> Event:
        """Get the single event between 'time_min' and 'time_max'."""
        if self.print_events:
            print(f"...getting events between {time_min.isoformat()} and {time_max.isoformat()}")
        try:
            events_result = (
                self.service.events()
                .list(
                    calendarId=self.calendar_id,
                    timeMin=time_min.isoformat(),
                    timeMax=time_max.isoformat(),
                    timeZone=self.tz,
                    showDeleted=False,
                    singleEvents=True,
                )
                .execute()
            )
        except API_ERRORS as error:
            raise FetchError(f"could not list events: {error}") from error
        events = events_result.get("items", [])
        if not events:
            raise FetchError("no events found")
        if len(events) > 1:
            raise FetchError(f"{len(events)} events found, expected 1")
        return GCal.to_event(events[0])

    @staticmethod
    def to_event(item: dict) -> Event:
        try:
            return Event.from_api(item)
        except ValidationError as error:
            raise FetchError(f"unexpected event data for '{item.get('id')}': {error}") from error

    def get_event_for_day(self, days_ahead: int, today: datetime = None) -> Event:
        """Get the single event on the local day 'days_ahead' days from today."""
        tz = pytz.timezone(self.tz)
        today = today.astimezone(tz) if today else datetime.now(tz)
        day = today.date() + timedelta(days=days_ahead)
        time_min = tz.localize(datetime.combine(day, time(0, 0, 0)))
        time_max = tz.localize(datetime.combine(day, time(23, 59, 59)))
        return self.get_event_in_window(time_min, time_max)

    def delete_event(self, event_id: str) -> None:
        """Remove the event without notifying its guests."""
        try:
            self.service.events().delete(
                calendarId=self.calendar_id, eventId=event_id, sendUpdates="none"
            ).execute()
        except API_ERRORS as error:
            raise DeleteError(f"could not delete event '{event_id}': {error}") from error
