"""Turn event start/end values into the strings the email templates show."""

from datetime import datetime

import pytz
from babel import Locale, UnknownLocaleError
from babel.dates import format_date

from vilma.errors import FormatError
from vilma.models.Event import EventTime


def local_datetime(event_time: EventTime) -> datetime:
    """Date-time of the event in its own time zone."""
    if event_time.date_time is None:
        raise FormatError("all-day event has no time of day")
    dt = event_time.date_time
    if event_time.time_zone and dt.tzinfo is not None:
        try:
            dt = dt.astimezone(pytz.timezone(event_time.time_zone))
        except pytz.UnknownTimeZoneError:
            raise FormatError(f"unknown time zone '{event_time.time_zone}'") from None
    return dt


def to_hour_minute(event_time: EventTime) -> str:
    return local_datetime(event_time).strftime("%H:%M")


def to_display_date(event_time: EventTime) -> str:
    if event_time.date_time is None:
        if event_time.day is None:
            raise FormatError("event time has neither date nor date-time")
        return event_time.day.isoformat()
    return local_datetime(event_time).date().isoformat()


def to_weekday_name(event_time: EventTime, locale: str) -> str:
    """Long weekday name, e.g. 'szerda' for hu-HU."""
    try:
        babel_locale = Locale.parse(locale, sep="-" if "-" in locale else "_")
    except (UnknownLocaleError, ValueError) as e:
        raise FormatError(f"unknown locale '{locale}': {e}") from e
    if event_time.date_time is None:
        if event_time.day is None:
            raise FormatError("event time has neither date nor date-time")
        day = event_time.day
    else:
        day = local_datetime(event_time).date()
    return format_date(day, "EEEE", locale=babel_locale)


def to_storage_key(event_time: EventTime) -> str:
    """Stem of the attendee log file, the start value as the calendar sends it."""
    if event_time.raw_value:
        return event_time.raw_value
    if event_time.date_time is not None:
        return event_time.date_time.isoformat()
    if event_time.day is not None:
        return event_time.day.isoformat()
    raise FormatError("event time has neither date nor date-time")
