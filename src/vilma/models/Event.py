from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ResponseStatus(str, Enum):
    NEEDS_ACTION = "needsAction"
    DECLINED = "declined"
    TENTATIVE = "tentative"
    ACCEPTED = "accepted"


class EventTime(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date_time: Optional[datetime] = Field(default=None, alias="dateTime")
    day: Optional[date] = Field(default=None, alias="date")
    time_zone: Optional[str] = Field(default=None, alias="timeZone")
    # the start value exactly as the calendar sent it
    raw_value: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def keep_raw_value(cls, data):
        if isinstance(data, dict) and data.get("raw_value") is None:
            for key in ("dateTime", "date_time", "date", "day"):
                if isinstance(data.get(key), str):
                    return {**data, "raw_value": data[key]}
        return data

    @property
    def is_all_day(self) -> bool:
        return self.date_time is None


class Attendee(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # rooms and resources added by id come without an address
    email: Optional[str] = None
    response_status: ResponseStatus = Field(
        default=ResponseStatus.NEEDS_ACTION, alias="responseStatus"
    )


class Event(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    summary: str = ""
    start: EventTime
    end: EventTime
    attendees: tuple[Attendee, ...] = ()

    @classmethod
    def from_api(cls, item: dict) -> "Event":
        """Build an event from a Calendar API event resource."""
        item = {**item, "attendees": item.get("attendees") or ()}
        return cls.model_validate(item)

    def accepted_emails(self) -> list[str]:
        return [
            i.email
            for i in self.attendees
            if i.response_status is ResponseStatus.ACCEPTED and i.email
        ]
