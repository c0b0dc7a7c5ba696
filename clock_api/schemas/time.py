"""Pydantic schemas for the Pakistan time endpoint."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SimpleTimeResponse(BaseModel):
    """Compact response returned when ``simple=true``."""

    time: str = Field(..., description="12-hour clock, e.g. '03:04:05 PM'.")
    time_24h: str = Field(..., description="24-hour clock, e.g. '15:04:05'.")
    date: str = Field(..., description="Long date, e.g. 'Monday, October 19, 2026'.")
    timezone: str = Field("PKT", description="Timezone abbreviation.")
    offset: str = Field("UTC+5", description="Offset from UTC.")
    country: str
    city: str


class Region(BaseModel):
    name: str
    type: str


class CountryInfo(BaseModel):
    name: str
    code: str
    current_region: Region
    current_city: str


class TimezoneInfo(BaseModel):
    name: str = Field(..., description="IANA timezone name.")
    abbreviation: str
    offset_hours: int
    description: str
    dst_observed: bool


class CurrentTime(BaseModel):
    date: str
    time_12h: str
    time_24h: str
    timezone: str
    day_of_week: str
    unix_timestamp: int = Field(..., description="Seconds since the UNIX epoch.")


class ResponseMeta(BaseModel):
    generated_at: str = Field(..., description="ISO-8601 UTC generation timestamp.")
    timezone_source: str


class TimezoneResponse(BaseModel):
    """Full response returned for ``format=json``."""

    country_info: CountryInfo
    timezone_info: TimezoneInfo
    current_time: CurrentTime
    meta: ResponseMeta
