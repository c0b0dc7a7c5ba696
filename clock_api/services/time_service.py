"""Current time in Pakistan Standard Time and the static country tables.

Only one timezone is served. PKT is a fixed UTC+5 offset with no daylight
saving, but the conversion still goes through the IANA database so the
output stays correct if that ever changes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from zoneinfo import ZoneInfo

TIMEZONE_NAME = "Asia/Karachi"
TIMEZONE_ABBREVIATION = "PKT"
OFFSET_HOURS = 5
PKT = ZoneInfo(TIMEZONE_NAME)

COUNTRY_NAME = "Pakistan"
COUNTRY_CODE = "PK"

REGIONS: tuple[dict[str, str], ...] = (
    {"name": "Islamabad", "type": "Capital Territory"},
    {"name": "Punjab", "type": "Province"},
    {"name": "Sindh", "type": "Province"},
    {"name": "Khyber Pakhtunkhwa", "type": "Province"},
    {"name": "Balochistan", "type": "Province"},
    {"name": "Gilgit-Baltistan", "type": "Administrative Territory"},
    {"name": "Azad Kashmir", "type": "Administrative Territory"},
)

MAJOR_CITIES: tuple[str, ...] = (
    "Karachi",
    "Lahore",
    "Faisalabad",
    "Rawalpindi",
    "Gujranwala",
    "Peshawar",
    "Multan",
    "Hyderabad",
    "Islamabad",
    "Quetta",
)

DEFAULT_REGION = REGIONS[1]
DEFAULT_CITY = "Lahore"
DESCRIPTION = "Pakistan Standard Time (PKT)"
SERVICE_NAME = "Pakistan Time Service"
SERVICE_VERSION = "2.0"

# English names regardless of the process locale; strftime %A/%B/%p follow LC_TIME.
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_TIME_24H_FORMAT = "%H:%M:%S"


def current_time(now: datetime | None = None) -> datetime:
    """Return ``now`` (default: the present instant) converted to PKT.

    Args:
        now: Timezone-aware instant; naive values are taken as UTC.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(PKT)


def weekday_name(moment: datetime) -> str:
    return _WEEKDAYS[moment.weekday()]


def format_date(moment: datetime) -> str:
    """``Monday, March 04, 2024``."""
    return f"{weekday_name(moment)}, {_MONTHS[moment.month - 1]} {moment.day:02d}, {moment.year}"


def format_time_12h(moment: datetime) -> str:
    """``03:04:05 PM``; noon is ``12:00:00 PM`` and midnight ``12:00:00 AM``."""
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{hour:02d}:{moment.minute:02d}:{moment.second:02d} {meridiem}"


def build_simple_payload(now: datetime | None = None) -> dict[str, Any]:
    pkt = current_time(now)
    return {
        "time": format_time_12h(pkt),
        "time_24h": pkt.strftime(_TIME_24H_FORMAT),
        "date": format_date(pkt),
        "timezone": TIMEZONE_ABBREVIATION,
        "offset": f"UTC+{OFFSET_HOURS}",
        "country": COUNTRY_NAME,
        "city": DEFAULT_CITY,
    }


def build_full_payload(now: datetime | None = None) -> dict[str, Any]:
    """Full description: country, timezone, current time and metadata."""
    pkt = current_time(now)
    generated_at = pkt.astimezone(timezone.utc)
    return {
        "country_info": {
            "name": COUNTRY_NAME,
            "code": COUNTRY_CODE,
            "current_region": dict(DEFAULT_REGION),
            "current_city": DEFAULT_CITY,
        },
        "timezone_info": {
            "name": TIMEZONE_NAME,
            "abbreviation": TIMEZONE_ABBREVIATION,
            "offset_hours": OFFSET_HOURS,
            "description": DESCRIPTION,
            "dst_observed": False,
        },
        "current_time": {
            "date": format_date(pkt),
            "time_12h": format_time_12h(pkt),
            "time_24h": pkt.strftime(_TIME_24H_FORMAT),
            "timezone": TIMEZONE_ABBREVIATION,
            "day_of_week": weekday_name(pkt),
            "unix_timestamp": int(pkt.timestamp()),
        },
        "meta": {
            "generated_at": generated_at.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "timezone_source": "Built-in Pakistan Standard Time",
        },
    }


def render_text(now: datetime | None = None) -> str:
    """Plain-text report for ``format=text``."""
    pkt = current_time(now)
    lines = [
        "🇵🇰 PAKISTAN STANDARD TIME",
        "========================",
        "",
        f"📍 Location: {DEFAULT_CITY}, {DEFAULT_REGION['name']}, {COUNTRY_NAME}",
        f"🌍 Region Type: {DEFAULT_REGION['type']}",
        f"⏰ Timezone: {TIMEZONE_ABBREVIATION} (UTC+{OFFSET_HOURS})",
        "",
        "📅 CURRENT TIME",
        "=============",
        f"📆 Date: {format_date(pkt)}",
        f"🕐 Time (12-hour): {format_time_12h(pkt)}",
        f"🕐 Time (24-hour): {pkt.strftime(_TIME_24H_FORMAT)}",
        "",
        "🏛️ ADMINISTRATIVE INFORMATION",
        "==========================",
        f"🔹 Regions: {', '.join(region['name'] for region in REGIONS)}",
        f"🔸 Major Cities: {', '.join(MAJOR_CITIES)}",
        "",
        f"🚀 {SERVICE_NAME} v{SERVICE_VERSION}",
    ]
    return "\n".join(lines)
