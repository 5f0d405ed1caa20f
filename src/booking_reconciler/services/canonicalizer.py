"""
Canonicalization of booking fields into comparable strings.

Live times are labelled straight from the API's local ISO timestamps.
Expected times come from the spreadsheet as UTC instants and are shifted to
the comparison timezone, then nudged forward one minute unless already on a
5-minute mark, matching the airline's scheduling granularity.
"""

from datetime import date, datetime, time, timedelta, timezone
from functools import lru_cache
from typing import Any, Optional, Tuple
from zoneinfo import ZoneInfo

from ..types import LiveBooking


INVALID_TIME = "Invalid date"

AM_HOURS = {"00", "01", "02", "03", "04", "05", "06", "07", "08", "09", "10", "11"}


def canonicalize_time(hhmm: str) -> str:
    """Append an AM/PM label to a 24-hour "HH:MM" string, keeping the digits"""
    suffix = "AM" if hhmm[:2] in AM_HOURS else "PM"
    return f"{hhmm} {suffix}"


def split_instant(iso_value: str) -> Tuple[str, str]:
    """Split an ISO timestamp into its date part and "HH:MM" part"""
    date_part, _, time_part = iso_value.partition("T")
    return date_part, time_part[:5]


@lru_cache(maxsize=None)
def _zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def _to_utc_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        instant = value
    elif isinstance(value, date):
        instant = datetime(value.year, value.month, value.day)
    elif isinstance(value, time):
        # time-only cells carry no date; anchor them to the epoch
        instant = datetime.combine(date(1970, 1, 1), value)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            instant = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant


def canonicalize_minute_rounding(instant: Any, zone: str) -> str:
    """
    Convert an instant to `zone` and format it as "HH:mm A".

    A minute whose value mod 10 is 0 or 5 is kept; any other minute gets
    one minute added (12 -> 13, 59 -> next hour :00). Blank or unparseable
    values give INVALID_TIME, which never matches a live label.
    """
    utc = _to_utc_datetime(instant)
    if utc is None:
        return INVALID_TIME

    local = utc.astimezone(_zone(zone))
    if local.minute % 10 not in (0, 5):
        local = local + timedelta(minutes=1)
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{local:%H:%M} {suffix}"


def format_travel_date(value: Any) -> str:
    """Format an expected travel date as YYYY-MM-DD"""
    if isinstance(value, (datetime, date)):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).strftime("%Y-%m-%d")
        except ValueError:
            return text
    return str(value)


def passenger_count(booking: LiveBooking) -> int:
    """Number of passengers on the booking"""
    return len(booking.passengers)
