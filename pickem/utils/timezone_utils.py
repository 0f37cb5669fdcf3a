"""
Timezone utility functions for the pick'em pool

Kickoffs and week starts are stored as naive UTC datetimes.
"""

from datetime import datetime, timezone

import pytz
from flask import current_app


def get_app_timezone():
    """Get the application's configured timezone"""
    try:
        timezone_name = current_app.config.get("TIMEZONE", "UTC")
        return pytz.timezone(timezone_name)
    except pytz.UnknownTimeZoneError:
        # Fallback to UTC if timezone is invalid
        return pytz.UTC


def get_utc_time():
    """Get current time in UTC"""
    return datetime.now(timezone.utc)


def ensure_utc(dt):
    """Return an aware UTC datetime; naive values are taken to be UTC"""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_storage(dt):
    """Convert a datetime to the naive UTC form stored in the database"""
    if dt is None:
        return None
    if dt.tzinfo is None:
        # Naive input is local to the application timezone
        dt = get_app_timezone().localize(dt)
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def convert_to_app_timezone(dt):
    """Convert a datetime to the application's timezone"""
    if dt is None:
        return None
    return ensure_utc(dt).astimezone(get_app_timezone())


def format_kickoff(dt, format_str="%a %m/%d at %I:%M %p"):
    """Format a kickoff time in the application's timezone"""
    local_time = convert_to_app_timezone(dt)
    if local_time is None:
        return "TBD"
    return local_time.strftime(format_str)
