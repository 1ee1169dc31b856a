from datetime import datetime, timedelta, timezone
import pytz


def utcnow():
    """Naive UTC timestamp, the format every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    return value.isoformat() if value else None


def parse_datetime(value):
    """Parse an ISO date/datetime string into naive UTC. None passes through."""
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _local_now(tz, now=None):
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(tz)


def _boundary_to_utc(tz, local_boundary):
    return tz.localize(local_boundary).astimezone(timezone.utc).replace(tzinfo=None)


def start_of_month(tz_name='UTC', now=None):
    """First instant of the current month in tz_name, as naive UTC."""
    tz = pytz.timezone(tz_name or 'UTC')
    local = _local_now(tz, now)
    return _boundary_to_utc(tz, datetime(local.year, local.month, 1))


def start_of_year(tz_name='UTC', now=None):
    """First instant of January 1st of the current year in tz_name, as naive UTC."""
    tz = pytz.timezone(tz_name or 'UTC')
    local = _local_now(tz, now)
    return _boundary_to_utc(tz, datetime(local.year, 1, 1))


def days_ago(days, now=None):
    """Naive UTC timestamp `days` days before now."""
    reference = now if now is not None else datetime.now(timezone.utc)
    if reference.tzinfo is not None:
        reference = reference.astimezone(timezone.utc).replace(tzinfo=None)
    return reference - timedelta(days=days)
