"""
Dates Module - UTC timestamps and their ISO-8601 wire form
"""

from datetime import datetime, timezone


def utcnow():
    """Naive UTC timestamp, the form every DateTime column stores"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_datetime(value):
    """Parse an ISO-8601 string (or datetime) into a naive UTC datetime"""
    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def format_datetime(value):
    if value is None:
        return None
    return value.isoformat() + 'Z'


__all__ = ['utcnow', 'parse_datetime', 'format_datetime']
