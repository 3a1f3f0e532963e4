import re
import uuid
from datetime import datetime, timezone
from typing import Union

from pydantic import TypeAdapter

_datetime_adapter = TypeAdapter(datetime)


_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")


def strip_control_chars(s: str) -> str:
    """Remove control characters, keeping newlines, tabs and carriage returns."""
    return _CONTROL_CHARS.sub("", s)


def sanitize(s: str) -> str:
    # remove HTML tags
    s = re.sub(r"<[^>]*>", "", s)
    # remove control chars except newline/tab/space
    s = strip_control_chars(s)
    # normalize whitespace
    s = re.sub(r"\s+", " ", s).strip()
    return s


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_timestamp(value: Union[str, datetime, None]) -> datetime:
    """Return `value` as a timezone-aware UTC datetime.

    Strings are parsed as ISO 8601 (``Z`` suffix and space separator accepted).
    Naive values are taken to be UTC. ``None`` means "now".
    """
    if value is None:
        return utcnow()
    if not isinstance(value, datetime):
        value = _datetime_adapter.validate_python(value)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def extract_request_metadata(request):
    headers = request.headers
    xff = headers.get("x-forwarded-for")
    if xff:
        ip = xff.split(",")[0].strip()
    else:
        ip = request.client.host if request.client else None
    return {
        "ip": ip,
        "user_agent": headers.get("user-agent"),
        "request_path": request.url.path,
        "method": request.method,
    }
