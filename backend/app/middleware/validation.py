from starlette.middleware.base import BaseHTTPMiddleware
from fastapi import Request, status
from fastapi.responses import JSONResponse
import json
from typing import List, Tuple

from app.utils import sanitize, strip_control_chars
import app.config as conf

# multi-line free text keeps its layout and angle brackets
FREE_TEXT_FIELDS = frozenset({"information", "specs", "description"})


def _get_rules() -> List[Tuple[str, str]]:
    """Return the configured (path_pattern, METHOD) rules from `app.config.settings`.

    Read on every request so runtime changes to settings are picked up.
    """
    raw = getattr(conf.settings, "VALIDATION_RULES", None)
    rules = conf._parse_validation_rules(raw)
    return rules or list(conf.DEFAULT_VALIDATION_RULES)


def _matches(rules: List[Tuple[str, str]], path: str, method: str) -> bool:
    for pattern, m in rules:
        if m != method:
            continue
        if pattern.endswith("*"):
            if path.startswith(pattern[:-1]):
                return True
        elif path == pattern:
            return True
    return False


def _clean(key, value):
    if not isinstance(value, str):
        return value
    if key in FREE_TEXT_FIELDS:
        return strip_control_chars(value)
    return sanitize(value)


class ValidationMiddleware(BaseHTTPMiddleware):
    """Sanitize JSON bodies of write requests before they reach the routes.

    For requests matching a validation rule the body must be a JSON object.
    Top-level string values have HTML tags and control characters removed and
    whitespace collapsed, except free-text fields (`information`, `specs`,
    `description`) which only lose control characters. The cleaned body
    replaces the original so the route's pydantic models parse the sanitized
    data.
    """

    async def dispatch(self, request: Request, call_next):
        if not _matches(_get_rules(), request.url.path, request.method.upper()):
            return await call_next(request)

        body_bytes = await request.body()
        try:
            data = json.loads(body_bytes) if body_bytes else {}
        except ValueError:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": "Invalid JSON body"},
            )
        if not isinstance(data, dict):
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": "Request body must be a JSON object"},
            )

        cleaned = {k: _clean(k, v) for k, v in data.items()}

        # BaseHTTPMiddleware replays the cached body to the downstream app
        request._body = json.dumps(cleaned).encode()

        return await call_next(request)
