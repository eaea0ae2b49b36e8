"""
Browser tool helper functions

Serialization and timestamp helpers shared by the session and transports.
"""

import json
import math
from datetime import date, datetime, timezone
from typing import Any


def iso_timestamp(moment: datetime = None) -> str:
    """UTC timestamp with millisecond precision and a ``Z`` suffix."""
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _json_default(value: Any) -> Any:
    # Playwright hands script Date values back as datetime objects
    if isinstance(value, datetime):
        return iso_timestamp(value)
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _finite(value: Any) -> Any:
    # NaN and the infinities have no JSON form; script results report them as null
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {key: _finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(item) for item in value]
    return value


def serialize_result(value: Any) -> str:
    """Format a script return value as indented JSON text."""
    return json.dumps(
        _finite(value), indent=2, ensure_ascii=False, allow_nan=False, default=_json_default
    )
