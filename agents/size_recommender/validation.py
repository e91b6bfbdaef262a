"""Turns a decoded request body into a ClassificationInput."""

import math
import re
from typing import Any, Dict, Optional

from .exceptions import InvalidRequestError
from .models import ClassificationInput, HistoricalRecord

NUMERIC_FIELDS = ["initialHandicap", "currentHandicap", "initialWater", "currentWater"]
REQUIRED_FIELDS = NUMERIC_FIELDS + ["historicalRecord"]

# leading decimal literal, trailing garbage is ignored ("1.5abc" -> 1.5)
_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def is_blank(value: Any) -> bool:
    return value is None or value == ""


def parse_float(value: Any) -> Optional[float]:
    """
    Lenient numeric parsing for form-style input.

    Numbers pass through, strings are parsed from their leading numeric
    prefix. Returns None for anything that does not yield a finite number,
    booleans included.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        match = _NUMBER_PREFIX.match(value)
        if not match:
            return None
        number = float(match.group(1))
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def validate_payload(data: Dict[str, Any]) -> ClassificationInput:
    if not isinstance(data, dict):
        raise InvalidRequestError("Request body must be a JSON object")

    for field in REQUIRED_FIELDS:
        if is_blank(data.get(field)):
            raise InvalidRequestError(f"Missing required field: {field}", field=field)

    numbers = {}
    for field in NUMERIC_FIELDS:
        number = parse_float(data[field])
        if number is None:
            raise InvalidRequestError("Invalid numeric format", field=field)
        numbers[field] = number

    record = data["historicalRecord"]
    if record not in (HistoricalRecord.WIN.value, HistoricalRecord.LOSS.value):
        raise InvalidRequestError(
            "historicalRecord must be either 'win' or 'loss'", field="historicalRecord"
        )

    return ClassificationInput(historicalRecord=HistoricalRecord(record), **numbers)
