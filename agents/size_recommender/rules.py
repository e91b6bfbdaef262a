"""
Totals recommendation rules.

The line movement (handicap) and the price movement (water) are each
reduced to a direction, then looked up together with the bettor's
historical record:

    line   water  record  ->  pick
    up     up     win         under
    up     up     loss        over
    down   up     loss        under
    down   up     win         over
    up     down   loss        under
    up     down   win         over
    down   down   loss        over
    down   down   win         under

A flat line or flat water matches no rule and yields Recommendation.NONE.
"""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Dict, Tuple

from .models import (
    Analysis,
    ClassificationInput,
    ClassificationResult,
    Direction,
    HistoricalRecord,
    Recommendation,
)

UP, DOWN = Direction.UP, Direction.DOWN
WIN, LOSS = HistoricalRecord.WIN, HistoricalRecord.LOSS

RULES: Dict[Tuple[Direction, Direction, HistoricalRecord], Recommendation] = {
    (UP, UP, WIN): Recommendation.UNDER,
    (UP, UP, LOSS): Recommendation.OVER,
    (DOWN, UP, LOSS): Recommendation.UNDER,
    (DOWN, UP, WIN): Recommendation.OVER,
    (UP, DOWN, LOSS): Recommendation.UNDER,
    (UP, DOWN, WIN): Recommendation.OVER,
    (DOWN, DOWN, LOSS): Recommendation.OVER,
    (DOWN, DOWN, WIN): Recommendation.UNDER,
}

DETAILS_SEPARATOR = " | "


def direction_of(delta: float) -> Direction:
    # exact comparison, no tolerance
    if delta > 0:
        return Direction.UP
    if delta < 0:
        return Direction.DOWN
    return Direction.FLAT


def format_number(value: float) -> str:
    """
    Render a float the way it prints as a JSON number.

    Integral values drop the fraction (1 rather than 1.0). Magnitudes below
    1e-6 or from 1e21 up use exponent form without padding (1e-7, 1.5e+21);
    everything in between is written out in full (0.000001, not 1e-06).
    """
    if value == 0:
        return "0"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    text = repr(value)
    if 1e-6 <= abs(value) < 1e21:
        digits = format(Decimal(text), "f")
        if "." in digits:
            digits = digits.rstrip("0").rstrip(".")
        return digits
    mantissa, exponent = text.split("e")
    exponent = int(exponent)
    return f"{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"


def round_half_up(value: float, places: int = 2) -> float:
    """Round the exact binary value, ties away from zero (0.125 -> 0.13)."""
    if not math.isfinite(value):
        return value
    with localcontext() as ctx:
        ctx.prec = 400
        quantum = Decimal(1).scaleb(-places)
        return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def _movement(label: str, direction: Direction, magnitude: float) -> str:
    if direction is Direction.UP:
        return f"{label} moved up by {format_number(magnitude)}"
    if direction is Direction.DOWN:
        return f"{label} moved down by {format_number(magnitude)}"
    return f"{label} unchanged"


def describe(handicap_change: float, water_change: float, record: HistoricalRecord) -> str:
    """Build the human-readable explanation attached to a recommendation."""
    # water is rounded to 2 places before abs(); the line change is not rounded
    handicap_text = _movement("Totals line", direction_of(handicap_change), abs(handicap_change))
    water_text = _movement("Water", direction_of(water_change), abs(round_half_up(water_change, 2)))
    record_text = f"Historical record: {record.value}"
    return DETAILS_SEPARATOR.join([handicap_text, water_text, record_text])


def classify(data: ClassificationInput) -> ClassificationResult:
    handicap_change = data.current_handicap - data.initial_handicap
    water_change = data.current_water - data.initial_water

    handicap_dir = direction_of(handicap_change)
    water_dir = direction_of(water_change)
    recommendation = RULES.get(
        (handicap_dir, water_dir, data.historical_record), Recommendation.NONE
    )

    analysis = Analysis(
        handicap_change=handicap_change,
        water_change=water_change,
        handicap_up=handicap_dir is Direction.UP,
        water_up=water_dir is Direction.UP,
        handicap_down=handicap_dir is Direction.DOWN,
        water_down=water_dir is Direction.DOWN,
        historical_record=data.historical_record,
    )
    return ClassificationResult(
        recommendation=recommendation,
        details=describe(handicap_change, water_change, data.historical_record),
        analysis=analysis,
    )
