"""Numeric formatting helpers"""

from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float, places: int = 2) -> float:
    """Round like a cash register: 0.005 goes up, not to even"""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_amount(value: float) -> str:
    """Render a money amount without trailing zeros: 100 -> '100', 100.5 -> '100.5'"""
    text = f"{round_half_up(value):.2f}"
    return text.rstrip("0").rstrip(".")
