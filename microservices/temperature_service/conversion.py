"""
Temperature unit conversion

Results are rounded to 2 decimal places, halves away from zero.
"""

from decimal import Decimal, ROUND_HALF_UP

_TWO_PLACES = Decimal("0.01")


def round2(value: float) -> float:
    # repr() gives the shortest decimal that round-trips, so 98.60000000000001
    # is rounded as written rather than as its binary expansion
    return float(Decimal(repr(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def celsius_to_fahrenheit(celsius: float) -> float:
    return round2(celsius * 1.8 + 32)


def celsius_to_kelvin(celsius: float) -> float:
    return round2(celsius + 273.15)


__all__ = ["round2", "celsius_to_fahrenheit", "celsius_to_kelvin"]
