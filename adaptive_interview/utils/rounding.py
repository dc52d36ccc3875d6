"""
Numeric helpers shared by the evaluator and the report aggregator.
"""
import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always going up (0.5 -> 1, 2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into the inclusive range [low, high]."""
    return max(low, min(high, value))
