import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up.

    The builtin round() rounds halves to even, which would turn 2.5 into 2.
    """
    return math.floor(value + 0.5)


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
