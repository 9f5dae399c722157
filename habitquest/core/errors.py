"""Exceptions raised by the gamification calculators."""


class GamificationError(Exception):
    """Base class for calculator errors."""


class InvalidArgument(GamificationError, ValueError):
    """An input is outside the range a calculator accepts.

    Raised for negative XP, out-of-range difficulty, malformed dates and
    invalid threshold tables. Always detectable by the caller before the call.
    """


class InsufficientResources(InvalidArgument):
    """A resource balance is too low to pay a cost."""
