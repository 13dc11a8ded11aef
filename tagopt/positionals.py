"""
Positional-argument policies.

A policy is an inclusive {minimum, maximum} range checked against the number
of positional arguments left after option scanning. The default policy is
unrestricted: minimum -1 (no lower bound enforcement at all) and maximum
sys.maxsize. A minimum of 0 is a different configuration even if, for a
count, it behaves the same: it is what no_positional_arguments() uses.

Policies double as configs: pass them to parser(...), leaf(...) or
Command.configure(...).
"""
import sys

from .faults import TooFewPositionalArgumentsError, TooManyPositionalArgumentsError


class Positionals:
    """
    Inclusive positional-argument count range.

    Raises ValueError at construction when the bounds are not integers,
    minimum is below -1, or minimum exceeds maximum.
    """

    __slots__ = ("minimum", "maximum")

    def __init__(self, minimum=-1, maximum=sys.maxsize):
        if not isinstance(minimum, int) or not isinstance(maximum, int):
            raise TypeError("positional bounds must be integers")
        if minimum < -1:
            raise ValueError("positional minimum cannot be lower than -1")
        if minimum > maximum:
            raise ValueError("positional minimum cannot exceed the maximum")
        self.minimum = minimum
        self.maximum = maximum

    def check(self, count, /):
        """
        Raise TooFewPositionalArgumentsError / TooManyPositionalArgumentsError
        when count falls outside the range; return None otherwise.
        """
        if count < self.minimum:
            raise TooFewPositionalArgumentsError("too few positional arguments", got=count, expected=self.minimum)
        if count > self.maximum:
            raise TooManyPositionalArgumentsError("too many positional arguments", got=count, expected=self.maximum)

    def __eq__(self, other):
        if not isinstance(other, Positionals):
            return NotImplemented
        return (self.minimum, self.maximum) == (other.minimum, other.maximum)

    def __hash__(self):
        return hash((self.minimum, self.maximum))

    def __repr__(self):
        return "positionals(minimum=%r, maximum=%r)" % (self.minimum, self.maximum)


def unrestricted():
    return Positionals(-1, sys.maxsize)


def no_positional_arguments():
    return Positionals(0, 0)


def at_least_one_positional_argument():
    return Positionals(1, sys.maxsize)


def just_one_positional_argument():
    return Positionals(1, 1)


__all__ = (
    "Positionals",
    "unrestricted",
    "no_positional_arguments",
    "at_least_one_positional_argument",
    "just_one_positional_argument",
)
