"""
Counter: an integer option that counts how many times it was given.

A field annotated with Counter behaves like a flag (it takes no value by
default) but, instead of flipping to True, it increments on every occurrence:

    -v -v -v        → 3
    -vvv            → 3
    --verbose=5     → 5   (explicit assignment, long form only)

Any type exposing a callable __counter__(value=None) gets the same treatment
from the option builder; Counter is the stock implementation.
"""


class Counter(int):
    """
    Occurrence counter.

    __counter__(value=None)
    - value None or blank → return a new Counter one above the current one.
    - value str   → return a new Counter holding the parsed integer. Base
      prefixes are honoured (0x10, 0o17, 0b11) like int(value, 0).

    Raises ValueError("not a valid number: <value>") on unparsable input.
    """

    __slots__ = ()

    def __counter__(self, value=None, /):
        if value is None or not value.strip():
            return type(self)(self + 1)
        try:
            return type(self)(int(value.strip(), 0))
        except ValueError:
            raise ValueError("not a valid number: %s" % value) from None

    def __repr__(self):
        return "%s(%d)" % (type(self).__name__, self)


__all__ = ("Counter",)
