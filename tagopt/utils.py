import functools
import re
from typing import final


@final
class UnsetType:
    """
    internal singleton sentinel representing an "unset" value.

    intent
    - used by the internal API to distinguish "not provided" from a user‑supplied
      value (including None, empty strings or other falsy values).
    - although this class is importable, it is intended for internal use only.

    behavior
    - truthiness: bool(Unset) is False.
    - identity: Unset is a process‑wide singleton (see __new__).
    - display: repr(Unset) -> "Unset".
    - final: subclassing is forbidden to preserve semantics (see __init_subclass__).
    """

    @functools.cache
    def __new__(cls):
        """
        return the singleton instance (process‑wide).
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def nullify(object, default=None, /):
    """
    return `default` when `object` is Unset; otherwise return `object` unchanged.
    """
    return default if object is Unset else object


def kebabize(identifier, /):
    """
    turn a python identifier into a kebab-case option name.

    rules
    - leading/trailing underscores are dropped, inner runs become a single hyphen.
    - camel-case boundaries split words; acronyms stay together
      ("EnableHTTP3" -> "enable-http3", "URLGetter" -> "url-getter").
    - the result is lowercased.

    errors
    - TypeError when the argument is not a string.
    """
    if not isinstance(identifier, str):
        raise TypeError("kebabize() argument must be a string")
    name = re.sub(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])", "-", identifier.strip("_"))
    return re.sub(r"[_\-\s]+", "-", name).strip("-").lower()


def punctuate(text, /):
    """
    terminate a sentence with a period unless it already has one.
    """
    return text if text.endswith(".") else text + "."


__all__ = (
    "UnsetType",
    "Unset",
    "nullify",
    "kebabize",
    "punctuate",
)
