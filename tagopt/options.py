r"""
tagopt option records and descriptors.

Overview
- An option record is a plain (non-frozen) dataclass. Each field becomes a
  command-line option; its metadata says how:
  • doc: str, required. Help text for the option. The sentinel "-" excludes
    the field (nested records, internal state, ...).
  • short: str, optional. Single-character alias ("-v").
  • required: bool, optional. The option must be given at parse time.
- option(...) is the convenience factory writing that metadata for you.
- describe(record) reflects over a record instance and returns its
  Descriptor tuple, one per documented field, in declaration order.

Example
    from dataclasses import dataclass
    from tagopt import Counter, option

    @dataclass
    class GlobalOptions:
        batch: bool = option(False, doc="emit JSON messages", short="b")
        logfile: str = option("", doc="file where to write logs", short="L")
        verbose: Counter = option(Counter(), doc="increases verbosity", short="v")

    describe(GlobalOptions())  # → (--batch/-b flag, --logfile/-L value, --verbose/-v counter)

Kinds (from the field annotation)
- counter: the type exposes __counter__ (see tagopt.counter). Valueless by
  default, increments per occurrence, accepts "--name=N".
- flag: bool. Valueless by default, accepts "--name=true|false".
- list: list[T]. Value required; comma-separated items are appended.
- value: any other callable type (str, int, float, pathlib.Path, enums, ...).
  Optional[T] / T | None unwraps to T.

Validation highlights
- MissingDocumentationError: a field without doc (and not excluded).
- InvalidShortNameError: a short alias that is not exactly one character.
- InvalidBindingError: not a dataclass instance, frozen record, private field,
  duplicate long/short name, or a type that cannot be parsed from text.
"""
import dataclasses
import re
import types
import typing

from .faults import MissingDocumentationError, InvalidShortNameError, InvalidBindingError, OptionSyntaxError
from .utils import Unset, kebabize


def option(default=dataclasses.MISSING, /, *, doc, short=Unset, required=False, default_factory=dataclasses.MISSING):
    """
    Build a dataclasses.field carrying tagopt metadata.

    Parameters
    - default: positional-only. Field default (omit for required-at-construction fields).
    - doc: help text, or "-" to exclude the field from the option table.
    - short: single-character alias (validated by describe(), not here).
    - required: mark the option mandatory at parse time.
    - default_factory: forwarded to dataclasses.field (lists, nested records).
    """
    metadata = {"doc": doc, "required": required}
    if short is not Unset:
        metadata["short"] = short
    return dataclasses.field(default=default, default_factory=default_factory, metadata=metadata)


def _integer(value):
    # base 0 rejects zero-padded decimals ("010"), hence the second attempt
    for base in (0, 10):
        try:
            return int(value.strip(), base)
        except ValueError:
            pass
    raise ValueError("not a valid number: %s" % value)


def _floating(value):
    try:
        return float(value)
    except ValueError:
        raise ValueError("not a valid float: %s" % value) from None


def _boolean(value):
    match value.strip().lower():
        case "true" | "t" | "1" | "yes" | "y" | "on":
            return True
        case "false" | "f" | "0" | "no" | "n" | "off":
            return False
    raise ValueError("not a valid boolean: %s" % value)


class Descriptor:
    """
    One registered option: naming, documentation and its storage binding.

    Fields
    - name: kebab-case long name (without the leading "--").
    - short: single character alias or None.
    - doc: documentation string as written in the metadata.
    - required: bool.
    - kind: "flag" | "counter" | "value" | "list".
    - convert: callable turning the raw text into the stored value
      (for counters this is the counter type itself).
    - field: attribute name on the bound record.

    assign(record, value) is the storage binding: it converts the raw text (or
    None for a bare flag/counter occurrence) and writes the attribute.
    """

    __slots__ = ("name", "short", "doc", "required", "kind", "convert", "field")

    def __init__(self, name, short, doc, required, kind, convert, field):
        self.name = name
        self.short = short
        self.doc = doc
        self.required = required
        self.kind = kind
        self.convert = convert
        self.field = field

    @property
    def flag(self):
        """
        True when the option takes no value unless one is attached with '='.
        """
        return self.kind in ("flag", "counter")

    @property
    def invocation(self):
        """
        Help column for this option: "-x, --name" or "      --name", plus " value".
        """
        head = "  -%s, --%s" % (self.short, self.name) if self.short else "      --%s" % self.name
        return head if self.flag else head + " value"

    def assign(self, record, value=None, /):
        try:
            match self.kind:
                case "flag":
                    object = True if value is None else _boolean(value)
                case "counter":
                    current = getattr(record, self.field)
                    if not isinstance(current, self.convert):
                        current = self.convert(current)
                    object = current.__counter__(value)
                case "list":
                    object = [*(getattr(record, self.field) or ()), *map(self.convert, value.split(","))]
                case _:
                    object = self.convert(value)
        except (ValueError, TypeError) as exception:
            raise OptionSyntaxError("invalid value for --%s: %s" % (self.name, exception), input=self.name) from None
        setattr(record, self.field, object)

    def __repr__(self):
        return "descriptor(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        for name in ("name", "short", "doc", "required", "kind", "field"):
            yield name, getattr(self, name)


def _classify(name, hint):
    """
    Map a resolved annotation to (kind, convert); raise InvalidBindingError when unusable.
    """
    origin = typing.get_origin(hint)

    if origin in (typing.Union, types.UnionType):
        members = [member for member in typing.get_args(hint) if member is not type(None)]
        if len(members) != 1:
            raise InvalidBindingError("field %r has an ambiguous union type" % name, field=name)
        return _classify(name, members[0])

    if callable(getattr(hint, "__counter__", None)):
        return "counter", hint

    if hint is bool:
        return "flag", _boolean

    if origin is list or hint is list:
        item = (typing.get_args(hint) or (str,))[0]
        kind, convert = _classify(name, item)
        if kind != "value":
            raise InvalidBindingError("field %r must be a list of plain values" % name, field=name)
        return "list", convert

    if hint is int:
        return "value", _integer
    if hint is float:
        return "value", _floating

    if not isinstance(hint, type) or origin is not None:
        raise InvalidBindingError("field %r has an unsupported type %r" % (name, hint), field=name)
    if dataclasses.is_dataclass(hint):
        raise InvalidBindingError("field %r holds a nested record; exclude it with doc='-'" % name, field=name)
    if issubclass(hint, (dict, set, frozenset, tuple, bytes)):
        raise InvalidBindingError("field %r has an unsupported type %r" % (name, hint.__name__), field=name)
    return "value", hint


def describe(record, /):
    """
    Reflect over an option record and return its descriptors.

    Parameters
    - record: instance of a non-frozen dataclass.

    Returns
    - tuple[Descriptor, ...] in field declaration order (excluded fields skipped).

    Raises
    - InvalidBindingError, MissingDocumentationError, InvalidShortNameError
      (see the module docstring).
    """
    if not dataclasses.is_dataclass(record) or isinstance(record, type):
        raise InvalidBindingError("expected a dataclass instance, got %s" % type(record).__name__)
    if type(record).__dataclass_params__.frozen:
        raise InvalidBindingError("expected a mutable record, %s is frozen" % type(record).__name__)

    try:
        hints = typing.get_type_hints(type(record))
    except NameError as exception:
        raise InvalidBindingError("cannot resolve annotations of %s: %s" % (type(record).__name__, exception)) from None

    descriptors = []
    longs = set()
    shorts = set()

    for field in dataclasses.fields(record):
        doc = field.metadata.get("doc")

        # "-" excludes the field
        if doc == "-":
            continue
        if not isinstance(doc, str) or not doc.strip():
            raise MissingDocumentationError("field %r has no documentation" % field.name, field=field.name)

        if field.name.startswith("_"):
            raise InvalidBindingError("field %r is private" % field.name, field=field.name)

        name = kebabize(field.name)
        if not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", name):
            raise InvalidBindingError("field %r does not map to a valid option name" % field.name, field=field.name)
        if name in longs:
            raise InvalidBindingError("option name %r is already in use" % name, field=field.name)
        longs.add(name)

        short = field.metadata.get("short")
        if short is not None:
            if not isinstance(short, str) or len(short) != 1 or short in "-= " or not short.isprintable():
                raise InvalidShortNameError(
                    "short name of field %r must be a single character, got %r" % (field.name, short),
                    field=field.name
                )
            if short in shorts:
                raise InvalidBindingError("short name %r is already in use" % short, field=field.name)
            shorts.add(short)

        kind, convert = _classify(field.name, hints[field.name])
        descriptors.append(Descriptor(
            name,
            short,
            doc.strip(),
            field.metadata.get("required") is True,
            kind,
            convert,
            field.name,
        ))

    return tuple(descriptors)


__all__ = (
    "option",
    "Descriptor",
    "describe",
)
