"""
tagopt faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain (structural, parsing, routing) so logs and
  searches stay predictable.
- CommandException: base type carrying a message and a read-only options
  mapping; it knows how to render itself as a single console line.
  • StructuralError: raised while turning an option record into descriptors
    (bad metadata, unbindable fields). These surface immediately.
  • ParsingError: raised while scanning an argument vector or routing it
    through the command tree. These are reported once, then raised.
- CommandWarning: developer-facing diagnostics emitted with warnings.warn.
- trigger(): central entry point to surface a fault with runtime options.

Rendering
- A fault renders as
      [<tool>: ][internal error: ]<message>[. See '<route> --help'.]
  where each bracketed part is driven by the options "tool", "internal" and
  "route". Styling is applied only when the "colorful" option is set; the
  palette can be overridden with a __styles__ mapping in __main__.
"""
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from .utils import Unset, nullify

console = Console(stderr=True, highlight=False)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - structural (211 0x): MISSING_DOCUMENTATION, INVALID_SHORT_NAME, INVALID_BINDING
    - parsing    (211 1x): OPTION_SYNTAX, MISSING_REQUIRED_OPTION
    - positional (211 2x): TOO_FEW_POSITIONALS, TOO_MANY_POSITIONALS
    - routing    (211 3x): NO_SUCH_SUBCOMMAND, MISSING_SUBCOMMAND_NAME
    - warnings   (221 xx): UNSUPPORTED_CONFIG, SKIPPED_OPTIONS
    """
    # --- structural errors ---
    MISSING_DOCUMENTATION   = 21101
    INVALID_SHORT_NAME      = 21102
    INVALID_BINDING         = 21103

    # --- option scanning errors ---
    OPTION_SYNTAX           = 21111
    MISSING_REQUIRED_OPTION = 21112

    # --- positional errors ---
    TOO_FEW_POSITIONALS     = 21121
    TOO_MANY_POSITIONALS    = 21122

    # --- routing errors ---
    NO_SUCH_SUBCOMMAND      = 21131
    MISSING_SUBCOMMAND_NAME = 21132

    # --- warnings ---
    UNSUPPORTED_CONFIG      = 22101
    SKIPPED_OPTIONS         = 22102


def _palette():
    return defaultdict(str, {
        "program-name": "bold #E6E6F0",  # near-white program name
        "error-message": "#C8C8D0",  # soft light gray message
        "internal": "bold #FF4DA6",  # pinky internal marker
        "hint": "italic #9CE19C",  # gentle green hint text
    } | getattr(__import__("__main__"), "__styles__", {}))


class CommandException(Exception):
    """
    base class of every tagopt error.

    attributes
    - message: str, the bare description (no program prefix, no hint).
    - options: read-only mapping of rendering/context options
      (tool, route, internal, colorful, input, ...).
    - code: FaultCode of the concrete class.
    """
    code = None

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        colorful = bool(self.options.get("colorful"))
        styles = _palette()

        def text(fragment, style):
            return Text(fragment, styles[style] if colorful else "")

        line = Text()
        if tool := self.options.get("tool"):
            line.append_text(text(str(tool), "program-name")).append(": ")
        if self.options.get("internal"):
            line.append_text(text("internal error", "internal")).append(": ")
        line.append_text(text(self.message, "error-message"))
        if route := self.options.get("route"):
            line.append_text(text(". See '%s --help'." % route, "hint"))
        return line

    def __trigger__(self):
        console.print(self, soft_wrap=True)
        raise self from None

    def __replace__(self, message=Unset, /, **overrides):
        return type(self)(nullify(message, self.message), **{**self.options, **overrides})


class StructuralError(CommandException): ...
class ParsingError(CommandException): ...


class MissingDocumentationError(StructuralError):
    code = FaultCode.MISSING_DOCUMENTATION

class InvalidShortNameError(StructuralError):
    code = FaultCode.INVALID_SHORT_NAME

class InvalidBindingError(StructuralError):
    code = FaultCode.INVALID_BINDING

class OptionSyntaxError(ParsingError):
    code = FaultCode.OPTION_SYNTAX

class MissingRequiredOptionError(ParsingError):
    code = FaultCode.MISSING_REQUIRED_OPTION

class TooFewPositionalArgumentsError(ParsingError):
    code = FaultCode.TOO_FEW_POSITIONALS

class TooManyPositionalArgumentsError(ParsingError):
    code = FaultCode.TOO_MANY_POSITIONALS

class NoSuchSubcommandError(ParsingError):
    code = FaultCode.NO_SUCH_SUBCOMMAND

class MissingSubcommandNameError(ParsingError):
    code = FaultCode.MISSING_SUBCOMMAND_NAME


class CommandWarning(Warning):
    """
    base class of developer-facing diagnostics.

    warnings never stop parsing; they go through the standard warnings
    machinery so hosts can filter, record or escalate them.
    """
    code = None

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __trigger__(self):
        warnings.warn(self, stacklevel=4)

    def __replace__(self, message=Unset, /, **overrides):
        return type(self)(nullify(message, self.message), **{**self.options, **overrides})


class UnsupportedConfigWarning(CommandWarning):
    code = FaultCode.UNSUPPORTED_CONFIG

class SkippedOptionsWarning(CommandWarning):
    code = FaultCode.SKIPPED_OPTIONS


def trigger(fault, message=Unset, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - message (optional) replaces the fault message; options are merged into the
      fault via __replace__(message, **options) before triggering.
    - errors are printed on the error console and then raised; warnings are
      emitted through warnings.warn. this function never exits the process.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(message, **options).__trigger__()


__all__ = (
    "FaultCode",
    "CommandException",
    "StructuralError",
    "ParsingError",
    "MissingDocumentationError",
    "InvalidShortNameError",
    "InvalidBindingError",
    "OptionSyntaxError",
    "MissingRequiredOptionError",
    "TooFewPositionalArgumentsError",
    "TooManyPositionalArgumentsError",
    "NoSuchSubcommandError",
    "MissingSubcommandNameError",
    "CommandWarning",
    "UnsupportedConfigWarning",
    "SkippedOptionsWarning",
    "trigger",
)
