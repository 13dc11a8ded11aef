"""
Flat getopt-style parser.

A Parser binds the options of one record (see tagopt.options) and scans an
argument vector against them. It knows nothing about subcommands: it stops
at the first positional token and leaves the remainder in Parser.args, which
is what lets a command tree hand the residual vector down to a child.

Grammar
- args[0] is the program name and is skipped.
- "--" ends option scanning (and is consumed).
- "-" or any token not starting with "-" ends option scanning (kept).
- long form: "--name", "--name=value", "--name value".
- short form: clusters "-abc", attached "-ivalue", detached "-i value".
- flags and counters take no value; in long form they accept "=value".

Example
    @dataclass
    class Options:
        input: str = option("", doc="input file", short="i", required=True)
        verbose: Counter = option(Counter(), doc="increases verbosity", short="v")

    parsed = parser(Options(), program_name("convert"), just_one_positional_argument())
    parsed.getopt(["convert", "-vv", "--input", "in.txt", "out.txt"])
    parsed.args   # → ("out.txt",)
"""
import collections
import os
import sys

from .faults import (
    CommandException,
    StructuralError,
    OptionSyntaxError,
    MissingRequiredOptionError,
    console,
)
from .options import Descriptor, describe, _boolean
from .positionals import Positionals, unrestricted
from . import rendering


class ProgramName:
    """
    Config overriding the program name shown by the usage screen.
    """

    __slots__ = ("name",)

    def __init__(self, name):
        if not isinstance(name, str):
            raise TypeError("program name must be a string")
        self.name = name

    def __repr__(self):
        return "program_name(%r)" % self.name


class Placeholder:
    """
    Config overriding the positional-arguments placeholder of the usage line.
    """

    __slots__ = ("text",)

    def __init__(self, text):
        if not isinstance(text, str):
            raise TypeError("placeholder must be a string")
        self.text = text.strip()

    def __repr__(self):
        return "placeholder(%r)" % self.text


def program_name(name, /):
    return ProgramName(name)


def placeholder(text, /):
    return Placeholder(text)


class HelpCell:
    """
    Storage of an injected help flag. It belongs to one parser build, so a
    command node never remembers that help was asked for.
    """

    __slots__ = ("value",)

    def __init__(self):
        self.value = False

    def __bool__(self):
        return self.value

    def __repr__(self):
        return "HelpCell(%r)" % self.value


class Parser:
    """
    Option table of one record plus the state of the last scan.

    Attributes (read-only)
    - record: the bound option record.
    - program: name shown by the usage screen.
    - placeholder: positional placeholder shown by the usage screen.
    - positionals: the Positionals policy checked by getopt().
    - descriptors: registered descriptors, help flag included once added.
    - args: positionals left by the last getopt() call.
    - nargs: len(args).

    Raises StructuralError subclasses at construction (see tagopt.options)
    and TypeError for objects that are not configs.
    """

    def __init__(self, record, /, *configs, colorful=False):
        self._record = record
        self._options = [(descriptor, record) for descriptor in describe(record)]
        self._program = os.path.basename(sys.argv[0]) if sys.argv else ""
        self._placeholder = "[parameters ...]"
        self._positionals = unrestricted()
        self._colorful = bool(colorful)
        self._help = None
        self._args = ()
        for config in configs:
            match config:
                case Positionals():
                    self._positionals = config
                case ProgramName(name=name) if name:
                    self._program = name
                case Placeholder(text=text) if text:
                    self._placeholder = text
                case ProgramName() | Placeholder():
                    pass
                case _:
                    raise TypeError("%r is not a parser config" % (config,))

    @property
    def record(self):
        return self._record

    @property
    def program(self):
        return self._program

    @property
    def placeholder(self):
        return self._placeholder

    @property
    def positionals(self):
        return self._positionals

    @property
    def descriptors(self):
        return tuple(descriptor for descriptor, _ in self._options)

    @property
    def args(self):
        return self._args

    @property
    def nargs(self):
        return len(self._args)

    def add_help(self):
        """
        Register "--help/-h" unless the record already uses either name.

        Returns the HelpCell the flag writes to, or None when the record
        defines its own help option. Calling it twice returns the same cell.
        """
        if self._help is not None:
            return self._help
        for descriptor, _ in self._options:
            if descriptor.short == "h" or descriptor.name == "help":
                return None
        self._help = HelpCell()
        self._options.append((Descriptor("help", "h", "Prints this help message", False, "flag", _boolean, "value"), self._help))
        return self._help

    def _long(self, name):
        for descriptor, target in self._options:
            if descriptor.name == name:
                return descriptor, target
        raise OptionSyntaxError("unknown option: --%s" % name, input=name)

    def _short(self, char):
        for descriptor, target in self._options:
            if descriptor.short == char:
                return descriptor, target
        raise OptionSyntaxError("unknown option: -%s" % char, input=char)

    def getopt(self, args, /):
        """
        Scan args, assign the bound record, then validate.

        Validation order: mandatory options, then the positional policy. Both
        checks are skipped when the injected help flag fired.

        Raises OptionSyntaxError, MissingRequiredOptionError and the
        positional errors of tagopt.positionals.
        """
        tokens = collections.deque(args[1:])
        seen = set()

        while tokens:
            token = tokens[0]
            if token == "--":
                tokens.popleft()
                break
            if token == "-" or not token.startswith("-"):
                break
            tokens.popleft()

            if token.startswith("--"):
                name, separator, value = token[2:].partition("=")
                descriptor, target = self._long(name)
                if not separator:
                    value = None
                    if not descriptor.flag:
                        if not tokens:
                            raise OptionSyntaxError("missing value for option: --%s" % name, input=name)
                        value = tokens.popleft()
                descriptor.assign(target, value)
                seen.add(descriptor)
                continue

            cluster = token[1:]
            for index, char in enumerate(cluster):
                descriptor, target = self._short(char)
                seen.add(descriptor)
                if descriptor.flag:
                    if cluster[index + 1:index + 2] == "=":
                        raise OptionSyntaxError("option -%s does not take a value" % char, input=char)
                    descriptor.assign(target)
                    continue
                value = cluster[index + 1:]
                if not value:
                    if not tokens:
                        raise OptionSyntaxError("missing value for option: -%s" % char, input=char)
                    value = tokens.popleft()
                descriptor.assign(target, value)
                break

        self._args = tuple(tokens)

        if self._help:
            return
        for descriptor, _ in self._options:
            if descriptor.required and descriptor not in seen:
                raise MissingRequiredOptionError("missing required option: --%s" % descriptor.name, input=descriptor.name)
        self._positionals.check(len(self._args))

    def must_getopt(self, args, /):
        """
        getopt() variant printing "error: <message>" and the usage to the
        standard error, then exiting with status 1.
        """
        try:
            self.getopt(args)
        except CommandException as exception:
            console.print("error: %s" % exception.message, soft_wrap=True, markup=False)
            self.print_usage(sys.stderr)
            sys.exit(1)

    def print_usage(self, file=None, /):
        """
        Print the usage screen to file (standard output by default).
        """
        if file is None:
            rendering.usage(self, colorful=self._colorful)
        else:
            rendering.usage(self, file=file, colorful=self._colorful)

    def __repr__(self):
        return "Parser(%r, program=%r)" % (type(self._record).__name__, self._program)


def parser(record, /, *configs, colorful=False):
    """
    Build a Parser for record; see Parser for configs and errors.
    """
    return Parser(record, *configs, colorful=colorful)


def must_parser(record, /, *configs, colorful=False):
    """
    parser() variant printing "error: <message>" to the standard error and
    exiting with status 1 when the record cannot be bound.
    """
    try:
        return Parser(record, *configs, colorful=colorful)
    except StructuralError as exception:
        console.print("error: %s" % exception.message, soft_wrap=True, markup=False)
        sys.exit(1)


__all__ = (
    "Parser",
    "HelpCell",
    "ProgramName",
    "Placeholder",
    "program_name",
    "placeholder",
    "parser",
    "must_parser",
)
