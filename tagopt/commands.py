"""
Hierarchical commands.

A command is a node of a tree: a name, a one-line description, an option
record, and either children (a dispatching node) or a positional policy (a
leaf). Resolving an argument vector walks the tree from the root:

    prog -v run websites -x arg
    └──┬──┘ └┬┘ └──┬───┘ └──┬──┘
     root    │     leaf     positionals of the leaf
          dispatching

Each node parses its own options, stops at the first positional token, and
hands the residual vector (first token = child name) to the matching child.
The result is a Selected(options, args) pair naming the leaf's record and its
positionals, or Selected(HasPrintedHelp(), ()) when help was shown instead.

Help forms (all equivalent)
- prog run websites --help
- prog help run websites
- prog              (bare top-level call on a tree with children)

Example
    @dataclass
    class Global:
        verbose: Counter = option(Counter(), doc="increases verbosity", short="v")

    @dataclass
    class Websites:
        batch: bool = option(False, doc="emit JSON messages", short="b")

    root = command(
        "checks for internet censorship", Global(),
        subcommand("run", "runs nettests", Global(),
            leaf("websites", "checks for blocked websites", Websites(), no_positional_arguments()),
        ),
    )

    match root.must_resolve():
        case Selected(options=HasPrintedHelp()):
            pass
        case Selected(options=Websites() as options):
            ...
"""
import dataclasses
import functools
import os
import shlex
import sys
from collections.abc import Iterable
from typing import NamedTuple, final

from .faults import (
    CommandException,
    StructuralError,
    ParsingError,
    NoSuchSubcommandError,
    MissingSubcommandNameError,
    UnsupportedConfigWarning,
    trigger,
)
from .flat import Parser, ProgramName, Placeholder, program_name, placeholder
from .positionals import Positionals, unrestricted
from .rendering import render
from .utils import Unset, nullify


@final
class HasPrintedHelp:
    """
    Marker returned in place of an option record when help was printed.

    behavior
    - identity: process-wide singleton, so `is` comparisons work.
    - matching: usable as a class pattern (case Selected(options=HasPrintedHelp())).
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __repr__(self):
        return "HasPrintedHelp()"

    def __init_subclass__(cls):
        raise TypeError("type 'HasPrintedHelp' is not an acceptable base type")


class Selected(NamedTuple):
    """
    Outcome of a resolution: the selected leaf's option record (or the
    HasPrintedHelp marker) and its residual positional arguments.
    """
    options: object
    args: tuple

    @property
    def nargs(self):
        return len(self.args)


@dataclasses.dataclass
class _HelpRequest:
    """
    Record of the automatic "help" subcommand; selecting it re-runs the
    resolution with "--help" appended to the remaining words.
    """


def _routable(name):
    # children are selected by exact match against a single argv token
    if isinstance(name, str) and (len(name.split()) != 1 or name != name.strip()):
        raise ValueError("subcommand name must be a single word, got %r" % (name,))
    return name


class Command:
    """
    Node of a command tree.

    Attributes (read-only)
    - name: routing token (for the root, the displayed program name).
    - descr: one-line description.
    - options: the option record the node parses into.
    - children: child commands, sorted by name.
    - positionals: positional policy (only meaningful on leaves).
    - placeholder: positional placeholder of the usage line.
    - colorful: whether help and error lines are styled.

    Errors
    - TypeError: name/descr not strings, or a child that is not a Command.
    - ValueError: empty name, child name that is not a single word, duplicate
      child names, child already mounted.
    """

    def __init__(self, name, descr, options, /, *children, colorful=False):
        if not isinstance(name, str):
            raise TypeError("command name must be a string")
        if not name.strip():
            raise ValueError("command name must not be empty")
        if not isinstance(descr, str):
            raise TypeError("command description must be a string")

        names = set()
        for child in children:
            if not isinstance(child, Command):
                raise TypeError("subcommands must be commands, got %s" % type(child).__name__)
            if child.name in names:
                raise ValueError("subcommand name %r is already in use" % child.name)
            if child._mounted:
                raise ValueError("command %r already belongs to another command" % child.name)
            _routable(child.name)
            names.add(child.name)
        for child in children:
            child._mounted = True

        self._name = name
        self._descr = descr
        self._options = options
        self._children = tuple(sorted(children, key=lambda child: child.name))
        self._positionals = unrestricted()
        self._placeholder = ""
        self._colorful = bool(colorful)
        self._mounted = False

    @property
    def name(self):
        return self._name

    @property
    def descr(self):
        return self._descr

    @property
    def options(self):
        return self._options

    @property
    def children(self):
        return self._children

    @property
    def positionals(self):
        return self._positionals

    @property
    def colorful(self):
        return self._colorful

    @property
    def placeholder(self):
        if self._placeholder:
            return self._placeholder
        if self._children:
            return "<subcommand> [...]"
        if self._positionals.maximum > 1:
            return "<argument> [<argument> ...]"
        if self._positionals.maximum == 1:
            return "<argument>"
        return ""

    def configure(self, *configs):
        """
        Apply configs to this node and return it.

        Accepted
        - Positionals (leaves only).
        - placeholder(text); an empty text keeps the computed placeholder.
        - program_name(name), before the node is mounted under a parent.

        Anything else is ignored with an UnsupportedConfigWarning.
        """
        for config in configs:
            match config:
                case Positionals() if not self._children:
                    self._positionals = config
                case Placeholder(text=text):
                    self._placeholder = text or self._placeholder
                case ProgramName(name=name) if not self._mounted:
                    if name:
                        self._name = name
                case _:
                    trigger(UnsupportedConfigWarning(
                        "command %r ignores config %r" % (self._name, config),
                        command=self._name,
                        config=config,
                    ))
        return self

    def resolve(self, args=Unset, /):
        """
        Resolve an argument vector against the tree rooted here.

        Parameters
        - args: sys.argv by default; a string is split like a shell would;
          otherwise a non-empty sequence of strings, program name first.

        Returns
        - Selected(options, args) for the selected leaf, or
          Selected(HasPrintedHelp(), ()) when help was printed.

        Raises
        - StructuralError when an option record cannot be bound, and
          ParsingError subclasses for user input errors. Both are reported
          on the standard error before being raised.
        - ValueError / TypeError for an unusable args value.
        """
        if args is Unset:
            args = sys.argv
        elif isinstance(args, str):
            args = shlex.split(args)
        elif not isinstance(args, Iterable):
            raise TypeError("resolve() argument must be a string or an iterable of strings")
        args = list(args)
        if not all(isinstance(arg, str) for arg in args):
            raise TypeError("resolve() argument must be a string or an iterable of strings")
        if not args:
            raise ValueError("resolve() argument must hold at least the program name")

        while True:
            selected = self._resolve((self,), args)
            if not isinstance(selected.options, _HelpRequest):
                return selected
            # "prog help run websites" is "prog run websites --help"
            args = [args[0], *selected.args, "--help"]

    def must_resolve(self, args=Unset, /):
        """
        resolve() variant exiting with status 1 on any (already reported) fault.
        """
        try:
            return self.resolve(args)
        except CommandException:
            sys.exit(1)

    def _resolve(self, chain, args):
        tool = chain[0].name
        route = " ".join(node.name for node in chain)
        colorful = chain[0].colorful

        try:
            parser = Parser(self._options, program_name(route), placeholder(self.placeholder))
        except StructuralError as exception:
            trigger(exception, tool=tool, internal=True, colorful=colorful)

        help = parser.add_help()
        try:
            parser.getopt(args)
        except ParsingError as exception:
            trigger(exception, tool=tool, route=route, colorful=colorful)

        if help:
            render(chain, colorful=colorful)
            return Selected(HasPrintedHelp(), ())

        if not self._children:
            try:
                self._positionals.check(parser.nargs)
            except ParsingError as exception:
                message = "%s: for command %s: %s" % (tool, self._name, exception.message)
                trigger(exception, message, route=route, colorful=colorful)
            return Selected(self._options, parser.args)

        if not parser.nargs:
            if len(chain) == 1:
                render(chain, colorful=colorful)
                return Selected(HasPrintedHelp(), ())
            trigger(MissingSubcommandNameError("expected subcommand name"), tool=tool, route=route, colorful=colorful)

        name = parser.args[0]
        for child in self._children:
            if child.name == name:
                return child._resolve((*chain, child), list(parser.args))
        trigger(
            NoSuchSubcommandError("no such subcommand: '%s'" % name, input=name),
            tool=tool,
            route=route,
            colorful=colorful,
        )

    def __repr__(self):
        return "Command(%r, children=%r)" % (self._name, [child.name for child in self._children])


def command(descr, options, /, *subcommands, name=Unset, colorful=False):
    """
    Build the top-level command.

    Parameters
    - descr: one-line description of the program.
    - options: global option record.
    - subcommands: children (subcommand() or leaf() results).
    - name: displayed program name, os.path.basename(sys.argv[0]) by default.
    - colorful: style help screens and error lines.

    A "help" leaf is appended unless a child already has that name.
    """
    if not any(isinstance(child, Command) and child.name == "help" for child in subcommands):
        subcommands = (*subcommands, leaf("help", "Prints generic or command-specific help", _HelpRequest()))
    name = nullify(name, os.path.basename(sys.argv[0]) if sys.argv else "") or "program"
    return Command(name, descr, options, *subcommands, colorful=colorful)


def subcommand(name, descr, options, /, *subcommands):
    """
    Build a dispatching node.
    """
    return Command(_routable(name), descr, options, *subcommands)


def leaf(name, descr, options, /, *configs):
    """
    Build a leaf; configs are applied as with Command.configure().
    """
    return Command(_routable(name), descr, options).configure(*configs)


def resolve(command, args=Unset, /):
    if not isinstance(command, Command):
        raise TypeError("resolve() argument must be a command")
    return command.resolve(args)


def must_resolve(command, args=Unset, /):
    if not isinstance(command, Command):
        raise TypeError("must_resolve() argument must be a command")
    return command.must_resolve(args)


__all__ = (
    "Command",
    "Selected",
    "HasPrintedHelp",
    "command",
    "subcommand",
    "leaf",
    "resolve",
    "must_resolve",
)
