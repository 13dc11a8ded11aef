"""
Help and usage rendering.

Two entry points, both printing through rich:
- render(chain, ...): full contextual help for a resolution chain (root first),
  as shown by "-h/--help", the "help" subcommand, or a bare top-level call.
- usage(parser, ...): the flat parser's usage screen, for programs without
  subcommands.

Layout of render()

    Usage: prog [options] run websites

    Checks for blocked websites.

    Options for prog:

      -b, --batch
                 Emit JSON messages.

    Subcommands:

      run websites
                 Checks for blocked websites.

Palette keys (only applied when colorful is set; override them with a
__styles__ mapping in __main__): usage-label, program-name, section-label,
option-name, subcommand-name, description.
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .faults import StructuralError, SkippedOptionsWarning, trigger
from .options import describe
from .utils import Unset, punctuate

console = Console(highlight=False)

# Column layout
DESCRIPTION_WIDTH = 72
DOC_WIDTH = 64
DOC_INDENT = 13


def _styler(colorful):
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",  # cyan headline
        "program-name": "bold #FF4D94",  # magenta-pink brand pop
        "section-label": "bold #FFFFFF",  # pure white headers
        "option-name": "bold #22C55E",  # green option names
        "subcommand-name": "bold #36C5F0",  # sky-blue subcommands
        "description": "#9CA3AF",  # muted gray
    } | getattr(__import__("__main__"), "__styles__", {}))

    def text(fragment, style=""):
        return Text(fragment, styles[style] if colorful and style else "")

    return text


def _wrap(fragment, width, style=""):
    # words longer than width get a line of their own instead of being split
    lines = Text(punctuate(fragment), style).wrap(console, width, overflow="ignore")
    for line in lines:
        line.rstrip()
    return list(lines)


def _print(lines, file):
    target = console if file is Unset else Console(file=file, highlight=False)
    target.print(Text("\n").join(lines), soft_wrap=True)


def options(descriptors, *, colorful=False):
    """
    Lines describing each option: its invocation form, then its doc wrapped
    and indented, then a blank separator.
    """
    text = _styler(colorful)
    lines = []
    for descriptor in descriptors:
        lines.append(text(descriptor.invocation, "option-name"))
        doc = punctuate(descriptor.doc)
        if descriptor.required:
            doc += " This option is mandatory."
        for line in _wrap(doc, DOC_WIDTH, text("", "description").style):
            lines.append(Text(" " * DOC_INDENT) + line)
        lines.append(Text())
    return lines


def _descriptors(node):
    # best-effort: a node whose record cannot be described is left out of the help
    try:
        return describe(node.options)
    except StructuralError as exception:
        trigger(SkippedOptionsWarning(
            "skipping options of %r: %s" % (node.name, exception.message),
            command=node.name,
            exception=exception,
        ))
        return None


def _subcommands(node, names, lines, text):
    for child in node.children:
        path = (*names, child.name)
        if child.children:
            _subcommands(child, path, lines, text)
            continue
        lines.append(Text("  ") + text(" ".join(path), "subcommand-name"))
        for line in _wrap(child.descr, DOC_WIDTH, text("", "description").style):
            lines.append(Text(" " * DOC_INDENT) + line)
        lines.append(Text())


def render(chain, /, *, file=Unset, colorful=False):
    """
    Print the full help for the last node of chain.

    Parameters
    - chain: sequence of commands from the root to the node being described.
    - file: optional text stream; defaults to the standard output.
    - colorful: apply the palette.

    Sections
    - brief usage walking the chain ("[options]" after every node declaring options),
      followed by the terminal node's positional placeholder;
    - the terminal node's description (wrapped, period-terminated);
    - one "Options for <name>:" block per chain node with options;
    - the flattened, depth-first listing of the terminal node's descendant leaves.
    """
    text = _styler(colorful)
    node = chain[-1]
    # described once so a broken record warns once per render
    tables = [(entry, _descriptors(entry)) for entry in chain]

    usage = Text.assemble(text("Usage", "usage-label"), ":")
    for entry, descriptors in tables:
        usage.append(" ").append_text(text(entry.name, "program-name"))
        if descriptors:
            usage.append(" [options]")
    if node.placeholder:
        usage.append(" ").append(node.placeholder)

    lines = [Text(), usage, Text()]
    lines.extend(_wrap(node.descr, DESCRIPTION_WIDTH, text("", "description").style))
    lines.append(Text())

    for entry, descriptors in tables:
        if not descriptors:
            continue
        lines.append(text("Options for %s:" % entry.name, "section-label"))
        lines.append(Text())
        lines.extend(options(descriptors, colorful=colorful))

    if node.children:
        lines.append(text("Subcommands:", "section-label"))
        lines.append(Text())
        _subcommands(node, (), lines, text)

    _print(lines, file)


def usage(parser, /, *, file=Unset, colorful=False):
    """
    Print the flat parser's usage screen: brief usage, then every registered
    option (including an injected help flag).
    """
    text = _styler(colorful)
    brief = Text.assemble(text("Usage", "usage-label"), ":", " ")
    brief.append_text(text(parser.program, "program-name")).append(" [options]")
    if parser.positionals.maximum >= 1 and parser.placeholder:
        brief.append(" ").append(parser.placeholder)
    lines = [Text(), brief, Text(), text("Options:", "section-label"), Text()]
    lines.extend(options(parser.descriptors, colorful=colorful))
    _print(lines, file)


__all__ = (
    "render",
    "usage",
    "options",
)
