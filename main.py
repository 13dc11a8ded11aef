import sys
from dataclasses import dataclass, field

from rich.pretty import pprint

from tagopt import *


@dataclass
class RunWebsitesOptions:
    enable_http3: bool = option(False, doc="enable HTTP3 measurements")


@dataclass
class RunIMOptions:
    test_all_endpoints: bool = option(False, doc="test all available endpoints")


@dataclass
class RunOptions:
    input: list[str] = option(doc="add URL to measure", short="i", default_factory=list)
    websites: RunWebsitesOptions = option(doc="-", default_factory=RunWebsitesOptions)
    im: RunIMOptions = option(doc="-", default_factory=RunIMOptions)


@dataclass
class ListOptions:
    id: int = option(0, doc="ID of the input to show")


@dataclass
class Options:
    batch: bool = option(False, doc="emit JSON formatted logs", short="b")
    verbose: Counter = option(Counter(), doc="increases verbosity", short="v")
    run: RunOptions = field(default_factory=RunOptions, metadata={"doc": "-"})
    list: ListOptions = field(default_factory=ListOptions, metadata={"doc": "-"})


if __name__ == '__main__':
    options = Options()
    cli = command(
        "network measurement tool", options,
        subcommand(
            "run", "runs nettests", options.run,
            leaf(
                "websites", "checks for blocked websites",
                options.run.websites,
                no_positional_arguments(),
            ),
            leaf(
                "im", "checks for blocked IM apps",
                options.run.im,
                no_positional_arguments(),
            ),
        ),
        leaf(
            "list", "lists available measurements", options.list,
            no_positional_arguments(),
        ),
        colorful=True,
    )
    match cli.must_resolve():
        case Selected(options=RunWebsitesOptions()):
            pprint(options)
        case Selected(options=RunIMOptions()):
            pprint(options)
        case Selected(options=ListOptions()):
            pprint(options)
        case Selected(options=HasPrintedHelp()):
            sys.exit(1)
        case selected:
            sys.exit("unhandled selected command: %r" % (selected,))
