"""
Flat parser module tests (getopt scanning, validation, help injection, usage).

Scope
- Validate the long/short grammar and where scanning stops.
- Validate syntax, mandatory-option and positional faults.
- Validate the injected help flag and the usage screen.

Conventions
- Test method names follow CamelCase per project convention.
- Output is captured with contextlib redirection.
"""

from __future__ import annotations

import contextlib
import io
import unittest
from dataclasses import dataclass
from unittest import TestCase

from tagopt import (
    Counter,
    option,
    parser,
    must_parser,
    program_name,
    placeholder,
    just_one_positional_argument,
    no_positional_arguments,
)
from tagopt.faults import (
    OptionSyntaxError,
    MissingRequiredOptionError,
    TooFewPositionalArgumentsError,
    TooManyPositionalArgumentsError,
)


@dataclass
class Options:
    batch: bool = option(False, doc="emit JSON messages", short="b")
    verbose: Counter = option(Counter(), doc="increases verbosity", short="v")
    input: list[str] = option(doc="add URL to measure", short="i", default_factory=list)
    id: int = option(0, doc="ID of the input to show")


@dataclass
class Mandatory:
    batch: bool = option(False, doc="emit JSON messages", short="b")
    input: str = option("", doc="input file", required=True)


@dataclass
class OwnHelp:
    help: bool = option(False, doc="shows the manual")


@dataclass
class OwnShortHelp:
    host: str = option("", doc="host to connect to", short="h")


@dataclass
class Undocumented:
    batch: bool = False


class TestGetopt(TestCase):
    """Behavioral tests for Parser.getopt scanning."""

    def setUp(self):
        self.options = Options()
        self.parser = parser(self.options)

    def testProgramNameIsSkipped(self):
        self.parser.getopt(["prog"])
        self.assertEqual(self.parser.args, ())
        self.assertEqual(self.parser.nargs, 0)

    def testLongForms(self):
        self.parser.getopt(["prog", "--batch", "--id=7", "--input", "a.com"])
        self.assertIs(self.options.batch, True)
        self.assertEqual(self.options.id, 7)
        self.assertEqual(self.options.input, ["a.com"])

    def testShortCluster(self):
        self.parser.getopt(["prog", "-bvv", "-ia.com", "-i", "b.com"])
        self.assertIs(self.options.batch, True)
        self.assertEqual(self.options.verbose, 2)
        self.assertEqual(self.options.input, ["a.com", "b.com"])

    def testCounterAcceptsExplicitValue(self):
        self.parser.getopt(["prog", "-v", "--verbose=5"])
        self.assertEqual(self.options.verbose, 5)

    def testCounterWithEmptyValueIncrements(self):
        self.parser.getopt(["prog", "-v", "--verbose="])
        self.assertEqual(self.options.verbose, 2)

    def testFlagAcceptsExplicitValueInLongForm(self):
        self.parser.getopt(["prog", "--batch=false"])
        self.assertIs(self.options.batch, False)

    def testFlagRejectsValueInShortForm(self):
        with self.assertRaises(OptionSyntaxError) as context:
            self.parser.getopt(["prog", "-b=1"])
        self.assertEqual(context.exception.message, "option -b does not take a value")

    def testScanningStopsAtFirstPositional(self):
        self.parser.getopt(["prog", "-b", "run", "--id", "3"])
        self.assertEqual(self.parser.args, ("run", "--id", "3"))
        self.assertEqual(self.options.id, 0)

    def testDoubleDashEndsOptions(self):
        self.parser.getopt(["prog", "--", "--batch"])
        self.assertEqual(self.parser.args, ("--batch",))
        self.assertIs(self.options.batch, False)

    def testSingleDashIsPositional(self):
        self.parser.getopt(["prog", "-", "-b"])
        self.assertEqual(self.parser.args, ("-", "-b"))

    def testValueMayStartWithDash(self):
        self.parser.getopt(["prog", "--input", "-weird"])
        self.assertEqual(self.options.input, ["-weird"])

    def testUnknownLongOption(self):
        with self.assertRaises(OptionSyntaxError) as context:
            self.parser.getopt(["prog", "--bacth"])
        self.assertEqual(context.exception.message, "unknown option: --bacth")

    def testUnknownShortOption(self):
        with self.assertRaises(OptionSyntaxError) as context:
            self.parser.getopt(["prog", "-bx"])
        self.assertEqual(context.exception.message, "unknown option: -x")

    def testMissingValue(self):
        with self.assertRaises(OptionSyntaxError) as context:
            self.parser.getopt(["prog", "--id"])
        self.assertEqual(context.exception.message, "missing value for option: --id")

    def testMissingShortValue(self):
        with self.assertRaises(OptionSyntaxError) as context:
            self.parser.getopt(["prog", "-i"])
        self.assertEqual(context.exception.message, "missing value for option: -i")


class TestValidation(TestCase):
    """Behavioral tests for mandatory options and positional policies."""

    def testMissingRequiredOption(self):
        with self.assertRaises(MissingRequiredOptionError) as context:
            parser(Mandatory()).getopt(["prog", "-b"])
        self.assertEqual(context.exception.message, "missing required option: --input")

    def testRequiredOptionGiven(self):
        options = Mandatory()
        parsed = parser(options)
        parsed.getopt(["prog", "--input=a", "--input=b"])
        self.assertEqual(options.input, "b")

    def testHelpSkipsRequiredCheck(self):
        parsed = parser(Mandatory())
        help = parsed.add_help()
        parsed.getopt(["prog", "--help"])
        self.assertTrue(help)

    def testPositionalPolicy(self):
        parsed = parser(Options(), just_one_positional_argument())
        with self.assertRaises(TooFewPositionalArgumentsError):
            parsed.getopt(["prog"])
        with self.assertRaises(TooManyPositionalArgumentsError):
            parsed.getopt(["prog", "a", "b"])
        parsed.getopt(["prog", "a"])
        self.assertEqual(parsed.args, ("a",))

    def testUnknownConfigRejected(self):
        with self.assertRaises(TypeError):
            parser(Options(), "verbose")


class TestHelpInjection(TestCase):
    """Behavioral tests for Parser.add_help."""

    def testHelpFlagInjected(self):
        parsed = parser(Options())
        help = parsed.add_help()
        self.assertFalse(help)
        self.assertEqual(parsed.descriptors[-1].name, "help")
        self.assertEqual(parsed.descriptors[-1].short, "h")
        self.assertEqual(parsed.descriptors[-1].doc, "Prints this help message")
        parsed.getopt(["prog", "-h"])
        self.assertTrue(help)

    def testEveryBuildGetsItsOwnCell(self):
        options = Options()
        first = parser(options)
        first_help = first.add_help()
        first.getopt(["prog", "--help"])
        second = parser(options)
        second_help = second.add_help()
        self.assertTrue(first_help)
        self.assertFalse(second_help)

    def testOwnLongHelpPreserved(self):
        options = OwnHelp()
        parsed = parser(options)
        self.assertIsNone(parsed.add_help())
        parsed.getopt(["prog", "--help"])
        self.assertIs(options.help, True)

    def testOwnShortHelpPreserved(self):
        options = OwnShortHelp()
        parsed = parser(options)
        self.assertIsNone(parsed.add_help())
        parsed.getopt(["prog", "-h", "example.com"])
        self.assertEqual(options.host, "example.com")


class TestUsage(TestCase):
    """Behavioral tests for usage rendering and terminating variants."""

    def testPrintUsage(self):
        parsed = parser(Mandatory(), program_name("convert"), placeholder("<file>"))
        parsed.add_help()
        stream = io.StringIO()
        parsed.print_usage(stream)
        self.assertEqual(stream.getvalue(), (
            "\n"
            "Usage: convert [options] <file>\n"
            "\n"
            "Options:\n"
            "\n"
            "  -b, --batch\n"
            "             emit JSON messages.\n"
            "\n"
            "      --input value\n"
            "             input file. This option is mandatory.\n"
            "\n"
            "  -h, --help\n"
            "             Prints this help message.\n"
            "\n"
        ))

    def testPrintUsageHidesPlaceholderWithoutPositionals(self):
        parsed = parser(Mandatory(), program_name("convert"), no_positional_arguments())
        stream = io.StringIO()
        parsed.print_usage(stream)
        self.assertTrue(stream.getvalue().startswith("\nUsage: convert [options]\n"))

    def testMustGetoptExits(self):
        parsed = parser(Options(), program_name("prog"))
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            parsed.must_getopt(["prog", "--bogus"])
        self.assertEqual(context.exception.code, 1)
        self.assertTrue(stderr.getvalue().startswith("error: unknown option: --bogus\n\nUsage: prog [options]"))

    def testMustParserExits(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            must_parser(Undocumented())
        self.assertEqual(context.exception.code, 1)
        self.assertEqual(stderr.getvalue(), "error: field 'batch' has no documentation\n")


if __name__ == "__main__":
    unittest.main()
