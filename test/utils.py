"""
Utils module tests (sentinel and identifier helpers).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from tagopt.utils import UnsetType, Unset, nullify, kebabize, punctuate


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testSubclassingRejected(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testNoUnionSupport(self):
        with self.assertRaises(TypeError):
            Unset | int

    def testNullify(self):
        self.assertEqual(nullify(Unset, "default"), "default")
        self.assertIsNone(nullify(None, "default"))
        self.assertEqual(nullify("", "default"), "")


class TestHelpers(TestCase):
    """Behavioral tests for kebabize and punctuate."""

    def testKebabize(self):
        self.assertEqual(kebabize("enable_http3"), "enable-http3")
        self.assertEqual(kebabize("EnableHTTP3"), "enable-http3")
        self.assertEqual(kebabize("URLGetter"), "url-getter")
        self.assertEqual(kebabize("_private__name_"), "private-name")

    def testKebabizeRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            kebabize(3)

    def testPunctuate(self):
        self.assertEqual(punctuate("done"), "done.")
        self.assertEqual(punctuate("done."), "done.")


if __name__ == "__main__":
    unittest.main()
