"""
Rendering tests (usage listing and current-values dump).

Scope
- Validate the usage header, option spellings, descriptions, choices and text entries.
- Validate description alignment and the name-column cap.
- Validate the current-values dump: explicit, default, unset and unknown parameters.

Conventions
- Test method names follow CamelCase per project convention.
- Output is captured from a StringIO-backed console (no terminal, no color).
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from foldout import Parser
from foldout import render


def _lines(parser, method):
    buffer = io.StringIO()
    getattr(parser, method)(file=buffer)
    return buffer.getvalue().splitlines()


class TestUsage(TestCase):
    """Behavioral tests for the usage listing."""

    def setUp(self):
        self.parser = Parser(["/opt/bin/tool"], colorful=False)
        self.parser.add_option("foo", "x", alias="f", descr="the foo")
        self.parser.add_option("level", "1", descr="the level")
        self.parser.add_documentation("Modes:")
        self.parser.add_option("mode", "basic", choices=("basic", "advanced"), descr="the mode")

    def testHeader(self):
        lines = _lines(self.parser, "print_usage")
        self.assertEqual(lines[0], "Usage: tool [options]")
        self.assertEqual(lines[1], "")

    def testEntriesInRegistrationOrder(self):
        lines = _lines(self.parser, "print_usage")[2:]
        self.assertIn("--foo (-f) [x]", lines[0])
        self.assertIn("--level [1]", lines[1])
        self.assertEqual(lines[2], "Modes:")
        self.assertIn("--mode [basic]", lines[3])

    def testChoices(self):
        lines = _lines(self.parser, "print_usage")
        self.assertTrue(lines[-1].endswith("the mode  {basic | advanced}"))

    def testDescriptionsAligned(self):
        lines = _lines(self.parser, "print_usage")[2:]
        columns = {lines[0].index("the foo"), lines[1].index("the level"), lines[3].index("the mode")}
        self.assertEqual(len(columns), 1)

    def testNameColumnCapped(self):
        parser = Parser(["tool"], colorful=False)
        parser.add_option("an-exceedingly-long-option-name", "with-a-long-default", descr="long")
        parser.add_option("x", descr="short")
        lines = _lines(parser, "print_usage")[2:]
        # the long name overflows; the short one is padded to the cap
        self.assertEqual(lines[1].index("short"), len(render.INDENT) + render.NAME_WIDTH + 2)

    def testHiddenOptionsOmitted(self):
        self.parser.add_option("secret", hidden=True)
        self.assertFalse(any("--secret" in line for line in _lines(self.parser, "print_usage")))

    def testRenderableWithoutParserConsole(self):
        console = Console(file=io.StringIO(), color_system=None, width=120)
        with console.capture() as capture:
            console.print(render.usage(self.parser, colorful=False))
        self.assertIn("Usage: tool [options]", capture.get())


class TestValues(TestCase):
    """Behavioral tests for the current-values dump."""

    def testValues(self):
        parser = Parser(["tool", "--foo", "y", "--secret", "s"], colorful=False)
        parser.add_option("foo", "x")
        parser.add_option("level", "1")
        parser.add_option("secret", hidden=True)
        parser.parse()
        lines = _lines(parser, "print_values")
        self.assertEqual(lines[0], "Current parameters for tool")
        self.assertEqual(lines[1].strip(), "--foo: y")
        self.assertEqual(lines[2].strip(), "--level: 1 (default)")
        self.assertEqual(lines[3], "")
        self.assertEqual(lines[4], "Unknown parameters")
        self.assertEqual(lines[5].strip(), "--secret: s")

    def testUnsetValuesShowDefault(self):
        parser = Parser(["tool"], colorful=False)
        parser.add_option("foo", "x")
        lines = _lines(parser, "print_values")
        self.assertEqual(lines[1].strip(), "--foo: [x]")
        self.assertNotIn("Unknown parameters", lines)


if __name__ == "__main__":
    unittest.main()
