"""
Utilities tests (Unset, coalesce, rename, mirror, ordinal, boolean).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from foldout.utils import *


class TestUnset(TestCase):
    """Sentinel semantics."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testUnionWithTypes(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", str | Unset)

    def testFinalClass(self):
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})

    def testCoalescePreservesFalsyValues(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertIsNone(coalesce(Unset))


class TestHelpers(TestCase):
    """rename(), mirror(), ordinal() and boolean()."""

    def testRenameBothForms(self):
        def f():
            pass

        self.assertEqual(rename(f, "g").__name__, "g")

        @rename("h")
        def k():
            pass

        self.assertEqual(k.__qualname__, "h")
        with self.assertRaises(TypeError):
            rename(1, "x")

    def testMirrorCopiesContainers(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [1, [2]]

        holder = Holder()
        holder.items[1].append(3)
        self.assertEqual(holder.items, [1, [2]])

    def testMirrorKeepsTuples(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ("a", ["b"])

        self.assertEqual(Holder().items, ("a", ["b"]))

    def testOrdinal(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(112), "112th")
        self.assertEqual(ordinal(23), "23rd")

    def testBoolean(self):
        for text in ("true", "TRUE", "yes", "on", "1"):
            self.assertIs(boolean(text), True)
        for text in ("false", "No", "off", "0"):
            self.assertIs(boolean(text), False)
        with self.assertRaises(ValueError):
            boolean("maybe")
        with self.assertRaises(TypeError):
            boolean(1)


if __name__ == "__main__":
    unittest.main()
