# python
"""
Arguments module behavioral tests (Option and Cardinal construction).

Scope
- Validate public declarations (Option, Cardinal): construction, normalization, read-only views.
- Validate alias grammar, policy defaults and capacity limits for options.
- Validate arity rules for cardinals against their slots.
- Validate occurrence counting through parse()/bind() and representation.

Conventions
- Test method names follow CamelCase per project convention.
- Never pass explicit None for any parameter; omit instead.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from slotargs import Array, Cardinal, Maybe, Option, Policy, Scalar, Switch, Vector


class TestOption(TestCase):
    """Behavioral tests for Option (named switch) declarations."""

    def testOptionRequiresAtLeastOneAlias(self):
        with self.assertRaises(TypeError):
            Option("port", Scalar("u16", 80))

    def testShortAliasGrammar(self):
        for short in ("p", "-pp", "--", "- "):
            with self.subTest(short=short):
                with self.assertRaises(ValueError):
                    Option("port", Scalar("u16", 80), short)

    def testLongAliasGrammar(self):
        for long in ("-port", "port", "--_port", "--", "--po rt"):
            with self.subTest(long=long):
                with self.assertRaises(ValueError):
                    Option("port", Scalar("u16", 80), long=long)

    def testAliasesAreStored(self):
        option = Option("port", Scalar("u16", 80), "-p", "--port")
        self.assertEqual(option.aliases, ("-p", "--port"))
        self.assertEqual(Option("log", Switch(), long="--log").aliases, ("--log",))
        self.assertIsNone(Option("log", Switch(), long="--log").short)

    def testNameValidation(self):
        with self.assertRaises(ValueError):
            Option("  ", Switch(), "-k")
        with self.assertRaises(ValueError):
            Option("keep alive", Switch(), "-k")
        with self.assertRaises(TypeError):
            Option(3, Switch(), "-k")

    def testSlotMustBeAValueSlot(self):
        with self.assertRaises(TypeError):
            Option("port", 8080, "-p")

    def testDescrDefaultsToNoneAndRejectsEmpty(self):
        self.assertIsNone(Option("keep", Switch(), "-k").descr)
        self.assertEqual(Option("keep", Switch(), "-k", descr=" open keep-alive ").descr, "open keep-alive")
        with self.assertRaises(ValueError):
            Option("keep", Switch(), "-k", descr="  ")

    def testPolicyDefaultsToTheSlotPolicy(self):
        self.assertEqual(Option("port", Scalar("u16", 80), "-p").policy, Policy.overwrite())
        self.assertEqual(Option("chars", Array("char", [None] * 3), "-c").policy, Policy.bounded())
        self.assertEqual(Option("mode", Maybe("str"), "-m", policy=Policy.single()).policy, Policy.single())

    def testPolicyMustBeAPolicy(self):
        with self.assertRaises(TypeError):
            Option("port", Scalar("u16", 80), "-p", policy="overwrite")

    def testCapacityCannotExceedFixedSlot(self):
        with self.assertRaises(ValueError):
            Option("chars", Array("char", [None] * 3), "-c", policy=Policy.bounded(4))
        Option("chars", Array("char", [None] * 3), "-c", policy=Policy.bounded(2))

    def testSortKeyDefaultsToName(self):
        self.assertEqual(Option("port", Scalar("u16", 80), "-p").sort_key, "port")
        self.assertEqual(Option("port", Scalar("u16", 80), "-p", sort_key="a-port").sort_key, "a-port")
        with self.assertRaises(ValueError):
            Option("port", Scalar("u16", 80), "-p", sort_key="")

    def testOptionalIsBoolean(self):
        self.assertIs(Option("user", Maybe("str"), "-u", optional=1).optional, True)
        self.assertIs(Option("user", Maybe("str"), "-u").optional, False)

    def testParseCountsOccurrences(self):
        slot = Scalar("u16", 80)
        option = Option("port", slot, "-p")
        option.parse("8000")
        option.parse("8080")
        self.assertEqual(option.count, 2)
        self.assertEqual(slot.value, 8080)

    def testBooleanFollowsTheSlot(self):
        self.assertTrue(Option("keep", Switch(), "-k").boolean)
        self.assertFalse(Option("port", Scalar("u16", 80), "-p").boolean)

    def testReprUsesTypename(self):
        self.assertTrue(repr(Option("port", Scalar("u16", 80), "-p")).startswith("option(name='port'"))


class TestCardinal(TestCase):
    """Behavioral tests for Cardinal (positional) declarations."""

    def testBooleanSlotRejected(self):
        with self.assertRaises(TypeError):
            Cardinal("FLAG", Switch())

    def testArityDefaultsFromSlot(self):
        self.assertIsNone(Cardinal("PATHS", Vector("path")).arity)
        self.assertEqual(Cardinal("PAIR", Array("u8", [0, 0])).arity, 2)
        self.assertEqual(Cardinal("NAME", Scalar("str", "x")).arity, 1)

    def testScalarTakesExactlyOneToken(self):
        with self.assertRaises(ValueError):
            Cardinal("NAME", Scalar("str", "x"), 2)
        with self.assertRaises(ValueError):
            Cardinal("NAME", Maybe("str"), None)

    def testArityValidation(self):
        with self.assertRaises(ValueError):
            Cardinal("FILES", Vector("str"), 0)
        with self.assertRaises(TypeError):
            Cardinal("FILES", Vector("str"), "2")
        with self.assertRaises(TypeError):
            Cardinal("FILES", Vector("str"), True)

    def testArityCannotExceedFixedSlot(self):
        with self.assertRaises(ValueError):
            Cardinal("PAIR", Array("u8", [0, 0]), 3)
        with self.assertRaises(ValueError):
            Cardinal("PAIR", Array("u8", [0, 0]), None)
        self.assertEqual(Cardinal("PAIR", Array("u8", [0, 0]), 1).arity, 1)

    def testRequiredAndMinimum(self):
        self.assertTrue(Cardinal("FILES", Vector("str"), 2).required)
        self.assertEqual(Cardinal("FILES", Vector("str"), 2).minimum, 2)
        self.assertEqual(Cardinal("FILES", Vector("str")).minimum, 1)
        self.assertFalse(Cardinal("FILES", Vector("str"), optional=True).required)
        self.assertEqual(Cardinal("FILES", Vector("str"), 2, optional=True).minimum, 0)
        self.assertFalse(Cardinal("FILES", Vector("str", ["a"])).required)

    def testBindCountsEveryToken(self):
        files = []
        cardinal = Cardinal("FILES", Vector("str", files))
        cardinal.bind(("a", "b", "c"))
        self.assertEqual(cardinal.count, 3)
        self.assertEqual(files, ["a", "b", "c"])

    def testBindClearsDefaultsOnFirstToken(self):
        files = ["default"]
        Cardinal("FILES", Vector("str", files)).bind(("a",))
        self.assertEqual(files, ["a"])

    def testReprUsesTypename(self):
        self.assertTrue(repr(Cardinal("PATHS", Vector("path"))).startswith("cardinal(name='PATHS'"))


if __name__ == "__main__":
    unittest.main()
