# python
"""
Occurrence policy tests.

Scope
- The four states: single, ignored, overwrite, bounded (with and without capacity).
- Capacity auto-initialization from a fixed slot size.
- Post-parse verification of bounded counts.
- Construction faults.

Conventions
- Test method names follow CamelCase per project convention.
- admit() is driven directly with 1-based counts, the way options call it.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from slotargs import (
    CountMismatchError,
    DuplicatedSwitchError,
    ExcessOccurrenceError,
    FaultCode,
    Occurrence,
    Policy,
    ValidationError,
)


class TestStates(TestCase):
    """What admit() decides for each state."""

    def testSingleRejectsSecondOccurrence(self):
        policy = Policy.single()
        self.assertTrue(policy.admit("mode", "a", 1))
        with self.assertRaises(DuplicatedSwitchError) as context:
            policy.admit("mode", "b", 2)
        self.assertIsInstance(context.exception, ValidationError)
        self.assertEqual(context.exception.name, "mode")
        self.assertEqual(context.exception.token, "b")
        self.assertIs(context.exception.options["code"], FaultCode.DUPLICATED_SWITCH)

    def testIgnoredKeepsOnlyTheFirst(self):
        policy = Policy.ignored()
        self.assertTrue(policy.admit("mode", "a", 1))
        self.assertFalse(policy.admit("mode", "b", 2))
        self.assertFalse(policy.admit("mode", "c", 3))

    def testOverwriteAlwaysAdmits(self):
        policy = Policy.overwrite()
        self.assertTrue(all(policy.admit("port", "80", count) for count in range(1, 6)))

    def testBoundedWithoutCapacityIsUnlimited(self):
        policy = Policy.bounded()
        self.assertTrue(all(policy.admit("port", "80", count) for count in range(1, 50)))
        self.assertIsNone(policy.capacity)

    def testBoundedCapacityOverflow(self):
        policy = Policy.bounded(2)
        self.assertTrue(policy.admit("chars", "a", 1))
        self.assertTrue(policy.admit("chars", "b", 2))
        with self.assertRaises(ExcessOccurrenceError) as context:
            policy.admit("chars", "c", 3)
        self.assertIn("third", str(context.exception))

    def testBoundedCapacityInitializesFromSize(self):
        policy = Policy.bounded()
        policy.admit("chars", "a", 1, size=3)
        self.assertEqual(policy.capacity, 3)
        with self.assertRaises(ExcessOccurrenceError):
            policy.admit("chars", "d", 4, size=3)

    def testExplicitCapacityIsNotReplacedBySize(self):
        policy = Policy.bounded(2)
        policy.admit("chars", "a", 1, size=5)
        self.assertEqual(policy.capacity, 2)


class TestVerify(TestCase):
    """verify() enforces exact bounded counts once anything was given."""

    def testCountMismatch(self):
        with self.assertRaises(CountMismatchError) as context:
            Policy.bounded(3).verify("chars", 2)
        self.assertEqual(context.exception.options["expected"], 3)
        self.assertEqual(context.exception.options["actual"], 2)

    def testZeroOccurrencesPass(self):
        Policy.bounded(3).verify("chars", 0)

    def testExactCountPasses(self):
        Policy.bounded(3).verify("chars", 3)

    def testNonBoundedPoliciesNeverMismatch(self):
        for policy in (Policy.single(), Policy.ignored(), Policy.overwrite(), Policy.bounded()):
            with self.subTest(policy=policy):
                policy.verify("x", 7)


class TestConstruction(TestCase):
    """Capacity rules, equality and representation."""

    def testCapacityOnlyForBounded(self):
        with self.assertRaises(TypeError):
            Policy(Occurrence.SINGLE, 3)

    def testCapacityMustBePositiveInteger(self):
        with self.assertRaises(ValueError):
            Policy.bounded(0)
        with self.assertRaises(TypeError):
            Policy.bounded(True)
        with self.assertRaises(TypeError):
            Policy.bounded("3")

    def testStateMustBeOccurrence(self):
        with self.assertRaises(TypeError):
            Policy("bounded")

    def testEqualityAndRepr(self):
        self.assertEqual(Policy.bounded(3), Policy(Occurrence.BOUNDED, 3))
        self.assertNotEqual(Policy.bounded(3), Policy.bounded())
        self.assertEqual(repr(Policy.bounded(3)), "policy.bounded(3)")
        self.assertEqual(repr(Policy.overwrite()), "policy.overwrite()")

    def testAccumulating(self):
        self.assertTrue(Policy.bounded().accumulating)
        self.assertFalse(Policy.overwrite().accumulating)
        self.assertIs(Policy.ignored().state, Occurrence.IGNORED)


if __name__ == "__main__":
    unittest.main()
