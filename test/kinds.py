# python
"""
Value kind tests.

Scope
- Round-trip law for every built-in kind: kind(kind.render(v)) == v.
- Whitespace rule: numeric/address kinds trim, string-like kinds keep the token verbatim.
- Malformed input raises ValueError (slots turn it into MalformedValueError).
- resolve(): names, Python types, enums, callables and rejected designators.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import enum
import unittest
from ipaddress import IPv4Address, IPv6Address
from pathlib import Path
from unittest import TestCase

from slotargs import KINDS, Kind, SocketAddress, resolve


class Color(enum.Enum):
    RED = 1
    GREEN = "green"


class TestRoundTrip(TestCase):
    """kind(kind.render(v)) == v across the built-in kinds."""

    SAMPLES = (
        ("bool", True),
        ("bool", False),
        ("char", "x"),
        ("str", " padded "),
        ("path", Path("a/b")),
        ("int", 10 ** 30),
        ("int", -7),
        ("u8", 255),
        ("u16", 8080),
        ("u32", 4294967295),
        ("u64", 2 ** 64 - 1),
        ("usize", 0),
        ("i8", -128),
        ("i16", 32767),
        ("i32", -2147483648),
        ("i64", -(2 ** 63)),
        ("isize", 42),
        ("float", 0.1),
        ("f32", -2.5),
        ("f64", 1e300),
        ("ip", IPv4Address("192.168.1.1")),
        ("ipv4", IPv4Address("127.0.0.1")),
        ("ipv6", IPv6Address("::1")),
        ("socket", SocketAddress(IPv6Address("::1"), 80)),
        ("socketv4", SocketAddress(IPv4Address("10.0.0.1"), 8080)),
        ("socketv6", SocketAddress(IPv6Address("fe80::1"), 443)),
    )

    def testEveryBuiltinKindRoundTrips(self):
        for name, value in self.SAMPLES:
            with self.subTest(kind=name, value=value):
                kind = resolve(name)
                self.assertEqual(kind(kind.render(value)), value)

    def testPortRendersAsItsDecimalToken(self):
        kind = resolve("u16")
        self.assertEqual(kind("8080"), 8080)
        self.assertEqual(kind.render(8080), "8080")

    def testSocketRendering(self):
        self.assertEqual(str(SocketAddress(IPv4Address("1.2.3.4"), 5)), "1.2.3.4:5")
        self.assertEqual(str(SocketAddress(IPv6Address("::1"), 5)), "[::1]:5")


class TestWhitespace(TestCase):
    """Numeric kinds trim, string-like kinds preserve."""

    def testNumericKindsTrim(self):
        self.assertEqual(resolve("u16")(" 8080 "), 8080)
        self.assertEqual(resolve("bool")(" TRUE "), True)
        self.assertEqual(resolve("ipv4")(" 127.0.0.1\t"), IPv4Address("127.0.0.1"))

    def testStringKindsKeepWhitespace(self):
        self.assertEqual(resolve("str")(" spaced "), " spaced ")
        self.assertEqual(resolve("path")(" dir"), Path(" dir"))
        self.assertEqual(resolve("char")(" "), " ")

    def testTrimFlags(self):
        self.assertTrue(KINDS["u8"].trim)
        self.assertFalse(KINDS["str"].trim)
        self.assertFalse(KINDS["char"].trim)


class TestMalformed(TestCase):
    """Conversion failures surface as ValueError."""

    def testIntegerRanges(self):
        with self.assertRaises(ValueError):
            resolve("u8")("256")
        with self.assertRaises(ValueError):
            resolve("i8")("-129")

    def testUnsignedRejectsSign(self):
        with self.assertRaises(ValueError):
            resolve("u16")("-1")

    def testIntegerRejectsNonDecimal(self):
        for token in ("0x10", "1_000", "", "1.0", "ten"):
            with self.subTest(token=token):
                with self.assertRaises(ValueError):
                    resolve("i32")(token)

    def testBooleanAcceptsOnlyTrueOrFalse(self):
        with self.assertRaises(ValueError):
            resolve("bool")("yes")

    def testCharNeedsExactlyOneCharacter(self):
        with self.assertRaises(ValueError):
            resolve("char")("ab")
        with self.assertRaises(ValueError):
            resolve("char")("")

    def testSocketShapes(self):
        with self.assertRaises(ValueError):
            resolve("socket")("127.0.0.1")
        with self.assertRaises(ValueError):
            resolve("socket")("::1:80")
        with self.assertRaises(ValueError):
            resolve("socketv4")("[::1]:80")
        with self.assertRaises(ValueError):
            resolve("socket")("127.0.0.1:70000")

    def testAddressVersion(self):
        with self.assertRaises(ValueError):
            resolve("ipv6")("127.0.0.1")


class TestResolve(TestCase):
    """Kind designators accepted by resolve()."""

    def testNamesAndTypes(self):
        self.assertIs(resolve("u16"), KINDS["u16"])
        self.assertIs(resolve(int), KINDS["int"])
        self.assertIs(resolve(bool), KINDS["bool"])
        self.assertIs(resolve(str), KINDS["str"])
        self.assertIs(resolve(Path), KINDS["path"])
        self.assertIs(resolve(SocketAddress), KINDS["socket"])

    def testKindPassesThrough(self):
        kind = Kind("upper", str.upper)
        self.assertIs(resolve(kind), kind)
        self.assertEqual(kind(" ab "), "AB")

    def testEnumMatching(self):
        kind = resolve(Color)
        self.assertEqual(kind.name, "Color")
        self.assertIs(kind("RED"), Color.RED)
        self.assertIs(kind("red"), Color.RED)
        self.assertIs(kind("1"), Color.RED)
        self.assertIs(kind("green"), Color.GREEN)
        self.assertEqual(kind.render(Color.GREEN), "GREEN")
        with self.assertRaises(ValueError):
            kind("blue")

    def testCallableBecomesUntrimmedKind(self):
        def hexadecimal(token):
            return int(token, 16)

        kind = resolve(hexadecimal)
        self.assertEqual(kind.name, "hexadecimal")
        self.assertFalse(kind.trim)
        self.assertEqual(kind("ff"), 255)

    def testUnknownNameRejected(self):
        with self.assertRaises(ValueError):
            resolve("u128")

    def testNonCallableRejected(self):
        with self.assertRaises(TypeError):
            resolve(3)

    def testKindNameMustBeNonEmpty(self):
        with self.assertRaises(TypeError):
            Kind(" ", str)


if __name__ == "__main__":
    unittest.main()
