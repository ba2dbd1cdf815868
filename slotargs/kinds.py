r"""
Value kinds: the textual grammar of one scalar type.

A Kind converts one raw token into a Python value and renders a value back into the
token that would produce it. Slots (see slotargs.slots) are shapes around a kind
(scalar, optional, growable or fixed collection); the kind alone decides the grammar.

Whitespace rule
- numeric, boolean, address and enum kinds trim the token before conversion
  (" 8080 " parses as 8080).
- string-like kinds (str, char, path) never trim; surrounding whitespace is data.

Built-in kinds (resolve() accepts the name or the Python type in brackets)
- bool [bool]               true / false, case-insensitive
- char                      exactly one character
- str [str], path [Path]    taken verbatim
- int [int]                 unbounded decimal integer
- u8 u16 u32 u64 usize      unsigned, range-checked
- i8 i16 i32 i64 isize      signed, range-checked
- float [float], f32, f64   anything float() accepts
- ip, ipv4 [IPv4Address], ipv6 [IPv6Address]
- socket [SocketAddress], socketv4, socketv6   "host:port" / "[v6]:port"

Anything else
- enum.Enum subclasses: matched by member name (exact, then case-insensitive), then by
  str(member.value); rendered as the member name.
- other callables: wrapped as an untrimmed kind named after the callable; the callable
  raises ValueError on bad input.

Law
- for every built-in kind and valid value v: kind(kind.render(v)) == v.
"""
import enum
import ipaddress
import pathlib
import re
from typing import NamedTuple


class SocketAddress(NamedTuple):
    """An IP address paired with a port; renders as 'host:port' or '[v6]:port'."""
    host: ipaddress.IPv4Address | ipaddress.IPv6Address
    port: int

    def __str__(self):
        if self.host.version == 6:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


class Kind:
    """
    Textual grammar for one scalar type.

    Parameters
    - name: label used in messages and help ("u16", "path", ...).
    - convert: Callable[[str], T], raising ValueError on malformed input.
    - render: Callable[[T], str], the inverse of convert (defaults to str).
    - trim: strip surrounding whitespace before convert.
    """
    __slots__ = ("_name", "_convert", "_render", "_trim")

    def __init__(self, name, convert, render=str, /, *, trim=True):
        if not isinstance(name, str) or not name.strip():
            raise TypeError("kind 'name' must be a non-empty string")
        if not callable(convert) or not callable(render):
            raise TypeError("kind 'convert' and 'render' must be callable")
        self._name = name.strip()
        self._convert = convert
        self._render = render
        self._trim = bool(trim)

    @property
    def name(self):
        return self._name

    @property
    def trim(self):
        return self._trim

    def __call__(self, token, /):
        return self._convert(token.strip() if self._trim else token)

    def render(self, value, /):
        return self._render(value)

    def __repr__(self):
        return f"kind({self._name!r})"


def _integer(bits, signed):
    # bits=None means unbounded
    grammar = re.compile(r"[+-]?\d+" if signed else r"\+?\d+")
    if bits is None:
        low = high = None
    elif signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1

    def convert(token):
        if not grammar.fullmatch(token):
            raise ValueError(f"invalid digits {token!r}")
        value = int(token)
        if low is not None and not low <= value <= high:
            raise ValueError(f"{value} is out of range [{low}, {high}]")
        return value
    return convert


def _boolean(token):
    match token.lower():
        case "true":
            return True
        case "false":
            return False
    raise ValueError(f"expected 'true' or 'false', got {token!r}")


def _character(token):
    if len(token) != 1:
        raise ValueError(f"expected exactly one character, got {len(token)}")
    return token


def _socket(version):
    def convert(token):
        if token.startswith("["):
            host, separator, port = token[1:].partition("]:")
        else:
            host, separator, port = token.rpartition(":")
        if not separator or not host:
            raise ValueError(f"expected 'host:port', got {token!r}")
        address = ipaddress.ip_address(host)
        if version is not None and address.version != version:
            raise ValueError(f"expected an IPv{version} address, got {host!r}")
        if token.startswith("[") != (address.version == 6):
            raise ValueError(f"IPv6 hosts must be bracketed, got {token!r}")
        return SocketAddress(address, _integer(16, False)(port))
    return convert


def _address(version):
    def convert(token):
        address = ipaddress.ip_address(token)
        if version is not None and address.version != version:
            raise ValueError(f"expected an IPv{version} address, got {token!r}")
        return address
    return convert


def _enumeration(cls):
    def convert(token):
        try:
            return cls[token]
        except KeyError:
            pass
        for member in cls:
            if member.name.lower() == token.lower() or str(member.value) == token:
                return member
        raise ValueError(f"expected one of {', '.join(member.name for member in cls)}")
    return Kind(cls.__name__, convert, lambda member: member.name)


KINDS = {
    "bool": Kind("bool", _boolean, lambda value: "true" if value else "false"),
    "char": Kind("char", _character, trim=False),
    "str": Kind("str", str, trim=False),
    "path": Kind("path", pathlib.Path, trim=False),
    "int": Kind("int", _integer(None, True)),
    "float": Kind("float", float, repr),
    "ip": Kind("ip", _address(None)),
    "ipv4": Kind("ipv4", _address(4)),
    "ipv6": Kind("ipv6", _address(6)),
    "socket": Kind("socket", _socket(None)),
    "socketv4": Kind("socketv4", _socket(4)),
    "socketv6": Kind("socketv6", _socket(6)),
} | {
    f"u{bits}": Kind(f"u{bits}", _integer(bits, False)) for bits in (8, 16, 32, 64)
} | {
    f"i{bits}": Kind(f"i{bits}", _integer(bits, True)) for bits in (8, 16, 32, 64)
}
KINDS["usize"] = Kind("usize", _integer(64, False))
KINDS["isize"] = Kind("isize", _integer(64, True))
KINDS["f32"] = Kind("f32", float, repr)
KINDS["f64"] = Kind("f64", float, repr)

_types = {
    bool: "bool",
    int: "int",
    float: "float",
    str: "str",
    pathlib.Path: "path",
    ipaddress.IPv4Address: "ipv4",
    ipaddress.IPv6Address: "ipv6",
    SocketAddress: "socket",
}


def resolve(kind, /):
    """
    Turn a kind designator into a Kind.

    Accepts a Kind, a registered name ("u16"), a registered Python type (int, Path...),
    an enum.Enum subclass, or any other callable (untrimmed, named after the callable).
    """
    match kind:
        case Kind():
            return kind
        case str() if kind in KINDS:
            return KINDS[kind]
        case str():
            raise ValueError(f"unknown value kind {kind!r}")
        case type() if kind in _types:
            return KINDS[_types[kind]]
        case type() if issubclass(kind, enum.Enum):
            return _enumeration(kind)
        case _ if callable(kind):
            return Kind(getattr(kind, "__name__", type(kind).__name__), kind, trim=False)
    raise TypeError(f"value kind must be a Kind, a kind name, or a callable, not {type(kind).__name__!r}")


__all__ = (
    "Kind",
    "SocketAddress",
    "KINDS",
    "resolve",
)
