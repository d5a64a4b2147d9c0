"""
Sized numeric types and strict string parsers for them.

Python ints and floats are unbounded (or always double precision), so a field
that must fit a given width is annotated with one of the types below, e.g.
``retries: Uint8 = Uint8(3)``. Plain ``int`` is treated as a signed 64-bit
integer and plain ``float`` as a 64-bit float.
"""

import math
import re
import struct


class Int8(int):
    bits = 8
    signed = True


class Int16(int):
    bits = 16
    signed = True


class Int32(int):
    bits = 32
    signed = True


class Int64(int):
    bits = 64
    signed = True


class Uint(int):
    bits = 64
    signed = False


class Uint8(int):
    bits = 8
    signed = False


class Uint16(int):
    bits = 16
    signed = False


class Uint32(int):
    bits = 32
    signed = False


class Uint64(int):
    bits = 64
    signed = False


class Float32(float):
    bits = 32


class Float64(float):
    bits = 64


_TRUE = ("1", "t", "T", "TRUE", "true", "True")
_FALSE = ("0", "f", "F", "FALSE", "false", "False")
_INF = ("inf", "infinity")

# digits with optional base prefix; "_" separators are checked by int() itself
_int_regex = re.compile(r"(0[xX][0-9a-fA-F_]+|0[oO][0-7_]+|0[bB][01_]+|0[0-7_]*|[1-9][0-9_]*)")
_old_octal_regex = re.compile(r"0[0-7_]+")


def int_bits(tp: type) -> tuple[int, bool]:
    """Width and signedness of an integer type."""
    return getattr(tp, "bits", 64), getattr(tp, "signed", True)


def float_bits(tp: type) -> int:
    return getattr(tp, "bits", 64)


def _parse_magnitude(s: str) -> int:
    if not _int_regex.fullmatch(s):
        raise ValueError(f"invalid syntax: {s!r}")
    if _old_octal_regex.fullmatch(s):
        # leading zero means octal, as in C
        return int(s[1:].lstrip("_") or "0", 8)
    return int(s, 0)


def parse_int(s: str, bits: int = 64) -> int:
    """Parse a signed integer literal, detecting the base from its prefix."""
    sign = 1
    digits = s
    if digits[:1] in ("+", "-"):
        sign = -1 if digits[0] == "-" else 1
        digits = digits[1:]
    value = sign * _parse_magnitude(digits)
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    if not low <= value <= high:
        raise OverflowError(f"value {s!r} out of range for int{bits}")
    return value


def parse_uint(s: str, bits: int = 64) -> int:
    """Parse an unsigned integer literal; signs are rejected."""
    value = _parse_magnitude(s)
    if value > (1 << bits) - 1:
        raise OverflowError(f"value {s!r} out of range for uint{bits}")
    return value


def parse_bool(s: str) -> bool:
    """Parse a boolean literal. Only the exact forms in _TRUE and _FALSE are accepted."""
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise ValueError(f"invalid boolean: {s!r}")


def parse_float(s: str, bits: int = 64) -> float:
    """Parse a decimal or scientific float literal, rounded to the given width."""
    if s != s.strip() or "_" in s:
        raise ValueError(f"invalid syntax: {s!r}")
    value = float(s)
    if math.isinf(value) and s.lstrip("+-").lower() not in _INF:
        raise OverflowError(f"value {s!r} out of range for float{bits}")
    if bits == 32 and math.isfinite(value):
        try:
            # standard size: overflow raises instead of becoming inf
            value = struct.unpack("<f", struct.pack("<f", value))[0]
        except OverflowError:
            raise OverflowError(f"value {s!r} out of range for float32") from None
    return value
