"""BigHex: arbitrary-precision integer that remembers its hex display length."""

import functools
import hmac
import secrets
from typing import Optional, Union

from srpauth.common.errors import DivideByZeroError, FormatError
from srpauth.common.utils import clean_hex, is_hex


@functools.total_ordering
class BigHex:
    """
    Signed integer + hexadecimal length.

    SRP hashes the byte form of its numbers, so "0a" and "a" hash differently
    even though they are equal. Every operator therefore computes a result
    length alongside the value:

        a + b, a - b, a ^ b   -> max(len(a), len(b))
        a * b                 -> len(a) + len(b)
        a // b, a % b         -> len(a)
        a.mod_pow(e, m)       -> len(m)

    A hex_length of None means "natural length" (no padding), which is what
    plain ints get when mixed into the arithmetic.

    // and % follow Python floor semantics, so -7 // 2 == -4 and -7 % 3 == 2.
    SRP only divides non-negative values, where floor and truncation agree.
    """

    __slots__ = ("_value", "_hex_length")

    def __init__(self, value: int = 0, hex_length: Optional[int] = None):
        if hex_length is not None and hex_length < 0:
            raise ValueError("hex_length must not be negative")
        object.__setattr__(self, "_value", int(value))
        object.__setattr__(self, "_hex_length", hex_length)

    def __setattr__(self, name, value):
        raise AttributeError("BigHex is immutable")

    # --- Construction ---

    @classmethod
    def from_hex(cls, text: str) -> "BigHex":
        """
        Parses hex text, keeping the exact digit count.
        Whitespace anywhere in the text is ignored.
        """
        if not isinstance(text, str):
            raise FormatError(f"Expected hex text, got {type(text).__name__}")

        digits = clean_hex(text)
        if not digits or not is_hex(digits):
            raise FormatError(f"Invalid hex integer: {text!r}")

        negative = digits.startswith("-")
        if negative:
            digits = digits[1:]

        value = int(digits, 16)
        return cls(-value if negative else value, len(digits))

    @classmethod
    def from_bytes(cls, data: bytes) -> "BigHex":
        """Big-endian bytes -> BigHex of exactly 2 * len(data) digits."""
        return cls(int.from_bytes(data, "big"), len(data) * 2)

    @classmethod
    def random(cls, byte_length: int) -> "BigHex":
        """
        Returns a non-zero random integer of byte_length bytes
        drawn from the OS CSPRNG.
        """
        if byte_length <= 0:
            raise ValueError("byte_length must be positive")

        while True:
            data = secrets.token_bytes(byte_length)
            if any(data):
                return cls.from_bytes(data)

    @classmethod
    def coerce(cls, value: Union["BigHex", str, int]) -> "BigHex":
        """Accepts a BigHex, hex text or a plain int."""
        if isinstance(value, BigHex):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        raise FormatError(f"Cannot convert {type(value).__name__} to BigHex")

    # --- Properties ---

    @property
    def value(self) -> int:
        return self._value

    @property
    def hex_length(self) -> Optional[int]:
        return self._hex_length

    def _length(self) -> int:
        if self._hex_length is not None:
            return self._hex_length
        return len(format(abs(self._value), "x"))

    def pad(self, length: int) -> "BigHex":
        """Same value, rendered with `length` digits."""
        return BigHex(self._value, length)

    # --- Conversions ---

    def to_hex(self) -> str:
        digits = format(abs(self._value), "x")
        if self._hex_length is not None:
            digits = digits.rjust(self._hex_length, "0")
        return f"-{digits}" if self._value < 0 else digits

    def to_bytes(self) -> bytes:
        """Big-endian magnitude; an odd digit count gets a leading zero nibble."""
        if self._hex_length == 0 and self._value == 0:
            return b""
        digits = format(abs(self._value), "x")
        if self._hex_length is not None:
            digits = digits.rjust(self._hex_length, "0")
        if len(digits) % 2:
            digits = "0" + digits
        return bytes.fromhex(digits)

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        digits = self.to_hex()
        if len(digits) > 16:
            digits = digits[:16] + "..."
        return f"<BigHex: {digits}>"

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    # --- Arithmetic ---

    def __add__(self, other):
        other = _operand(other)
        if other is NotImplemented:
            return other
        return BigHex(self._value + other._value, max(self._length(), other._length()))

    def __radd__(self, other):
        other = _operand(other)
        if other is NotImplemented:
            return other
        return other + self

    def __sub__(self, other):
        other = _operand(other)
        if other is NotImplemented:
            return other
        return BigHex(self._value - other._value, max(self._length(), other._length()))

    def __rsub__(self, other):
        other = _operand(other)
        if other is NotImplemented:
            return other
        return other - self

    def __mul__(self, other):
        other = _operand(other)
        if other is NotImplemented:
            return other
        return BigHex(self._value * other._value, self._length() + other._length())

    def __rmul__(self, other):
        other = _operand(other)
        if other is NotImplemented:
            return other
        return other * self

    def __floordiv__(self, other):
        other = _operand(other)
        if other is NotImplemented:
            return other
        if other._value == 0:
            raise DivideByZeroError("Division by zero")
        return BigHex(self._value // other._value, self._length())

    def __rfloordiv__(self, other):
        other = _operand(other)
        if other is NotImplemented:
            return other
        return other // self

    def __mod__(self, other):
        other = _operand(other)
        if other is NotImplemented:
            return other
        if other._value == 0:
            raise DivideByZeroError("Modulo by zero")
        return BigHex(self._value % other._value, self._length())

    def __rmod__(self, other):
        other = _operand(other)
        if other is NotImplemented:
            return other
        return other % self

    def __xor__(self, other):
        other = _operand(other)
        if other is NotImplemented:
            return other
        return BigHex(self._value ^ other._value, max(self._length(), other._length()))

    def __rxor__(self, other):
        other = _operand(other)
        if other is NotImplemented:
            return other
        return other ^ self

    def __neg__(self):
        return BigHex(-self._value, self._hex_length)

    def mod_pow(self, exponent, modulus) -> "BigHex":
        """
        (self ** exponent) mod modulus, always in [0, |modulus|).
        A negative base is reduced into the residue range first,
        e.g. -5 ^ 3 mod 0x1000 == 0xf83.
        """
        exponent = BigHex.coerce(exponent)
        modulus = BigHex.coerce(modulus)
        m = abs(modulus._value)
        if m == 0:
            raise DivideByZeroError("Modular exponentiation with zero modulus")

        result = pow(self._value % m, exponent._value, m)
        return BigHex(result, modulus._length())

    # --- Comparison ---

    def __eq__(self, other):
        other = _operand(other)
        if other is NotImplemented:
            return other
        return self._value == other._value

    def __lt__(self, other):
        other = _operand(other)
        if other is NotImplemented:
            return other
        return self._value < other._value

    def __hash__(self):
        return hash(self._value)


def _operand(other):
    if isinstance(other, BigHex):
        return other
    if isinstance(other, int) and not isinstance(other, bool):
        return BigHex(other)
    return NotImplemented


BigHex.ZERO = BigHex(0)


def constant_time_equals(expected: BigHex, actual: BigHex) -> bool:
    """Numeric equality that does not leak where two proofs first differ."""
    if expected < 0 or actual < 0:
        return expected == actual
    length = max(len(expected.to_hex()), len(actual.to_hex()))
    return hmac.compare_digest(expected.pad(length).to_bytes(), actual.pad(length).to_bytes())
