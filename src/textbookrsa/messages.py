"""The message transform: textbook RSA encryption and decryption of single bounded integers.

Messages go in as any integer-like value and come back out narrowed into a caller chosen fixed-width integer type.
There is no padding and no range check at encryption time, so a message at or above the modulus cannot be recovered.

Typical usage example:

    c = encrypt(123, 7, 1517)
    m = decrypt(c, 823, 1517, into=U8)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import operator
import typing
import warnings

from textbookrsa.arith import modular_exponentiation
from textbookrsa.errors import BadMessage


class IntType(typing.NamedTuple):
    """A fixed-width integer type decrypted values are narrowed into.

    Attributes:
        name: Short name, as used on the command line.
        bits: Width in bits, None for an unbounded non-negative integer.
        signed: Whether the range is two's complement signed.
    """
    name: str
    bits: int | None = None
    signed: bool = False

    @property
    def min(self) -> int:
        if self.signed and self.bits is not None:
            return -(1 << self.bits - 1)
        return 0

    @property
    def max(self) -> int | None:
        if self.bits is None:
            return None
        if self.signed:
            return (1 << self.bits - 1) - 1
        return (1 << self.bits) - 1

    def narrow(self, value: int) -> int:
        """Return `value` unchanged if it fits this type.

        Raises:
            BadMessage: If `value` is out of range.
        """
        upper = self.max
        if value < self.min or (upper is not None and value > upper):
            raise BadMessage(f"Recovered value {value} does not fit in {self.name}.")
        return value


U8 = IntType("u8", 8)
U16 = IntType("u16", 16)
U32 = IntType("u32", 32)
U64 = IntType("u64", 64)
U128 = IntType("u128", 128)
I8 = IntType("i8", 8, True)
I16 = IntType("i16", 16, True)
I32 = IntType("i32", 32, True)
I64 = IntType("i64", 64, True)
I128 = IntType("i128", 128, True)
BIGUINT = IntType("biguint")

INT_TYPES: dict[str, IntType] = {t.name: t for t in (U8, U16, U32, U64, U128, I8, I16, I32, I64, I128, BIGUINT)}


def _as_unsigned(value: typing.SupportsIndex, what: str) -> int:
    number = operator.index(value)
    if number < 0:
        raise ValueError(f"{what} must be non-negative, got {number}")
    return number


def encrypt(message: typing.SupportsIndex, exponent: int, modulus: int) -> int:
    """Encrypts a single integer message with the public exponent and modulus.

    Args:
        message: Any integer-like value. Must be non-negative and should be below `modulus`.
        exponent: The public exponent.
        modulus: The key modulus.

    Returns:
        The ciphertext.

    Raises:
        TypeError: If `message` is not integer-like.
        ValueError: If `message` is negative.
    """
    plain = _as_unsigned(message, "Message")
    if plain >= modulus:
        warnings.warn("Message is not below the modulus and will not decrypt to itself.", RuntimeWarning)
    return modular_exponentiation(plain, exponent, modulus)


def decrypt(ciphertext: typing.SupportsIndex, exponent: int, modulus: int, into: IntType = U64) -> int:
    """Decrypts a ciphertext with the private exponent and narrows the result.

    Args:
        ciphertext: The ciphertext as produced by `encrypt`.
        exponent: The private exponent.
        modulus: The key modulus.
        into: Integer type the recovered message has to fit. Defaults to `U64`.

    Returns:
        The recovered message.

    Raises:
        BadMessage: If the recovered value does not fit `into`.
    """
    cipher = _as_unsigned(ciphertext, "Ciphertext")
    return into.narrow(modular_exponentiation(cipher, exponent, modulus))
