"""Textbook RSA over small integer messages.

Derives RSA key pairs from two primes and encrypts/decrypts single bounded integers via modular exponentiation.
There is no padding and no key serialization, this is the bare arithmetic of the algorithm.

Typical usage example:

    pair = KeyPair.from_primes(37, 41, 7)
    c = encrypt(123, pair.public.exponent, pair.public.modulus)
    m = decrypt(c, pair.private.exponent, pair.public.modulus, into=U64)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from textbookrsa.arith import mod_inverse
from textbookrsa.arith import modular_exponentiation
from textbookrsa.errors import BadMessage
from textbookrsa.errors import BadPrimeNumber
from textbookrsa.errors import BadPrimeNumberOnGeneration
from textbookrsa.errors import BadPublicKey
from textbookrsa.errors import ErrorOnPrivateNumberGeneration
from textbookrsa.errors import KeyPairError
from textbookrsa.errors import MessageError
from textbookrsa.keys import KeyPair
from textbookrsa.keys import PrivateKey
from textbookrsa.keys import PublicKey
from textbookrsa.messages import BIGUINT
from textbookrsa.messages import decrypt
from textbookrsa.messages import encrypt
from textbookrsa.messages import I8
from textbookrsa.messages import I16
from textbookrsa.messages import I32
from textbookrsa.messages import I64
from textbookrsa.messages import I128
from textbookrsa.messages import INT_TYPES
from textbookrsa.messages import IntType
from textbookrsa.messages import U8
from textbookrsa.messages import U16
from textbookrsa.messages import U32
from textbookrsa.messages import U64
from textbookrsa.messages import U128
from textbookrsa.primes import generate_prime
from textbookrsa.primes import is_prime

__version__ = "0.0.1"
__all__ = [
    "KeyPair",
    "PublicKey",
    "PrivateKey",
    "encrypt",
    "decrypt",
    "IntType",
    "INT_TYPES",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "BIGUINT",
    "modular_exponentiation",
    "mod_inverse",
    "is_prime",
    "generate_prime",
    "KeyPairError",
    "BadPrimeNumber",
    "BadPrimeNumberOnGeneration",
    "BadPublicKey",
    "ErrorOnPrivateNumberGeneration",
    "MessageError",
    "BadMessage",
]
