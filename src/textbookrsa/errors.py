"""Exceptions raised by key derivation and the message transform.

Every class also derives from the builtin exception a caller would otherwise expect for that kind of failure, so
`except ValueError` style handlers keep working.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class KeyPairError(Exception):
    """Base class for anything that goes wrong while building a key pair."""
    default_message = "Key pair could not be built."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class BadPrimeNumber(KeyPairError, ValueError):
    default_message = "One or both of the supplied numbers are not prime."


class BadPrimeNumberOnGeneration(KeyPairError, RuntimeError):
    default_message = "The prime source failed to generate a prime number."


class BadPublicKey(KeyPairError, ValueError):
    default_message = ("The public exponent does not satisfy the rules. A public exponent must:\n"
                       "1- be a prime number\n"
                       "2- be no greater than the totient\n"
                       "3- not be a factor of the totient")


class ErrorOnPrivateNumberGeneration(KeyPairError, ArithmeticError):
    default_message = "The private exponent could not be derived as a non-negative integer."


class MessageError(Exception):
    """Base class for failures of the message transform."""
    default_message = "Message could not be transformed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class BadMessage(MessageError, ValueError):
    default_message = "The decrypted value does not fit the requested integer type."
