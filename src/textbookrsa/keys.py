"""Key derivation: turning two primes and a public exponent into an RSA key pair.

A pair is either generated from two fresh 1024-bit probable primes with the conventional exponent 65537, or built
from primes and an exponent the caller already has. Only the second path validates the exponent against the totient,
generation trusts 65537 outright. The totient itself is never kept, so a finished pair cannot re-validate itself.

Typical usage example:

    public, private = KeyPair.from_primes(37, 41, 7)
    pair = KeyPair.generate()
    c = pair.public.encrypt(69)
    m = pair.decrypt(c, into=U8)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import typing

from textbookrsa import arith
from textbookrsa import messages
from textbookrsa import primes
from textbookrsa.errors import BadPrimeNumber
from textbookrsa.errors import BadPrimeNumberOnGeneration
from textbookrsa.errors import BadPublicKey
from textbookrsa.errors import ErrorOnPrivateNumberGeneration

DEFAULT_PUBLIC_EXPONENT: int = 65537
PRIME_BITS: int = 1024


class PublicKey(typing.NamedTuple):
    """The public half of a key pair.

    Attributes:
        exponent: The public (encryption) exponent.
        modulus: The product of the two primes.
    """
    exponent: int
    modulus: int

    @property
    def product(self) -> int:
        return self.modulus

    @staticmethod
    def check_validity(exponent: int, totient: int) -> bool:
        """Checks a public exponent against the totient.

        A prime exponent that does not divide the totient is coprime to it. Composite exponents are rejected even when
        they happen to be coprime.

        Args:
            exponent: Candidate public exponent.
            totient: `(p - 1) * (q - 1)` of the key's primes.

        Returns:
            True if `exponent` is prime, no greater than `totient` and not a factor of it.
        """
        return primes.is_prime(exponent) and exponent <= totient and totient % exponent != 0

    @classmethod
    def from_totient(cls, exponent: int, modulus: int, totient: int) -> "PublicKey":
        """Builds a public key after validating its exponent.

        Raises:
            BadPublicKey: If `check_validity` fails.
        """
        if not cls.check_validity(exponent, totient):
            raise BadPublicKey()
        return cls(exponent, modulus)

    def encrypt(self, message: typing.SupportsIndex) -> int:
        """Encrypts `message` with this key, see `messages.encrypt`."""
        return messages.encrypt(message, self.exponent, self.modulus)


class PrivateKey(typing.NamedTuple):
    """The private half of a key pair.

    Attributes:
        exponent: The private (decryption) exponent.
    """
    exponent: int

    @classmethod
    def derive(cls, public_exponent: int, totient: int) -> "PrivateKey":
        """Derives the private exponent as the inverse of the public one modulo the totient.

        Raises:
            ErrorOnPrivateNumberGeneration: If no non-negative inverse exists.
        """
        try:
            exponent = arith.mod_inverse(public_exponent, totient)
        except ValueError as err:
            raise ErrorOnPrivateNumberGeneration() from err
        if exponent < 0:
            raise ErrorOnPrivateNumberGeneration()
        return cls(exponent)


def _totient(p: int, q: int) -> int:
    return (p - 1) * (q - 1)


class KeyPair(typing.NamedTuple):
    """A public key and the private key derived alongside it.

    Unpacks by value as `public, private = pair`.
    """
    public: PublicKey
    private: PrivateKey

    @classmethod
    def generate(cls, prime_bits: int = PRIME_BITS) -> "KeyPair":
        """Generates a key pair from two fresh probable primes and the exponent 65537.

        The exponent is not checked against the new totient.

        Args:
            prime_bits: Size of each prime in bits. Defaults to `PRIME_BITS`.

        Returns:
            The new key pair.

        Raises:
            BadPrimeNumberOnGeneration: If the prime source fails.
            ErrorOnPrivateNumberGeneration: If 65537 happens to share a factor with the totient.
        """
        try:
            p = primes.generate_prime(prime_bits)
            q = primes.generate_prime(prime_bits)
        except (RuntimeError, ValueError) as err:
            raise BadPrimeNumberOnGeneration() from err
        public = PublicKey(DEFAULT_PUBLIC_EXPONENT, p * q)
        private = PrivateKey.derive(public.exponent, _totient(p, q))
        return cls(public, private)

    @classmethod
    def from_primes(cls, p: int, q: int, public_exponent: int) -> "KeyPair":
        """Builds a key pair from known primes and a public exponent.

        Args:
            p: First prime.
            q: Second prime.
            public_exponent: The public exponent to validate and use.

        Returns:
            The key pair.

        Raises:
            BadPrimeNumber: If `p` or `q` is not prime.
            BadPublicKey: If `public_exponent` fails `PublicKey.check_validity`.
            ErrorOnPrivateNumberGeneration: If the private exponent cannot be derived.
        """
        if not primes.is_prime(p) or not primes.is_prime(q):
            raise BadPrimeNumber()
        totient = _totient(p, q)
        public = PublicKey.from_totient(public_exponent, p * q, totient)
        private = PrivateKey.derive(public_exponent, totient)
        return cls(public, private)

    def get_keys(self) -> tuple[PublicKey, PrivateKey]:
        return self.public, self.private

    def decrypt(self, ciphertext: typing.SupportsIndex, into: messages.IntType = messages.U64) -> int:
        """Decrypts `ciphertext` with this pair, see `messages.decrypt`."""
        return messages.decrypt(ciphertext, self.private.exponent, self.public.modulus, into)
