# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import itertools

import pytest
import sympy

import textbookrsa
from textbookrsa import keys
from textbookrsa.errors import BadPrimeNumber
from textbookrsa.errors import BadPrimeNumberOnGeneration
from textbookrsa.errors import BadPublicKey
from textbookrsa.errors import ErrorOnPrivateNumberGeneration
from textbookrsa.errors import KeyPairError



def rsa_prime(below: int) -> int:
    """Largest prime below `below` that keeps 65537 coprime to the totient."""
    p = sympy.prevprime(below)
    while (p - 1) % 65537 == 0:
        p = sympy.prevprime(p)
    return p


P = rsa_prime(2**512)
Q = rsa_prime(P)


@pytest.fixture(scope="module")
def divisible_prime() -> int:
    """A prime p with 65537 dividing p - 1."""
    return next(c for c in (65537 * k + 1 for k in itertools.count(2, 2)) if sympy.isprime(c))


@pytest.mark.parametrize("p,q,e,modulus,d", [
    (7, 19, 29, 133, 41),
    (29, 23, 3, 667, 411),
    (37, 41, 7, 1517, 823),
])
def test_from_primes_known(p, q, e, modulus, d):
    public, private = keys.KeyPair.from_primes(p, q, e)
    assert public.exponent == e
    assert public.modulus == modulus
    assert public.product == modulus
    assert private.exponent == d


def test_from_primes_large():
    pair = keys.KeyPair.from_primes(P, Q, 65537)
    totient = (P - 1) * (Q - 1)
    assert pair.public.modulus == P * Q
    assert pair.public.exponent * pair.private.exponent % totient == 1


@pytest.mark.parametrize("p,q", [(8, 19), (7, 21), (1, 19), (0, 7), (7, -19), (561, 41), (P, Q * 3)])
def test_from_primes_rejects_composites(p, q):
    with pytest.raises(BadPrimeNumber):
        keys.KeyPair.from_primes(p, q, 3)


@pytest.mark.parametrize("e,valid", [
    (29, True),
    (5, True),
    (107, True),
    (2, False),  # divides 108
    (3, False),  # divides 108
    (4, False),  # not prime
    (25, False),  # not prime, coprime to 108 all the same
    (109, False),  # larger than 108
    (1, False),
    (0, False),
])
def test_public_key_validity(e, valid):
    assert keys.PublicKey.check_validity(e, 108) == valid
    if valid:
        assert keys.KeyPair.from_primes(7, 19, e).public.exponent == e
    else:
        with pytest.raises(BadPublicKey):
            keys.KeyPair.from_primes(7, 19, e)


def test_public_key_validity_exhaustive():
    for p, q in itertools.combinations(sympy.primerange(3, 30), 2):
        totient = (p - 1) * (q - 1)
        for e in range(0, totient + 3):
            expected = sympy.isprime(e) and e <= totient and totient % e != 0
            assert keys.PublicKey.check_validity(e, totient) == expected, (p, q, e)
            if expected:
                pair = keys.KeyPair.from_primes(p, q, e)
                assert e * pair.private.exponent % totient == 1


def test_error_hierarchy():
    with pytest.raises(KeyPairError):
        keys.KeyPair.from_primes(7, 19, 4)
    with pytest.raises(ValueError):
        keys.KeyPair.from_primes(8, 19, 29)
    assert "prime number" in str(BadPublicKey())


def test_private_key_derive():
    assert keys.PrivateKey.derive(29, 108) == keys.PrivateKey(41)


def test_private_key_derive_fails():
    with pytest.raises(ErrorOnPrivateNumberGeneration) as err:
        keys.PrivateKey.derive(3, 108)
    assert isinstance(err.value.__cause__, ValueError)


def test_private_key_derive_negative(mocker):
    mocker.patch("textbookrsa.arith.mod_inverse", return_value=-5)
    with pytest.raises(ErrorOnPrivateNumberGeneration):
        keys.PrivateKey.derive(29, 108)


def test_generate_functional(mocker):
    mocker.patch("textbookrsa.primes.generate_prime", side_effect=[P, Q])
    pair = keys.KeyPair.generate()
    textbookrsa.primes.generate_prime.assert_has_calls([mocker.call(1024), mocker.call(1024)])
    assert pair.public.exponent == keys.DEFAULT_PUBLIC_EXPONENT == 65537
    assert pair.public.modulus == P * Q
    assert pair.private.exponent == pow(65537, -1, (P - 1) * (Q - 1))


@pytest.mark.parametrize("exc", [RuntimeError("no prime"), ValueError("bad size")])
def test_generate_source_failure(mocker, exc):
    mocker.patch("textbookrsa.primes.generate_prime", side_effect=exc)
    with pytest.raises(BadPrimeNumberOnGeneration) as err:
        keys.KeyPair.generate()
    assert err.value.__cause__ is exc


def test_generate_skips_validation(mocker, divisible_prime):
    validity = mocker.spy(keys.PublicKey, "check_validity")
    mocker.patch("textbookrsa.primes.generate_prime", side_effect=[divisible_prime, P])
    with pytest.raises(ErrorOnPrivateNumberGeneration):
        keys.KeyPair.generate()
    validity.assert_not_called()
    with pytest.raises(BadPublicKey):
        keys.KeyPair.from_primes(divisible_prime, P, 65537)


def test_generate_small():
    pair = keys.KeyPair.generate(prime_bits=128)
    assert pair.public.modulus.bit_length() == 256
    for message in (0, 1, 31, 69, 255, 2**64 - 1):
        assert pair.decrypt(pair.public.encrypt(message)) == message


@pytest.mark.slow
def test_generate_default_size():
    pair = keys.KeyPair.generate()
    assert pair.public.modulus.bit_length() == 2048
    assert pair.public.exponent == 65537
    assert pair.decrypt(pair.public.encrypt(69), into=textbookrsa.U8) == 69


def test_keypair_extraction():
    pair = keys.KeyPair.from_primes(37, 41, 7)
    public, private = pair
    assert (public, private) == pair.get_keys()
    assert public is pair.public
    assert private is pair.private
    assert public == keys.PublicKey(7, 1517)


def test_keypair_immutable():
    pair = keys.KeyPair.from_primes(37, 41, 7)
    with pytest.raises(AttributeError):
        pair.public = keys.PublicKey(3, 667)
    with pytest.raises(AttributeError):
        pair.public.exponent = 3
    with pytest.raises(AttributeError):
        pair.private.exponent = 1
