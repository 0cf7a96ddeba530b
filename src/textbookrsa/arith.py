"""Modular arithmetic kernel used by key derivation and the message transform.

Both functions are pure and keep nothing beyond their local accumulators.

Typical usage example:

    d = mod_inverse(29, 108)
    c = modular_exponentiation(31, 29, 133)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


def modular_exponentiation(base: int, exponent: int, modulus: int) -> int:
    """Computes `base ** exponent % modulus` by right-to-left square-and-multiply.

    Costs one squaring per bit of `exponent` plus one multiplication per set bit, all on numbers below `modulus`.

    Args:
        base: Any non-negative integer, reduced modulo `modulus` first.
        exponent: Non-negative exponent.
        modulus: Modulus, at least 1.

    Returns:
        The residue in `[0, modulus)`.
    """
    if modulus == 1:
        return 0
    result = 1
    base %= modulus
    while exponent > 0:
        if exponent & 1:
            result = result * base % modulus
        base = base * base % modulus
        exponent >>= 1
    return result


def mod_inverse(a: int, m: int) -> int:
    """Modular multiplicative inverse through the iterative Extended Euclidean Algorithm.

    Only the Bezout coefficient of `a` is tracked, the one of `m` is never needed.

    Args:
        a: The number to invert. May be negative or larger than `m`.
        m: The modulus, at least 1.

    Returns:
        The `x` in `[0, m)` with `a * x % m == 1`. 1 if `m` is 1.

    Raises:
        ValueError: If `a` and `m` are not coprime.
    """
    if m == 1:
        return 1
    r0, r1 = a % m, m
    s0, s1 = 1, 0
    while r0 > 1:
        if r1 == 0:
            raise ValueError(f"{a} has no inverse modulo {m}")
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
    if r0 != 1:
        raise ValueError(f"{a} has no inverse modulo {m}")
    if s0 < 0:
        s0 += m
    return s0
