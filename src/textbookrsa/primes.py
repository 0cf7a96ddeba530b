"""The Prime Source: primality testing and generation of large probable primes.

Key derivation treats this module as an external collaborator with a two-function contract, `is_prime` and
`generate_prime`. Candidates are screened by trial division against a cached list of small primes before a FIPS 186-5
flavoured Miller-Rabin test is run on them.

Typical usage example:

    p = generate_prime(1024)
    is_prime(p)
    get_small_primes(20000)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import secrets

SIEVE_LIMIT: int = 10000

# (upper bit length, Miller-Rabin rounds) as per FIPS 186-5 Appendix C.1, anything larger gets the last entry.
MR_ROUNDS: tuple[tuple[int, int], ...] = ((512, 40), (1024, 56), (1536, 64), (2048, 70))
MR_ROUNDS_MAX: int = 74

_small_primes: list[int] = []
_small_primes_cap: int = 0


def _sieve(n: int = SIEVE_LIMIT) -> list[int]:
    """Sieve of Eratosthenes over odd numbers only.

    Args:
        n: Inclusive upper bound. Must be >= 0.

    Returns:
        All primes <= `n` in ascending order.
    """
    if n < 2:
        return []
    # Index i stands for the odd number 2 * i + 3.
    odd = [True] * ((n - 1) // 2)
    i = 0
    while (2 * i + 3)**2 <= n:
        if odd[i]:
            step = 2 * i + 3
            odd[(step * step - 3) // 2::step] = [False] * len(range((step * step - 3) // 2, len(odd), step))
        i += 1
    return [2] + [2 * idx + 3 for idx, flag in enumerate(odd) if flag]


def get_small_primes(n: int = SIEVE_LIMIT, change: bool = False) -> list[int]:
    """Return the cached small primes, sieving again when the cache cannot answer.

    The cache is replaced as a whole rather than extended, so a reader never observes a half-built list.

    Args:
        n: Primes are guaranteed up to at least `n`. Must be >= 0.
        change: Force a fresh sieve up to exactly `n`. Defaults to False.

    Returns:
        List of primes in ascending order.

    Raises:
        ValueError: If `n` is negative.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    global _small_primes
    global _small_primes_cap
    if change or not _small_primes or n > _small_primes_cap:
        _small_primes = _sieve(n)
        _small_primes_cap = n
    return _small_primes


def _trial_division(value: int, n: int = SIEVE_LIMIT) -> bool:
    """Cheap pre-check before Miller-Rabin.

    Returns:
        False if a small prime divides `value` (or `value` < 2), True if `value` may still be prime.
    """
    if value < 2:
        return False
    for prime in get_small_primes(n):
        if prime * prime > value:
            return True
        if value % prime == 0:
            return False
    return True


def _miller_rabin(w: int, rounds: int) -> bool:
    """Miller-Rabin probabilistic primality test with random bases from `secrets`.

    Args:
        w: Odd integer to test. Values <= 3 are answered directly.
        rounds: Number of random bases to try.

    Returns:
        True if `w` is probably prime, False if it is certainly composite.
    """
    if w <= 3:
        return w in (2, 3)
    if w % 2 == 0:
        return False
    d, s = w - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for _ in range(rounds):
        x = pow(secrets.randbelow(w - 3) + 2, d, w)
        if x in (1, w - 1):
            continue
        for _ in range(s - 1):
            x = pow(x, 2, w)
            if x == w - 1:
                break
        else:
            return False
    return True


def _rounds_for(bit_length: int) -> int:
    for cap, rounds in MR_ROUNDS:
        if bit_length <= cap:
            return rounds
    return MR_ROUNDS_MAX


def is_prime(value: int, rounds: int | None = None, n: int = SIEVE_LIMIT) -> bool:
    """Composite primality test: trial division by small primes, then Miller-Rabin.

    Args:
        value: The integer to test.
        rounds: Miller-Rabin rounds. Chosen from `MR_ROUNDS` by bit length when omitted.
        n: Bound for the trial division primes. Defaults to `SIEVE_LIMIT`.

    Returns:
        True if `value` is probably prime, False otherwise.
    """
    if value < 2:
        return False
    if not _trial_division(value, n):
        return False
    if rounds is None:
        rounds = _rounds_for(value.bit_length())
    return _miller_rabin(value, rounds)


def generate_prime(bit_length: int) -> int:
    """Generate a random probable prime of exactly `bit_length` bits.

    The two most significant bits are forced on so the product of two such primes has exactly twice the bits.

    Args:
        bit_length: Size of the prime in bits. Must be >= 2.

    Returns:
        A probable prime.

    Raises:
        ValueError: If `bit_length` is below 2.
        RuntimeError: If no prime turns up after an improbable number of candidates.
    """
    if bit_length < 2:
        raise ValueError("Prime size must be at least 2 bits.")
    top = (1 << bit_length - 1) | (1 << bit_length - 2)
    attempts = bit_length * 5
    for _ in range(attempts):
        candidate = secrets.randbits(bit_length) | top | 1
        if is_prime(candidate):
            return candidate
    raise RuntimeError(f"No prime found in {attempts} candidates. Check system random number generator.")
