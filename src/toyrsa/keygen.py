"""Toy Key Generation Utility, drawing small primes and deriving the keypair from them.

Primes are drawn by rejection sampling over a fixed demonstration range using an injected random generator, so a
seeded `random.Random` reproduces the same key. The resulting moduli are tiny and the keys insecure; this is an
academic utility.

Typical usage example:

    rng = random.Random(1234)
    p = generate_prime(rng)
    (n, e), (n, d, p, q) = generate_key_pair(rng)
    n, phi, d = derive_key_pair(101, 103)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import math
import random
import warnings

from toyrsa.numtheory import is_prime
from toyrsa.numtheory import mod_inverse

DEFAULT_PUB_EXP: int = 65537
PRIME_RANGE: tuple[int, int] = (100, 1000)
# Roughly one in six draws in the default range is prime.
PRIME_ATTEMPTS: int = 10000
KEY_ATTEMPTS: int = 100


class NonInvertibleKeyError(RuntimeError):
    """The public exponent shares a factor with the totient, so no private exponent exists."""


def _check_pub(pub: int) -> None:
    if pub <= 1 or pub % 2 == 0:
        raise ValueError("Public exponent must be odd and greater than 1.")


def generate_prime(rng: random.Random, low: int = PRIME_RANGE[0], high: int = PRIME_RANGE[1]) -> int:
    """Draws a uniformly random prime in `[low, high)`.

    Samples candidates from the range and rejects composites until one passes `is_prime`.

    Args:
        rng: The random generator to draw from.
        low: Inclusive lower bound of the range. Defaults to 100.
        high: Exclusive upper bound of the range. Defaults to 1000.

    Returns:
        A prime in the requested range.

    Raises:
        ValueError: If the range is empty or starts below 2.
        RuntimeError: If no prime was drawn in `PRIME_ATTEMPTS` draws.
    """
    if low < 2 or high <= low:
        raise ValueError("Prime range must be non-empty and start at 2 or above.")
    for _ in range(PRIME_ATTEMPTS):
        candidate = rng.randrange(low, high)
        if is_prime(candidate):
            return candidate
    raise RuntimeError(
        f"Run an improbable {PRIME_ATTEMPTS} amount of draws in [{low}, {high}) with no prime found. "
        "Check the random number generator.")


def derive_key_pair(p: int, q: int, pub: int = DEFAULT_PUB_EXP) -> tuple[int, int, int]:
    """Derives modulus, totient and private exponent from a pair of primes.

    Does not refuse a public exponent that shares a factor with the totient. The derived private exponent is then
    no inverse and the key will not round-trip; a warning is issued instead.

    Args:
        p: The first prime.
        q: The second prime.
        pub: The public exponent. Defaults to 65537.

    Returns:
        Tuple of (modulus, totient, private exponent).

    Raises:
        ValueError: If both primes are equal, as (p-1)*(q-1) is then not the totient.
    """
    if p == q:
        raise ValueError("Primes must be distinct.")
    n = p * q
    phi = (p - 1) * (q - 1)
    if math.gcd(pub, phi) != 1:
        warnings.warn(f"Public exponent {pub} is not invertible modulo {phi}. Key will not round-trip.",
                      RuntimeWarning)
    d = mod_inverse(pub, phi)
    return n, phi, d


def generate_key_pair(rng: random.Random | None = None,
                      pub: int = DEFAULT_PUB_EXP,
                      attempts: int = KEY_ATTEMPTS) -> tuple[tuple[int, int], tuple[int, int, int, int]]:
    """Generates a toy RSA key pair.

    Draws two distinct primes and retries with fresh primes while the public exponent is not coprime with the
    totient.

    Args:
        rng: The random generator to draw from. Defaults to a fresh, entropy-seeded `random.Random`.
        pub: The public exponent. Defaults to 65537. Has to be odd and greater than 1.
        attempts: How many prime pairs to try before giving up. Defaults to `KEY_ATTEMPTS`.

    Returns:
        A tuple of (public, private) sub-tuples, (modulus, exponent) and (modulus, exponent, p, q).

    Raises:
        ValueError: If `pub` does not meet requirements.
        NonInvertibleKeyError: If no prime pair within `attempts` admits a private exponent.
    """
    _check_pub(pub)
    if rng is None:
        rng = random.Random()
    for _ in range(attempts):
        p = generate_prime(rng)
        q = generate_prime(rng)
        while p == q:
            q = generate_prime(rng)
        phi = (p - 1) * (q - 1)
        if math.gcd(pub, phi) != 1:
            continue
        n = p * q
        return (n, pub), (n, mod_inverse(pub, phi), p, q)
    raise NonInvertibleKeyError(f"No prime pair out of {attempts} admits public exponent {pub}.")
