"""Number theory primitives backing the toy cipher.

Covers the primality predicate used during prime sampling, the Extended Euclidean Algorithm with the modular inverse
built on it, and square-and-multiply modular exponentiation. Everything here is a pure function over Python integers.

Typical usage example:

    is_prime(997)
    d = mod_inverse(65537, 10200)
    c = mod_pow(72, 65537, 10403)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


def is_prime(x: int) -> bool:
    """Deterministic primality test by trial division.

    Rejects multiples of 2 and 3 upfront, then only tries divisors of the form 6k-1 and 6k+1 up to the square root.

    Args:
        x: The candidate to test.

    Returns:
        True if `x` is prime, False otherwise.
    """
    if x <= 1:
        return False
    if x <= 3:
        return True
    if x % 2 == 0 or x % 3 == 0:
        return False
    i = 5
    while i * i <= x:
        if x % i == 0 or x % (i + 2) == 0:
            return False
        i += 6
    return True


def eea(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such a that a*s0 + b*t0 = r0 = gcd(a, b).

    Args:
        a: The first natural number.
        b: The second natural number.

    Returns:
        Greatest common divisor of two integers.
        As well as the Bezout coefficients.
    """
    r0, r1 = a, b
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def mod_inverse(a: int, m: int) -> int:
    """Multiplicative inverse of `a` modulo `m`.

    The caller is responsible for `gcd(a, m) == 1`. Otherwise, a value is still returned, but it is not an inverse.

    Args:
        a: The value to invert.
        m: The modulus. Must be positive.

    Returns:
        The inverse in range [0, m-1]. Zero for `m == 1`.

    Raises:
        ValueError: If the modulus is not positive.
    """
    if m <= 0:
        raise ValueError("Modulus must be positive")
    _, s, _ = eea(a, m)
    return s % m


def mod_pow(base: int, exp: int, mod: int) -> int:
    """Modular exponentiation by repeated squaring.

    Right-to-left binary method. Every intermediate product is reduced, so nothing grows past `mod**2`.

    Args:
        base: The base.
        exp: The exponent. Must be non-negative.
        mod: The modulus. Must be positive.

    Returns:
        `base**exp % mod`

    Raises:
        ValueError: If the exponent is negative or the modulus not positive.
    """
    if exp < 0:
        raise ValueError("Exponent must be non-negative")
    if mod <= 0:
        raise ValueError("Modulus must be positive")
    result = 1 % mod
    base %= mod
    while exp > 0:
        if exp & 1:
            result = (result * base) % mod
        base = (base * base) % mod
        exp >>= 1
    return result
