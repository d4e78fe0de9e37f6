"""Arithmetic in the prime field F_p.

Field elements are plain Python integers, so intermediate products never overflow. Every value returned by the
functions in this module is reduced into the canonical range [0, p).
"""

import secrets

from ecc_elgamal.errors import MalformedInputError, NoInverseError

MILLER_RABIN_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)
# Smallest strong pseudoprime to all of MILLER_RABIN_BASES
MILLER_RABIN_DETERMINISTIC_BOUND = 3317044064679887385961981
RANDOM_WITNESSES = 20


def mod(n: int, p: int) -> int:
    """Reduce `n` modulo `p`.

    Args:
        n (int): The integer to reduce. It can be negative.
        p (int): The modulus, must be positive.

    Returns:
        The unique `r` in [0, p) such that `r = n mod p`.

    Raises:
        MalformedInputError: If `p <= 0`.
    """
    if p <= 0:
        msg = f"The modulus must be positive, got {p}"
        raise MalformedInputError(msg)
    return n % p


def mod_inverse(a: int, m: int) -> int:
    """Compute the inverse of `a` modulo `m` with the extended Euclidean algorithm.

    Args:
        a (int): The element to invert.
        m (int): The modulus.

    Returns:
        The unique `x` in [0, m) such that `a * x = 1 mod m`.

    Raises:
        NoInverseError: If gcd(a, m) != 1, in particular if `a = 0 mod m`.

    Example:
        >>> mod_inverse(2, 11)
        6
    """
    old_r, r = mod(a, m), m
    old_s, s = 1, 0

    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_s, s = s, old_s - quotient * s

    if old_r != 1:
        msg = f"{a} has no inverse modulo {m}: gcd({a}, {m}) = {old_r}"
        raise NoInverseError(msg)

    return mod(old_s, m)


def mod_pow(base: int, exp: int, m: int) -> int:
    """Compute `base^exp mod m` by square-and-multiply.

    Args:
        base (int): The base, normalised modulo `m` before exponentiation.
        exp (int): The exponent, must be non-negative.
        m (int): The modulus.

    Returns:
        `base^exp mod m`, in [0, m).

    Raises:
        MalformedInputError: If `exp < 0`.
    """
    if exp < 0:
        msg = f"The exponent must be non-negative, got {exp}"
        raise MalformedInputError(msg)

    result = mod(1, m)
    base = mod(base, m)
    while exp > 0:
        if exp & 1:
            result = mod(result * base, m)
        base = mod(base * base, m)
        exp >>= 1
    return result


def mod_sqrt(a: int, p: int) -> int | None:
    """Compute a square root of `a` modulo the prime `p`.

    If `p = 3 mod 4`, the candidate `a^((p+1)/4) mod p` is computed and checked, so that non-residues are
    rejected. Otherwise, the roots are searched exhaustively in [1, p), which is only sensible for small primes.
    No general Tonelli-Shanks algorithm is provided.

    Args:
        a (int): The element whose square root is computed.
        p (int): An odd prime modulus.

    Returns:
        Some `r` in [0, p) with `r^2 = a mod p`, or `None` if `a` is not a quadratic residue.
    """
    a = mod(a, p)
    if a == 0:
        return 0

    if p % 4 == 3:
        r = mod_pow(a, (p + 1) // 4, p)
        return r if mod(r * r, p) == a else None

    for r in range(1, p):
        if mod(r * r, p) == a:
            return r
    return None


def _is_witness(base: int, d: int, s: int, n: int) -> bool:
    """Return `True` if `base` proves that the odd number `n = 2^s * d + 1` is composite."""
    x = mod_pow(base, d, n)
    if x in (1, n - 1):
        return False
    for _ in range(s - 1):
        x = mod(x * x, n)
        if x == n - 1:
            return False
    return True


def is_prime(n: int) -> bool:
    """Check whether `n` is prime with the Miller-Rabin test.

    The test uses the first thirteen primes as witnesses, which makes it deterministic for every
    n < 3317044064679887385961981 (about 3.3 * 10^24). Larger candidates are also checked against
    `RANDOM_WITNESSES` random bases, so for them a composite passes with probability at most 4^-RANDOM_WITNESSES.
    """
    if n < 2:  # noqa: PLR2004
        return False
    for q in MILLER_RABIN_BASES:
        if n % q == 0:
            return n == q

    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1

    bases = list(MILLER_RABIN_BASES)
    if n >= MILLER_RABIN_DETERMINISTIC_BOUND:
        bases += [secrets.randbelow(n - 3) + 2 for _ in range(RANDOM_WITNESSES)]
    return not any(_is_witness(base, d, s, n) for base in bases)
