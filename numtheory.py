# numtheory.py
import math
from typing import Optional, Tuple

import numpy as np

# ---- Number theory primitives for the textbook RSA demo (small numbers only) ----

def is_prime(n: int) -> bool:
    """Deterministic trial division. Fine for classroom-sized n, hopeless for real keys."""
    if n < 2:
        return False
    if n == 2:
        return True
    if n % 2 == 0:
        return False
    r = math.isqrt(n)
    f = 3
    while f <= r:
        if n % f == 0:
            return False
        f += 2
    return True

def gcd(a: int, b: int) -> int:
    while b:
        a, b = b, a % b
    return abs(a)

def egcd(a: int, b: int) -> Tuple[int, int, int]:
    """Extended Euclid: returns (g, x, y) with a*x + b*y == g."""
    if b == 0:
        return a, 1, 0
    g, y, x = egcd(b, a % b)
    return g, x, y - (a // b) * x

def mod_inverse(a: int, m: int) -> Optional[int]:
    """
    The unique x in [1, m) with (a*x) % m == 1, or None if a has no inverse mod m.
    Same answer an exhaustive search over [1, m) would give, without the search.
    """
    if m < 2:
        return None
    g, x, _ = egcd(a % m, m)
    if g != 1:
        return None
    return x % m

def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Square-and-multiply modular exponentiation; result is in [0, modulus)."""
    if modulus <= 0:
        raise ValueError("modulus must be positive")
    if exponent < 0:
        raise ValueError("exponent must be non-negative")
    result = 1 % modulus
    base %= modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        exponent >>= 1
        base = (base * base) % modulus
    return result

def generate_primes(limit: int) -> np.ndarray:
    """All primes <= limit, ascending (sieve of Eratosthenes)."""
    if limit < 2:
        return np.array([], dtype=np.int64)
    sieve = np.ones(limit + 1, dtype=bool)
    sieve[:2] = False
    for i in range(2, math.isqrt(limit) + 1):
        if sieve[i]:
            sieve[i * i::i] = False
    return np.flatnonzero(sieve).astype(np.int64)

def factor_modulus(n: int) -> Tuple[Optional[int], Optional[int]]:
    """
    Naive trial-division factorization, i.e. what an eavesdropper does to a toy modulus.
    Returns (p, q) with p <= q if a factorization is found; otherwise (None, None).
    """
    if n < 4:
        return None, None
    if n % 2 == 0:
        return 2, n // 2
    r = math.isqrt(n)
    f = 3
    while f <= r:
        if n % f == 0:
            return f, n // f
        f += 2
    return None, None
