# rsa_keys.py
import logging
import operator
from dataclasses import dataclass
from typing import NamedTuple, Tuple

from numtheory import gcd, is_prime, mod_inverse
from rsa_errors import (
    DuplicatePrimeError, InvalidPrimeError, KeyDerivationFailedError, NoValidExponentError,
)
from rsa_trace import StepTrace, TraceStep

log = logging.getLogger(__name__)

# ---- Textbook RSA key derivation from two user-chosen primes (DEMO ONLY) ----

FIRST_PUBLIC_EXPONENT = 3

class PublicKey(NamedTuple):
    e: int
    n: int

class PrivateKey(NamedTuple):
    d: int
    n: int

@dataclass(frozen=True)
class KeyMaterial:
    p: int
    q: int
    n: int
    phi: int  # kept for display; nothing needs it once d is known
    e: int
    d: int

    @property
    def public_key(self) -> PublicKey:
        return PublicKey(self.e, self.n)

    @property
    def private_key(self) -> PrivateKey:
        return PrivateKey(self.d, self.n)

def choose_public_exponent(phi: int) -> int:
    """Smallest odd e >= 3 with gcd(e, phi) == 1 and e < phi. 65537 gets no special treatment."""
    e = FIRST_PUBLIC_EXPONENT
    while e < phi:
        if gcd(e, phi) == 1:
            return e
        e += 2
    raise NoValidExponentError(phi)

def derive_keys(p: int, q: int) -> Tuple[KeyMaterial, StepTrace]:
    """
    Build a key pair from primes p and q and narrate each step.

    Raises:
        InvalidPrimeError: p or q is not prime (p is checked first)
        DuplicatePrimeError: p == q
        NoValidExponentError: φ(n) too small to admit an odd e >= 3
        KeyDerivationFailedError: e has no inverse mod φ(n)
    """
    p, q = operator.index(p), operator.index(q)
    if not is_prime(p):
        raise InvalidPrimeError("p", p)
    if not is_prime(q):
        raise InvalidPrimeError("q", q)
    if p == q:
        raise DuplicatePrimeError(p)

    n = p * q
    phi = (p - 1) * (q - 1)
    e = choose_public_exponent(phi)
    d = mod_inverse(e, phi)
    if d is None:
        raise KeyDerivationFailedError(e, phi)

    keys = KeyMaterial(p=p, q=q, n=n, phi=phi, e=e, d=d)
    trace = (
        TraceStep("n", f"{p} × {q}", n),
        TraceStep("φ(n)", f"({p}-1) × ({q}-1)", phi),
        TraceStep("e", f"{e} (coprime with φ(n))", e),
        TraceStep("d", f"{e}⁻¹ mod {phi}", d),
    )
    log.debug("derived keys p=%d q=%d -> n=%d phi=%d e=%d d=%d", p, q, n, phi, e, d)
    return keys, trace
