# rsa_errors.py
from typing import Any, Optional


class RSAError(ValueError):
    """Base class for every failure the engine reports. `kind` names the failure."""

    kind = "RSAError"


class InvalidPrimeError(RSAError):
    kind = "InvalidPrime"

    def __init__(self, name: str, value: int):
        self.name = name
        self.value = value
        super().__init__(f"{name} = {value} is not a prime number")


class DuplicatePrimeError(RSAError):
    kind = "DuplicatePrime"

    def __init__(self, value: int):
        self.value = value
        super().__init__(f"p and q must be different primes (both are {value})")


class NoValidExponentError(RSAError):
    kind = "NoValidExponent"

    def __init__(self, phi: int):
        self.phi = phi
        super().__init__(f"no odd public exponent e with 3 <= e < φ(n) = {phi} is coprime with φ(n)")


class KeyDerivationFailedError(RSAError):
    kind = "KeyDerivationFailed"

    def __init__(self, e: int, phi: int):
        self.e = e
        self.phi = phi
        super().__init__(f"{e} has no inverse modulo {phi}; could not compute the private exponent")


class MalformedCiphertextError(RSAError):
    kind = "MalformedCiphertext"

    def __init__(self, index: int, value: Any, reason: Optional[str] = None):
        self.index = index
        self.value = value
        self.reason = reason or "not a non-negative integer"
        super().__init__(f"ciphertext element {index} ({value!r}) is malformed: {self.reason}")


class OutOfRangeCharacterError(RSAError):
    kind = "OutOfRangeCharacter"

    def __init__(self, index: int, character: str, n: int):
        self.index = index
        self.character = character
        self.n = n
        super().__init__(
            f"character {character!r} at position {index} has code {ord(character)} >= n = {n}; "
            "it cannot survive a round trip with this key"
        )
