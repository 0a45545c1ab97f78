# rsa_codec.py
import logging
import numbers
import operator
import re
from typing import Any, Iterable, List, Sequence, Tuple

from numtheory import mod_pow
from rsa_errors import MalformedCiphertextError, OutOfRangeCharacterError
from rsa_keys import PrivateKey, PublicKey
from rsa_trace import StepTrace, TraceStep

log = logging.getLogger(__name__)

# ---- Character-wise textbook RSA (no padding, one integer per character) ----

def encrypt(plaintext: str, public_key: PublicKey, strict: bool = False) -> Tuple[List[int], StepTrace]:
    """
    Encrypt each character's code point as code^e mod n.

    Code points >= n wrap silently (and will not decrypt back), which is what
    unpadded RSA does. With strict=True such a character raises
    OutOfRangeCharacterError before anything is encrypted.
    """
    e, n = map(operator.index, public_key)
    if strict:
        for i, ch in enumerate(plaintext):
            if ord(ch) >= n:
                raise OutOfRangeCharacterError(i, ch, n)

    cipher: List[int] = []
    steps = []
    for ch in plaintext:
        code = ord(ch)
        c = mod_pow(code, e, n)
        cipher.append(c)
        steps.append(TraceStep(ch, f"{code}^{e} mod {n}", c, value=code))
    log.debug("encrypted %d characters with e=%d n=%d", len(cipher), e, n)
    return cipher, tuple(steps)

def _as_cipher_int(index: int, value: Any) -> int:
    if isinstance(value, bool):
        raise MalformedCiphertextError(index, value)
    if isinstance(value, numbers.Integral):
        if value < 0:
            raise MalformedCiphertextError(index, value)
        return operator.index(value)
    if isinstance(value, str) and value.strip().isdecimal():
        try:
            return int(value.strip())
        except ValueError:
            raise MalformedCiphertextError(index, value, "too many digits") from None
    raise MalformedCiphertextError(index, value)

def decrypt(ciphertext: Sequence[Any], private_key: PrivateKey) -> Tuple[str, StepTrace]:
    """
    Decrypt each integer as c^d mod n and read the result as a code point.

    Every element is validated before any decryption happens, so a malformed
    element never yields a truncated plaintext.
    """
    d, n = map(operator.index, private_key)
    values = [_as_cipher_int(i, v) for i, v in enumerate(ciphertext)]

    chars = []
    steps = []
    for i, c in enumerate(values):
        m = mod_pow(c, d, n)
        try:
            ch = chr(m)
        except (ValueError, OverflowError):
            raise MalformedCiphertextError(i, c, f"decrypts to {m}, which is not a valid code point") from None
        chars.append(ch)
        steps.append(TraceStep("c", f"{c}^{d} mod {n}", m, value=c, character=ch))
    log.debug("decrypted %d values with d=%d n=%d", len(values), d, n)
    return "".join(chars), tuple(steps)

# ---- Text form used when ciphertext is stored or sent alongside a message ----

_SEPARATORS = re.compile(r"[,\s]+")

def format_ciphertext(cipher: Iterable[int]) -> str:
    return ", ".join(map(str, cipher))

def parse_ciphertext(text: str) -> List[int]:
    """Parse "12, 34 56" or "[12, 34, 56]" into integers."""
    body = text.strip()
    if body.startswith("[") and body.endswith("]"):
        body = body[1:-1]
    tokens = [t for t in _SEPARATORS.split(body) if t]
    return [_as_cipher_int(i, t) for i, t in enumerate(tokens)]
