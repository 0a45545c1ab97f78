import sys

import numpy as np
import pytest

from numtheory import generate_primes, mod_pow
from rsa_codec import decrypt, encrypt, format_ciphertext, parse_ciphertext
from rsa_errors import MalformedCiphertextError, OutOfRangeCharacterError
from rsa_keys import PrivateKey, PublicKey, derive_keys

PUB = PublicKey(e=7, n=143)
PRIV = PrivateKey(d=103, n=143)


def test_encrypt_hi():
    cipher, _ = encrypt("HI", PUB)
    assert cipher == [mod_pow(72, 7, 143), mod_pow(73, 7, 143)]
    assert cipher == [19, 83]


def test_decrypt_hi():
    plaintext, _ = decrypt([19, 83], PRIV)
    assert plaintext == "HI"


def test_encrypt_trace_has_one_record_per_character():
    text = "Hello, RSA!"
    cipher, trace = encrypt(text, PUB)
    assert len(trace) == len(text) == len(cipher)
    first = trace[0]
    assert (first.label, first.value, first.formula, first.result) == ("H", 72, "72^7 mod 143", 19)


def test_decrypt_trace_records_characters():
    _, trace = decrypt([19, 83], PRIV)
    assert len(trace) == 2
    assert trace[1].value == 83
    assert trace[1].formula == "83^103 mod 143"
    assert trace[1].result == 73
    assert trace[1].character == "I"


def test_empty_message():
    assert encrypt("", PUB) == ([], ())
    assert decrypt([], PRIV) == ("", ())


@pytest.mark.parametrize("p,q,text", [
    (11, 13, "The quick brown fox jumps over the lazy dog"),
    (61, 53, "Hello, World! 123"),
    (17, 19, "~ repeated letters keep their position: aaaa ~"),
    (101, 103, "héllo ünïcode"),
])
def test_round_trip(p, q, text):
    keys, _ = derive_keys(p, q)
    cipher, _ = encrypt(text, keys.public_key)
    assert all(0 <= c < keys.n for c in cipher)
    plaintext, _ = decrypt(cipher, keys.private_key)
    assert plaintext == text


def test_identical_characters_give_identical_ciphertext():
    cipher, _ = encrypt("AAB", PUB)
    assert cipher[0] == cipher[1] != cipher[2]


def test_code_points_at_or_above_n_wrap_silently():
    # ord("ſ") == 383 == 2 * 143 + 97, so it comes back as chr(97)
    cipher, _ = encrypt("ſ", PUB)
    plaintext, _ = decrypt(cipher, PRIV)
    assert plaintext == "a"


def test_strict_rejects_out_of_range_character():
    with pytest.raises(OutOfRangeCharacterError) as exc_info:
        encrypt("okſ", PUB, strict=True)
    err = exc_info.value
    assert (err.index, err.character, err.n) == (2, "ſ", 143)
    assert err.kind == "OutOfRangeCharacter"


def test_strict_accepts_in_range_text():
    assert encrypt("HI", PUB, strict=True)[0] == [19, 83]


def test_decrypt_accepts_digit_strings():
    assert decrypt(["19", " 83 "], PRIV)[0] == "HI"


@pytest.mark.parametrize("bad,index", [
    (["abc"], 0),
    ([19, "x83"], 1),
    ([19, -1], 1),
    ([19, 8.5], 1),
    ([True], 0),
    ([19, 83, None], 2),
    (["-5"], 0),
    ([""], 0),
])
def test_malformed_ciphertext(bad, index):
    with pytest.raises(MalformedCiphertextError) as exc_info:
        decrypt(bad, PRIV)
    assert exc_info.value.index == index
    assert exc_info.value.kind == "MalformedCiphertext"


def test_result_outside_unicode_is_malformed():
    key = PrivateKey(d=1, n=0x200000)
    with pytest.raises(MalformedCiphertextError) as exc_info:
        decrypt([72, 0x110000], key)
    assert exc_info.value.index == 1


def test_format_ciphertext():
    assert format_ciphertext([19, 83]) == "19, 83"
    assert format_ciphertext([]) == ""


@pytest.mark.parametrize("text,expected", [
    ("19, 83", [19, 83]),
    ("19,83", [19, 83]),
    ("19 83", [19, 83]),
    ("  19 ,\n 83  ", [19, 83]),
    ("[19, 83]", [19, 83]),
    ("", []),
    ("[]", []),
])
def test_parse_ciphertext(text, expected):
    assert parse_ciphertext(text) == expected


@pytest.mark.parametrize("text,index", [("19, abc", 1), ("-5", 0), ("19; 83", 0)])
def test_parse_ciphertext_rejects_bad_tokens(text, index):
    with pytest.raises(MalformedCiphertextError) as exc_info:
        parse_ciphertext(text)
    assert exc_info.value.index == index


def test_text_form_round_trip():
    cipher, _ = encrypt("HI there", PUB)
    assert decrypt(parse_ciphertext(format_ciphertext(cipher)), PRIV)[0] == "HI there"


def test_ciphertext_values_at_or_above_n_wrap_silently():
    assert decrypt([19 + 143, 83 + 2 * 143], PRIV)[0] == "HI"


def test_keys_from_numpy_primes_round_trip():
    primes = generate_primes(20)
    keys, _ = derive_keys(primes[4], primes[5])
    cipher, _ = encrypt("HI", keys.public_key)
    assert cipher == [19, 83]
    assert all(type(c) is int for c in cipher)
    assert decrypt(cipher, keys.private_key)[0] == "HI"


def test_decrypt_accepts_numpy_integers():
    values = np.array([19, 83], dtype=np.int64)
    assert decrypt(list(values), PRIV)[0] == "HI"
    assert decrypt([19, 83], PrivateKey(np.int64(103), np.int64(143)))[0] == "HI"


def test_negative_numpy_integer_is_malformed():
    with pytest.raises(MalformedCiphertextError) as exc_info:
        decrypt([np.int64(-1)], PRIV)
    assert exc_info.value.index == 0


@pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="no int digit limit before Python 3.11")
def test_overlong_digit_string_is_malformed():
    with pytest.raises(MalformedCiphertextError) as exc_info:
        parse_ciphertext("19, " + "9" * 5000)
    assert exc_info.value.index == 1
    assert exc_info.value.reason == "too many digits"
