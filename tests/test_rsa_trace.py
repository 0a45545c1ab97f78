import dataclasses

import pytest

from rsa_codec import decrypt, encrypt
from rsa_keys import derive_keys
from rsa_trace import TraceStep, render_trace, trace_rows


def test_render_key_trace():
    keys, trace = derive_keys(11, 13)
    assert render_trace(trace) == [
        "Step 1: n = 11 × 13 = 143",
        "Step 2: φ(n) = (11-1) × (13-1) = 120",
        "Step 3: e = 7 (coprime with φ(n)) = 7",
        "Step 4: d = 7⁻¹ mod 120 = 103",
    ]


def test_render_codec_traces():
    keys, _ = derive_keys(11, 13)
    cipher, enc_trace = encrypt("HI", keys.public_key)
    _, dec_trace = decrypt(cipher, keys.private_key)
    assert render_trace(enc_trace) == [
        "Step 1: 'H' (72): 72^7 mod 143 = 19",
        "Step 2: 'I' (73): 73^7 mod 143 = 83",
    ]
    assert render_trace(dec_trace) == [
        "Step 1: 19^103 mod 143 = 72 → 'H'",
        "Step 2: 83^103 mod 143 = 73 → 'I'",
    ]


def test_render_empty_trace():
    assert render_trace(()) == []


def test_trace_rows():
    _, trace = decrypt([19], derive_keys(11, 13)[0].private_key)
    assert trace_rows(trace) == [
        {"step": "c", "input": 19, "calculation": "19^103 mod 143", "result": 72, "character": "H"},
    ]


def test_trace_steps_are_immutable():
    step = TraceStep("n", "11 × 13", 143)
    with pytest.raises(dataclasses.FrozenInstanceError):
        step.result = 0
