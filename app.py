import streamlit as st

from numtheory import factor_modulus, generate_primes
from rsa_codec import decrypt, encrypt, format_ciphertext, parse_ciphertext
from rsa_errors import OutOfRangeCharacterError, RSAError
from rsa_keys import derive_keys
from rsa_trace import render_trace, trace_rows

st.set_page_config(page_title="RSA, step by step", page_icon="🔐", layout="wide")

PRIME_LIMIT = 500

# ---------------- Session State ----------------
if "rsa_cipher" not in st.session_state:
    st.session_state.rsa_cipher = None   # list[int], one per character
if "rsa_cipher_key" not in st.session_state:
    st.session_state.rsa_cipher_key = None   # (e, n) the cipher was made with

# ---------------- Header ----------------
st.title("🔐 Textbook RSA — Every Step Shown")
st.caption(
    "Pick two small primes, watch the key pair fall out, then encrypt a message one character at a time. "
    "Toggle **Eve** to see how quickly a tiny modulus gives everything away."
)

attacker = st.toggle(
    "Eve (attacker) ON?",
    value=False,
    help="Eve only sees (e, n) and the ciphertext. With a tiny n, Eve factors it by trial division."
)

def show_trace(trace, table=False):
    st.code("\n".join(render_trace(trace)))
    if table:
        st.dataframe(trace_rows(trace), hide_index=True)

# ---------------- Key Panel ----------------
def key_panel():
    st.subheader("1. Key generation")
    primes = generate_primes(PRIME_LIMIT)
    st.caption(f"Primes up to {PRIME_LIMIT}: " + ", ".join(map(str, primes[:25].tolist())) + ", …")

    cols = st.columns(2)
    with cols[0]:
        p = st.number_input("Prime p", min_value=0, value=11, step=1, key="p")
    with cols[1]:
        q = st.number_input("Prime q", min_value=0, value=13, step=1, key="q")

    try:
        keys, trace = derive_keys(int(p), int(q))
    except RSAError as exc:
        st.error(f"{exc.kind}: {exc}")
        return None

    show_trace(trace)
    st.code(f"Public key (e, n):  ({keys.e}, {keys.n})\nPrivate key (d, n): ({keys.d}, {keys.n})")
    return keys

# ---------------- Message Panel ----------------
def message_panel(keys):
    st.subheader("2. Encrypt & decrypt")
    cols = st.columns(2)

    with cols[0]:
        msg = st.text_input("Message", "HI", key="msg")
        strict = st.checkbox(
            "Reject characters with code ≥ n",
            value=False,
            help="Unpadded RSA silently wraps such characters, so they won't decrypt back."
        )
        if st.button("Encrypt", key="encrypt"):
            try:
                cipher, trace = encrypt(msg, keys.public_key, strict=strict)
            except OutOfRangeCharacterError as exc:
                st.error(str(exc))
            else:
                st.session_state.rsa_cipher = cipher
                st.session_state.rsa_cipher_key = tuple(keys.public_key)
                show_trace(trace, table=True)

        if st.session_state.rsa_cipher is not None:
            st.code("Ciphertext:\n" + format_ciphertext(st.session_state.rsa_cipher))
            if st.session_state.rsa_cipher_key != tuple(keys.public_key):
                st.warning("The keys changed since this ciphertext was made; decrypting it will give garbage.")

    with cols[1]:
        default_ct = format_ciphertext(st.session_state.rsa_cipher or [])
        ct_text = st.text_input("Ciphertext (comma or space separated)", default_ct)
        if attacker:
            eve_panel(keys, ct_text)
        elif ct_text.strip():
            try:
                plaintext, trace = decrypt(parse_ciphertext(ct_text), keys.private_key)
            except RSAError as exc:
                st.error(f"{exc.kind}: {exc}")
            else:
                st.info("Eve OFF → the receiver decrypts with the private exponent d.")
                show_trace(trace, table=True)
                st.code("Decrypted message:\n" + plaintext)

def eve_panel(keys, ct_text):
    st.warning("Eve is ON → factoring n via trial division.")
    p, q = factor_modulus(keys.n)
    if p is None:
        st.error("Factoring failed.")
        return
    st.code(f"Eve factored n = {keys.n}: p = {p}, q = {q}")
    try:
        eve_keys, trace = derive_keys(p, q)
        show_trace(trace)
        if ct_text.strip():
            plaintext, _ = decrypt(parse_ciphertext(ct_text), eve_keys.private_key)
            st.success("Eve recovered the plaintext")
            st.code(plaintext)
    except RSAError as exc:
        st.error(f"{exc.kind}: {exc}")

# ---------------- Layout ----------------
keys = key_panel()
if keys is not None:
    st.divider()
    message_panel(keys)

st.caption(
    "⚠️ Educational demo: tiny primes, no padding, one integer per character. "
    "Real RSA uses 2048+ bit moduli with OAEP padding."
)
