\
"""
Command-line front end for the textbook RSA engine (no UI needed).

Usage:
    python rsa_cli.py keys --p 11 --q 13
    python rsa_cli.py encrypt --e 7 --n 143 "HI"
    python rsa_cli.py decrypt --d 103 --n 143 "19, 83"
    python rsa_cli.py demo --p 11 --q 13 "HI"
    python rsa_cli.py primes --limit 100
    python rsa_cli.py crack --e 7 --n 143 "19, 83"
"""
import argparse
import logging
import sys

from numtheory import factor_modulus, generate_primes
from rsa_codec import decrypt, encrypt, format_ciphertext, parse_ciphertext
from rsa_errors import RSAError
from rsa_keys import PrivateKey, PublicKey, derive_keys
from rsa_trace import render_trace

DEFAULT_PRIME_LIMIT = 200

def modulus(text):
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"modulus must be a positive integer, got {value}")
    return value

def exponent(text):
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"exponent must be a non-negative integer, got {value}")
    return value

def _print_trace(title, trace):
    print(title)
    for line in render_trace(trace):
        print("  " + line)

def _print_keys(keys):
    print(f"Public key (e, n):  ({keys.e}, {keys.n})")
    print(f"Private key (d, n): ({keys.d}, {keys.n})")

def cmd_keys(args):
    keys, trace = derive_keys(args.p, args.q)
    _print_trace("Key derivation:", trace)
    _print_keys(keys)

def cmd_encrypt(args):
    cipher, trace = encrypt(args.message, PublicKey(args.e, args.n), strict=args.strict)
    _print_trace("Encryption:", trace)
    print("Ciphertext:", format_ciphertext(cipher))

def cmd_decrypt(args):
    plaintext, trace = decrypt(parse_ciphertext(args.ciphertext), PrivateKey(args.d, args.n))
    _print_trace("Decryption:", trace)
    print("Plaintext:", plaintext)

def cmd_demo(args):
    keys, key_trace = derive_keys(args.p, args.q)
    _print_trace("Key derivation:", key_trace)
    _print_keys(keys)
    cipher, enc_trace = encrypt(args.message, keys.public_key, strict=args.strict)
    _print_trace("Encryption:", enc_trace)
    print("Ciphertext:", format_ciphertext(cipher))
    plaintext, dec_trace = decrypt(cipher, keys.private_key)
    _print_trace("Decryption:", dec_trace)
    print("Plaintext:", plaintext)
    print("Round trip OK:", plaintext == args.message)

def cmd_primes(args):
    primes = generate_primes(args.limit)
    print(f"{primes.size} primes <= {args.limit}:")
    print(" ".join(map(str, primes.tolist())))

def cmd_crack(args):
    p, q = factor_modulus(args.n)
    if p is None:
        print(f"Could not factor n = {args.n}", file=sys.stderr)
        return 1
    print(f"Factored n: p = {p}, q = {q}")
    keys, trace = derive_keys(p, q)
    if keys.e != args.e:
        print(f"Public exponent {args.e} differs from the derived e = {keys.e}; "
              "decrypting with the derived key anyway")
    _print_trace("Recovered key derivation:", trace)
    plaintext, _ = decrypt(parse_ciphertext(args.ciphertext), keys.private_key)
    print("Recovered plaintext:", plaintext)
    return 0

def build_parser():
    parser = argparse.ArgumentParser(description="Textbook RSA with every step shown (educational, insecure).")
    parser.add_argument("--verbose", "-v", action="store_true", help="log engine calls to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("keys", help="derive a key pair from two primes")
    p.add_argument("--p", type=int, default=11, help="first prime")
    p.add_argument("--q", type=int, default=13, help="second prime")
    p.set_defaults(func=cmd_keys)

    p = sub.add_parser("encrypt", help="encrypt a message with a public key")
    p.add_argument("--e", type=exponent, required=True, help="public exponent")
    p.add_argument("--n", type=modulus, required=True, help="modulus")
    p.add_argument("--strict", action="store_true", help="reject characters with code >= n")
    p.add_argument("message")
    p.set_defaults(func=cmd_encrypt)

    p = sub.add_parser("decrypt", help="decrypt comma/space separated integers with a private key")
    p.add_argument("--d", type=exponent, required=True, help="private exponent")
    p.add_argument("--n", type=modulus, required=True, help="modulus")
    p.add_argument("ciphertext")
    p.set_defaults(func=cmd_decrypt)

    p = sub.add_parser("demo", help="derive keys, encrypt and decrypt in one go")
    p.add_argument("--p", type=int, default=11, help="first prime")
    p.add_argument("--q", type=int, default=13, help="second prime")
    p.add_argument("--strict", action="store_true", help="reject characters with code >= n")
    p.add_argument("message", nargs="?", default="HI")
    p.set_defaults(func=cmd_demo)

    p = sub.add_parser("primes", help="list primes to pick p and q from")
    p.add_argument("--limit", type=int, default=DEFAULT_PRIME_LIMIT, help="largest candidate")
    p.set_defaults(func=cmd_primes)

    p = sub.add_parser("crack", help="play Eve: factor n and read the message")
    p.add_argument("--e", type=exponent, required=True, help="public exponent")
    p.add_argument("--n", type=modulus, required=True, help="modulus")
    p.add_argument("ciphertext")
    p.set_defaults(func=cmd_crack)
    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    try:
        status = args.func(args)
    except RSAError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return status or 0

if __name__ == "__main__":
    sys.exit(main())
