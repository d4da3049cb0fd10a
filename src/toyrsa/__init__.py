"""Toy RSA Utilities in an Academic Sense.

Provides a deliberately small RSA cipher for Encryption and Decryption of integers, text and fixed-width binary codes
(such as Huffman codes), built on hand-written number theory primitives. Keys are drawn from three-digit primes and
are insecure.

Typical usage example:

    cipher = RSACipher(rng=random.Random(1234))
    c = cipher.encrypt_string("Hi there!")
    r = cipher.decrypt_string(c)
    (n, e), (n, d, p, q) = generate_key_pair(random.Random(1234))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from toyrsa.keygen import derive_key_pair
from toyrsa.keygen import generate_key_pair
from toyrsa.keygen import generate_prime
from toyrsa.keygen import NonInvertibleKeyError
from toyrsa.numtheory import is_prime
from toyrsa.numtheory import mod_inverse
from toyrsa.numtheory import mod_pow
from toyrsa.rsa import binary_to_integer
from toyrsa.rsa import integer_to_binary
from toyrsa.rsa import RSACipher
from toyrsa.rsa import RSAPrivKey
from toyrsa.rsa import RSAPubKey

__version__ = "0.0.1"
__all__ = [
    "RSACipher",
    "RSAPrivKey",
    "RSAPubKey",
    "NonInvertibleKeyError",
    "binary_to_integer",
    "integer_to_binary",
    "is_prime",
    "mod_inverse",
    "mod_pow",
    "generate_prime",
    "derive_key_pair",
    "generate_key_pair",
]
