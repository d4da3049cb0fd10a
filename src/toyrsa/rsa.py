"""Provides the toy RSA cipher: single-integer, character-string and binary-code encryption and decryption.

Handles the key classes and the facade holding a generated keypair, as well as the codec turning binary-digit
tokens into integers and back at a fixed width. Codes keep the width of their plaintext token, which external
prefix-code (Huffman) decoders rely on.

Typical usage example:

    cipher = RSACipher(rng=random.Random(1234))
    c = cipher.encrypt_string("Hi there!")
    r = cipher.decrypt_string(c)
    cc = cipher.encrypt_codes("010 1101 00", truncate=True)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import math
import random
import warnings

from toyrsa import keygen
from toyrsa.numtheory import mod_pow

# The original arithmetic ran on signed 64-bit integers.
WORD_BITS: int = 63


class RSAKey:
    """The overall RSA key class implementation.

    Acts mostly as a template for the "core" components of a RSA Key that are strictly mandatory in both a public
    and a private key.

    Attributes:
        mod: The modulus of the keypair.
        expo: The exponent of the key, whether private or public.
    """

    def __init__(self, mod: int, expo: int) -> None:
        self.mod = mod
        self.expo = expo

    def c_rsa(self, message: int) -> int:
        """Performs core RSA operation. (Encrypt/Decrypt).

        Args:
            message: The int-marshalled message.

        Returns:
            `message**expo % mod`

        Raises:
            ValueError: If the message is out of range for the current key.
        """
        if not 0 <= message < self.mod:
            raise ValueError("Message representative must be in range [0, mod-1]")
        return mod_pow(message, self.expo, self.mod)

    def _map_codes(self, codes: str, truncate: bool) -> str:
        """Runs `c_rsa` over every whitespace-delimited binary token, keeping each token's width."""
        result = []
        for token in codes.split():
            value = self.c_rsa(binary_to_integer(token))
            result.append(integer_to_binary(value, len(token), truncate) + " ")
        return "".join(result)


class RSAPubKey(RSAKey):
    """A rather straightforward subclass of RSAKey, for Public Keys.

    The init is not overwritten as a Public Key consists solely of a modulus and exponent.
    """

    def encrypt(self, message: int) -> int:
        return self.c_rsa(message)

    def encrypt_string(self, message: str) -> str:
        """Encrypts every character of the message separately.

        Args:
            message: The text to encrypt. Every code point must be below the modulus.

        Returns:
            Decimal ciphertexts, each followed by a single space.
        """
        return "".join(f"{self.c_rsa(ord(char))} " for char in message)

    def encrypt_codes(self, codes: str, truncate: bool = False) -> str:
        """Encrypts whitespace-delimited binary codes, keeping the width of every code.

        Args:
            codes: Binary-digit tokens separated by whitespace.
            truncate: Whether to cut ciphertexts down to the token width instead of failing.
                Warning! Truncated codes do not decrypt.

        Returns:
            Binary ciphertext tokens, each followed by a single space.
        """
        return self._map_codes(codes, truncate)


class RSAPrivKey(RSAKey):
    """RSA Private Key class implementation.

    Modifies the baseline RSAKey class to keep the primes and totient when known and exposes its connected public
    key.

    Attributes:
        mod: The modulus of the keypair.
        expo: The private exponent of the key.
        pub: The public key of the key.
        p: Private Prime 1.
        q: Private Prime 2.
        phi: Totient of the modulus, if the primes are known.
    """

    def __init__(self, mod: int, pub_exp: int, priv_exp: int, p: int | None = None, q: int | None = None) -> None:
        """Initialize the RSA Private Key.

        Args:
            mod: The modulus of the keypair.
            pub_exp: The public exponent of the key.
            priv_exp: The private exponent of the key.
            p: The private prime 1.
            q: The private prime 2.

        Raises:
            ValueError: If both primes are given and equal.
        """
        super().__init__(mod, priv_exp)
        self.pub: RSAPubKey = RSAPubKey(mod, pub_exp)
        self.p: int | None = None
        self.q: int | None = None
        self.phi: int | None = None
        if p and q:
            if p == q:
                raise ValueError("Primes must be distinct.")
            self.p = p
            self.q = q
            self.phi = (p - 1) * (q - 1)

    def is_valid(self) -> bool:
        """Whether the exponents are inverse modulo the totient. Keys without primes are assumed valid."""
        if self.phi is None:
            return True
        return (self.pub.expo * self.expo) % self.phi == 1 % self.phi

    def decrypt(self, message: int) -> int:
        return self.c_rsa(message)

    def decrypt_string(self, message: str) -> str:
        """Decrypts whitespace-delimited decimal ciphertexts back into text.

        Args:
            message: Decimal ciphertexts as produced by `RSAPubKey.encrypt_string`.

        Returns:
            The decrypted text.

        Raises:
            ValueError: If a token is not a decimal integer or out of range for the key.
        """
        return "".join(chr(self.c_rsa(int(token))) for token in message.split())

    def decrypt_codes(self, codes: str, truncate: bool = False) -> str:
        """Decrypts whitespace-delimited binary codes, keeping the width of every code.

        Args:
            codes: Binary ciphertext tokens separated by whitespace.
            truncate: Whether to cut plaintexts down to the token width instead of failing.

        Returns:
            Binary plaintext tokens, each followed by a single space.
        """
        return self._map_codes(codes, truncate)

    @classmethod
    def from_primes(cls, p: int, q: int, pub_exp: int = keygen.DEFAULT_PUB_EXP, strict: bool = True) -> "RSAPrivKey":
        """Builds the key belonging to a given pair of primes.

        Args:
            p: The first prime.
            q: The second prime.
            pub_exp: The public exponent of the key.
            strict: Whether to refuse a public exponent sharing a factor with the totient.
                If False, such a key is built anyway and will not round-trip.

        Returns:
            The RSA Private Key for the primes.

        Raises:
            ValueError: If both primes are equal.
            NonInvertibleKeyError: If `strict` and no private exponent exists.
        """
        if p == q:
            raise ValueError("Primes must be distinct.")
        if strict and math.gcd(pub_exp, (p - 1) * (q - 1)) != 1:
            raise keygen.NonInvertibleKeyError(f"Public exponent {pub_exp} is not invertible for primes {p}, {q}.")
        n, _, d = keygen.derive_key_pair(p, q, pub_exp)
        return cls(n, pub_exp, d, p, q)

    @classmethod
    def generate(cls, rng: random.Random | None = None, pub_exp: int = keygen.DEFAULT_PUB_EXP) -> "RSAPrivKey":
        """Generates an RSA Private Key, and it's respective Public Key.

        Args:
            rng: The random generator to draw primes from.
            pub_exp: The public exponent of the key.

        Returns:
            A new generated RSA Private Key.
        """
        (n, pub), (_, d, p, q) = keygen.generate_key_pair(rng, pub_exp)
        return cls(n, pub, d, p, q)


class RSACipher:
    """Holds a single keypair and runs every cipher operation against it.

    The keypair is generated once on construction, unless one is provided, and never changes afterward.

    Attributes:
        key: The private key, with its public key attached.
    """

    def __init__(self,
                 key: RSAPrivKey | None = None,
                 rng: random.Random | None = None,
                 pub_exp: int = keygen.DEFAULT_PUB_EXP) -> None:
        if key is None:
            key = RSAPrivKey.generate(rng, pub_exp)
        self.key = key

    @property
    def public_key(self) -> tuple[int, int]:
        """The public key as (exponent, modulus)."""
        return self.key.pub.expo, self.key.pub.mod

    @property
    def private_key(self) -> tuple[int, int]:
        """The private key as (exponent, modulus)."""
        return self.key.expo, self.key.mod

    def encrypt(self, message: int) -> int:
        return self.key.pub.encrypt(message)

    def decrypt(self, message: int) -> int:
        return self.key.decrypt(message)

    def encrypt_string(self, message: str) -> str:
        return self.key.pub.encrypt_string(message)

    def decrypt_string(self, message: str) -> str:
        return self.key.decrypt_string(message)

    def encrypt_codes(self, codes: str, truncate: bool = False) -> str:
        return self.key.pub.encrypt_codes(codes, truncate)

    def decrypt_codes(self, codes: str, truncate: bool = False) -> str:
        return self.key.decrypt_codes(codes, truncate)


def binary_to_integer(bits: str) -> int:
    """Converts a string of binary digits to an integer, most significant bit first.

    Args:
        bits: The binary digits. At most `WORD_BITS` long.

    Returns:
        The representative integer.

    Raises:
        ValueError: If the string holds anything but binary digits or is too long.
    """
    if len(bits) > WORD_BITS:
        raise ValueError(f"Binary token longer than {WORD_BITS} bits")
    result = 0
    for bit in bits:
        if bit not in "01":
            raise ValueError(f"Invalid binary digit {bit!r}")
        result = (result << 1) | int(bit)
    return result


def integer_to_binary(value: int, width: int, truncate: bool = False) -> str:
    """Converts an integer to a string of binary digits, using a fixed width.

    Args:
        value: The non-negative integer to render.
        width: The exact number of digits to produce.
        truncate: Whether to drop high bits that do not fit. If False, not fitting is an error.

    Returns:
        The binary digits, most significant bit first, zero-padded to `width`.

    Raises:
        ValueError: If the value is negative or does not fit and `truncate` is False.
    """
    if value < 0 or width < 0:
        raise ValueError("Value and width must be non-negative")
    if value.bit_length() > width:
        if not truncate:
            raise ValueError(f"Value {value} does not fit in {width} bits")
        warnings.warn(f"Truncating {value} to {width} bits. Result will not round-trip.", RuntimeWarning)
        value &= (1 << width) - 1
    return format(value, "b").zfill(width) if width else ""
