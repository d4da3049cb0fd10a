# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import random

import pytest

import toyrsa
import toyrsa.rsa as rsau

standard_payload = "The quick brown fox jumps over the lazy dog1234567890!@#$%^&*()-_=+[{}];:\\|<>,./?~`'\""
SEEDS = [0, 1, 42, 1234, 2025]


@pytest.fixture(scope="module")
def key() -> rsau.RSAPrivKey:
    # n = 11413
    return rsau.RSAPrivKey.from_primes(101, 113)


@pytest.fixture(scope="module")
def code_key() -> rsau.RSAPrivKey:
    # n = 115, phi = 88, 19 * 51 = 969 = 11 * 88 + 1. Small enough for codes to keep their width.
    return rsau.RSAPrivKey(115, 19, 51, 5, 23)


@pytest.fixture(scope="module", params=SEEDS)
def cipher(request) -> rsau.RSACipher:
    return rsau.RSACipher(rng=random.Random(request.param))


@pytest.mark.parametrize("bits,expected", [("", 0), ("0", 0), ("1", 1), ("00", 0), ("010", 2), ("1101", 13),
                                           ("0001101", 13), ("1" * 63, 2**63 - 1)])
def test_binary_to_integer(bits, expected):
    assert rsau.binary_to_integer(bits) == expected


@pytest.mark.parametrize("bits", ["012", "1a0", " 10", "1" * 64, "0" * 64])
def test_binary_to_integer_validates(bits):
    with pytest.raises(ValueError):
        rsau.binary_to_integer(bits)


@pytest.mark.parametrize("value,width,expected", [(2, 3, "010"), (13, 4, "1101"), (0, 2, "00"), (0, 0, ""),
                                                  (1, 1, "1"), (13, 7, "0001101"), (2**63 - 1, 63, "1" * 63)])
def test_integer_to_binary(value, width, expected):
    assert rsau.integer_to_binary(value, width) == expected


@pytest.mark.parametrize("value,width", [(8, 3), (13, 2), (1, 0), (-1, 4), (3, -1)])
def test_integer_to_binary_validates(value, width):
    with pytest.raises(ValueError):
        rsau.integer_to_binary(value, width)


@pytest.mark.parametrize("value,width,expected", [(13, 2, "01"), (8, 3, "000"), (7832, 3, "000"), (1, 0, "")])
def test_integer_to_binary_truncates(value, width, expected):
    with pytest.warns(RuntimeWarning, match="Truncating"):
        assert rsau.integer_to_binary(value, width, truncate=True) == expected


def test_from_primes(key):
    assert key.mod == 11413
    assert key.pub.mod == 11413
    assert key.pub.expo == 65537
    assert (key.p, key.q) == (101, 113)
    assert key.phi == 100 * 112
    assert key.is_valid()


def test_from_primes_strict():
    with pytest.raises(toyrsa.NonInvertibleKeyError):
        rsau.RSAPrivKey.from_primes(101, 103, 3)


@pytest.mark.parametrize("pub_exp,strict", [(65537, True), (65537, False), (3, True), (3, False)])
def test_from_primes_equal(pub_exp, strict):
    # (p-1)**2 is not the totient of p**2, such a key would not round-trip.
    with pytest.raises(ValueError, match="distinct"):
        rsau.RSAPrivKey.from_primes(101, 101, pub_exp, strict)


def test_equal_primes_refused():
    with pytest.raises(ValueError, match="distinct"):
        rsau.RSAPrivKey(10201, 65537, 1, 101, 101)


def test_generate(mocker):
    mocker.patch("toyrsa.keygen.generate_key_pair", return_value=((10403, 65537), (10403, 5633, 101, 103)))
    reskey = rsau.RSAPrivKey.generate(random.Random(0))
    assert reskey.mod == 10403
    assert reskey.expo == 5633
    assert reskey.pub.expo == 65537
    assert (reskey.p, reskey.q) == (101, 103)


def test_key_without_primes_assumed_valid():
    assert rsau.RSAPrivKey(115, 19, 51).is_valid()
    assert rsau.RSAPrivKey(115, 19, 51).phi is None


@pytest.mark.parametrize("flow", [-1, 0])
def test_overflow_underflow_c_rsa(key, flow):
    message = key.mod + flow if flow == 0 else flow
    with pytest.raises(ValueError):
        key.decrypt(message)
    with pytest.raises(ValueError):
        key.pub.encrypt(message)


def test_encrypt_known(key):
    assert key.pub.encrypt(72) == 10983
    assert key.decrypt(10983) == 72


def test_exponent_above_totient_round_trips():
    # 65537 > phi = 10200, yet gcd(65537, 10200) == 1, so the key is valid.
    small = rsau.RSAPrivKey.from_primes(101, 103)
    assert small.pub.expo > small.phi
    assert small.is_valid()
    assert all(small.decrypt(small.pub.encrypt(m)) == m for m in range(small.mod))


def test_non_invertible_key_fails_round_trip():
    with pytest.warns(RuntimeWarning, match="not invertible"):
        broken = rsau.RSAPrivKey.from_primes(101, 103, 3, strict=False)
    assert not broken.is_valid()
    assert any(broken.decrypt(broken.pub.encrypt(m)) != m for m in range(broken.mod))


def test_round_trip_sample(cipher):
    n = cipher.public_key[1]
    rng = random.Random(n)
    for m in [0, 1, 2, n - 2, n - 1] + [rng.randrange(n) for _ in range(500)]:
        assert cipher.decrypt(cipher.encrypt(m)) == m


@pytest.mark.extreme
def test_round_trip_exhaustive(cipher):
    n = cipher.public_key[1]
    assert all(cipher.decrypt(cipher.encrypt(m)) == m for m in range(n))


def test_encrypt_string_format(key):
    assert key.pub.encrypt_string("H") == "10983 "
    assert key.pub.encrypt_string("") == ""
    ciph = key.pub.encrypt_string("Hello, World!")
    assert ciph.endswith(" ")
    assert not ciph.endswith("  ")
    tokens = ciph.split(" ")[:-1]
    assert len(tokens) == 13
    assert all(token.isdigit() and int(token) < key.mod for token in tokens)


@pytest.mark.parametrize("payload", ["Hello, World!", "", " ", "a b\tc\n", standard_payload, "zażółć"])
def test_string_round_trip(key, payload):
    assert key.decrypt_string(key.pub.encrypt_string(payload)) == payload


def test_decrypt_string_whitespace(key):
    assert key.decrypt_string("  10983\t10983\n") == "HH"


@pytest.mark.parametrize("ciph", ["10983 abc ", "10983 1.5 ", "0x10 "])
def test_decrypt_string_malformed(key, ciph):
    with pytest.raises(ValueError):
        key.decrypt_string(ciph)


def test_string_out_of_range(key):
    with pytest.raises(ValueError):
        key.pub.encrypt_string(chr(key.mod))
    with pytest.raises(ValueError):
        key.decrypt_string(f"{key.mod} ")


def test_encrypt_codes_known(code_key):
    assert code_key.is_valid()
    assert code_key.pub.encrypt_codes("010 1101 00") == "011 0010 00 "
    assert code_key.decrypt_codes("011 0010 00 ") == "010 1101 00 "


@pytest.mark.parametrize("codes", ["010 1101 00 ", "0 1 ", "", "1110010 0000001 "])
def test_codes_round_trip(code_key, codes):
    assert code_key.decrypt_codes(code_key.pub.encrypt_codes(codes)) == codes


def test_codes_keep_width(code_key):
    codes = "010 1101 00 0000011 1"
    ciph = code_key.pub.encrypt_codes(codes)
    assert [len(token) for token in ciph.split()] == [len(token) for token in codes.split()]


def test_codes_overflow(key):
    # 2**65537 % 11413 needs more than 3 bits.
    with pytest.raises(ValueError, match="does not fit"):
        key.pub.encrypt_codes("010 1101 00")


def test_codes_truncate():
    small = rsau.RSAPrivKey.from_primes(101, 103)
    with pytest.warns(RuntimeWarning, match="Truncating"):
        ciph = small.pub.encrypt_codes("010 1101 00", truncate=True)
    # 7832 and 4083 cut down to 3 and 4 bits.
    assert ciph == "000 0011 00 "


@pytest.mark.parametrize("codes", ["012", "01 2", "1" * 64])
def test_codes_validate(code_key, codes):
    with pytest.raises(ValueError):
        code_key.pub.encrypt_codes(codes)
    with pytest.raises(ValueError):
        code_key.decrypt_codes(codes)


def test_codes_out_of_range(code_key):
    # 1111111 = 127 >= 115
    with pytest.raises(ValueError):
        code_key.pub.encrypt_codes("1111111")


def test_cipher_keys_stable(cipher):
    assert cipher.public_key == cipher.public_key
    assert cipher.private_key == cipher.private_key
    e, n = cipher.public_key
    d, n2 = cipher.private_key
    assert n == n2
    assert e == 65537
    assert cipher.key.is_valid()
    assert (e * d) % cipher.key.phi == 1


@pytest.mark.parametrize("seed", SEEDS)
def test_cipher_reproducible(seed):
    first = rsau.RSACipher(rng=random.Random(seed))
    second = rsau.RSACipher(rng=random.Random(seed))
    assert first.public_key == second.public_key
    assert first.private_key == second.private_key


def test_cipher_default_rng():
    cipher = rsau.RSACipher()
    assert cipher.public_key[0] == 65537
    assert cipher.decrypt_string(cipher.encrypt_string("Hello, World!")) == "Hello, World!"


def test_cipher_custom_exponent():
    cipher = rsau.RSACipher(rng=random.Random(3), pub_exp=3)
    assert cipher.public_key[0] == 3
    assert cipher.key.is_valid()


def test_cipher_given_key(key):
    cipher = rsau.RSACipher(key)
    assert cipher.public_key == (65537, 11413)
    assert cipher.private_key == (key.expo, 11413)
    assert cipher.encrypt(72) == 10983
    assert cipher.decrypt(10983) == 72
    assert cipher.encrypt_string("H") == "10983 "
    assert cipher.decrypt_string("10983 ") == "H"


def test_cipher_codes(code_key):
    cipher = rsau.RSACipher(code_key)
    assert cipher.encrypt_codes("010 1101 00") == "011 0010 00 "
    assert cipher.decrypt_codes("011 0010 00 ") == "010 1101 00 "


def test_cipher_string_round_trip(cipher):
    assert cipher.decrypt_string(cipher.encrypt_string("Hello, World!")) == "Hello, World!"
