"""
Tests that keys and ciphertexts are compatible with tno.mpc.encryption_schemes.paillier.
"""

from __future__ import annotations

import pytest

from tno.mpc.encryption_schemes.paillier import (
    Paillier,
    PaillierCiphertext,
)
from tno.mpc.encryption_schemes.paillier import PaillierPublicKey as TnoPublicKey
from tno.mpc.encryption_schemes.paillier import PaillierSecretKey as TnoSecretKey

from tno.mpc.protocols.paillier_bytes import (
    KeyPair,
    bytes_to_int,
    int_to_bytes,
)


@pytest.fixture(name="tno_scheme", scope="module")
def fixture_tno_scheme(key_pair: KeyPair) -> Paillier:
    """
    Constructs a Paillier scheme with the same key material.

    :param key_pair: generated key pair
    :return: Paillier scheme with integer precision
    """
    public_key, private_key = key_pair
    return Paillier(
        public_key=TnoPublicKey(public_key.n, public_key.g),
        secret_key=TnoSecretKey(private_key.lambda_, private_key.mu, private_key.n),
        precision=0,
    )


@pytest.mark.parametrize("plaintext", [0, 1, 42, 2**100])
def test_decrypt_with_tno_scheme(
    key_pair: KeyPair, tno_scheme: Paillier, plaintext: int
) -> None:
    """
    Tests that ciphertexts produced here are decrypted correctly by the Paillier scheme.

    :param key_pair: generated key pair
    :param tno_scheme: Paillier scheme with the same key material
    :param plaintext: plaintext to encrypt
    """
    ciphertext = key_pair.public_key.encrypt(int_to_bytes(plaintext))
    decryption = tno_scheme.decrypt(
        PaillierCiphertext(bytes_to_int(ciphertext), tno_scheme)
    )
    assert decryption == plaintext


@pytest.mark.parametrize("plaintext", [0, 1, 42, 2**100])
def test_encrypt_with_tno_scheme(
    key_pair: KeyPair, tno_scheme: Paillier, plaintext: int
) -> None:
    """
    Tests that ciphertexts produced by the Paillier scheme are decrypted correctly here.

    :param key_pair: generated key pair
    :param tno_scheme: Paillier scheme with the same key material
    :param plaintext: plaintext to encrypt
    """
    ciphertext = tno_scheme.encrypt(plaintext)
    decryption = key_pair.private_key.decrypt(int_to_bytes(ciphertext.get_value()))
    assert bytes_to_int(decryption) == plaintext


def test_homomorphic_add_with_tno_scheme(key_pair: KeyPair, tno_scheme: Paillier) -> None:
    """
    Tests homomorphic addition of ciphertexts from both implementations.

    :param key_pair: generated key pair
    :param tno_scheme: Paillier scheme with the same key material
    """
    public_key, private_key = key_pair
    ciphertext = public_key.homomorphic_add(
        public_key.encrypt(int_to_bytes(42)),
        int_to_bytes(tno_scheme.encrypt(58).get_value()),
    )
    assert bytes_to_int(private_key.decrypt(ciphertext)) == 100
