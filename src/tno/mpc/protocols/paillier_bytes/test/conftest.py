"""
Test fixtures
"""

from __future__ import annotations

import pytest
from _pytest.fixtures import FixtureRequest

from tno.mpc.encryption_schemes.templates import EncryptionSchemeWarning

from tno.mpc.protocols.paillier_bytes import (
    KeyPair,
    PaillierPrivateKey,
    PaillierPublicKey,
    generate_key_pair,
)


@pytest.fixture(
    name="key_pair",
    params=[512, 513],
    ids=["512-bit", "513-bit"],
    scope="module",
)
def fixture_key_pair(request: FixtureRequest) -> KeyPair:
    """
    Generates a key pair of an even and of an odd requested key length.

    :param request: A fixture request used to indirectly parametrize.
    :return: a freshly generated key pair
    """
    with pytest.warns(EncryptionSchemeWarning):
        return generate_key_pair(request.param)


@pytest.fixture(name="public_key", scope="module")
def fixture_public_key(key_pair: KeyPair) -> PaillierPublicKey:
    """
    :param key_pair: generated key pair
    :return: public key of the key pair
    """
    return key_pair.public_key


@pytest.fixture(name="private_key", scope="module")
def fixture_private_key(key_pair: KeyPair) -> PaillierPrivateKey:
    """
    :param key_pair: generated key pair
    :return: private key of the key pair
    """
    return key_pair.private_key
