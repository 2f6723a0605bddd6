"""
Implementation of the Paillier cryptosystem on byte-encoded plaintexts and ciphertexts.

Plaintexts and ciphertexts are unsigned big-endian integers of minimal length. Callers that need
fixed-width encodings should pad and unpad themselves.
"""

from __future__ import annotations

import hashlib
import logging
import warnings
from dataclasses import dataclass, field
from functools import cached_property, lru_cache
from random import Random
from typing import NamedTuple

import sympy

from tno.mpc.encryption_schemes.templates import EncryptionSchemeWarning
from tno.mpc.encryption_schemes.utils import mod_inv, pow_mod

from .exceptions import (
    GenerationError,
    InvalidCipherError,
    LargeCipherError,
    LargeMessageError,
)
from .utils import bytes_to_int, int_to_bytes, mult_list, random_prime

logger = logging.getLogger(__name__)

DEFAULT_KEY_LENGTH = 2048
ADVISED_MINIMUM_KEY_LENGTH = 1024
# For tiny key lengths there may be only one prime of the requested length.
MAX_DISTINCT_PRIME_ATTEMPTS = 64


@dataclass(frozen=True, eq=True)
class PaillierPublicKey:
    r"""
    Public key $(N, g)$ for the Paillier encryption scheme, with $N = pq$ for primes $p, q$ of
    equal length and the generator fixed to $g = N + 1$.

    All operations are pure functions of the key and their arguments, so a key can be shared
    between threads. Only encryption and rerandomization draw from a random source.

    :param n: Modulus $N$ of the plaintext space.
    """

    n: int

    @property
    def g(self) -> int:
        """
        Plaintext base for encryption.
        """
        return self.n + 1

    @cached_property
    def n_squared(self) -> int:
        """
        Modulus of the ciphertext space.
        """
        return self.n * self.n

    @lru_cache
    def id(self) -> int:
        """
        Identifier of this specific key that is consistent over system architectures.

        :return: Representation of SHA-256 hash of the modulus.
        """
        h = hashlib.sha256()
        h.update(int_to_bytes(self.n))
        return int.from_bytes(h.digest(), "big")

    def encrypt(self, plaintext: bytes, random_source: Random | None = None) -> bytes:
        r"""
        Encrypt a plaintext $m \in \mathbb{Z}_N$. We compute the ciphertext as
        $c = g^m \cdot r^N \mod N^2$, for a fresh random prime $r$ with the bit length of $N$.

        Encrypting the same plaintext twice yields different ciphertexts with overwhelming
        probability.

        :param plaintext: Unsigned big-endian encoding of $m$.
        :param random_source: Source of the randomness $r$, defaults to the operating system's
            CSPRNG.
        :raise LargeMessageError: When $m \geq N$.
        :return: Unsigned big-endian encoding of the ciphertext $c$.
        """
        message = bytes_to_int(plaintext)
        if message >= self.n:
            raise LargeMessageError()
        ciphertext = (
            pow_mod(self.g, message, self.n_squared)
            * self._generate_randomness(random_source)
            % self.n_squared
        )
        return int_to_bytes(ciphertext)

    def homomorphic_add(self, ciphertext_1: bytes, ciphertext_2: bytes) -> bytes:
        r"""
        Secure addition of two ciphertexts $c_1, c_2$. We compute $c' = c_1 \cdot c_2 \mod N^2$,
        which decrypts to $m_1 + m_2 \mod N$.

        :param ciphertext_1: First ciphertext $c_1$.
        :param ciphertext_2: Second ciphertext $c_2$.
        :raise LargeCipherError: When either ciphertext is at least $N^2$.
        :return: Ciphertext $c'$ of the sum.
        """
        value_1 = _ciphertext_value(ciphertext_1, self)
        value_2 = _ciphertext_value(ciphertext_2, self)
        return int_to_bytes(value_1 * value_2 % self.n_squared)

    def homomorphic_add_many(self, *ciphertexts: bytes) -> bytes:
        r"""
        Secure addition of any number of ciphertexts. The ciphertexts are multiplied modulo $N^2$
        in the given order, starting from $1$. Hence, calling this without ciphertexts returns
        the encoding of $1$, the (non-randomized) encryption of zero.

        :param ciphertexts: Ciphertexts $c_1, \ldots, c_k$ to add.
        :raise LargeCipherError: On the first ciphertext that is at least $N^2$.
        :return: Ciphertext of $\sum_i m_i \mod N$.
        """
        return int_to_bytes(
            mult_list(
                (_ciphertext_value(ciphertext, self) for ciphertext in ciphertexts),
                self.n_squared,
            )
        )

    def rerandomize(self, ciphertext: bytes, random_source: Random | None = None) -> bytes:
        r"""
        Rerandomize a ciphertext by multiplying it with fresh randomness $r^N \mod N^2$. The
        result decrypts to the same plaintext, but cannot be linked to the input.

        Useful after homomorphic addition, whose output is fully determined by its inputs.

        :param ciphertext: Ciphertext $c$ to rerandomize.
        :param random_source: Source of the randomness $r$, defaults to the operating system's
            CSPRNG.
        :raise LargeCipherError: When the ciphertext is at least $N^2$.
        :return: Rerandomized ciphertext.
        """
        value = _ciphertext_value(ciphertext, self)
        return int_to_bytes(
            value * self._generate_randomness(random_source) % self.n_squared
        )

    def _generate_randomness(self, random_source: Random | None) -> int:
        r"""
        Generate the randomness value $r^N \mod N^2$. A prime $r$ is coprime to $N$ with
        overwhelming probability, since $N$ has only two large prime factors.

        :param random_source: Source of random bits.
        :return: Randomness value.
        """
        random_element = random_prime(self.n.bit_length(), random_source)
        return int(pow_mod(random_element, self.n, self.n_squared))


@dataclass(frozen=True, eq=True)
class PaillierPrivateKey:
    r"""
    Private key for the Paillier encryption scheme.

    Holds the public key it belongs to, $\lambda = \varphi(N) = (p-1)(q-1)$, and
    $\mu = \lambda^{-1} \mod N$. The primes $p, q$ themselves are not retained.

    :param public_key: Public key $(N, g)$ of this private key.
    :param lambda_: Decryption exponent $\lambda$.
    :param mu: Decryption multiplier $\mu$.
    :raise ValueError: When $\lambda \cdot \mu \not\equiv 1 \mod N$.
    """

    public_key: PaillierPublicKey
    lambda_: int = field(repr=False)
    mu: int = field(repr=False)

    def __post_init__(self) -> None:
        if self.lambda_ * self.mu % self.public_key.n != 1:
            raise ValueError("mu is not the inverse of lambda_ modulo n")

    @classmethod
    def from_primes(cls, p: int, q: int) -> PaillierPrivateKey:
        r"""
        Construct the private key belonging to the modulus $N = pq$.

        :param p: First prime factor of $N$.
        :param q: Second prime factor of $N$.
        :raise GenerationError: When $p$ or $q$ is not prime, when $p = q$, or when $\lambda$
            has no inverse modulo $N$.
        :return: Private key for $N = pq$, with its public key.
        """
        if p == q:
            raise GenerationError("p and q must be distinct primes")
        if not (sympy.isprime(p) and sympy.isprime(q)):
            raise GenerationError("p and q must both be prime")

        n = p * q
        lambda_ = (p - 1) * (q - 1)
        try:
            mu = mod_inv(lambda_, n)
        except (ValueError, ZeroDivisionError) as exc:
            raise GenerationError("lambda has no inverse modulo n") from exc
        return cls(PaillierPublicKey(int(n)), int(lambda_), int(mu))

    @property
    def n(self) -> int:
        """
        Modulus of the plaintext space.
        """
        return self.public_key.n

    @property
    def n_squared(self) -> int:
        """
        Modulus of the ciphertext space.
        """
        return self.public_key.n_squared

    def decrypt(self, ciphertext: bytes) -> bytes:
        r"""
        Decrypt a ciphertext $c \in \mathbb{Z}^*_{N^2}$. We compute the plaintext as
        $m = L(c^\lambda \mod N^2) \cdot \mu \mod N$, where $L(x) = (x-1)/N$.

        :param ciphertext: Unsigned big-endian encoding of $c$.
        :raise LargeCipherError: When $c \geq N^2$.
        :raise InvalidCipherError: When $c^\lambda \not\equiv 1 \mod N$, i.e. $c$ is not coprime
            to $N$.
        :return: Unsigned big-endian encoding of $m$. Zero is encoded as the empty byte string.
        """
        value = _ciphertext_value(ciphertext, self.public_key)
        c_lambda = int(pow_mod(value, self.lambda_, self.n_squared))
        l_value, remainder = divmod(c_lambda - 1, self.n)
        if remainder != 0:
            raise InvalidCipherError(
                "Ciphertext raised to lambda minus one is not divisible by N. The ciphertext was "
                "not produced under this key."
            )
        return int_to_bytes(l_value * self.mu % self.n)


class KeyPair(NamedTuple):
    """
    Public and private key produced by a single key generation.
    """

    public_key: PaillierPublicKey
    private_key: PaillierPrivateKey


def generate_key_pair(
    key_length: int = DEFAULT_KEY_LENGTH, random_source: Random | None = None
) -> KeyPair:
    r"""
    Generate a Paillier key pair with a modulus $N$ of the given bit length.

    Both primes have length key_length // 2. For an odd key_length, $N$ therefore has one bit less
    than requested.

    :param key_length: Desired bit length of the modulus $N$.
    :param random_source: Source of random bits for the prime sampling, defaults to the operating
        system's CSPRNG. Exceptions raised by the source are propagated unchanged.
    :raise GenerationError: When key_length is too small to sample two distinct primes.
    :return: KeyPair containing the public key and the private key.
    """
    prime_length = key_length // 2
    p = random_prime(prime_length, random_source)
    q = random_prime(prime_length, random_source)
    attempts = 1
    while p == q:
        if attempts >= MAX_DISTINCT_PRIME_ATTEMPTS:
            raise GenerationError(
                f"Could not sample two distinct primes of {prime_length} bits in "
                f"{attempts} attempts"
            )
        logger.debug("Sampled p = q, drawing a new q")
        q = random_prime(prime_length, random_source)
        attempts += 1

    private_key = PaillierPrivateKey.from_primes(p, q)

    if key_length < ADVISED_MINIMUM_KEY_LENGTH:
        warnings.warn(
            f"The key length={key_length} is lower than the advised minimum of "
            f"{ADVISED_MINIMUM_KEY_LENGTH}.",
            EncryptionSchemeWarning,
        )
    logger.info(
        f"Key generation complete, modulus has {private_key.n.bit_length()} bits"
    )
    return KeyPair(private_key.public_key, private_key)


def _ciphertext_value(ciphertext: bytes, public_key: PaillierPublicKey) -> int:
    """
    Parse a ciphertext and check that it lies in the ciphertext space of the given key.

    :param ciphertext: Unsigned big-endian encoding of the ciphertext.
    :param public_key: Key that defines the ciphertext space.
    :raise LargeCipherError: When the ciphertext is at least $N^2$.
    :return: The ciphertext as integer.
    """
    value = bytes_to_int(ciphertext)
    if value >= public_key.n_squared:
        raise LargeCipherError()
    return value
