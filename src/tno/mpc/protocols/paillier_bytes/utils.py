"""
Useful functions for the byte-oriented Paillier module.
"""

from __future__ import annotations

import secrets
from collections.abc import Iterable
from random import Random

import sympy

from .exceptions import GenerationError

# Neutral element of the ciphertext group, i.e. the empty homomorphic sum.
MULTIPLICATIVE_IDENTITY = 1

system_random = secrets.SystemRandom()


def mult_list(list_: Iterable[int], modulus: int | None = None) -> int:
    """
    Utility function to multiply a list of numbers in a modular group

    :param list_: list of elements
    :param modulus: modulus to be applied
    :return: product of the elements in the list modulo the modulus
    """
    out = MULTIPLICATIVE_IDENTITY
    if modulus is None:
        for element in list_:
            out = out * element
    else:
        for element in list_:
            out = out * element % modulus
    return out


def bytes_to_int(value: bytes) -> int:
    """
    Interpret a byte string as an unsigned big-endian integer.

    :param value: byte string, possibly empty
    :return: the integer represented by value
    """
    return int.from_bytes(value, "big")


def int_to_bytes(value: int) -> bytes:
    """
    Minimal unsigned big-endian encoding of a non-negative integer. Leading zero bytes are
    dropped, so zero encodes to the empty byte string.

    :param value: non-negative integer
    :return: byte string representing value
    """
    value = int(value)
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def random_prime(bits: int, random_source: Random | None = None) -> int:
    r"""
    Sample a random prime of exactly the given bit length.

    The two most significant bits of every candidate are set, such that the product of two
    primes of length $k$ is guaranteed to have length $2k$. Candidates are tested with
    :func:`sympy.isprime`.

    :param bits: bit length of the prime, at least 2
    :param random_source: source of random bits, defaults to the operating system's CSPRNG
    :raise GenerationError: if bits is smaller than 2
    :return: a prime $p$ with $2^{\text{bits}-1} + 2^{\text{bits}-2} \leq p < 2^\text{bits}$
    """
    if bits < 2:
        raise GenerationError(f"prime size must be at least 2 bits, got {bits}")
    if random_source is None:
        random_source = system_random

    top_bits = 0b11 << (bits - 2)
    while True:
        candidate = random_source.getrandbits(bits) | top_bits | 1
        if sympy.isprime(candidate):
            return candidate
