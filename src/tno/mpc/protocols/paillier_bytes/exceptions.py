"""
Exceptions raised by the byte-oriented Paillier cryptosystem.
"""

ERR_LARGE_MESSAGE = "message size must be smaller than Paillier public key size"
ERR_LARGE_CIPHER = "cipher size must be smaller than Paillier public key size"


class PaillierError(Exception):
    """
    Base class for all errors raised by this package.
    """


class GenerationError(PaillierError):
    r"""
    Used to raise exceptions when key generation fails, either because no suitable primes could
    be sampled or because $\lambda$ has no inverse modulo $N$.
    """


class LargeMessageError(PaillierError):
    r"""
    Used to raise exceptions when a plaintext does not lie in the message space $\mathbb{Z}_N$.
    """

    def __init__(self, message: str = ERR_LARGE_MESSAGE) -> None:
        super().__init__(message)


class LargeCipherError(PaillierError):
    r"""
    Used to raise exceptions when a ciphertext does not lie in the ciphertext space
    $\mathbb{Z}_{N^2}$.
    """

    def __init__(self, message: str = ERR_LARGE_CIPHER) -> None:
        super().__init__(message)


class InvalidCipherError(PaillierError):
    """
    Used to raise exceptions when a ciphertext lies in the ciphertext space, but cannot be the
    encryption of any plaintext under the given key.
    """
