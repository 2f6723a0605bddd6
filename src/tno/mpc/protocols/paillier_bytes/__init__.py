"""
Paillier homomorphic encryption on byte-encoded plaintexts and ciphertexts.
"""

# Explicit re-export of all functionalities, such that they can be imported properly. Following
# https://www.python.org/dev/peps/pep-0484/#stub-files and
# https://mypy.readthedocs.io/en/stable/command_line.html#cmdoption-mypy-no-implicit-reexport
from .exceptions import GenerationError as GenerationError
from .exceptions import InvalidCipherError as InvalidCipherError
from .exceptions import LargeCipherError as LargeCipherError
from .exceptions import LargeMessageError as LargeMessageError
from .exceptions import PaillierError as PaillierError
from .paillier import KeyPair as KeyPair
from .paillier import PaillierPrivateKey as PaillierPrivateKey
from .paillier import PaillierPublicKey as PaillierPublicKey
from .paillier import generate_key_pair as generate_key_pair
from .utils import bytes_to_int as bytes_to_int
from .utils import int_to_bytes as int_to_bytes

__version__ = "1.0.0"
