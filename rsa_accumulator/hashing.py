"""
Hash-to-Prime
=============

Bit positions are accumulated as primes. This module maps an index to a
prime deterministically so that prover and verifier derive the same prime
independently.

Construction:
-------------
    H(data) = first candidate c_j, j = 0, 1, 2, ..., that is prime, where
    c_j = SHA-256(b"VC_H2P" || data || j) with the top and bottom bits set

The top bit fixes the bit length of every output and the bottom bit skips
even candidates. Primality is tested with charm-crypto's isPrime (GMP Miller-Rabin).

Domain Separation:
------------------
The prefix b"VC_H2P" separates these primes from any other SHA-256 use.
"""

import hashlib
import operator
from functools import lru_cache

from charm.core.math.integer import integer, isPrime

from vc_config import config
from vc_errors import EngineError

H2P_PREFIX = b"VC_H2P"
MAX_ATTEMPTS = 1 << 16


def hash_to_prime(data: bytes, bits: int = None) -> int:
    """
    Hash arbitrary bytes to a prime of exactly `bits` bits.

    Parameters
    ----------
    data : bytes
        The input to hash
    bits : int, optional
        Bit length of the output prime (at most 256). Defaults to
        config.prime_bits.

    Returns
    -------
    int
        A prime p with p.bit_length() == bits

    Notes
    -----
    The expected number of attempts is about ln(2^bits) / 2 ≈ 89 for
    256-bit outputs. MAX_ATTEMPTS is never reached in practice.
    """
    bits = config.prime_bits if bits is None else bits
    if not 2 < bits <= 256:
        raise EngineError(f"Prime size must be in (2, 256] bits, got {bits}")
    return _hash_to_prime(bytes(data), bits)


@lru_cache(maxsize=1 << 14)
def _hash_to_prime(data: bytes, bits: int) -> int:
    top = 1 << (bits - 1)
    mask = (1 << bits) - 1
    for j in range(MAX_ATTEMPTS):
        digest = hashlib.sha256(H2P_PREFIX + data + j.to_bytes(8, 'little')).digest()
        candidate = (int.from_bytes(digest, 'big') & mask) | top | 1
        if isPrime(integer(candidate)):
            return candidate
    raise EngineError(f"No prime found for {data.hex()} after {MAX_ATTEMPTS} attempts")


def index_to_prime(index: int) -> int:
    """
    Map a bit index to its prime H(index).

    The index is serialized as a fixed-width little-endian unsigned integer
    (config.index_bytes bytes) before hashing. Non-integral indices raise
    TypeError.
    """
    index = operator.index(index)
    if index < 0 or index > config.max_index:
        raise EngineError(f"Bit index {index} out of range [0, {config.max_index}]")
    return hash_to_prime(index.to_bytes(config.index_bytes, 'little'))
