"""
Key-Value Encoding
==================

This module turns (key, value) pairs into the binary vector and bit indices
committed by the RSA accumulator (rsa_accumulator.binary).

Encoding:
---------
For a value width W (config.value_width, a multiple of 8):

- value → W/8 bytes, little-endian
- each byte → 8 bits, most significant bit first
- bit j of that sequence is placed at index key·W + j

Example (W = 8): value 6 = 0b00000110 at key 1
    bits    = [0, 0, 0, 0, 0, 1, 1, 0]
    indices = [8, 9, 10, 11, 12, 13, 14, 15]

Keys own disjoint index ranges [key·W, key·W + W), so two keys never share
a bit position. The verifier re-derives (bits, indices) from the claimed
(key, value), so this mapping must never change for a deployed width.
"""

from typing import List, Sequence, Tuple

import numpy as np

from vc_config import config
from vc_errors import InvalidInput


def _width(width: int = None) -> int:
    width = config.value_width if width is None else width
    if isinstance(width, bool) or not isinstance(width, int) or width <= 0 or width % 8 != 0:
        raise InvalidInput(f"Value width must be a positive multiple of 8, got {width!r}")
    return width


def _check_int(name: str, x) -> int:
    # bool is an int subclass; True/False are not keys or values
    if isinstance(x, bool) or not isinstance(x, (int, np.integer)):
        raise InvalidInput(f"{name} must be an integer, got {type(x).__name__}")
    return int(x)


def to_binary(value: int, width: int = None) -> List[bool]:
    """
    Decompose a value into its W-bit encoding.

    Parameters
    ----------
    value : int
        Unsigned value in [0, 2^W)
    width : int, optional
        Value width W in bits. Defaults to config.value_width.

    Returns
    -------
    List[bool]
        The bits of the little-endian bytes of value, MSB first within
        each byte

    Examples
    --------
    >>> to_binary(6)
    [False, False, False, False, False, True, True, False]
    >>> to_binary(256, width=16)  # bytes 00 01
    [False, False, False, False, False, False, False, False, False, False, False, False, False, False, False, True]
    """
    width = _width(width)
    value = _check_int("value", value)
    if value < 0 or value >= 1 << width:
        raise InvalidInput(f"Value {value} does not fit in {width} bits")

    byte_vec = np.frombuffer(value.to_bytes(width // 8, 'little'), dtype=np.uint8)
    return np.unpackbits(byte_vec, bitorder='big').astype(bool).tolist()


def key_indices(key: int, width: int = None) -> List[int]:
    """Bit indices [key·W, key·W + W) owned by a key."""
    width = _width(width)
    key = _check_int("key", key)
    if key < 0:
        raise InvalidInput(f"Key must be non-negative, got {key}")
    offset = key * width
    if offset + width - 1 > config.max_index:
        raise InvalidInput(f"Key {key} exceeds the index space of {8 * config.index_bytes} bits")
    return list(range(offset, offset + width))


def convert_key_value(keys: Sequence[int], values: Sequence[int],
                      width: int = None) -> Tuple[List[bool], List[int]]:
    """
    Convert key-value pairs into a binary vector and matching bit indices.

    Parameters
    ----------
    keys : Sequence[int]
        Distinct non-negative keys
    values : Sequence[int]
        Values in [0, 2^W), values[i] stored at keys[i]
    width : int, optional
        Value width W in bits. Defaults to config.value_width.

    Returns
    -------
    binary_vec : List[bool]
        Concatenated to_binary(values[i]) in input order
    indices : List[int]
        Concatenated key_indices(keys[i]) in input order

    Raises
    ------
    InvalidInput
        On length mismatch, duplicate keys, a negative or oversized key, or
        a value that does not fit in W bits

    Notes
    -----
    len(binary_vec) == len(indices) == len(values) · W.
    """
    width = _width(width)
    if len(keys) != len(values):
        raise InvalidInput(f"keys and values must have same length: {len(keys)} != {len(values)}")

    binary_vec: List[bool] = []
    indices: List[int] = []
    seen = set()
    for key, value in zip(keys, values):
        index_vec = key_indices(key, width)
        if index_vec[0] in seen:
            raise InvalidInput(f"Duplicate key {key}")
        seen.add(index_vec[0])

        binary_vec.extend(to_binary(value, width))
        indices.extend(index_vec)

    return binary_vec, indices


# Short alias
encode = convert_key_value
