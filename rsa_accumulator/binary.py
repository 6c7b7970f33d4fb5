"""
Binary Vector Commitments
=========================

This module implements a commitment to a binary vector on top of the RSA
accumulator (Boneh-Bünz-Fisch 2019, Section 6). Bit i of the vector is 1
iff the prime H(i) is accumulated:

    A = g^{∏_{i : b_i = 1} H(i)} mod N

Opening a set of positions proves membership of the primes of the 1-bits and
non-membership of the primes of the 0-bits, each as a single batched witness.

Operations:
-----------
- get_bit_elems: (∏ primes of 1-bits, ∏ primes of 0-bits)
- commit: accumulate the 1-bits over a base value
- batch_open: witness pair (π_i, π_e) for a set of positions
- batch_verify: check a witness pair (never raises)
- update: flip bits in both directions
- update_aggregate: the product matching the digest returned by update

All functions are pure: accumulator values and products are passed in and
returned, never stored.
"""

import logging
from typing import Sequence, Tuple

from vc_errors import EngineError, VectorCommitmentError
from . import accumulator
from .hashing import index_to_prime

logger = logging.getLogger(__name__)


def _check_lengths(bits: Sequence[bool], indices: Sequence[int]):
    if len(bits) != len(indices):
        raise EngineError(f"bits and indices must have same length: {len(bits)} != {len(indices)}")


def get_bit_elems(bits: Sequence[bool], indices: Sequence[int]) -> Tuple[int, int]:
    """
    Compute the prime products for a set of bit assignments.

    Parameters
    ----------
    bits : Sequence[bool]
        The bit values b_j
    indices : Sequence[int]
        The positions i_j of the bits

    Returns
    -------
    elems_ones : int
        ∏_{j : b_j = 1} H(i_j)
    elems_zeros : int
        ∏_{j : b_j = 0} H(i_j)

    Notes
    -----
    Both products are 1 when the corresponding set is empty.
    """
    _check_lengths(bits, indices)

    elems_ones = 1
    elems_zeros = 1
    for bit, index in zip(bits, indices):
        if bit:
            elems_ones *= index_to_prime(index)
        else:
            elems_zeros *= index_to_prime(index)

    return elems_ones, elems_zeros


def commit(accumulator_value: int, bits: Sequence[bool], indices: Sequence[int],
           params: dict) -> Tuple[int, int]:
    """
    Commit to bit assignments over an accumulator value.

    Parameters
    ----------
    accumulator_value : int
        The base value (g for a fresh commitment)
    bits : Sequence[bool]
        The bit values
    indices : Sequence[int]
        The bit positions
    params : dict
        Group parameters from setup()

    Returns
    -------
    new_accumulator : int
        accumulator_value^{elems_ones} mod N
    product : int
        elems_ones, required later by batch_open and update

    Notes
    -----
    0-bits are not accumulated; they are implied by absence.
    """
    elems_ones, _ = get_bit_elems(bits, indices)
    logger.debug("commit: %d bits, %d-bit exponent", len(bits), elems_ones.bit_length())
    new_accumulator = accumulator.add(accumulator_value, elems_ones, params)
    return new_accumulator, elems_ones


def batch_open(old_state: int, product: int, bits: Sequence[bool], indices: Sequence[int],
               params: dict) -> Tuple[int, Tuple[int, int]]:
    """
    Open a commitment A = old_state^product at the given positions.

    Parameters
    ----------
    old_state : int
        The value the commitment was made over
    product : int
        The product returned by commit (or update_aggregate)
    bits : Sequence[bool]
        The claimed bit values
    indices : Sequence[int]
        The positions to open
    params : dict
        Group parameters

    Returns
    -------
    pi_i : int
        Membership witness for the 1-bits
    pi_e : Tuple[int, int]
        Non-membership witness for the 0-bits

    Raises
    ------
    EngineError
        If the claimed bits are not the committed ones (no honest proof exists)
    """
    elems_ones, elems_zeros = get_bit_elems(bits, indices)
    logger.debug("batch_open: %d bits", len(bits))
    pi_i = accumulator.prove_membership(old_state, product, elems_ones, params)
    pi_e = accumulator.prove_non_membership(old_state, product, elems_zeros, params)
    return pi_i, pi_e


def batch_verify(old_state: int, accumulator_value: int, bits: Sequence[bool],
                 indices: Sequence[int], pi_i: int, pi_e: Tuple[int, int],
                 params: dict) -> bool:
    """
    Verify a witness pair from batch_open.

    Parameters
    ----------
    old_state : int
        The value the commitment was made over
    accumulator_value : int
        The commitment A
    bits : Sequence[bool]
        The claimed bit values
    indices : Sequence[int]
        The opened positions
    pi_i : int
        Membership witness for the 1-bits
    pi_e : Tuple[int, int]
        Non-membership witness for the 0-bits
    params : dict
        Group parameters

    Returns
    -------
    bool
        True iff both witnesses verify. Malformed witnesses or arithmetic
        failures yield False.

    Notes
    -----
    Membership:      π_i^{elems_ones} = A
    Non-membership:  d^{elems_zeros} · A^b = old_state, π_e = (d, b)
    """
    try:
        elems_ones, elems_zeros = get_bit_elems(bits, indices)
        if not accumulator.verify_membership(accumulator_value, elems_ones, pi_i, params):
            return False
        return accumulator.verify_non_membership(old_state, accumulator_value, elems_zeros, pi_e, params)
    except (VectorCommitmentError, TypeError, ValueError, ArithmeticError):
        return False


def _toggle(agg: int, bits: Sequence[bool], indices: Sequence[int]) -> Tuple[int, int, int]:
    """
    Apply bit assignments to a product.

    Returns (new_agg, elems_added, elems_deleted). Assignments are applied in
    order, so a repeated index takes its last value.
    """
    _check_lengths(bits, indices)

    new_agg = agg
    elems_added = 1
    elems_deleted = 1
    for bit, index in zip(bits, indices):
        p = index_to_prime(index)
        present = new_agg % p == 0
        if bit and not present:
            new_agg *= p
            elems_added *= p
        elif not bit and present:
            new_agg //= p
            elems_deleted *= p

    return new_agg, elems_added, elems_deleted


def update(accumulator_value: int, old_state: int, agg: int, bits: Sequence[bool],
           indices: Sequence[int], params: dict) -> int:
    """
    Set bits of an existing commitment, in both directions.

    Parameters
    ----------
    accumulator_value : int
        The base the commitment was made over
    old_state : int
        The current commitment, accumulator_value^agg
    agg : int
        The product of the currently accumulated primes
    bits : Sequence[bool]
        The new bit values
    indices : Sequence[int]
        The positions to set
    params : dict
        Group parameters

    Returns
    -------
    int
        The new commitment accumulator_value^{new_agg} mod N

    Notes
    -----
    - 0 → 1: multiply H(i) into the product
    - 1 → 0: divide H(i) out of the product
    - unchanged bits are skipped

    Without deletions the new value is old_state^{elems_added}. A deletion
    cannot be applied to old_state without a root of it, so the value is
    recomputed from the base.

    old_state is assumed to equal accumulator_value^agg; this is not checked.
    """
    new_agg, elems_added, elems_deleted = _toggle(agg, bits, indices)
    logger.debug("update: %d bits, added=%s deleted=%s",
                 len(bits), elems_added != 1, elems_deleted != 1)

    if elems_deleted == 1:
        return accumulator.add(old_state, elems_added, params)
    return accumulator.add(accumulator_value, new_agg, params)


def update_aggregate(agg: int, bits: Sequence[bool], indices: Sequence[int]) -> int:
    """Product after applying the bit assignments, matching update()."""
    new_agg, _, _ = _toggle(agg, bits, indices)
    return new_agg
