"""
Vector Commitments for Integer Values
=====================================

This module is the key-value interface on top of the binary vector
commitment (rsa_accumulator.binary). A vector of W-bit values is committed
bit by bit; opening a key proves every bit of its value at once.

Roles:
------
- Committer: commit(), update(), update_product(); keeps (digest, product)
- Prover: open_at_key() right after the commitment it opens
- Verifier: verify_at_key(); needs only the two digests and the witnesses

State:
------
Nothing is stored here. The caller threads the base, the digest and the
product through every call:

    digest, product = commit(base, keys, values)
    pi_i, pi_e = open_at_key(base, product, key, value)
    assert verify_at_key(base, digest, key, value, pi_i, pi_e)

    new_digest = update(base, digest, product, [key], [new_value])
    new_product = update_product(product, [key], [new_value])

Trust Model:
------------
update() does not check that the updated keys held consistent values under
old_digest. Callers establish that first (e.g. with open/verify).
"""

from typing import Sequence, Tuple

from rsa_accumulator import binary, default_params
from vc_encoder import convert_key_value
from vc_errors import VectorCommitmentError


def commit(accumulator: int, keys: Sequence[int], values: Sequence[int],
           params: dict = None) -> Tuple[int, int]:
    """
    Commit to a set of keys and corresponding values.

    Parameters
    ----------
    accumulator : int
        The base digest (params['g'] for a fresh vector)
    keys : Sequence[int]
        Distinct non-negative keys
    values : Sequence[int]
        The values stored at keys
    params : dict, optional
        Group parameters. Defaults to default_params().

    Returns
    -------
    digest : int
        The new commitment
    product : int
        Aggregate needed later by open_at_key() and update()

    Raises
    ------
    InvalidInput
        If the pairs cannot be encoded (see vc_encoder.convert_key_value)
    """
    params = params or default_params()
    binary_vec, indices = convert_key_value(keys, values)
    return binary.commit(accumulator, binary_vec, indices, params)


def open_at_key(old_state: int, product: int, key: int, value: int,
                params: dict = None) -> Tuple[int, Tuple[int, int]]:
    """
    Open a commitment for a value at a specific key.

    Called by the committer right after the commit() or update() that
    produced `product`.

    Parameters
    ----------
    old_state : int
        The base the commitment was made over
    product : int
        The product from commit() or update_product()
    key : int
        The key to open
    value : int
        Its value
    params : dict, optional
        Group parameters

    Returns
    -------
    pi_i : int
        Membership witness for the 1-bits of value
    pi_e : Tuple[int, int]
        Non-membership witness for the 0-bits of value

    Raises
    ------
    EngineError
        If (key, value) is not what product commits to
    """
    params = params or default_params()
    binary_vec, indices = convert_key_value([key], [value])
    return binary.batch_open(old_state, product, binary_vec, indices, params)


def verify_at_key(old_state: int, accumulator: int, key: int, value: int,
                  pi_i: int, pi_e: Tuple[int, int], params: dict = None) -> bool:
    """
    Verify a commitment for a value at a specific key.

    Parameters
    ----------
    old_state : int
        The base the commitment was made over
    accumulator : int
        The commitment
    key : int
        The claimed key
    value : int
        The claimed value
    pi_i, pi_e
        The witnesses from open_at_key()
    params : dict, optional
        Group parameters

    Returns
    -------
    bool
        True iff the witnesses prove `value` at `key`. Never raises: a claim
        that cannot even be encoded is simply rejected.
    """
    try:
        params = params or default_params()
        binary_vec, indices = convert_key_value([key], [value])
    except (VectorCommitmentError, TypeError, ValueError):
        return False
    return binary.batch_verify(old_state, accumulator, binary_vec, indices, pi_i, pi_e, params)


def update(accumulator: int, old_state: int, agg: int, keys: Sequence[int],
           values: Sequence[int], params: dict = None) -> int:
    """
    Update the values for a set of keys. Assumes key-value pairs are valid.

    Parameters
    ----------
    accumulator : int
        The base the commitment was made over
    old_state : int
        The current digest
    agg : int
        The current product
    keys : Sequence[int]
        Keys to overwrite
    values : Sequence[int]
        Their new values
    params : dict, optional
        Group parameters

    Returns
    -------
    int
        The new digest

    Notes
    -----
    Each bit of each new value is set in place: bits that become 1 are
    accumulated, bits that become 0 are removed. Use update_product() for
    the matching product.
    """
    params = params or default_params()
    binary_vec, indices = convert_key_value(keys, values)
    return binary.update(accumulator, old_state, agg, binary_vec, indices, params)


def update_product(agg: int, keys: Sequence[int], values: Sequence[int]) -> int:
    """Product matching the digest returned by update() for the same arguments."""
    binary_vec, indices = convert_key_value(keys, values)
    return binary.update_aggregate(agg, binary_vec, indices)


def get_key_value_elem(key: int, value: int) -> int:
    """
    Product of the accumulated elements for a key-value pair.

    commit(g, [key], [value]) equals g^elem mod N; useful for checking a
    commitment by hand.
    """
    binary_vec, indices = convert_key_value([key], [value])
    elem, _ = binary.get_bit_elems(binary_vec, indices)
    return elem
