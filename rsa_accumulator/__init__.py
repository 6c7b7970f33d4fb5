"""
RSA Accumulator for Binary Vector Commitments
=============================================

An RSA accumulator over Z_N^* used as a commitment to a binary vector.
Each bit position i is mapped to a prime H(i); a 1-bit is committed by
accumulating H(i), a 0-bit by leaving it out. Batched membership proofs
cover the 1-bits and batched non-membership proofs cover the 0-bits, so a
pair of witnesses pins down every bit of an opened range exactly.

The construction follows Boneh, Bünz and Fisch, "Batching Techniques for
Accumulators with Applications to IOPs and Stateless Blockchains" (2019),
Section 6 (vector commitments from accumulators).

Modules:
--------
- groups: RSA modulus setup (hidden-order group Z_N^*)
- hashing: Hash-to-prime mapping of bit indices
- accumulator: Accumulate, membership and non-membership witnesses
- binary: Binary vector commitment (commit, batch_open, batch_verify,
  update, get_bit_elems)
- utils: Modular exponentiation, Bezout coefficients, products

Usage:
------
    from rsa_accumulator import setup, binary

    params = setup(1024)
    A, product = binary.commit(params['g'], [True, False], [0, 1], params)
    pi_i, pi_e = binary.batch_open(params['g'], product, [True, False], [0, 1], params)
    assert binary.batch_verify(params['g'], A, [True, False], [0, 1], pi_i, pi_e, params)
"""

__version__ = "0.1.0"

from .groups import setup, default_params, clear_default_params

__all__ = ['setup', 'default_params', 'clear_default_params']
