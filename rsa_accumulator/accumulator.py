"""
RSA Accumulator Primitives
==========================

This module implements the accumulator operations over Z_N^* that the
binary vector engine is built from. Elements are primes (see hashing.py),
and a set S is represented by the product P = ∏_{x∈S} x, so that

    A = g^P mod N

is the accumulator value of S over the base g.

Witnesses:
----------
- Membership of x (x | P):      w = g^{P/x},    check  w^x = A
- Non-membership of x (gcd=1):  a·x + b·P = 1,  d = g^a,  check  d^x · A^b = g

x may itself be a product of primes, which turns both witnesses into batch
proofs for a whole set of elements at constant size.

Security:
---------
- Membership soundness relies on the strong RSA assumption
- Non-membership soundness relies on the adaptive root assumption
- Both require N to have unknown factorization (see groups.py)

References:
-----------
Li, Li, Xue (2007) "Universal Accumulators with Efficient Nonmembership Proofs"
Boneh, Bünz, Fisch (2019) Section 3 (batching) and Section 6 (vector commitments)
"""

from typing import Tuple

from vc_errors import EngineError
from .utils import bezout, mod_exp


def add(A: int, x: int, params: dict) -> int:
    """
    Accumulate element(s) x into A.

    Parameters
    ----------
    A : int
        The current accumulator value
    x : int
        A prime or a product of primes
    params : dict
        Group parameters from setup()

    Returns
    -------
    int
        A^x mod N
    """
    return mod_exp(A, x, params['N'])


def prove_membership(g: int, P: int, x: int, params: dict) -> int:
    """
    Batch membership witness for x against A = g^P.

    Parameters
    ----------
    g : int
        The base the set was accumulated over
    P : int
        The product of all accumulated elements
    x : int
        Product of the elements to prove (1 proves nothing and yields A)
    params : dict
        Group parameters

    Returns
    -------
    int
        w = g^{P/x} mod N

    Raises
    ------
    EngineError
        If some element of x is not accumulated in P
    """
    if x <= 0 or P % x != 0:
        raise EngineError("Elements are not members of the accumulated set")
    return mod_exp(g, P // x, params['N'])


def verify_membership(A: int, x: int, w: int, params: dict) -> bool:
    """Check w^x = A (mod N)."""
    N = params['N']
    return mod_exp(w, x, N) == A % N


def prove_non_membership(g: int, P: int, x: int, params: dict) -> Tuple[int, int]:
    """
    Batch non-membership witness for x against A = g^P.

    Parameters
    ----------
    g : int
        The base the set was accumulated over
    P : int
        The product of all accumulated elements
    x : int
        Product of the elements to prove absent
    params : dict
        Group parameters

    Returns
    -------
    pi_e : Tuple[int, int]
        Witness (d, b) where:
        - d = g^a mod N
        - b ∈ Z (may be negative)
        with a·x + b·P = 1

    Raises
    ------
    EngineError
        If gcd(x, P) != 1, i.e. some element of x is accumulated

    Notes
    -----
    Verification: d^x · A^b = g^{a·x} · g^{b·P} = g^{a·x + b·P} = g.
    """
    a, b, d_gcd = bezout(x, P)
    if d_gcd != 1:
        raise EngineError("Elements are members of the accumulated set")
    d = mod_exp(g, a, params['N'])
    return (d, b)


def verify_non_membership(g: int, A: int, x: int, pi_e: Tuple[int, int], params: dict) -> bool:
    """Check d^x · A^b = g (mod N) for pi_e = (d, b)."""
    N = params['N']
    (d, b) = pi_e
    lhs = (mod_exp(d, x, N) * mod_exp(A, b, N)) % N
    return lhs == g % N
