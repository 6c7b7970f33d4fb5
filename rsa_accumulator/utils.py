"""
Utility Functions
=================

Integer helpers shared by the accumulator and the binary vector engine.

Key Operations:
- mod_exp: x^e mod N, including negative e (via the modular inverse)
- bezout: Extended Euclid, a·x + b·y = gcd(x, y)
"""

from typing import Tuple

from vc_errors import EngineError


def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """
    Compute base^exponent mod modulus.

    Negative exponents are computed as (base^{-1})^{|exponent|}. If base is
    not a unit mod modulus this raises EngineError.
    """
    try:
        return pow(base, exponent, modulus)
    except ValueError as e:
        raise EngineError(f"{base} is not invertible mod N") from e


def bezout(x: int, y: int) -> Tuple[int, int, int]:
    """
    Extended Euclidean algorithm.

    Parameters
    ----------
    x, y : int
        Non-negative integers

    Returns
    -------
    a, b, g : int
        Coefficients and gcd with a·x + b·y = g

    Examples
    --------
    >>> bezout(240, 46)
    (-9, 47, 2)
    """
    old_r, r = x, y
    old_s, s = 1, 0
    old_t, t = 0, 1
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_s, s = s, old_s - q * s
        old_t, t = t, old_t - q * t
    return old_s, old_t, old_r
