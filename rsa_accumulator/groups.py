"""
Group Setup
===========

This module sets up the hidden-order group Z_N^* used by the accumulator.

The modulus N = p·q is generated with charm-crypto's RSAGroup, and the
factors p, q are dropped immediately: nobody, including the party running
setup, may keep them, since knowing φ(N) allows computing arbitrary roots
and therefore forging membership witnesses.

According to charm-crypto documentation (https://jhuisi.github.io/charm/):
- RSAGroup().paramgen(secparam) returns (p, q, N) with |p| = |q| = secparam
- Elements are charm `integer` objects and convert with int()
"""

import logging
import threading
from math import gcd

from charm.toolbox.integergroup import RSAGroup

from vc_config import config
from vc_errors import EngineError

logger = logging.getLogger(__name__)

_default_lock = threading.Lock()
_default_params = None


def setup(secparam: int = None, modulus: int = None, base: int = None) -> dict:
    """
    Initialize the RSA group for the accumulator.

    Parameters
    ----------
    secparam : int, optional
        Bit length of each prime factor. Defaults to config.secparam (1024,
        giving a 2048-bit modulus).
    modulus : int, optional
        Use an existing modulus (e.g. from a public ceremony) instead of
        generating one.
    base : int, optional
        The generator g used as the empty accumulator. Defaults to
        config.base (2).

    Returns
    -------
    dict
        A dictionary containing:
        - 'N': The RSA modulus
        - 'g': The base generator
        - 'secparam': Bit length of the prime factors (None for a supplied modulus)
        - 'modulus_bits': Bit length of N

    Notes
    -----
    The base must be a unit mod N. Any g with gcd(g, N) = 1 works; 2 is the
    conventional choice since N is odd.
    """
    base = config.base if base is None else base

    if modulus is None:
        secparam = config.secparam if secparam is None else secparam
        p, q, N = RSAGroup().paramgen(secparam)
        N = int(N)
        # Trapdoor must not survive setup
        del p, q
    else:
        N = int(modulus)
        secparam = None

    if N < 3 or N % 2 == 0:
        raise EngineError(f"Invalid RSA modulus: {N}")
    if base % N in (0, 1) or gcd(base, N) != 1:
        raise EngineError(f"Base {base} is not a generator candidate mod N")

    logger.info("Accumulator group ready: %d-bit modulus, base %d", N.bit_length(), base)

    return {
        'N': N,
        'g': base,
        'secparam': secparam,
        'modulus_bits': N.bit_length(),
    }


def default_params() -> dict:
    """
    Process-wide group parameters.

    Uses config.modulus (the public RSA-2048 challenge modulus unless
    VC_MODULUS overrides it), so every process derives the same group and
    digests verify across processes. Only when config.modulus is None is a
    process-local modulus generated.

    Concurrent first calls wait for a single setup. Each call returns a
    fresh copy of the parameters.
    """
    global _default_params
    with _default_lock:
        if _default_params is None:
            if config.modulus is not None:
                _default_params = setup(modulus=config.modulus)
            else:
                logger.warning("No modulus configured, generating a process-local modulus")
                _default_params = setup()
        return dict(_default_params)


def clear_default_params():
    """Drop the cached default parameters; the next default_params() call rebuilds them."""
    global _default_params
    with _default_lock:
        _default_params = None
