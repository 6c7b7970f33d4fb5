"""
Error Types
===========

Two failure classes surface from this code base:

- InvalidInput: the caller passed keys/values that cannot be encoded
  (length mismatch, negative key, value wider than the configured width, ...)
- EngineError: the accumulator arithmetic could not complete
  (non-invertible element, bits that cannot be opened against a product, ...)

A rejected proof is not an error: verify_at_key returns False.
"""


class VectorCommitmentError(Exception):
    """Base class for all errors raised by the vector commitment layer."""


class InvalidInput(VectorCommitmentError, ValueError):
    """Keys or values cannot be encoded into a binary vector."""


class EngineError(VectorCommitmentError, ArithmeticError):
    """The RSA accumulator engine failed."""
