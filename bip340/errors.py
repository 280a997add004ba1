"""
Exception hierarchy.

Each error also derives from the builtin a caller would naturally catch
(``ValueError`` for bad input, ``RuntimeError`` for signing aborts), so
code written against plain builtins keeps working.
"""


class BIP340Error(Exception):
    """Base class for every error raised by this package."""


class InvalidRange(BIP340Error, ValueError):
    """Integer not strictly below its modulus, zero private key, or 1/0."""


class InvalidPublicKey(BIP340Error, ValueError):
    """x-coordinate ≥ p, or no curve point with that x-coordinate."""


class PointAtInfinity(BIP340Error, ArithmeticError):
    """The identity appeared where an affine point is required."""


class SigningFailure(BIP340Error, RuntimeError):
    """
    Derived nonce was zero, or the fresh signature failed its self-check.

    Not retried: the caller must not reuse the same (message, aux_rand)
    pair.
    """
