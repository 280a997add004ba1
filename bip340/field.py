"""
Prime-field arithmetic for secp256k1.

Two concrete value types share one implementation:

- ``FieldElement``: the base field  F_p,  p = 2²⁵⁶ − 2³² − 977.
  Curve coordinates and the signature's *r* live here.
- ``Scalar``: the scalar field  Z_n,  n = group order.
  Private keys, nonces, challenges and the signature's *s* live here.

Both are canonical at rest: the constructor rejects any integer that is
not in  [0, modulus)  with ``InvalidRange`` instead of silently reducing
it.  Hash outputs, which BIP-340 reduces mod n on purpose, go through the
explicit ``reduce`` / ``from_bytes_reduce`` constructors.
"""

from __future__ import annotations

import secrets
from typing import Callable, Optional

from .errors import InvalidRange
from .params import SECP256K1

FIELD_PRIME = SECP256K1.p
ORDER = SECP256K1.n
ELEMENT_BYTES = 32

RandBytes = Callable[[int], bytes]


class _PrimeFieldElement:
    """Integer modulo ``MODULUS``, immutable and always reduced."""

    __slots__ = ("_v",)

    MODULUS: int = 0

    def __init__(self, value: int) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"expected int, got {type(value).__name__}")
        if not 0 <= value < self.MODULUS:
            raise InvalidRange(
                f"{type(self).__name__} value out of range [0, modulus)"
            )
        self._v = value

    # constructors -----------------------------------------------------------
    @classmethod
    def zero(cls):
        return cls(0)

    @classmethod
    def one(cls):
        return cls(1)

    @classmethod
    def reduce(cls, value: int):
        """Reduce an arbitrary integer modulo ``MODULUS``."""
        return cls(value % cls.MODULUS)

    @classmethod
    def from_bytes(cls, data: bytes):
        """Strict 32-byte big-endian decoding; no reduction."""
        if len(data) != ELEMENT_BYTES:
            raise ValueError(f"need {ELEMENT_BYTES} bytes, got {len(data)}")
        return cls(int.from_bytes(data, "big"))

    @classmethod
    def from_bytes_reduce(cls, data: bytes):
        """Hash-output safe: interpret big-endian and reduce."""
        return cls.reduce(int.from_bytes(data, "big"))

    # serialisation ----------------------------------------------------------
    def to_bytes(self) -> bytes:
        return self._v.to_bytes(ELEMENT_BYTES, "big")

    @property
    def value(self) -> int:
        return self._v

    def __int__(self) -> int:
        return self._v

    def validate(self) -> None:
        """Re-check the canonical-range invariant."""
        if not 0 <= self._v < self.MODULUS:
            raise InvalidRange(f"{type(self).__name__} is not canonical")

    def is_zero(self) -> bool:
        return self._v == 0

    def is_even(self) -> bool:
        return self._v & 1 == 0

    # arithmetic -------------------------------------------------------------
    def _coerce(self, o):
        if type(o) is type(self):
            return o._v
        return None

    def __add__(self, o):
        v = self._coerce(o)
        if v is None:
            return NotImplemented
        return type(self)((self._v + v) % self.MODULUS)

    def __sub__(self, o):
        v = self._coerce(o)
        if v is None:
            return NotImplemented
        return type(self)((self._v - v) % self.MODULUS)

    def __mul__(self, o):
        v = self._coerce(o)
        if v is None:
            return NotImplemented
        return type(self)((self._v * v) % self.MODULUS)

    def __rmul__(self, o):
        if isinstance(o, int) and not isinstance(o, bool):
            return type(self)((o * self._v) % self.MODULUS)
        return NotImplemented

    def __neg__(self):
        return type(self)((-self._v) % self.MODULUS)

    def __truediv__(self, o):
        if type(o) is not type(self):
            return NotImplemented
        return self * o.inv()

    def __pow__(self, e: int):
        if e < 0:
            return self.inv() ** (-e)
        return type(self)(pow(self._v, e, self.MODULUS))

    def inv(self):
        """Multiplicative inverse via Fermat's little theorem."""
        if self._v == 0:
            raise InvalidRange("cannot invert zero")
        return type(self)(pow(self._v, self.MODULUS - 2, self.MODULUS))

    # comparison / hashing ---------------------------------------------------
    def __eq__(self, o: object) -> bool:
        if type(o) is type(self):
            return self._v == o._v
        if isinstance(o, int) and not isinstance(o, bool):
            return self._v == o
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._v)

    def __bool__(self) -> bool:
        return self._v != 0

    def __repr__(self) -> str:
        h = hex(self._v)
        name = type(self).__name__
        return f"{name}(0x{h[2:10]}…)" if len(h) > 14 else f"{name}({h})"


# ── F_p ─────────────────────────────────────────────────────────────────
class FieldElement(_PrimeFieldElement):
    """Element of the secp256k1 base field  F_p."""

    __slots__ = ()

    MODULUS = FIELD_PRIME

    def sqrt(self) -> Optional[FieldElement]:
        """
        Square root, or ``None`` for a quadratic non-residue.

        p ≡ 3 (mod 4), so a candidate root is  a^((p+1)/4);  it is a
        real root exactly when it squares back to *a*.  Which of the two
        roots is returned is unspecified; callers pick parity themselves.
        """
        y = pow(self._v, (FIELD_PRIME + 1) // 4, FIELD_PRIME)
        if y * y % FIELD_PRIME != self._v:
            return None
        return FieldElement(y)


# ── Z_n ─────────────────────────────────────────────────────────────────
class Scalar(_PrimeFieldElement):
    """Element of the scalar field  Z_n  where *n* = ``ORDER``."""

    __slots__ = ()

    MODULUS = ORDER

    @classmethod
    def random(cls, randbytes: Optional[RandBytes] = None) -> Scalar:
        """Uniform in [1, n-1] via rejection sampling."""
        source = randbytes or secrets.token_bytes
        while True:
            c = int.from_bytes(source(ELEMENT_BYTES), "big")
            if 0 < c < ORDER:
                return cls(c)
