"""
Elliptic curve arithmetic on secp256k1 via libsecp256k1.

Every group operation (point addition, negation, scalar multiplication)
is delegated to the C library ``coincurve``, which wraps Bitcoin Core's
libsecp256k1.  Multiplying the generator by a *secret* scalar (key
derivation, nonce point) goes through its constant-time fixed-base path,
so signing does not branch on secret bits in Python.

Points expose affine ``FieldElement`` coordinates read back from the
library's uncompressed encoding; ``lift_x`` is computed in F_p.

Install
-------
    pip install coincurve>=18.0.0

References
----------
- SEC 2 v2 §2.4.1  secp256k1 domain parameters
- SEC 1 v2 §2.3.3  point encoding
- BIP-340            Schnorr signature specification for Bitcoin
"""

from __future__ import annotations

from typing import Optional, Union

from coincurve import PrivateKey as _SK, PublicKey as _PK

from .errors import InvalidPublicKey, PointAtInfinity
from .field import FieldElement, Scalar, ELEMENT_BYTES, FIELD_PRIME
from .params import SECP256K1

CURVE_B = SECP256K1.b
COMPRESSED_BYTES = 33
UNCOMPRESSED_BYTES = 65


def _is_on_curve(x: int, y: int) -> bool:
    return (y * y - x * x * x - CURVE_B) % FIELD_PRIME == 0


# ── Point  (secp256k1 group element via libsecp256k1) ───────────────────
class Point:
    """
    Point on secp256k1.

    The identity (point at infinity) is represented by a flag rather than
    a ``coincurve.PublicKey``, since libsecp256k1 cannot encode it.
    Reading its coordinates or serialising it raises ``PointAtInfinity``.
    """

    __slots__ = ("_pk", "_x", "_y", "_inf")

    def __init__(
        self,
        x: Optional[FieldElement] = None,
        y: Optional[FieldElement] = None,
        *,
        infinity: bool = False,
    ) -> None:
        self._pk: Optional[_PK] = None
        self._x: Optional[FieldElement] = None
        self._y: Optional[FieldElement] = None
        self._inf: bool = infinity
        if infinity:
            return
        if not isinstance(x, FieldElement) or not isinstance(y, FieldElement):
            raise TypeError("affine coordinates must be FieldElement")
        if not _is_on_curve(x.value, y.value):
            raise InvalidPublicKey("point is not on secp256k1")
        self._pk = _PK(b"\x04" + x.to_bytes() + y.to_bytes())
        self._x, self._y = x, y

    # constructors -----------------------------------------------------------
    @classmethod
    def _from_pk(cls, pk: _PK) -> Point:
        """Wrap a library point, reading its affine coordinates back."""
        raw = pk.format(compressed=False)
        obj = cls.__new__(cls)
        obj._pk = pk
        obj._x = FieldElement(int.from_bytes(raw[1:33], "big"))
        obj._y = FieldElement(int.from_bytes(raw[33:65], "big"))
        obj._inf = False
        return obj

    @classmethod
    def generator(cls) -> Point:
        """Standard base point *G*."""
        return cls(FieldElement(SECP256K1.gx), FieldElement(SECP256K1.gy))

    @classmethod
    def identity(cls) -> Point:
        """Point at infinity, the additive identity."""
        return cls(infinity=True)

    @classmethod
    def lift_x(cls, x: Union[FieldElement, int]) -> Point:
        """
        The unique point with x-coordinate *x* and even y.

        Raises ``InvalidPublicKey`` if x ≥ p or x³ + 7 is not a square.
        """
        if isinstance(x, int):
            if not 0 <= x < FIELD_PRIME:
                raise InvalidPublicKey("x-coordinate not below field prime")
            x = FieldElement(x)
        c = x ** 3 + FieldElement(CURVE_B)
        y = c.sqrt()
        if y is None:
            raise InvalidPublicKey("no curve point with this x-coordinate")
        if not y.is_even():
            y = -y
        return cls(x, y)

    @classmethod
    def from_xonly(cls, data: bytes) -> Point:
        """Decode a 32-byte BIP-340 x-only key to its even-y point."""
        if len(data) != ELEMENT_BYTES:
            raise ValueError(f"need {ELEMENT_BYTES} bytes, got {len(data)}")
        return cls.lift_x(int.from_bytes(data, "big"))

    @classmethod
    def from_bytes(cls, data: bytes) -> Point:
        """Deserialise SEC 1 compressed (33 B) or uncompressed (65 B)."""
        if len(data) == COMPRESSED_BYTES and data[0] in (2, 3):
            P = cls.from_xonly(data[1:])
            return -P if data[0] == 3 else P
        if len(data) == UNCOMPRESSED_BYTES and data[0] == 4:
            x = int.from_bytes(data[1:33], "big")
            y = int.from_bytes(data[33:65], "big")
            if x >= FIELD_PRIME or y >= FIELD_PRIME:
                raise InvalidPublicKey("coordinate not below field prime")
            return cls(FieldElement(x), FieldElement(y))
        raise ValueError("expected SEC 1 compressed or uncompressed point")

    @classmethod
    def from_secret(cls, s: Scalar) -> Point:
        """
        Compute *s · G* in constant time via libsecp256k1.

        Use this whenever *s* is secret (private key, nonce).
        """
        if not isinstance(s, Scalar):
            raise TypeError("expected Scalar")
        if s.is_zero():
            return cls.identity()
        return cls._from_pk(_SK(s.to_bytes()).public_key)

    # serialisation ----------------------------------------------------------
    def to_xonly(self) -> bytes:
        """32-byte x-only encoding (BIP-340 public key / nonce)."""
        return self.x.to_bytes()

    def to_bytes_compressed(self) -> bytes:
        if self._inf:
            raise PointAtInfinity("identity has no SEC 1 encoding")
        return self._pk.format(compressed=True)  # type: ignore[union-attr]

    def to_bytes(self) -> bytes:
        return self.to_bytes_compressed()

    @property
    def x(self) -> FieldElement:
        if self._inf:
            raise PointAtInfinity("identity has no x-coordinate")
        return self._x  # type: ignore[return-value]

    @property
    def y(self) -> FieldElement:
        if self._inf:
            raise PointAtInfinity("identity has no y-coordinate")
        return self._y  # type: ignore[return-value]

    def is_identity(self) -> bool:
        return self._inf

    def has_even_y(self) -> bool:
        return self.y.is_even()

    # group operations -------------------------------------------------------
    def add(self, o: Point) -> Point:
        if self._inf:
            return o
        if o._inf:
            return self
        # libsecp256k1 refuses to return the identity: P + (-P) = O
        if self._x == o._x and self._y != o._y:
            return Point.identity()
        return Point._from_pk(_PK.combine_keys([self._pk, o._pk]))

    def double(self) -> Point:
        return self.add(self)

    def negate(self) -> Point:
        if self._inf:
            return self
        raw = bytearray(self._pk.format(compressed=True))  # type: ignore[union-attr]
        raw[0] ^= 0x01            # 0x02 ↔ 0x03 flip parity
        return Point._from_pk(_PK(bytes(raw)))

    def scalar_multiply(self, k: Union[Scalar, int]) -> Point:
        """
        k · self  via libsecp256k1.

        Integer multipliers are reduced mod n; negative ones negate the
        point first.
        """
        if isinstance(k, int) and not isinstance(k, bool):
            if k < 0:
                return self.negate().scalar_multiply(-k)
            k = Scalar.reduce(k)
        elif not isinstance(k, Scalar):
            raise TypeError("scalar must be Scalar or int")
        if self._inf or k.is_zero():
            return Point.identity()
        copy = _PK(self._pk.format())  # type: ignore[union-attr]
        return Point._from_pk(copy.multiply(k.to_bytes()))

    def __neg__(self) -> Point:
        return self.negate()

    def __add__(self, o: Point) -> Point:
        if not isinstance(o, Point):
            return NotImplemented
        return self.add(o)

    def __sub__(self, o: Point) -> Point:
        if not isinstance(o, Point):
            return NotImplemented
        return self.add(o.negate())

    def __rmul__(self, s) -> Point:
        if isinstance(s, (Scalar, int)) and not isinstance(s, bool):
            return self.scalar_multiply(s)
        return NotImplemented

    def __eq__(self, o: object) -> bool:
        if not isinstance(o, Point):
            return False
        if self._inf or o._inf:
            return self._inf and o._inf
        return self._x == o._x and self._y == o._y

    def __hash__(self) -> int:
        if self._inf:
            return hash("identity")
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        if self._inf:
            return "Point(∞)"
        return f"Point(0x{self.x.value:064x})"[:42] + "…)"


# ── module-level generator ──────────────────────────────────────────────
G = Point.generator()
