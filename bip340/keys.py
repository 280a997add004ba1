"""
BIP-340 key material.

Public keys are *x-only*: 32 bytes naming the curve point with that
x-coordinate and an even y.  A private key *d₀* whose point *d₀·G* has odd
y is therefore used as  *d = n − d₀*  when signing, so that *d·G* is the
even-y point the public key names.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .curve import Point
from .errors import InvalidRange, PointAtInfinity
from .field import ELEMENT_BYTES, ORDER, RandBytes, Scalar


@dataclass(frozen=True)
class PublicKey:
    """x-only public key; ``point`` is the lifted even-y point."""

    point: Point

    def __post_init__(self) -> None:
        if not isinstance(self.point, Point):
            raise TypeError("point must be a Point")
        if self.point.is_identity():
            raise PointAtInfinity("identity cannot be a public key")
        if not self.point.has_even_y():
            object.__setattr__(self, "point", -self.point)

    @classmethod
    def from_bytes(cls, data: bytes) -> PublicKey:
        """Raises ``InvalidPublicKey`` if x ≥ p or x is not on the curve."""
        return cls(Point.from_xonly(data))

    def to_bytes(self) -> bytes:
        return self.point.to_xonly()


@dataclass(frozen=True)
class PrivateKey:
    """Secret scalar  d₀ ∈ [1, n−1]."""

    secret: Scalar

    def __post_init__(self) -> None:
        if not isinstance(self.secret, Scalar):
            raise TypeError("secret must be a Scalar")
        if self.secret.is_zero():
            raise InvalidRange("private key must be in [1, n-1]")

    @classmethod
    def from_int(cls, value: int) -> PrivateKey:
        if not 1 <= value < ORDER:
            raise InvalidRange("private key must be in [1, n-1]")
        return cls(Scalar(value))

    @classmethod
    def from_bytes(cls, data: bytes) -> PrivateKey:
        if len(data) != ELEMENT_BYTES:
            raise ValueError(f"need {ELEMENT_BYTES} bytes, got {len(data)}")
        return cls.from_int(int.from_bytes(data, "big"))

    @classmethod
    def random(cls, randbytes: Optional[RandBytes] = None) -> PrivateKey:
        return cls(Scalar.random(randbytes))

    def to_bytes(self) -> bytes:
        return self.secret.to_bytes()

    def point(self) -> Point:
        """d₀·G, computed in constant time.  May have odd y."""
        return Point.from_secret(self.secret)

    def public_key(self) -> PublicKey:
        return PublicKey(self.point())

    def effective_scalar(self) -> Scalar:
        """The even-y normalised secret *d* used by the signer."""
        if self.point().has_even_y():
            return self.secret
        return -self.secret

    def __repr__(self) -> str:
        return "PrivateKey(<secret>)"


@dataclass(frozen=True)
class KeyPair:
    """A private key together with its x-only public key."""

    private_key: PrivateKey
    public_key: PublicKey

    @property
    def private_bytes(self) -> bytes:
        return self.private_key.to_bytes()

    @property
    def public_bytes(self) -> bytes:
        return self.public_key.to_bytes()

    @classmethod
    def from_private_key(cls, private_key: PrivateKey) -> KeyPair:
        return cls(private_key=private_key, public_key=private_key.public_key())


def generate_keypair(randbytes: Optional[RandBytes] = None) -> KeyPair:
    """
    Draw a uniformly random private key and derive its public key.

    *randbytes* must be a cryptographically secure byte source; the
    default is ``secrets.token_bytes``.
    """
    return KeyPair.from_private_key(PrivateKey.random(randbytes))


def pubkey_gen(seckey: bytes) -> bytes:
    """32-byte secret key → 32-byte x-only public key."""
    return PrivateKey.from_bytes(seckey).public_key().to_bytes()
