"""
secp256k1 domain parameters.

The curve is  y² = x³ + 7  over  F_p.  Parameters are plain data so the
arithmetic modules never hard-code them twice.

References
----------
- SEC 2 v2 §2.4.1  secp256k1 domain parameters
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CurveParams:
    """Short-Weierstrass curve  y² = x³ + a·x + b  with a = 0."""

    name: str
    p: int          # base field prime
    n: int          # group order
    b: int
    gx: int
    gy: int

    @property
    def byte_length(self) -> int:
        return (self.p.bit_length() + 7) // 8


SECP256K1 = CurveParams(
    name="secp256k1",
    p=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
    n=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
    b=7,
    gx=0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    gy=0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)
