"""
BIP-340 Schnorr signing and verification.

**Signing** (secret key d₀, 32-byte message m, 32-byte aux_rand a):

    P  = d₀·G,        d = d₀ if P.y even else n − d₀
    t  = bytes(d) ⊕ H_aux(a)
    k₀ = H_nonce(t ‖ P.x ‖ m)  mod n          (k₀ = 0 → abort)
    R  = k₀·G,        k = k₀ if R.y even else n − k₀
    e  = H_challenge(R.x ‖ P.x ‖ m)  mod n
    s  = k + e·d  mod n
    σ  = R.x ‖ s

**Verification** (x-only key, m, σ = r ‖ s):

    reject if r ≥ p or s ≥ n or lift_x(key) fails
    e  = H_challenge(r ‖ P.x ‖ m)  mod n
    R  = s·G − e·P
    accept iff R ≠ ∞, R.y even, R.x = r

The verifier is split into ``challenge`` and ``verify_components`` so it
can be re-expressed over already-decoded canonical values (for instance
by an arithmetic-circuit front end) without touching byte encodings.

References
----------
- Wuille, Nick, Ruffing (2020). "BIP-340: Schnorr Signatures for
  secp256k1."
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Optional

from .curve import Point, G
from .errors import (
    BIP340Error,
    InvalidPublicKey,
    InvalidRange,
    SigningFailure,
)
from .field import ELEMENT_BYTES, FieldElement, RandBytes, Scalar
from .hash import hash_aux, hash_challenge, hash_nonce
from .keys import PrivateKey, PublicKey

logger = logging.getLogger(__name__)

MESSAGE_BYTES = 32
AUX_RAND_BYTES = 32
SIGNATURE_BYTES = 64


# ── data structures ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class Signature:
    """
    BIP-340 signature  (r, s).

    *r* is the x-coordinate of the nonce point (an F_p element), *s* the
    response (a Z_n element).  Both are range-checked on construction.
    """

    r: FieldElement
    s: Scalar

    def __post_init__(self) -> None:
        if not isinstance(self.r, FieldElement):
            raise TypeError("r must be a FieldElement")
        if not isinstance(self.s, Scalar):
            raise TypeError("s must be a Scalar")

    def to_bytes(self) -> bytes:
        """Serialise to 64 bytes: r (32) ‖ s (32)."""
        return self.r.to_bytes() + self.s.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> Signature:
        """Raises ``InvalidRange`` if r ≥ p or s ≥ n."""
        if len(data) != SIGNATURE_BYTES:
            raise ValueError(f"expected {SIGNATURE_BYTES} bytes, got {len(data)}")
        r = FieldElement.from_bytes(data[:32])
        s = Scalar.from_bytes(data[32:64])
        return cls(r=r, s=s)


# ── signer ──────────────────────────────────────────────────────────────

def _check_length(name: str, data: bytes, expected: int) -> None:
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError(f"{name} must be bytes")
    if len(data) != expected:
        raise ValueError(f"{name} must be {expected} bytes, got {len(data)}")


def _xor_bytes(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


def sign_with_key(
    private_key: PrivateKey,
    message: bytes,
    aux_rand: Optional[bytes] = None,
    *,
    randbytes: Optional[RandBytes] = None,
) -> Signature:
    """
    Produce a BIP-340 signature with an already-parsed private key.

    Parameters
    ----------
    private_key : PrivateKey
        Secret key *d₀*.
    message : bytes
        32-byte message (usually a hash of the real payload).
    aux_rand : bytes, optional
        32 bytes of fresh auxiliary randomness.  Drawn from *randbytes*
        (default ``secrets.token_bytes``) when omitted.

    Raises
    ------
    SigningFailure
        The derived nonce is zero, or the signature fails to verify.
        Not retried.
    """
    _check_length("message", message, MESSAGE_BYTES)
    if aux_rand is None:
        aux_rand = (randbytes or secrets.token_bytes)(AUX_RAND_BYTES)
    _check_length("aux_rand", aux_rand, AUX_RAND_BYTES)
    message = bytes(message)
    aux_rand = bytes(aux_rand)

    P = private_key.point()
    if P.has_even_y():
        d = private_key.secret
    else:
        d, P = -private_key.secret, -P
    px = P.to_xonly()

    t = _xor_bytes(d.to_bytes(), hash_aux(aux_rand))
    k0 = hash_nonce(t, px, message)
    if k0.is_zero():
        raise SigningFailure("derived nonce is zero")

    R = Point.from_secret(k0)
    k = k0 if R.has_even_y() else -k0

    rx = R.to_xonly()
    e = hash_challenge(rx, px, message)
    s = k + e * d
    sig = Signature(r=R.x, s=s)

    # never release a signature that does not verify
    if not verify_components(P, e, sig.r, sig.s):
        raise SigningFailure("created signature does not pass verification")
    return sig


def sign(
    private_key: bytes,
    message: bytes,
    aux_rand: Optional[bytes] = None,
    *,
    randbytes: Optional[RandBytes] = None,
) -> bytes:
    """
    Byte-level signing: 32-byte key, 32-byte message, 32-byte aux_rand
    → 64-byte signature.

    Raises ``InvalidRange`` for a key outside [1, n−1] and
    ``ValueError`` for wrong-length buffers, before any curve arithmetic.
    """
    _check_length("private_key", private_key, ELEMENT_BYTES)
    key = PrivateKey.from_bytes(bytes(private_key))
    return sign_with_key(key, message, aux_rand, randbytes=randbytes).to_bytes()


# ── verification ────────────────────────────────────────────────────────

def challenge(r: FieldElement, public_key: Point, message: bytes) -> Scalar:
    """e = H_challenge(r ‖ P.x ‖ m)  mod n."""
    return hash_challenge(r.to_bytes(), public_key.to_xonly(), message)


def verify_components(
    public_key: Point,
    e: Scalar,
    r: FieldElement,
    s: Scalar,
) -> bool:
    """
    Verification equation over canonical, already-decoded values.

    Check:  R = s·G − e·P  is not the identity, has even y, and R.x = r.
    Pure predicate; never raises for well-typed input.
    """
    R = s * G - e * public_key
    if R.is_identity():
        logger.debug("signature rejected: R is the point at infinity")
        return False
    if not R.has_even_y():
        logger.debug("signature rejected: R has odd y")
        return False
    if R.x != r:
        logger.debug("signature rejected: R.x does not match r")
        return False
    return True


def verify_signature(
    public_key: PublicKey,
    message: bytes,
    sig: Signature,
) -> bool:
    """Typed verification with a parsed key and signature."""
    _check_length("message", message, MESSAGE_BYTES)
    e = challenge(sig.r, public_key.point, bytes(message))
    return verify_components(public_key.point, e, sig.r, sig.s)


def verify(public_key: bytes, message: bytes, signature: bytes) -> bool:
    """
    Byte-level BIP-340 verification.

    Returns ``False`` for any malformed key or signature content
    (r ≥ p, s ≥ n, x ≥ p, x not on the curve).  Only wrong-length
    buffers, which are caller bugs, raise ``ValueError``.
    """
    _check_length("public_key", public_key, ELEMENT_BYTES)
    _check_length("message", message, MESSAGE_BYTES)
    _check_length("signature", signature, SIGNATURE_BYTES)

    try:
        sig = Signature.from_bytes(bytes(signature))
    except InvalidRange:
        logger.debug("signature rejected: r or s out of range")
        return False
    try:
        pk = PublicKey.from_bytes(bytes(public_key))
    except InvalidPublicKey:
        logger.debug("signature rejected: public key does not lift")
        return False

    try:
        return verify_signature(pk, message, sig)
    except BIP340Error as exc:
        logger.debug("signature rejected: %s", exc)
        return False
