"""
bip340: BIP-340 Schnorr signatures over secp256k1.

- **x-only public keys** with even-y normalisation
- **deterministic nonces** hedged with auxiliary randomness
- **pure-Python field arithmetic**, with every curve group operation
  delegated to libsecp256k1 via ``coincurve``

Quick start
-----------
::

    from bip340 import generate_keypair, sign, verify

    kp = generate_keypair()
    msg = bytes(32)

    sig = sign(kp.private_bytes, msg)
    assert verify(kp.public_bytes, msg, sig)
"""

__version__ = "0.1.0"

# ── core types ──────────────────────────────────────────────────────────
from .params import CurveParams, SECP256K1
from .field import FieldElement, Scalar, FIELD_PRIME, ORDER
from .curve import Point, G

# ── errors ──────────────────────────────────────────────────────────────
from .errors import (
    BIP340Error,
    InvalidRange,
    InvalidPublicKey,
    PointAtInfinity,
    SigningFailure,
)

# ── keys ────────────────────────────────────────────────────────────────
from .keys import PrivateKey, PublicKey, KeyPair, generate_keypair, pubkey_gen

# ── signing / verification ──────────────────────────────────────────────
from .signing import (
    Signature,
    sign,
    sign_with_key,
    verify,
    verify_signature,
    verify_components,
    challenge,
)

# ── hashing ─────────────────────────────────────────────────────────────
from .hash import tagged_hash, hash_aux, hash_nonce, hash_challenge

__all__ = [
    # version
    "__version__",
    # core
    "CurveParams", "SECP256K1",
    "FieldElement", "Scalar", "FIELD_PRIME", "ORDER",
    "Point", "G",
    # errors
    "BIP340Error", "InvalidRange", "InvalidPublicKey",
    "PointAtInfinity", "SigningFailure",
    # keys
    "PrivateKey", "PublicKey", "KeyPair", "generate_keypair", "pubkey_gen",
    # signing
    "Signature", "sign", "sign_with_key",
    "verify", "verify_signature", "verify_components", "challenge",
    # hashing
    "tagged_hash", "hash_aux", "hash_nonce", "hash_challenge",
]
