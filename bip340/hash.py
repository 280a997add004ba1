"""
BIP-340 tagged hashes.

    H_tag(x) = SHA-256( SHA-256(tag) ‖ SHA-256(tag) ‖ x )

The 64-byte prefix fills exactly one SHA-256 block, so the hasher state
after absorbing it (the "midstate") is computed once per tag and copied
for every call.
"""

from __future__ import annotations

import hashlib
from functools import lru_cache

from .field import Scalar

# ── domain tags ─────────────────────────────────────────────────────────
TAG_AUX       = "BIP0340/aux"
TAG_NONCE     = "BIP0340/nonce"
TAG_CHALLENGE = "BIP0340/challenge"


# ── internal helpers ────────────────────────────────────────────────────
@lru_cache(maxsize=None)
def _tagged_hasher(tag: str) -> "hashlib._Hash":
    """Return a SHA-256 context pre-loaded with the BIP-340 tag prefix."""
    tag_hash = hashlib.sha256(tag.encode("utf-8")).digest()
    h = hashlib.sha256()
    h.update(tag_hash)
    h.update(tag_hash)
    return h


def tagged_hash(tag: str, data: bytes) -> bytes:
    """Compute the 32-byte BIP-340 tagged hash of *data* under *tag*."""
    h = _tagged_hasher(tag).copy()
    h.update(data)
    return h.digest()


# ── public hash functions ───────────────────────────────────────────────

def hash_aux(aux_rand: bytes) -> bytes:
    """Mask applied to the secret key before nonce derivation."""
    return tagged_hash(TAG_AUX, aux_rand)


def hash_nonce(t: bytes, pubkey_x: bytes, message: bytes) -> Scalar:
    r"""
    Nonce  k₀ = H_nonce(t ‖ P.x ‖ m)  mod n.

    *t* is the masked secret key; a zero result must be treated as a
    signing failure by the caller.
    """
    return Scalar.from_bytes_reduce(
        tagged_hash(TAG_NONCE, t + pubkey_x + message)
    )


def hash_challenge(r_x: bytes, pubkey_x: bytes, message: bytes) -> Scalar:
    r"""
    Schnorr challenge  e = H_challenge(R.x ‖ P.x ‖ m)  mod n.

    Shared by signing and verification.
    """
    return Scalar.from_bytes_reduce(
        tagged_hash(TAG_CHALLENGE, r_x + pubkey_x + message)
    )
