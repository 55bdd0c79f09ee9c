"""
Legacy Guard Cryptographic Primitives
"""

from legacy_guard.crypto.hash import sha3_256, tagged_hash
from legacy_guard.crypto.signatures import (
    SignatureVerifier,
    Ed25519Verifier,
    authorization_message,
)

__all__ = [
    # Hash functions
    "sha3_256",
    "tagged_hash",
    # Signatures
    "SignatureVerifier",
    "Ed25519Verifier",
    "authorization_message",
]
