"""
Legacy Guard Signatures

Authorization is a capability injected into the validator: anything with
a verify(public_key, message, signature) -> bool method will do.
Ed25519Verifier is the stock implementation.
"""

from __future__ import annotations
import logging
from typing import Optional, Protocol, runtime_checkable

from nacl.exceptions import BadSignatureError, CryptoError
from nacl.signing import VerifyKey

from legacy_guard.constants import TAG_PULSE, TAG_CLAIM
from legacy_guard.core.types import App, Hash, PublicKey
from legacy_guard.crypto.hash import tagged_hash

logger = logging.getLogger(__name__)

AUTH_TAGS = {
    "pulse": TAG_PULSE,
    "claim": TAG_CLAIM,
}


@runtime_checkable
class SignatureVerifier(Protocol):
    """Verifies a detached signature against a 32-byte public key."""

    def verify(self, public_key: PublicKey, message: bytes, signature: bytes) -> bool:
        ...


class Ed25519Verifier:
    """Ed25519 (RFC 8032) verification backed by libsodium."""

    def verify(self, public_key: PublicKey, message: bytes, signature: bytes) -> bool:
        try:
            VerifyKey(public_key.data).verify(message, signature)
            return True
        except BadSignatureError:
            return False
        except (CryptoError, ValueError, TypeError) as e:
            logger.debug(f"Signature verification error: {e}")
            return False


def authorization_message(
    kind: str,
    app: App,
    prior_record: bytes,
    produced_record: Optional[bytes] = None,
) -> Hash:
    """
    Digest a Pulse or Claim signature commits to.

    Binds the action kind, the app and the exact encoded records, so a
    signature cannot be replayed onto another vault or another heartbeat.
    """
    if kind not in AUTH_TAGS:
        raise ValueError(f"Unknown authorization kind: {kind}")

    parts = [app.serialize(), len(prior_record).to_bytes(4, "big"), prior_record]
    if produced_record is not None:
        parts += [len(produced_record).to_bytes(4, "big"), produced_record]
    return tagged_hash(AUTH_TAGS[kind], b"".join(parts))
