"""
Legacy Guard Primitive Types

Fixed-size identifiers shared by vault records and the transaction view.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import string

from legacy_guard.constants import HASH_SIZE, PUBLIC_KEY_SIZE, APP_TAG


def _clean_hex(hex_string: str, size: int) -> str:
    cleaned = hex_string[2:] if hex_string.startswith(("0x", "0X")) else hex_string
    if len(cleaned) < size * 2:
        cleaned = cleaned.rjust(size * 2, "0")
    if len(cleaned) != size * 2 or any(c not in string.hexdigits for c in cleaned):
        raise ValueError(
            f"Invalid hex format. Must be {size} bytes ({size * 2} hex characters)"
        )
    return cleaned.lower()


@dataclass(frozen=True, slots=True)
class Hash:
    """
    32-byte digest or identifier.

    SIZE: 32 bytes
    SERIALIZATION: raw bytes
    """
    data: bytes = field(default_factory=lambda: bytes(HASH_SIZE))

    def __post_init__(self):
        if len(self.data) != HASH_SIZE:
            raise ValueError(f"Hash must be {HASH_SIZE} bytes, got {len(self.data)}")

    def __bytes__(self) -> bytes:
        return self.data

    def __repr__(self) -> str:
        return f"Hash({self.data.hex()[:16]}...)"

    def hex(self) -> str:
        return self.data.hex()

    @classmethod
    def from_hex(cls, hex_string: str) -> Hash:
        return cls(bytes.fromhex(_clean_hex(hex_string, HASH_SIZE)))

    @classmethod
    def zero(cls) -> Hash:
        return cls(bytes(HASH_SIZE))


@dataclass(frozen=True, slots=True)
class PublicKey:
    """
    Owner or heir key identifier.

    SIZE: 32 bytes
    SERIALIZATION: array of 32 unsigned integers
    """
    data: bytes = field(default_factory=lambda: bytes(PUBLIC_KEY_SIZE))

    def __post_init__(self):
        if len(self.data) != PUBLIC_KEY_SIZE:
            raise ValueError(
                f"PublicKey must be {PUBLIC_KEY_SIZE} bytes, got {len(self.data)}"
            )

    def __bytes__(self) -> bytes:
        return self.data

    def __repr__(self) -> str:
        return f"PublicKey({self.data.hex()[:16]}...)"

    def hex(self) -> str:
        return self.data.hex()

    @classmethod
    def from_hex(cls, hex_string: str) -> PublicKey:
        """
        Parse a key from hex.

        Accepts an optional 0x prefix; shorter input is left-padded with
        zeros to 32 bytes.
        """
        return cls(bytes.fromhex(_clean_hex(hex_string, PUBLIC_KEY_SIZE)))


@dataclass(frozen=True, slots=True)
class App:
    """
    Application identity a state record is attached to.

    A transaction may carry records for many apps; the validator only
    ever inspects the ones whose App equals its own.
    """
    vk: Hash
    identity: Hash = field(default_factory=Hash.zero)
    tag: str = APP_TAG

    def __post_init__(self):
        if len(self.tag) != 1:
            raise ValueError(f"App tag must be a single character, got {self.tag!r}")

    def __repr__(self) -> str:
        return f"App({self.tag}/{self.identity.hex()[:8]}/{self.vk.hex()[:8]})"

    def serialize(self) -> bytes:
        """Serialize to bytes: tag || identity || vk."""
        return self.tag.encode("utf-8") + self.identity.data + self.vk.data


@dataclass(frozen=True, slots=True)
class UtxoId:
    """Reference to a consumed output: txid:vout."""
    txid: Hash
    vout: int = 0

    def __str__(self) -> str:
        return f"{self.txid.hex()}:{self.vout}"

    @classmethod
    def parse(cls, value: str) -> UtxoId:
        txid, _, vout = value.partition(":")
        return cls(Hash.from_hex(txid), int(vout or 0))
