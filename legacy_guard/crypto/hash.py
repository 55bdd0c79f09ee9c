"""
Legacy Guard Hash Functions

SHA3-256 per NIST FIPS 202 with tagged hashing for domain separation.
"""

from __future__ import annotations
import hashlib
from typing import Union

from legacy_guard.core.types import Hash


def sha3_256(data: Union[bytes, bytearray, memoryview]) -> Hash:
    """
    SHA3-256 hash function per NIST FIPS 202.

    Args:
        data: Input data to hash

    Returns:
        Hash: 32-byte hash output wrapped in Hash type
    """
    hasher = hashlib.sha3_256()
    hasher.update(data)
    return Hash(hasher.digest())


def tagged_hash(tag: bytes, data: bytes) -> Hash:
    """
    Domain-separated hash using tagged hashing.

    Computes: SHA3-256(SHA3-256(tag) || SHA3-256(tag) || data)
    """
    tag_hash = hashlib.sha3_256(tag).digest()
    return sha3_256(tag_hash + tag_hash + data)
