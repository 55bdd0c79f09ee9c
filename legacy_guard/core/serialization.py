"""
Legacy Guard Serialization

CBOR codec for actions, vault state records and witnesses.

Shapes match the externally tagged layout of the deployed contract so its
records decode unchanged:

    VaultState  {"owner_pubkey": [32 x uint], "heir_pubkey": [32 x uint],
                 "last_heartbeat": u64, "timeout_blocks": u64}
    Pulse       "Pulse"
    Claim       "Claim"
    Initialize  {"Initialize": {"owner_pubkey", "heir_pubkey", "timeout_blocks"}}

Every malformed payload raises DecodeError; nothing else escapes.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from fido2 import cbor

from legacy_guard.constants import (
    PUBLIC_KEY_SIZE,
    SIGNATURE_SIZE,
    U64_MAX,
    FIELD_OWNER_KEY,
    FIELD_HEIR_KEY,
    FIELD_LAST_HEARTBEAT,
    FIELD_TIMEOUT_BLOCKS,
    FIELD_SIGNATURE,
    ACTION_INITIALIZE,
    ACTION_PULSE,
    ACTION_CLAIM,
)
from legacy_guard.core.types import PublicKey
from legacy_guard.core.vault import Action, Initialize, Pulse, Claim, VaultState
from legacy_guard.errors import (
    DecodeError,
    InvalidActionError,
    InvalidVaultStateError,
    InvalidWitnessError,
)


@dataclass(frozen=True, slots=True)
class Witness:
    """Private input accompanying a transition."""
    signature: Optional[bytes] = None


# ==============================================================================
# Raw CBOR
# ==============================================================================

def decode_payload(data: bytes) -> Any:
    """
    Decode a complete CBOR item.

    Truncated input, trailing bytes and unsupported major types all
    surface as DecodeError.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise DecodeError(f"Expected bytes, got {type(data).__name__}")
    if len(data) == 0:
        raise DecodeError("Empty payload")
    try:
        return cbor.decode(bytes(data))
    except Exception as e:
        raise DecodeError(f"Malformed CBOR: {e!r}") from e


def encode_payload(value: Any) -> bytes:
    return cbor.encode(value)


# ==============================================================================
# Field helpers
# ==============================================================================

def _decode_key(value: Any, name: str) -> PublicKey:
    if isinstance(value, bytes):
        raw = value
    elif isinstance(value, list):
        if not all(type(b) is int and 0 <= b <= 0xFF for b in value):
            raise InvalidVaultStateError(f"{name} must contain bytes 0..255")
        raw = bytes(value)
    else:
        raise InvalidVaultStateError(f"{name} has type {type(value).__name__}")
    if len(raw) != PUBLIC_KEY_SIZE:
        raise InvalidVaultStateError(
            f"{name} must be {PUBLIC_KEY_SIZE} bytes, got {len(raw)}"
        )
    return PublicKey(raw)


def _decode_u64(value: Any, name: str) -> int:
    if type(value) is not int:
        raise InvalidVaultStateError(f"{name} has type {type(value).__name__}")
    if not 0 <= value <= U64_MAX:
        raise InvalidVaultStateError(f"{name} out of u64 range: {value}")
    return value


def _require(fields: Mapping, name: str) -> Any:
    if name not in fields:
        raise InvalidVaultStateError(f"missing field {name}")
    return fields[name]


def _encode_key(key: PublicKey) -> list:
    return list(key.data)


# ==============================================================================
# VaultState
# ==============================================================================

def vault_state_to_dict(state: VaultState) -> dict:
    return {
        FIELD_OWNER_KEY: _encode_key(state.owner_key),
        FIELD_HEIR_KEY: _encode_key(state.heir_key),
        FIELD_LAST_HEARTBEAT: state.last_heartbeat,
        FIELD_TIMEOUT_BLOCKS: state.timeout_blocks,
    }


def vault_state_from_dict(fields: Any) -> VaultState:
    if not isinstance(fields, Mapping):
        raise InvalidVaultStateError(f"expected map, got {type(fields).__name__}")
    return VaultState(
        owner_key=_decode_key(_require(fields, FIELD_OWNER_KEY), FIELD_OWNER_KEY),
        heir_key=_decode_key(_require(fields, FIELD_HEIR_KEY), FIELD_HEIR_KEY),
        last_heartbeat=_decode_u64(
            _require(fields, FIELD_LAST_HEARTBEAT), FIELD_LAST_HEARTBEAT
        ),
        timeout_blocks=_decode_u64(
            _require(fields, FIELD_TIMEOUT_BLOCKS), FIELD_TIMEOUT_BLOCKS
        ),
    )


def encode_vault_state(state: VaultState) -> bytes:
    """Serialize a vault state record to CBOR."""
    return encode_payload(vault_state_to_dict(state))


def decode_vault_state(data: bytes) -> VaultState:
    """Deserialize a vault state record from CBOR."""
    return vault_state_from_dict(decode_payload(data))


# ==============================================================================
# Action
# ==============================================================================

def encode_action(action: Action) -> bytes:
    """Serialize an action to CBOR."""
    if isinstance(action, Pulse):
        return encode_payload(ACTION_PULSE)
    if isinstance(action, Claim):
        return encode_payload(ACTION_CLAIM)
    if isinstance(action, Initialize):
        return encode_payload({
            ACTION_INITIALIZE: {
                FIELD_OWNER_KEY: _encode_key(action.owner_key),
                FIELD_HEIR_KEY: _encode_key(action.heir_key),
                FIELD_TIMEOUT_BLOCKS: action.timeout_blocks,
            }
        })
    raise TypeError(f"Unknown action type: {type(action).__name__}")


def decode_action(data: bytes) -> Action:
    """Deserialize an action from CBOR."""
    value = decode_payload(data)

    if isinstance(value, str):
        if value == ACTION_PULSE:
            return Pulse()
        if value == ACTION_CLAIM:
            return Claim()
        if value == ACTION_INITIALIZE:
            raise InvalidActionError("Initialize requires parameters")
        raise InvalidActionError(f"unknown variant {value!r}")

    if not isinstance(value, Mapping):
        raise InvalidActionError(f"expected string or map, got {type(value).__name__}")
    if len(value) != 1:
        raise InvalidActionError(f"enum map must have one entry, got {len(value)}")

    (variant, body), = value.items()
    if variant != ACTION_INITIALIZE:
        raise InvalidActionError(f"unknown or unit variant {variant!r} in map form")
    if not isinstance(body, Mapping):
        raise InvalidActionError("Initialize body must be a map")

    try:
        return Initialize(
            owner_key=_decode_key(_require(body, FIELD_OWNER_KEY), FIELD_OWNER_KEY),
            heir_key=_decode_key(_require(body, FIELD_HEIR_KEY), FIELD_HEIR_KEY),
            timeout_blocks=_decode_u64(
                _require(body, FIELD_TIMEOUT_BLOCKS), FIELD_TIMEOUT_BLOCKS
            ),
        )
    except InvalidVaultStateError as e:
        raise InvalidActionError(e.message) from e


# ==============================================================================
# Witness
# ==============================================================================

def encode_witness(signature: Optional[bytes] = None) -> bytes:
    """Serialize a witness; no signature yields an empty map."""
    if signature is None:
        return encode_payload({})
    return encode_payload({FIELD_SIGNATURE: bytes(signature)})


def decode_witness(data: Optional[bytes]) -> Witness:
    """
    Deserialize a witness.

    An absent or empty payload is an empty witness, matching the
    contract where the witness is unused.
    """
    if data is None or len(data) == 0:
        return Witness()

    value = decode_payload(data)
    if not isinstance(value, Mapping):
        raise InvalidWitnessError(f"expected map, got {type(value).__name__}")

    signature = value.get(FIELD_SIGNATURE)
    if signature is None:
        return Witness()
    if not isinstance(signature, bytes):
        raise InvalidWitnessError("signature must be a byte string")
    if len(signature) != SIGNATURE_SIZE:
        raise InvalidWitnessError(
            f"signature must be {SIGNATURE_SIZE} bytes, got {len(signature)}"
        )
    return Witness(signature=signature)
