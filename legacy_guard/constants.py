"""
Legacy Guard Constants

All vault and validator constants defined here for single source of truth.
"""

from typing import Final, Dict

# ==============================================================================
# APPLICATION IDENTITY
# ==============================================================================

# Verification key of the deployed legacy-guard app
APP_VK: Final[str] = "c78f9360ba4bc547be980aeb7c55e799184b8a6171d267cc53e1a427cdef7337"
APP_TAG: Final[str] = "n"                       # Charms tag for non-fungible state

# ==============================================================================
# FIELD SIZES
# ==============================================================================

HASH_SIZE: Final[int] = 32
PUBLIC_KEY_SIZE: Final[int] = 32                # x-only / ed25519 public key
SIGNATURE_SIZE: Final[int] = 64                 # ed25519 / schnorr signature
U64_MAX: Final[int] = 2**64 - 1

# ==============================================================================
# WIRE FORMAT
# ==============================================================================

FIELD_OWNER_KEY: Final[str] = "owner_pubkey"
FIELD_HEIR_KEY: Final[str] = "heir_pubkey"
FIELD_LAST_HEARTBEAT: Final[str] = "last_heartbeat"
FIELD_TIMEOUT_BLOCKS: Final[str] = "timeout_blocks"
FIELD_SIGNATURE: Final[str] = "signature"

ACTION_INITIALIZE: Final[str] = "Initialize"
ACTION_PULSE: Final[str] = "Pulse"
ACTION_CLAIM: Final[str] = "Claim"

# ==============================================================================
# AUTHORIZATION
# ==============================================================================

TAG_PULSE: Final[bytes] = b"LEGACY_GUARD_PULSE_V1"
TAG_CLAIM: Final[bytes] = b"LEGACY_GUARD_CLAIM_V1"

# ==============================================================================
# TIMING
# ==============================================================================

BTC_BLOCK_TIME_SECONDS: Final[int] = 600        # ~10 minutes average
SECONDS_PER_DAY: Final[int] = 86400

# Timeout presets offered when creating a vault
TIMEOUT_OPTIONS: Final[Dict[str, int]] = {
    "3-months": 26_000,
    "6-months": 52_000,
    "1-year": 104_000,
    "5-years": 520_000,
}
DEFAULT_TIMEOUT_BLOCKS: Final[int] = 52_000


def timeout_for(key: str) -> int:
    """Timeout in blocks for a preset key, falling back to the default."""
    return TIMEOUT_OPTIONS.get(key, DEFAULT_TIMEOUT_BLOCKS)
