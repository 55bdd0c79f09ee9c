"""
Legacy Guard Vault Records

The persisted vault state and the actions a caller may declare against it.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from legacy_guard.constants import (
    BTC_BLOCK_TIME_SECONDS,
    SECONDS_PER_DAY,
    U64_MAX,
)
from legacy_guard.core.types import PublicKey


class VaultStatus(Enum):
    """Claimability of a vault at a given height."""
    ACTIVE = "active"
    EXPIRED = "expired"


@dataclass(frozen=True, slots=True)
class VaultState:
    """
    State record of one vault instance.

    owner_key, heir_key and timeout_blocks are fixed at initialization;
    last_heartbeat only ever moves forward.
    """
    owner_key: PublicKey
    heir_key: PublicKey
    last_heartbeat: int
    timeout_blocks: int

    def __post_init__(self):
        for name in ("last_heartbeat", "timeout_blocks"):
            value = getattr(self, name)
            if not 0 <= value <= U64_MAX:
                raise ValueError(f"{name} out of u64 range: {value}")

    @property
    def deadline(self) -> int:
        """Last height at which the vault is still live."""
        return self.last_heartbeat + self.timeout_blocks

    def is_claimable(self, current_height: int) -> bool:
        return current_height > self.deadline

    def blocks_remaining(self, current_height: int) -> int:
        """Blocks until the heir may claim (0 once claimable)."""
        return max(0, self.deadline + 1 - current_height)

    def days_remaining(self, current_height: int) -> float:
        seconds = self.blocks_remaining(current_height) * BTC_BLOCK_TIME_SECONDS
        return round(seconds / SECONDS_PER_DAY, 1)

    def status(self, current_height: int) -> VaultStatus:
        if self.is_claimable(current_height):
            return VaultStatus.EXPIRED
        return VaultStatus.ACTIVE

    def same_terms(self, other: VaultState) -> bool:
        """True if identity and terms match bit for bit."""
        return (
            self.owner_key == other.owner_key
            and self.heir_key == other.heir_key
            and self.timeout_blocks == other.timeout_blocks
        )

    def with_heartbeat(self, height: int) -> VaultState:
        """Successor state after a pulse at the given height."""
        return replace(self, last_heartbeat=height)


# ==============================================================================
# Actions
# ==============================================================================

@dataclass(frozen=True, slots=True)
class Initialize:
    """Create a new vault with the declared identity and terms."""
    owner_key: PublicKey
    heir_key: PublicKey
    timeout_blocks: int

    def __post_init__(self):
        if not 0 <= self.timeout_blocks <= U64_MAX:
            raise ValueError(f"timeout_blocks out of u64 range: {self.timeout_blocks}")

    @classmethod
    def for_state(cls, state: VaultState) -> Initialize:
        return cls(state.owner_key, state.heir_key, state.timeout_blocks)


@dataclass(frozen=True, slots=True)
class Pulse:
    """Owner proves liveness, advancing last_heartbeat."""


@dataclass(frozen=True, slots=True)
class Claim:
    """Heir takes custody after the timeout elapsed."""


Action = Union[Initialize, Pulse, Claim]
