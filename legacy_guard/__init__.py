"""
Legacy Guard
Dead man's switch vault for Bitcoin inheritance.

An owner keeps the vault alive with periodic pulses; once the owner has
been silent for timeout_blocks, the heir may claim it.
"""

__version__ = "0.1.0"
__author__ = "Legacy Guard"

from legacy_guard.contract.validation import (
    TransitionValidator,
    ValidationResult,
    app_contract,
)
from legacy_guard.config import ValidatorConfig
from legacy_guard.core.vault import VaultState, Initialize, Pulse, Claim

__all__ = [
    "TransitionValidator",
    "ValidationResult",
    "ValidatorConfig",
    "app_contract",
    "VaultState",
    "Initialize",
    "Pulse",
    "Claim",
    "__version__",
]
