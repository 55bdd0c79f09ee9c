"""
Legacy Guard Contract

Transition validation for the dead man's switch vault.
"""

from legacy_guard.contract.validation import (
    TransitionValidator,
    ValidationResult,
    app_contract,
    validate_initialize_strict,
    validate_pulse_strict,
    validate_claim_strict,
)

__all__ = [
    "TransitionValidator",
    "ValidationResult",
    "app_contract",
    "validate_initialize_strict",
    "validate_pulse_strict",
    "validate_claim_strict",
]
