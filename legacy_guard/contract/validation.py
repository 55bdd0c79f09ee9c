"""
Legacy Guard Transition Validator

Decides whether a proposed transition of a dead man's switch vault is
acceptable. Three transitions exist:

    Initialize  nothing consumed -> one fresh VaultState produced
    Pulse       one VaultState consumed -> one VaultState with a later heartbeat
    Claim       one VaultState consumed -> nothing produced for this app

The strict functions raise a LegacyGuardError describing the first broken
rule. The public entry points (TransitionValidator.validate, app_contract)
never raise: every failure is a plain rejection.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from legacy_guard.config import ValidatorConfig
from legacy_guard.core.types import App, Hash, PublicKey
from legacy_guard.core.vault import Action, Initialize, Pulse, Claim, VaultState
from legacy_guard.core.transaction import (
    Transaction,
    find_input_record,
    find_output_record,
    count_input_records,
)
from legacy_guard.core.serialization import (
    decode_action,
    decode_vault_state,
    decode_witness,
)
from legacy_guard.crypto.signatures import (
    SignatureVerifier,
    Ed25519Verifier,
    authorization_message,
)
from legacy_guard.errors import (
    ErrorCode,
    RejectionKind,
    LegacyGuardError,
    InvalidParameterError,
    InternalError,
    UnexpectedRecordError,
    OwnerMismatchError,
    HeirMismatchError,
    TimeoutMismatchError,
    UnsetHeartbeatError,
    NonMonotonicHeartbeatError,
    ZeroTimeoutError,
    MissingAttestationError,
    TimeoutNotElapsedError,
    MissingWitnessError,
    InvalidSignatureError,
)

logger = logging.getLogger(__name__)

ActionInput = Union[bytes, bytearray, Initialize, Pulse, Claim]


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation, with the rejection reason if any."""
    accepted: bool
    code: Optional[ErrorCode] = None
    reason: str = ""

    def __bool__(self) -> bool:
        return self.accepted

    @property
    def kind(self) -> Optional[RejectionKind]:
        return self.code.kind if self.code is not None else None

    @classmethod
    def accept(cls) -> ValidationResult:
        return cls(accepted=True)

    @classmethod
    def reject(cls, error: LegacyGuardError) -> ValidationResult:
        return cls(accepted=False, code=error.code, reason=error.message)


# ==============================================================================
# Shared checks
# ==============================================================================

def check_same_terms(prior: VaultState, produced: VaultState) -> None:
    """Owner, heir and timeout must be bit-for-bit identical."""
    if produced.owner_key != prior.owner_key:
        raise OwnerMismatchError(prior.owner_key.data, produced.owner_key.data)
    if produced.heir_key != prior.heir_key:
        raise HeirMismatchError(prior.heir_key.data, produced.heir_key.data)
    if produced.timeout_blocks != prior.timeout_blocks:
        raise TimeoutMismatchError(prior.timeout_blocks, produced.timeout_blocks)


def check_signature(
    verifier: SignatureVerifier,
    witness_payload: Optional[bytes],
    role: str,
    key: PublicKey,
    message: Hash,
) -> None:
    witness = decode_witness(witness_payload)
    if witness.signature is None:
        raise MissingWitnessError()
    if not verifier.verify(key, message.data, witness.signature):
        raise InvalidSignatureError(role)


def _check_height(attested_height) -> int:
    if isinstance(attested_height, bool) or not isinstance(attested_height, int):
        raise InvalidParameterError("attested_height", "must be an integer")
    if attested_height < 0:
        raise InvalidParameterError("attested_height", "must be non-negative")
    return attested_height


# ==============================================================================
# Per-action rules
# ==============================================================================

def validate_initialize_strict(
    action: Initialize,
    tx: Transaction,
    app: App,
    reject_zero_timeout: bool = False,
) -> VaultState:
    """
    Validate vault creation.

    The produced record must carry exactly the declared owner, heir and
    timeout, with a non-zero heartbeat. This is the only point where the
    caller's declared fields are trusted. A zero timeout is accepted
    unless reject_zero_timeout is set.

    Returns:
        The newly created vault state
    """
    consumed = count_input_records(tx, app)
    if consumed:
        raise UnexpectedRecordError(consumed)

    produced = decode_vault_state(find_output_record(tx, app))

    if produced.owner_key != action.owner_key:
        raise OwnerMismatchError(action.owner_key.data, produced.owner_key.data)
    if produced.heir_key != action.heir_key:
        raise HeirMismatchError(action.heir_key.data, produced.heir_key.data)
    if produced.timeout_blocks != action.timeout_blocks:
        raise TimeoutMismatchError(action.timeout_blocks, produced.timeout_blocks)

    # Zero means unset; an all-zero record must never pass as initialized
    if produced.last_heartbeat == 0:
        raise UnsetHeartbeatError()
    if reject_zero_timeout and produced.timeout_blocks == 0:
        raise ZeroTimeoutError()

    return produced


def validate_pulse_strict(
    tx: Transaction,
    app: App,
    witness: Optional[bytes] = None,
    verifier: Optional[SignatureVerifier] = None,
) -> Tuple[VaultState, VaultState]:
    """
    Validate a liveness proof.

    Identity and terms are carried over unchanged and the heartbeat
    strictly increases. With a verifier, the witness must hold the
    owner's signature over both records.

    Returns:
        (prior, produced) vault states
    """
    prior_record = find_input_record(tx, app)
    prior = decode_vault_state(prior_record)

    produced_record = find_output_record(tx, app)
    produced = decode_vault_state(produced_record)

    check_same_terms(prior, produced)

    if produced.last_heartbeat <= prior.last_heartbeat:
        raise NonMonotonicHeartbeatError(prior.last_heartbeat, produced.last_heartbeat)

    if verifier is not None:
        message = authorization_message("pulse", app, prior_record, produced_record)
        check_signature(verifier, witness, "owner", prior.owner_key, message)

    return prior, produced


def validate_claim_strict(
    tx: Transaction,
    app: App,
    witness: Optional[bytes] = None,
    verifier: Optional[SignatureVerifier] = None,
    attested_height: Optional[int] = None,
    require_height_attestation: bool = False,
) -> VaultState:
    """
    Validate the heir taking custody.

    The vault record is consumed and nothing replaces it; outputs are
    not inspected since custody leaves through plain payments.

    Without attested_height the timeout is assumed to have been checked
    by whoever invoked the validator. Pass the verified current height
    to enforce height > last_heartbeat + timeout_blocks here instead.

    Returns:
        The consumed vault state
    """
    prior_record = find_input_record(tx, app)
    prior = decode_vault_state(prior_record)

    if attested_height is not None:
        height = _check_height(attested_height)
        if not prior.is_claimable(height):
            raise TimeoutNotElapsedError(height, prior.deadline)
    elif require_height_attestation:
        raise MissingAttestationError()

    if verifier is not None:
        message = authorization_message("claim", app, prior_record)
        check_signature(verifier, witness, "heir", prior.heir_key, message)

    return prior


# ==============================================================================
# Validator
# ==============================================================================

class TransitionValidator:
    """
    Stateless transition validator bound to one app identity.

    Safe to share across threads: configuration and verifier are only
    read, and each call works on its own inputs.
    """

    def __init__(
        self,
        config: Optional[ValidatorConfig] = None,
        verifier: Optional[SignatureVerifier] = None,
        app: Optional[App] = None,
    ):
        self.config = config or ValidatorConfig()
        self.app = app or self.config.app

        if verifier is None and self.config.require_authorization:
            verifier = Ed25519Verifier()
        self.verifier = verifier

    def validate_strict(
        self,
        action: ActionInput,
        tx: Transaction,
        witness: Optional[bytes] = None,
        attested_height: Optional[int] = None,
    ) -> Action:
        """
        Validate a transition, raising on the first broken rule.

        Args:
            action: Encoded action payload, or an already decoded Action
            tx: Transaction view
            witness: Encoded witness payload (signature)
            attested_height: Verified current block height, if available

        Returns:
            The decoded action

        Raises:
            LegacyGuardError: describing why the transition is rejected
        """
        if not isinstance(action, (Initialize, Pulse, Claim)):
            action = decode_action(action)

        if isinstance(action, Initialize):
            validate_initialize_strict(
                action, tx, self.app, self.config.reject_zero_timeout
            )
        elif isinstance(action, Pulse):
            validate_pulse_strict(tx, self.app, witness, self.verifier)
        else:
            validate_claim_strict(
                tx,
                self.app,
                witness,
                self.verifier,
                attested_height,
                self.config.require_height_attestation,
            )

        return action

    def evaluate(
        self,
        action: ActionInput,
        tx: Transaction,
        witness: Optional[bytes] = None,
        attested_height: Optional[int] = None,
    ) -> ValidationResult:
        """Validate a transition and report the reason for any rejection."""
        try:
            decoded = self.validate_strict(action, tx, witness, attested_height)
        except LegacyGuardError as e:
            logger.debug(f"Transition rejected: {e}")
            return ValidationResult.reject(e)
        except Exception as e:
            logger.warning(f"Transition rejected on unexpected error: {e!r}")
            return ValidationResult.reject(InternalError(repr(e)))

        logger.debug(f"Transition accepted: {type(decoded).__name__}")
        return ValidationResult.accept()

    def validate(
        self,
        action: ActionInput,
        tx: Transaction,
        witness: Optional[bytes] = None,
        attested_height: Optional[int] = None,
    ) -> bool:
        """Validate a transition. Never raises."""
        return self.evaluate(action, tx, witness, attested_height).accepted


def app_contract(
    app: App,
    tx: Transaction,
    x: bytes,
    w: Optional[bytes] = None,
    attested_height: Optional[int] = None,
    verifier: Optional[SignatureVerifier] = None,
) -> bool:
    """
    Contract entry point: public input x is the encoded action, w the witness.

    With no verifier and no attested height this behaves exactly like the
    deployed contract.
    """
    validator = TransitionValidator(verifier=verifier, app=app)
    return validator.validate(x, tx, w, attested_height)
