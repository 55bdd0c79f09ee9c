"""
Legacy Guard Error Handling

All error codes and exception classes raised by the transition validator.
Every one of them resolves to a rejection at the public boundary.
"""

from enum import Enum, IntEnum
from typing import Optional, Any


class RejectionKind(Enum):
    """Coarse category of a rejection."""

    INTERNAL = "internal"
    DECODE = "decode"
    MISSING_RECORD = "missing_record"
    INVARIANT = "invariant"
    AUTHORIZATION = "authorization"


class ErrorCode(IntEnum):
    """Validator error codes."""

    # 1xxx - General errors
    UNKNOWN_ERROR = 1000
    INVALID_PARAMETER = 1001
    INTERNAL_ERROR = 1002

    # 2xxx - Decode errors
    MALFORMED_PAYLOAD = 2001
    INVALID_ACTION = 2002
    INVALID_VAULT_STATE = 2003
    INVALID_WITNESS = 2004

    # 3xxx - Record lookup errors
    MISSING_INPUT_RECORD = 3001
    MISSING_OUTPUT_RECORD = 3002
    AMBIGUOUS_INPUT_RECORD = 3003
    AMBIGUOUS_OUTPUT_RECORD = 3004
    UNEXPECTED_INPUT_RECORD = 3005

    # 4xxx - State invariant violations
    OWNER_MISMATCH = 4001
    HEIR_MISMATCH = 4002
    TIMEOUT_MISMATCH = 4003
    UNSET_HEARTBEAT = 4004
    NON_MONOTONIC_HEARTBEAT = 4005
    ZERO_TIMEOUT = 4006

    # 5xxx - Trust boundary errors
    MISSING_ATTESTATION = 5001
    TIMEOUT_NOT_ELAPSED = 5002
    MISSING_WITNESS = 5003
    INVALID_SIGNATURE = 5004

    @property
    def kind(self) -> RejectionKind:
        group = self.value // 1000
        return _KIND_BY_GROUP.get(group, RejectionKind.INTERNAL)


_KIND_BY_GROUP = {
    1: RejectionKind.INTERNAL,
    2: RejectionKind.DECODE,
    3: RejectionKind.MISSING_RECORD,
    4: RejectionKind.INVARIANT,
    5: RejectionKind.AUTHORIZATION,
}


class LegacyGuardError(Exception):
    """Base exception for all validator errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Any] = None
    ):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(f"[{code.value}] {message}")

    @property
    def kind(self) -> RejectionKind:
        return self.code.kind

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for diagnostics."""
        result = {
            "code": self.code.value,
            "name": self.code.name,
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


# ==============================================================================
# General Errors (1xxx)
# ==============================================================================

class InvalidParameterError(LegacyGuardError):
    def __init__(self, param: str, message: str = ""):
        msg = f"Invalid parameter: {param}"
        if message:
            msg += f" - {message}"
        super().__init__(ErrorCode.INVALID_PARAMETER, msg, {"parameter": param})


class InternalError(LegacyGuardError):
    def __init__(self, message: str = "Internal error", details: Any = None):
        super().__init__(ErrorCode.INTERNAL_ERROR, message, details)


# ==============================================================================
# Decode Errors (2xxx)
# ==============================================================================

class DecodeError(LegacyGuardError):
    """Raised when a payload cannot be decoded into the expected structure."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.MALFORMED_PAYLOAD,
        details: Any = None
    ):
        super().__init__(code, message, details)


class InvalidActionError(DecodeError):
    def __init__(self, message: str):
        super().__init__(f"Invalid action: {message}", ErrorCode.INVALID_ACTION)


class InvalidVaultStateError(DecodeError):
    def __init__(self, message: str):
        super().__init__(f"Invalid vault state: {message}", ErrorCode.INVALID_VAULT_STATE)


class InvalidWitnessError(DecodeError):
    def __init__(self, message: str):
        super().__init__(f"Invalid witness: {message}", ErrorCode.INVALID_WITNESS)


# ==============================================================================
# Record Errors (3xxx)
# ==============================================================================

class MissingRecordError(LegacyGuardError):
    def __init__(self, side: str):
        code = (
            ErrorCode.MISSING_INPUT_RECORD if side == "input"
            else ErrorCode.MISSING_OUTPUT_RECORD
        )
        super().__init__(code, f"No {side} record for this app", {"side": side})


class AmbiguousRecordError(LegacyGuardError):
    def __init__(self, side: str, count: int):
        code = (
            ErrorCode.AMBIGUOUS_INPUT_RECORD if side == "input"
            else ErrorCode.AMBIGUOUS_OUTPUT_RECORD
        )
        super().__init__(
            code,
            f"Expected exactly one {side} record for this app, found {count}",
            {"side": side, "count": count}
        )


class UnexpectedRecordError(LegacyGuardError):
    def __init__(self, count: int):
        super().__init__(
            ErrorCode.UNEXPECTED_INPUT_RECORD,
            f"Initialize must not consume vault state, found {count} input record(s)",
            {"count": count}
        )


# ==============================================================================
# Invariant Errors (4xxx)
# ==============================================================================

class InvariantViolationError(LegacyGuardError):
    """Base class for state invariant violations."""
    pass


class OwnerMismatchError(InvariantViolationError):
    def __init__(self, expected: bytes, actual: bytes):
        super().__init__(
            ErrorCode.OWNER_MISMATCH,
            f"Owner key changed: {expected.hex()[:16]} -> {actual.hex()[:16]}",
        )


class HeirMismatchError(InvariantViolationError):
    def __init__(self, expected: bytes, actual: bytes):
        super().__init__(
            ErrorCode.HEIR_MISMATCH,
            f"Heir key changed: {expected.hex()[:16]} -> {actual.hex()[:16]}",
        )


class TimeoutMismatchError(InvariantViolationError):
    def __init__(self, expected: int, actual: int):
        super().__init__(
            ErrorCode.TIMEOUT_MISMATCH,
            f"Timeout changed: {expected} -> {actual}",
            {"expected": expected, "actual": actual}
        )


class UnsetHeartbeatError(InvariantViolationError):
    def __init__(self):
        super().__init__(ErrorCode.UNSET_HEARTBEAT, "Initial heartbeat is zero")


class NonMonotonicHeartbeatError(InvariantViolationError):
    def __init__(self, previous: int, new: int):
        super().__init__(
            ErrorCode.NON_MONOTONIC_HEARTBEAT,
            f"Heartbeat must increase: {previous} -> {new}",
            {"previous": previous, "new": new}
        )


class ZeroTimeoutError(InvariantViolationError):
    def __init__(self):
        super().__init__(ErrorCode.ZERO_TIMEOUT, "Timeout must be non-zero")


# ==============================================================================
# Trust Boundary Errors (5xxx)
# ==============================================================================

class MissingAttestationError(LegacyGuardError):
    def __init__(self):
        super().__init__(
            ErrorCode.MISSING_ATTESTATION,
            "Claim requires an attested block height"
        )


class TimeoutNotElapsedError(LegacyGuardError):
    def __init__(self, height: int, deadline: int):
        super().__init__(
            ErrorCode.TIMEOUT_NOT_ELAPSED,
            f"Timeout not elapsed: height {height} <= deadline {deadline}",
            {"height": height, "deadline": deadline}
        )


class MissingWitnessError(LegacyGuardError):
    def __init__(self):
        super().__init__(ErrorCode.MISSING_WITNESS, "Witness carries no signature")


class InvalidSignatureError(LegacyGuardError):
    def __init__(self, role: str):
        super().__init__(
            ErrorCode.INVALID_SIGNATURE,
            f"Signature does not verify against {role} key",
            {"role": role}
        )
