"""
Legacy Guard Core Data Structures
"""

from legacy_guard.core.types import Hash, PublicKey, App, UtxoId
from legacy_guard.core.vault import (
    VaultState,
    VaultStatus,
    Action,
    Initialize,
    Pulse,
    Claim,
)
from legacy_guard.core.transaction import (
    Transaction,
    find_input_record,
    find_output_record,
)
from legacy_guard.core.serialization import (
    Witness,
    encode_vault_state,
    decode_vault_state,
    encode_action,
    decode_action,
    encode_witness,
    decode_witness,
)

__all__ = [
    # Types
    "Hash",
    "PublicKey",
    "App",
    "UtxoId",
    # Vault
    "VaultState",
    "VaultStatus",
    "Action",
    "Initialize",
    "Pulse",
    "Claim",
    # Transaction
    "Transaction",
    "find_input_record",
    "find_output_record",
    # Serialization
    "Witness",
    "encode_vault_state",
    "decode_vault_state",
    "encode_action",
    "decode_action",
    "encode_witness",
    "decode_witness",
]
