"""
Legacy Guard Test Fixtures
"""

import pytest
from typing import Callable, Optional

from nacl.signing import SigningKey

from legacy_guard.constants import APP_VK
from legacy_guard.core.types import Hash, PublicKey, App, UtxoId
from legacy_guard.core.vault import VaultState
from legacy_guard.core.transaction import Transaction
from legacy_guard.core.serialization import encode_vault_state


@pytest.fixture
def owner_signing_key() -> SigningKey:
    """Deterministic owner signing key."""
    return SigningKey(bytes(range(32)))


@pytest.fixture
def heir_signing_key() -> SigningKey:
    """Deterministic heir signing key."""
    return SigningKey(bytes([(i + 100) % 256 for i in range(32)]))


@pytest.fixture
def owner_key(owner_signing_key) -> PublicKey:
    return PublicKey(owner_signing_key.verify_key.encode())


@pytest.fixture
def heir_key(heir_signing_key) -> PublicKey:
    return PublicKey(heir_signing_key.verify_key.encode())


@pytest.fixture
def app() -> App:
    """The legacy-guard app identity."""
    return App(vk=Hash.from_hex(APP_VK), identity=Hash(bytes([7] * 32)))


@pytest.fixture
def other_app() -> App:
    """An unrelated app sharing the transaction."""
    return App(vk=Hash(bytes([0xAA] * 32)), identity=Hash(bytes([7] * 32)))


@pytest.fixture
def vault_state(owner_key, heir_key) -> VaultState:
    """Vault with owner O, heir H, timeout 100, heartbeat 500."""
    return VaultState(
        owner_key=owner_key,
        heir_key=heir_key,
        last_heartbeat=500,
        timeout_blocks=100,
    )


@pytest.fixture
def utxo() -> UtxoId:
    return UtxoId(Hash(bytes([0x11] * 32)), 0)


@pytest.fixture
def make_tx(app, utxo) -> Callable[..., Transaction]:
    """
    Build a transaction carrying vault records for the app.

    Records may be VaultState (encoded here) or raw bytes.
    """
    def _encode(record):
        if isinstance(record, VaultState):
            return encode_vault_state(record)
        return record

    def builder(
        prior: Optional[object] = None,
        produced: Optional[object] = None,
        target: Optional[App] = None,
    ) -> Transaction:
        target = target or app
        ins = []
        outs = []
        if prior is not None:
            ins.append((utxo, {target: _encode(prior)}))
        if produced is not None:
            outs.append({target: _encode(produced)})
        return Transaction(ins=ins, outs=outs)

    return builder
