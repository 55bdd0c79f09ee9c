"""
Legacy Guard Transaction View Tests
"""

import pytest

from legacy_guard.core.types import Hash, UtxoId
from legacy_guard.core.transaction import (
    Transaction,
    find_input_record,
    find_output_record,
    count_input_records,
    count_output_records,
)
from legacy_guard.errors import (
    AmbiguousRecordError,
    ErrorCode,
    MissingRecordError,
    RejectionKind,
)


class TestRecordLookup:
    """Tests for exactly-one record lookup."""

    def test_finds_unique_records(self, app, utxo):
        """Test unique input and output are returned."""
        tx = Transaction(ins=[(utxo, {app: b"in"})], outs=[{app: b"out"}])
        assert find_input_record(tx, app) == b"in"
        assert find_output_record(tx, app) == b"out"

    def test_ignores_other_apps(self, app, other_app, utxo):
        """Test records of unrelated apps are invisible."""
        tx = Transaction(
            ins=[(utxo, {other_app: b"x", app: b"in"})],
            outs=[{other_app: b"y"}, {app: b"out"}, {other_app: b"z"}],
        )
        assert find_input_record(tx, app) == b"in"
        assert find_output_record(tx, app) == b"out"
        assert count_output_records(tx, other_app) == 2

    def test_missing_input(self, app, other_app, utxo):
        """Test no matching input raises MissingRecordError."""
        tx = Transaction(ins=[(utxo, {other_app: b"x"})])
        with pytest.raises(MissingRecordError) as exc_info:
            find_input_record(tx, app)
        assert exc_info.value.code == ErrorCode.MISSING_INPUT_RECORD
        assert exc_info.value.kind == RejectionKind.MISSING_RECORD

    def test_missing_output(self, app):
        """Test no matching output raises MissingRecordError."""
        with pytest.raises(MissingRecordError) as exc_info:
            find_output_record(Transaction(), app)
        assert exc_info.value.code == ErrorCode.MISSING_OUTPUT_RECORD

    def test_ambiguous_input(self, app, utxo):
        """Test two matching inputs are rejected rather than picking one."""
        other_utxo = UtxoId(Hash(bytes([0x22] * 32)), 1)
        tx = Transaction(ins=[(utxo, {app: b"a"}), (other_utxo, {app: b"b"})])
        assert count_input_records(tx, app) == 2
        with pytest.raises(AmbiguousRecordError) as exc_info:
            find_input_record(tx, app)
        assert exc_info.value.code == ErrorCode.AMBIGUOUS_INPUT_RECORD
        assert exc_info.value.details == {"side": "input", "count": 2}

    def test_ambiguous_output(self, app):
        """Test two matching outputs are rejected."""
        tx = Transaction(outs=[{app: b"a"}, {app: b"b"}])
        with pytest.raises(AmbiguousRecordError):
            find_output_record(tx, app)


class TestTransactionImmutability:
    """Tests that the view cannot be altered through the validator."""

    def test_sequences_become_tuples(self, app, utxo):
        tx = Transaction(ins=[(utxo, {app: b"in"})], outs=[{app: b"out"}])
        assert isinstance(tx.ins, tuple)
        assert isinstance(tx.outs, tuple)

    def test_charms_read_only(self, app, utxo):
        tx = Transaction(outs=[{app: b"out"}])
        with pytest.raises(TypeError):
            tx.outs[0][app] = b"tampered"

    def test_source_dict_changes_not_visible(self, app):
        charms = {app: b"out"}
        tx = Transaction(outs=[charms])
        charms[app] = b"tampered"
        assert find_output_record(tx, app) == b"out"

    def test_iter_apps(self, app, other_app, utxo):
        tx = Transaction(ins=[(utxo, {app: b"in"})], outs=[{other_app: b"x"}, {app: b"out"}])
        assert list(tx.iter_apps()) == [app, other_app]
