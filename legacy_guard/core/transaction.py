"""
Legacy Guard Transaction View

Read-only view of the records a transaction consumes and produces,
keyed by application identity. A transaction may carry records for
unrelated apps; lookups only ever see the records of one app.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, List, Mapping, Sequence, Tuple

from legacy_guard.core.types import App, UtxoId
from legacy_guard.errors import AmbiguousRecordError, MissingRecordError


Charms = Mapping[App, bytes]


def _freeze(charms: Charms) -> Charms:
    return MappingProxyType(dict(charms))


@dataclass(frozen=True)
class Transaction:
    """
    Records consumed (ins) and produced (outs) by a proposed transition.

    ins:  sequence of (UtxoId, {App: payload})
    outs: sequence of {App: payload}
    """
    ins: Tuple[Tuple[UtxoId, Charms], ...] = field(default_factory=tuple)
    outs: Tuple[Charms, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(
            self, "ins", tuple((utxo, _freeze(charms)) for utxo, charms in self.ins)
        )
        object.__setattr__(self, "outs", tuple(_freeze(charms) for charms in self.outs))

    def input_records(self, app: App) -> List[bytes]:
        return [charms[app] for _, charms in self.ins if app in charms]

    def output_records(self, app: App) -> List[bytes]:
        return [charms[app] for charms in self.outs if app in charms]

    def iter_apps(self) -> Iterator[App]:
        """All distinct apps mentioned anywhere in the transaction."""
        seen = set()
        for charms in [c for _, c in self.ins] + list(self.outs):
            for app in charms:
                if app not in seen:
                    seen.add(app)
                    yield app


def _exactly_one(records: Sequence[bytes], side: str) -> bytes:
    if len(records) == 0:
        raise MissingRecordError(side)
    if len(records) > 1:
        raise AmbiguousRecordError(side, len(records))
    return records[0]


def find_input_record(tx: Transaction, app: App) -> bytes:
    """
    Return the single consumed record for app.

    Raises:
        MissingRecordError: no input carries a record for app
        AmbiguousRecordError: more than one input carries one
    """
    return _exactly_one(tx.input_records(app), "input")


def find_output_record(tx: Transaction, app: App) -> bytes:
    """
    Return the single produced record for app.

    Raises:
        MissingRecordError: no output carries a record for app
        AmbiguousRecordError: more than one output carries one
    """
    return _exactly_one(tx.output_records(app), "output")


def count_input_records(tx: Transaction, app: App) -> int:
    return len(tx.input_records(app))


def count_output_records(tx: Transaction, app: App) -> int:
    return len(tx.output_records(app))
