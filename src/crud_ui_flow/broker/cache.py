"""In-memory record cache that reflects CRUD outcomes.

The cache keeps loaded records keyed by id, in load order. Successful update
and delete outcomes are applied in place and republished on `changes`, so
every reader of the same collection sees them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

from crud_ui_flow.flow.types import CrudKind
from crud_ui_flow.reactive.channel import Broadcast
from crud_ui_flow.ui.models import RecordId

logger = logging.getLogger(__name__)

D = TypeVar("D")

REFLECTED_KINDS: frozenset[CrudKind] = frozenset({CrudKind.UPDATE, CrudKind.DELETE})


@dataclass(frozen=True, slots=True)
class CrudChange(Generic[D]):
    crud_kind: CrudKind
    record: D
    applied: bool


class RecordCache(Generic[D]):
    def __init__(self, id_field: str = "id", *, name: str = "records") -> None:
        self.id_field = id_field
        self.name = name
        self._records: dict[RecordId, D] = {}
        self.changes: Broadcast[CrudChange[D]] = Broadcast(name=f"{name}.changes")

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    @property
    def records(self) -> list[D]:
        return list(self._records.values())

    def record_id(self, record: D) -> RecordId:
        """Read a record's id from a mapping key or an attribute."""

        if isinstance(record, Mapping):
            if self.id_field not in record:
                raise KeyError(f"Record has no {self.id_field!r} key")
            return record[self.id_field]
        try:
            return getattr(record, self.id_field)
        except AttributeError:
            raise KeyError(f"Record has no {self.id_field!r} attribute") from None

    def get(self, record_id: RecordId) -> D | None:
        return self._records.get(record_id)

    def replace_all(self, records: Iterable[D]) -> None:
        """Replace the cached records with a freshly loaded list."""

        self._records = {self.record_id(record): record for record in records}
        logger.debug(f"{self.name}: loaded {len(self._records)} records")

    def apply(self, crud_kind: CrudKind, record: D) -> bool:
        """Reflect an update or delete outcome and republish it.

        Records that are not cached are left alone (they belong to a page
        that was never loaded), but the change is still republished.

        Returns:
            True if the cached records changed.
        """

        if crud_kind not in REFLECTED_KINDS:
            raise ValueError(f"Only update and delete outcomes are reflected, got {crud_kind.value}")

        record_id = self.record_id(record)
        applied = record_id in self._records
        if applied:
            if crud_kind is CrudKind.UPDATE:
                self._records[record_id] = record
            else:
                del self._records[record_id]

        logger.debug(
            f"{self.name}: {crud_kind.value} of {record_id!r} "
            f"{'applied' if applied else 'not cached'}"
        )
        self.changes.emit(CrudChange(crud_kind=crud_kind, record=record, applied=applied))
        return applied
