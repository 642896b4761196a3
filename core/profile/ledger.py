"""
Ordered sub-record ledgers (experience, education).

A ledger is a newest-first list of dict records, each carrying a string "id"
that is unique within the ledger. Functions here never mutate their input;
they return new lists so JSON columns are reassigned rather than edited.
"""

import uuid
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from core.errors import RecordNotFound

Record = dict[str, Any]


def _new_id() -> str:
    return uuid.uuid4().hex


def append(
    records: Sequence[Mapping[str, Any]] | None,
    record: Mapping[str, Any],
    id_factory: Callable[[], str] = _new_id,
) -> tuple[list[Record], Record]:
    """
    Insert a copy of record at the front of the ledger under a fresh id.

    Any "id" already on the record is replaced.

    Returns:
        Tuple of (new ledger, stored record)
    """
    existing = list(records or [])
    taken = {r.get("id") for r in existing}

    record_id = id_factory()
    while record_id in taken:
        record_id = id_factory()

    stored = {**record, "id": record_id}
    return [stored, *(dict(r) for r in existing)], stored


def index_of(records: Sequence[Mapping[str, Any]] | None, record_id: str) -> int:
    """Position of the first record with record_id, or -1."""
    for position, record in enumerate(records or []):
        if record.get("id") == record_id:
            return position
    return -1


def remove_by_id(
    records: Sequence[Mapping[str, Any]] | None,
    record_id: str,
    kind: str = "record",
) -> tuple[list[Record], Record]:
    """
    Remove the first record whose id equals record_id.

    The remaining records keep their relative order.

    Raises:
        RecordNotFound: no record has that id; the ledger is left as is

    Returns:
        Tuple of (new ledger, removed record)
    """
    existing = [dict(r) for r in records or []]
    position = index_of(existing, record_id)
    if position < 0:
        raise RecordNotFound(kind, record_id)

    removed = existing.pop(position)
    return existing, removed


__all__ = ["Record", "append", "index_of", "remove_by_id"]
