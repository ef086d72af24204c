from __future__ import annotations

import json
import logging
from typing import Callable, Iterable, Optional

from ..models import (
    ID_FIELD,
    ChangeKind,
    DatabaseSnapshot,
    DiffReport,
    Record,
    RecordDiff,
    TableDiff,
)
from .linediff import split_diff

logger = logging.getLogger(__name__)

# (serialized before, serialized after) -> (rendered left, rendered right)
LineDiff = Callable[[str, str], Iterable[str]]


def serialize_record(record: Record) -> str:
    """
    Comparison string for a record: pretty JSON, field order preserved.

    Two records serialize identically iff every field name, position and
    value is equal.
    """
    return json.dumps(record, indent=2, ensure_ascii=False)


def index_by_id(records: Iterable[Record]) -> dict[str, str]:
    """
    Map each record's ``id`` to its serialized form, in record order.

    Records without an ``id`` (or with a NULL one) cannot be correlated
    across snapshots and are left out.
    """
    indexed: dict[str, str] = {}
    for record in records:
        key: Optional[str] = record.get(ID_FIELD)
        if key is None:
            continue
        indexed[key] = serialize_record(record)
    return indexed


def diff_table(
    table_name: str,
    before_records: Iterable[Record],
    after_records: Iterable[Record],
    line_diff: Optional[LineDiff] = split_diff,
) -> TableDiff | None:
    """
    Classify the records of one table. Returns None when nothing changed.
    """
    before = index_by_id(before_records)
    after = index_by_id(after_records)

    records: list[RecordDiff] = []
    # before order first, then keys that only exist after
    for key in list(before) + [k for k in after if k not in before]:
        if key not in after:
            kind, old, new = ChangeKind.REMOVED, before[key], ""
        elif key not in before:
            kind, old, new = ChangeKind.ADDED, "", after[key]
        elif before[key] != after[key]:
            kind, old, new = ChangeKind.CHANGED, before[key], after[key]
        else:
            continue

        left, right = line_diff(old, new) if line_diff is not None else ("", "")
        records.append(
            RecordDiff(
                table=table_name,
                key=key,
                kind=kind,
                before=old,
                after=new,
                left=left,
                right=right,
            )
        )

    if not records:
        return None

    logger.info(
        "%s: %d added, %d removed, %d changed",
        table_name,
        sum(1 for r in records if r.kind is ChangeKind.ADDED),
        sum(1 for r in records if r.kind is ChangeKind.REMOVED),
        sum(1 for r in records if r.kind is ChangeKind.CHANGED),
    )
    return TableDiff(table=table_name, records=records)


def diff_snapshots(
    before: DatabaseSnapshot,
    after: DatabaseSnapshot,
    line_diff: Optional[LineDiff] = split_diff,
) -> DiffReport:
    """
    Compare two snapshots table by table.

    Only tables present in ``before`` are visited: a table created between
    the two reads is not reported. Every table in ``before`` must also be
    present in ``after``; a missing one raises KeyError.

    Args:
        before: Snapshot taken before the operation
        after: Snapshot taken after the operation
        line_diff: Renders a (before, after) text pair as (left, right) panes;
            None leaves the panes empty for the caller to render later

    Returns:
        DiffReport listing, in ``before`` table order, only the tables with
        at least one added, removed or changed record
    """
    report = DiffReport()
    for table_name, before_records in before.items():
        table_diff = diff_table(table_name, before_records, after[table_name], line_diff)
        if table_diff is not None:
            report.tables.append(table_diff)
    return report
