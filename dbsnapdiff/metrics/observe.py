from __future__ import annotations

import logging
from typing import Mapping

from ..models import DiffReport
from .registry import (
    RECORD_DIFF_TOTAL,
    SNAPSHOT_READ_LATENCY_SECONDS,
    SNAPSHOT_READ_TOTAL,
    SNAPSHOT_ROWS_READ,
)

logger = logging.getLogger(__name__)


def observe_snapshot_read(
    status: str,
    latency_s: float,
    rows_by_table: Mapping[str, int] | None = None,
) -> None:
    """
    Record one snapshot read.

    Metric errors are logged and dropped so they never mask the read result.
    """
    try:
        SNAPSHOT_READ_TOTAL.labels(status=status).inc()
        SNAPSHOT_READ_LATENCY_SECONDS.observe(latency_s)
        for table, rows in (rows_by_table or {}).items():
            SNAPSHOT_ROWS_READ.labels(table=table).inc(rows)
    except Exception:
        logger.debug("Failed to record snapshot metrics", exc_info=True)


def observe_record_diffs(report: DiffReport) -> None:
    """Count the classified records of a finished report."""
    try:
        for table_diff in report.tables:
            for record_diff in table_diff.records:
                RECORD_DIFF_TOTAL.labels(
                    table=table_diff.table, kind=record_diff.kind.value
                ).inc()
    except Exception:
        logger.debug("Failed to record diff metrics", exc_info=True)
