from __future__ import annotations

from prometheus_client import Counter, Histogram

SNAPSHOT_READ_TOTAL = Counter(
    "dbsnapdiff_snapshot_read_total",
    "Full-database snapshot reads",
    ["status"],
)

SNAPSHOT_READ_LATENCY_SECONDS = Histogram(
    "dbsnapdiff_snapshot_read_latency_seconds",
    "Time taken to read a full-database snapshot",
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

SNAPSHOT_ROWS_READ = Counter(
    "dbsnapdiff_snapshot_rows_read_total",
    "Rows read into snapshots",
    ["table"],
)

RECORD_DIFF_TOTAL = Counter(
    "dbsnapdiff_record_diff_total",
    "Records classified as added, removed or changed",
    ["table", "kind"],
)
