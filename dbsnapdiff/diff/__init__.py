from .engine import diff_snapshots, diff_table, index_by_id, serialize_record
from .linediff import DIFF_CSS, SplitDiff, split_diff

__all__ = [
    "DIFF_CSS",
    "SplitDiff",
    "diff_snapshots",
    "diff_table",
    "index_by_id",
    "serialize_record",
    "split_diff",
]
