from .observe import observe_record_diffs, observe_snapshot_read

__all__ = ["observe_record_diffs", "observe_snapshot_read"]
