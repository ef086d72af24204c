from __future__ import annotations

import logging
import sys
from typing import Optional, Protocol, TextIO

from .adapters.base import DatabaseAdapter
from .adapters.mysql import MySQLAdapter
from .config import ConnectionConfig
from .diff.engine import diff_snapshots
from .metrics import observe_record_diffs
from .models import DiffReport
from .output.base import OutputAdapter
from .output.html import HtmlOutputAdapter

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "Run the use case now, then press Enter when done."


class OperatorSignal(Protocol):
    """Blocks until the operator has performed the action being measured."""

    def wait_for_signal(self) -> None:
        ...


class ConsoleSignal:
    """
    Prompt on stdout and block on a single character from stdin.

    There is no timeout; the process is interrupted to cancel.
    """

    def __init__(
        self,
        prompt: str = DEFAULT_PROMPT,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.prompt = prompt
        self._stdin = stdin
        self._stdout = stdout

    def wait_for_signal(self) -> None:
        stdout = self._stdout or sys.stdout
        stdin = self._stdin or sys.stdin
        print(self.prompt, file=stdout, flush=True)
        stdin.read(1)


class DbDiff:
    """
    Snapshot the database, wait for the operator, snapshot again and render
    the difference.

    Usage:
        with open(path, "w", encoding="utf-8") as sink:
            DbDiff(sink, config).execute()

    The adapter, renderer and signal default to MySQL, HTML and the console;
    each can be injected.
    """

    def __init__(
        self,
        sink: TextIO,
        config: Optional[ConnectionConfig] = None,
        *,
        adapter: Optional[DatabaseAdapter] = None,
        output: Optional[OutputAdapter] = None,
        signal: Optional[OperatorSignal] = None,
    ) -> None:
        if adapter is None:
            if config is None:
                raise ValueError("config is required when no adapter is given")
            adapter = MySQLAdapter(config)
        self.sink = sink
        self.config = config
        self.adapter = adapter
        self.output = output if output is not None else HtmlOutputAdapter(sink)
        self.signal = signal if signal is not None else ConsoleSignal()

    def execute(self) -> DiffReport:
        """
        Run both reads, diff them and write the report.

        Raises:
            DbConnectionError, QueryError, FormatError: From either read;
                nothing is written to the sink in that case
        """
        try:
            logger.info("Reading database (before)...")
            before = self.adapter.read_database()
            self.signal.wait_for_signal()
            logger.info("Reading database (after)...")
            after = self.adapter.read_database()
        finally:
            self.adapter.disconnect()

        report = diff_snapshots(before, after, line_diff=None)
        observe_record_diffs(report)
        self.render(report)
        logger.info("Done.")
        return report

    def render(self, report: DiffReport) -> None:
        """Write the report; each record's panes are rendered just before its section."""
        output = self.output
        output.start_output()
        for table_diff in report.tables:
            output.write_title(table_diff.table)
            for record_diff in table_diff.records:
                left, right = output.generate_diff(record_diff.before, record_diff.after)
                output.write_diff_section(
                    left,
                    right,
                    label=f"id {record_diff.key} ({record_diff.kind.value})",
                )
            output.close_section()
        if not report.has_any_difference:
            output.write_no_diff_message()
        output.end_output()
