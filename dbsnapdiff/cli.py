"""
Command-line entry point.

``execute()`` owns the report file: it picks the path, opens it, runs the
orchestrator, and closes the file on every exit path. It is also the one
place where run failures are caught and reported.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import uuid
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, TextIO

from .clipboard import copy_to_clipboard
from .config import (
    ENV_DATABASE,
    ConnectionConfig,
    OutputConfig,
    resolve_connection_config,
    resolve_output_config,
)
from .errors import SinkError
from .runner import DbDiff

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = "db_diff.html"


def build_output_path(
    output_dir: Path,
    file_suffix: str,
    unique_id: Optional[str] = None,
) -> Path:
    """``<output_dir>/<unique id>_<suffix>``."""
    if unique_id is None:
        unique_id = uuid.uuid4().hex
    return Path(output_dir) / f"{unique_id}_{file_suffix}"


def _next_in_chain(exc: BaseException) -> Optional[BaseException]:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__


def log_error_chain(exc: BaseException) -> None:
    """Log ``exc`` with its traceback, then one line per exception in its cause chain."""
    logger.error("%s: %s", type(exc).__name__, exc, exc_info=exc)
    cause = _next_in_chain(exc)
    while cause is not None:
        logger.error("caused by %s: %s", type(cause).__name__, cause)
        cause = _next_in_chain(cause)


def execute(
    file_suffix: str,
    config: ConnectionConfig,
    output: Optional[OutputConfig] = None,
    *,
    runner_factory: Callable[[TextIO, ConnectionConfig], Any] = DbDiff,
    stdout: Optional[TextIO] = None,
) -> Optional[Path]:
    """
    Write one before/after report and print its path.

    Args:
        file_suffix: Appended to the unique id to form the file name
        config: Resolved connection parameters
        output: Report directory and clipboard preference
        runner_factory: Builds the orchestrator from (sink, config)
        stdout: Where the report path is printed (defaults to sys.stdout)

    Returns:
        The report path, or None if the report file could not be opened.
        Failures during the run are logged, not raised.
    """
    output = output or resolve_output_config()
    stdout = stdout or sys.stdout
    path = build_output_path(output.output_dir, file_suffix)

    try:
        sink = open(path, "w", encoding="utf-8")
    except OSError as exc:
        sink_error = SinkError(f"Cannot open report file {path}")
        sink_error.__cause__ = exc
        log_error_chain(sink_error)
        return None

    try:
        with sink:
            runner_factory(sink, config).execute()
    except Exception as exc:
        log_error_chain(exc)
        return path

    message = f"output: {path}"
    if output.copy_to_clipboard and copy_to_clipboard(f"open {path}"):
        message += " (Copied to clipboard)"
    print(message, file=stdout)
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dbsnapdiff",
        description=(
            "Snapshot a MySQL database, wait while you perform an action, "
            "snapshot it again and write an HTML report of what changed."
        ),
        epilog=(
            "Connection flags are defaults: DB_HOST, DB_USERNAME, DB_PASSWORD, "
            "DB_DATABASE, DB_PORT and DB_ENCODING take precedence when set."
        ),
    )
    parser.add_argument(
        "suffix",
        nargs="?",
        default=DEFAULT_SUFFIX,
        help=f"Report file name suffix (default: {DEFAULT_SUFFIX})",
    )
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=3306)
    parser.add_argument("--username", default="root")
    parser.add_argument("--password", default="")
    parser.add_argument("--database")
    parser.add_argument("--encoding", default="utf8mb4")
    parser.add_argument(
        "--output-dir",
        help="Report directory (default: $DB_DIFF_OUTPUT_DIR, then /tmp)",
    )
    parser.add_argument(
        "--no-clipboard",
        action="store_true",
        help="Do not copy the 'open <path>' command to the clipboard",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.database is None and ENV_DATABASE not in os.environ:
        parser.error(f"--database is required unless {ENV_DATABASE} is set")

    defaults = {
        "host": args.host,
        "port": args.port,
        "username": args.username,
        "password": args.password,
        "encoding": args.encoding,
    }
    if args.database is not None:
        defaults["database"] = args.database

    try:
        config = resolve_connection_config(defaults)
    except ValueError as exc:
        parser.error(str(exc))

    output = resolve_output_config(
        output_dir=args.output_dir, copy_to_clipboard=not args.no_clipboard
    )
    path = execute(args.suffix, config, output)
    return 0 if path is not None else 1
