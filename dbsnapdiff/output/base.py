from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, TextIO


class OutputAdapter(ABC):
    """
    Abstract base for report renderers.

    The orchestrator drives a renderer in this order::

        start_output()
        for each table with differences:
            write_title(table)
            write_diff_section(left, right)   # once per record
            close_section()
        write_no_diff_message()               # only if nothing changed
        end_output()

    The renderer writes to a sink it does not own: the caller opens it and
    closes it after ``end_output()``.
    """

    def __init__(self, sink: TextIO) -> None:
        self._sink = sink

    @property
    def sink(self) -> TextIO:
        return self._sink

    def _write(self, text: str) -> None:
        self._sink.write(text)
        self._sink.write("\n")

    @abstractmethod
    def start_output(self) -> None:
        ...

    @abstractmethod
    def end_output(self) -> None:
        ...

    @abstractmethod
    def write_title(self, title: str) -> None:
        ...

    @abstractmethod
    def write_diff_section(
        self, left_content: str, right_content: str, label: Optional[str] = None
    ) -> None:
        ...

    def close_section(self) -> None:
        """Finish the current table section. Optional for renderers."""
        return None

    @abstractmethod
    def write_no_diff_message(self) -> None:
        ...

    @abstractmethod
    def generate_diff(self, left: str, right: str) -> tuple[str, str]:
        """Render a serialized (before, after) pair as (left, right) panes."""
        ...

    @abstractmethod
    def format_content(self, content: Optional[str]) -> Optional[str]:
        """Inline rendering of raw text, for use without a line diff."""
        ...
