from __future__ import annotations

from unittest.mock import MagicMock

import pyperclip
import pytest

from dbsnapdiff import clipboard


def test_copies_text(monkeypatch: pytest.MonkeyPatch) -> None:
    copy = MagicMock()
    monkeypatch.setattr(clipboard.pyperclip, "copy", copy)

    assert clipboard.copy_to_clipboard("open /tmp/x") is True

    copy.assert_called_once_with("open /tmp/x")


def test_returns_false_when_clipboard_unavailable(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    copy = MagicMock(side_effect=pyperclip.PyperclipException("no copy/paste mechanism"))
    monkeypatch.setattr(clipboard.pyperclip, "copy", copy)

    assert clipboard.copy_to_clipboard("text") is False
    assert any("Clipboard copy failed" in r.getMessage() for r in caplog.records)
