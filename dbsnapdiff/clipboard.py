from __future__ import annotations

import logging

import pyperclip

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str) -> bool:
    """
    Copy ``text`` to the system clipboard.

    Returns False when no clipboard mechanism is available; clipboard
    support is a convenience and never fails the run.
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        logger.warning("Clipboard copy failed: %s", exc)
        return False
    return True
