"""
Side-by-side HTML line diff.

Lines are aligned with :class:`difflib.SequenceMatcher`; where a block of
lines was replaced, each old/new line pair is compared again character by
character and the differing runs are wrapped in ``<strong>``. The left
pane carries unchanged and deleted lines, the right pane unchanged and
inserted lines.
"""

from __future__ import annotations

import difflib
import html
from dataclasses import dataclass

DIFF_CSS = """
.diff { overflow: auto; }
.diff ul { background: #fff; overflow: auto; font-size: 13px; list-style: none; margin: 0; padding: 0; display: table; width: 100%; }
.diff del, .diff ins { display: block; text-decoration: none; }
.diff li { padding: 0; display: table-row; margin: 0; height: 1em; white-space: pre-wrap; }
.diff li.ins { background: #dfd; color: #080; }
.diff li.del { background: #fee; color: #b00; }
.diff li:hover { background: #ffc; }
.diff del strong { font-weight: normal; background: #fcc; }
.diff ins strong { font-weight: normal; background: #9f9; }
""".strip()


@dataclass(frozen=True)
class SplitDiff:
    left: str
    right: str

    def __iter__(self):
        # allows ``left, right = split_diff(a, b)``
        return iter((self.left, self.right))


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def _unchanged(line: str) -> str:
    return f'<li class="unchanged"><span>{_escape(line)}</span></li>'


def _deleted(content: str) -> str:
    return f'<li class="del"><del>{content}</del></li>'


def _inserted(content: str) -> str:
    return f'<li class="ins"><ins>{content}</ins></li>'


def _highlight_pair(old: str, new: str) -> tuple[str, str]:
    old_parts: list[str] = []
    new_parts: list[str] = []
    matcher = difflib.SequenceMatcher(None, old, new, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            old_parts.append(_escape(old[i1:i2]))
            new_parts.append(_escape(new[j1:j2]))
            continue
        if i2 > i1:
            old_parts.append(f"<strong>{_escape(old[i1:i2])}</strong>")
        if j2 > j1:
            new_parts.append(f"<strong>{_escape(new[j1:j2])}</strong>")
    return "".join(old_parts), "".join(new_parts)


def _wrap(items: list[str]) -> str:
    if not items:
        return '<div class="diff"></div>'
    body = "\n".join(f"    {item}" for item in items)
    return f'<div class="diff">\n  <ul>\n{body}\n  </ul>\n</div>'


def split_diff(left: str, right: str) -> SplitDiff:
    """
    Render ``left`` and ``right`` as two aligned HTML panes.

    Either side may be empty (added or removed records); its pane is then
    an empty ``<div class="diff"></div>``.
    """
    left_lines = (left or "").splitlines()
    right_lines = (right or "").splitlines()
    left_items: list[str] = []
    right_items: list[str] = []

    matcher = difflib.SequenceMatcher(None, left_lines, right_lines, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            for line in left_lines[i1:i2]:
                left_items.append(_unchanged(line))
                right_items.append(_unchanged(line))
        elif tag == "delete":
            left_items.extend(_deleted(_escape(line)) for line in left_lines[i1:i2])
        elif tag == "insert":
            right_items.extend(_inserted(_escape(line)) for line in right_lines[j1:j2])
        else:
            old_block = left_lines[i1:i2]
            new_block = right_lines[j1:j2]
            for old, new in zip(old_block, new_block):
                old_html, new_html = _highlight_pair(old, new)
                left_items.append(_deleted(old_html))
                right_items.append(_inserted(new_html))
            paired = min(len(old_block), len(new_block))
            left_items.extend(_deleted(_escape(line)) for line in old_block[paired:])
            right_items.extend(_inserted(_escape(line)) for line in new_block[paired:])

    return SplitDiff(left=_wrap(left_items), right=_wrap(right_items))
