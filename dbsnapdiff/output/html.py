from __future__ import annotations

import html
from datetime import datetime
from typing import Callable, Optional, TextIO

from ..diff.linediff import DIFF_CSS, split_diff
from .base import OutputAdapter

REPORT_TITLE = "Database Diff Report"
ATTRIBUTION_URL = "https://docs.python.org/3/library/difflib.html"

REPORT_CSS = """
* { margin: 0; padding: 0; box-sizing: border-box; }
body {
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif;
  line-height: 1.6;
  color: #333;
  background-color: #f5f7fa;
}
.header {
  background: linear-gradient(135deg, #2c3e50 0%, #3498db 100%);
  color: white;
  padding: 2rem;
  text-align: center;
  box-shadow: 0 2px 8px rgba(0, 0, 0, 0.15);
}
.header h1 { font-size: 2.5rem; margin-bottom: 0.5rem; }
.header .generated-at { font-size: 0.9rem; opacity: 0.85; }
.main-content { max-width: 1400px; margin: 2rem auto; padding: 0 1rem; }
.table-section {
  background: #fff;
  border-radius: 8px;
  box-shadow: 0 2px 6px rgba(0, 0, 0, 0.08);
  margin-bottom: 2rem;
  padding: 1.5rem;
}
.table-title {
  font-size: 1.8rem;
  border-bottom: 2px solid #3498db;
  padding-bottom: 0.5rem;
  margin-bottom: 1rem;
}
.diff-label { font-size: 0.9rem; color: #666; margin: 1rem 0 0.5rem; }
.diff-part { display: flex; gap: 1rem; width: 100%; margin-bottom: 1rem; }
.diff-left, .diff-right { flex: 1; min-width: 0; border-radius: 6px; overflow: hidden; border: 1px solid #ddd; }
.diff-header { font-size: 1.2rem; color: white; padding: 0.5rem 1rem; }
.diff-left .diff-header { background-color: #e74c3c; }
.diff-right .diff-header { background-color: #27ae60; }
.diff-content { font-family: 'Monaco', 'Menlo', 'Ubuntu Mono', monospace; padding: 0.5rem; }
.diff-part:hover { box-shadow: 0 2px 8px rgba(0, 0, 0, 0.12); }
.no-diff-message { text-align: center; padding: 4rem 2rem; }
.no-diff-icon { font-size: 4rem; margin-bottom: 1rem; }
.no-diff-message h2 { font-size: 2rem; color: #27ae60; margin-bottom: 1rem; }
.footer { text-align: center; padding: 2rem; color: #888; font-size: 0.9rem; }
.footer a { color: #3498db; }
.footer a:hover { text-decoration: underline; }
@media (max-width: 768px) {
  .diff-part { flex-direction: column; }
  .main-content { padding: 10px; }
  .header h1 { font-size: 2rem; }
}
@media (prefers-color-scheme: dark) {
  body { background-color: #1a1a1a; color: #e0e0e0; }
  .table-section { background: #2d2d2d; }
  .diff ul { background: #2d2d2d; }
  .diff-left, .diff-right { border-color: #444; }
}
""".strip()


class HtmlOutputAdapter(OutputAdapter):
    """
    Renders the report as a single self-contained HTML5 page.

    All styles are inline; the only external URL is the footer attribution.
    """

    def __init__(
        self,
        sink: TextIO,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(sink)
        self.clock = clock
        self._section_open = False

    def start_output(self) -> None:
        self._write("<!DOCTYPE html>")
        self._write('<html lang="en">')
        self._write("<head>")
        self._write('<meta charset="UTF-8">')
        self._write('<meta name="viewport" content="width=device-width, initial-scale=1.0">')
        self._write(f"<title>{REPORT_TITLE}</title>")
        self._write("<style>")
        self._write(REPORT_CSS)
        self._write(DIFF_CSS)
        self._write("</style>")
        self._write("</head>")
        self._write("<body>")
        self._write('<header class="header">')
        self._write(f"<h1>{REPORT_TITLE}</h1>")
        generated_at = self.clock().strftime("%Y-%m-%d %H:%M:%S")
        self._write(f'<p class="generated-at">Generated at {generated_at}</p>')
        self._write("</header>")
        self._write('<main class="main-content">')

    def end_output(self) -> None:
        if self._section_open:
            self.close_section()
        self._write("</main>")
        self._write('<footer class="footer">')
        self._write(
            f'<p>Rendered with <a href="{ATTRIBUTION_URL}">Python difflib</a></p>'
        )
        self._write("</footer>")
        self._write("</body>")
        self._write("</html>")

    def write_title(self, title: str) -> None:
        if self._section_open:
            self.close_section()
        self._write('<section class="table-section">')
        self._write(f'<h2 class="table-title">{html.escape(title)}</h2>')
        self._section_open = True

    def write_diff_section(
        self, left_content: str, right_content: str, label: Optional[str] = None
    ) -> None:
        if label:
            self._write(f'<div class="diff-label">{html.escape(label)}</div>')
        self._write('<div class="diff-part">')
        self._write('<div class="diff-left">')
        self._write('<h3 class="diff-header">Before</h3>')
        self._write(f'<div class="diff-content">{left_content}</div>')
        self._write("</div>")
        self._write('<div class="diff-right">')
        self._write('<h3 class="diff-header">After</h3>')
        self._write(f'<div class="diff-content">{right_content}</div>')
        self._write("</div>")
        self._write("</div>")

    def close_section(self) -> None:
        if not self._section_open:
            return
        self._write("</section>")
        self._section_open = False

    def write_no_diff_message(self) -> None:
        self._write('<div class="no-diff-message">')
        self._write('<div class="no-diff-icon">✅</div>')
        self._write("<h2>No Changes Detected</h2>")
        self._write("<p>The database state remained unchanged during the operation.</p>")
        self._write("</div>")

    def generate_diff(self, left: str, right: str) -> tuple[str, str]:
        diff = split_diff(left, right)
        return diff.left, diff.right

    def format_content(self, content: Optional[str]) -> Optional[str]:
        if content is None:
            return None
        return content.replace(" ", "&nbsp;").replace("\n", "<br/>")
