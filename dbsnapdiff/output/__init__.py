from .base import OutputAdapter
from .html import HtmlOutputAdapter

__all__ = ["HtmlOutputAdapter", "OutputAdapter"]
