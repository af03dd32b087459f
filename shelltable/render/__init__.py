"""
Renderers for tables.

- render_text: ASCII box rendering
- render_delimited: CSV-style text
- render_json: JSON document with optional data and call history
"""

from .text import render_delimited, render_text
from .json import render_json, table_document

__all__ = ["render_delimited", "render_text", "render_json", "table_document"]
