"""
Ingestion adapters.

This module provides:
- TableSource: Abstract adapter interface
- DelimitedSource: CSV/TSV text
- DocumentSource: JSON table documents (data or call history)
- QueryResultSource: DB-API 2.0 query results
- load_table: Build a tracked table from any source
"""

from .base import SourceData, TableSource, load_table
from .delimited import DelimitedSource
from .document import DocumentSource
from .resultset import QueryResultSource

__all__ = [
    "SourceData",
    "TableSource",
    "load_table",
    "DelimitedSource",
    "DocumentSource",
    "QueryResultSource",
]
