"""
Transformation engine.

Pure functions that build new tables from existing ones. Table methods of
the same names wrap these and log the derivation on the result.
"""

from .relational import column_list, filter_rows, join, select, sort

__all__ = ["column_list", "filter_rows", "join", "select", "sort"]
