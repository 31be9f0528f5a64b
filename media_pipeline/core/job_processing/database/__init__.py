"""
Persistence for the job processor.

Exports: ResultStore, format_vector
"""

from .result_store import ResultStore, format_vector

__all__ = ["ResultStore", "format_vector"]
