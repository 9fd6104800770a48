"""
Directory traversal pieces used by ``Fileset``.

The walker does the breadth-first enumeration, pattern_matching decides which
entries are pruned, and path_resolution validates roots and makes results
relative.
"""
from .walker import perform_recursion, stat_function_for

__all__ = ["perform_recursion", "stat_function_for"]
