"""Core fileset model, traversal and merge."""
