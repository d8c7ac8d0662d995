"""Pera Language Server package.

This package provides:
- A pygls-based Language Server for the Pera language.
- A lightweight indexer that scans documents without evaluating them.

Note: The LSP does not evaluate user buffers; it builds a static index from text.
"""

__all__ = [
    "server",
    "indexer",
]
