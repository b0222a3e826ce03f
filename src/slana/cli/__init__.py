"""CLI layer — argument parsing, dispatch and the process error boundary.

This package is the outermost layer.  It may import from ``core`` and
``infra``; no other layer imports from ``cli``.
"""
