"""CLI layer — argument parsing, diagnostics, and the error boundary.

This package is the outermost layer.  It may import from ``core``, but
``core`` must never import from ``cli``.
"""
