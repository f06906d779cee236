"""
EventBoard package
==================

This package contains EventBoard, an in-memory campus event board.

- The CLI entry point is in `eventboard/cli.py`.
- The core state container (filters, session, handlers) is in `eventboard/engine.py`.
- Status classification and the view filter are in `eventboard/status.py`.
- Catalog loading is in `eventboard/loader.py`.
"""

__version__ = '0.1.0'
