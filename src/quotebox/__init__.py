"""
Quotebox: local-first quote keeper.

A small record store that provides:
- Durable, append-only quote collection
- Category filtering with a persisted selection
- Periodic reconciliation against a remote quote source
"""

__version__ = "0.1.0"
