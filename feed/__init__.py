"""
Feed notifications.

Ingestion, keyset pagination and read-state tracking for a social feed's
notification inbox.
"""

__version__ = "0.1.0"
