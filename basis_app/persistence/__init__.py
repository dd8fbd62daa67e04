"""Local persistence for user price alerts"""

from .alert_store import AlertStore

__all__ = ["AlertStore"]
