"""Reconciliation of incoming records against existing timelines."""

from __future__ import annotations

from .contracts import Resolution
from .resolve import is_contained, resolve_record

__all__ = ["Resolution", "is_contained", "resolve_record"]
