"""Synchronization between documents and the calendar model."""

from notecal.sync.engine import EditFailure, EditResult, SyncEngine
from notecal.sync.model import CalendarModel
from notecal.sync.resolver import IdentityResolver, Resolution, ResolutionStatus

__all__ = [
    "CalendarModel",
    "EditFailure",
    "EditResult",
    "IdentityResolver",
    "Resolution",
    "ResolutionStatus",
    "SyncEngine",
]
