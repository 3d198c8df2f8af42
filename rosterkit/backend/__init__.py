"""Backend package for the roster draw and grouping toolkit."""

from .config import BackendSettings, load_settings
from .draw import DrawEngine, compute_eligible, draw, record_winner, reset_history
from .errors import (
    DrawInProgressError,
    EmptyPoolError,
    EmptyRosterError,
    InvalidGroupSizeError,
    RosterKitError,
)
from .grouping import GroupingEngine, coerce_group_size, generate, partition, shuffle
from .models import DrawHistoryEntry, Group, Participant
from .reveal import Reveal, RevealStatus, SpinTiming
from .roster import Roster, normalize_name
from .store import InMemorySessionStore, SessionStore

__all__ = [
    "BackendSettings",
    "coerce_group_size",
    "compute_eligible",
    "draw",
    "DrawEngine",
    "DrawHistoryEntry",
    "DrawInProgressError",
    "EmptyPoolError",
    "EmptyRosterError",
    "generate",
    "Group",
    "GroupingEngine",
    "InMemorySessionStore",
    "InvalidGroupSizeError",
    "load_settings",
    "normalize_name",
    "partition",
    "Participant",
    "record_winner",
    "reset_history",
    "Reveal",
    "RevealStatus",
    "Roster",
    "RosterKitError",
    "SessionStore",
    "shuffle",
    "SpinTiming",
]
