"""State builders for session snapshots."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Sequence

from .models import DrawHistoryEntry, Group
from .reveal import Reveal
from .roster import Roster


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_initial_meta(name: str) -> dict[str, Any]:
    now = utc_now_iso()
    return {"name": name, "createdAt": now, "updatedAt": now}


def build_session_state(
    session_id: str,
    version: int,
    meta: dict[str, Any],
    roster: Roster,
    allow_repeats: bool,
    eligible_count: int,
    history: Sequence[DrawHistoryEntry],
    group_size: int,
    groups: Sequence[Group],
    reveal: Reveal,
) -> dict[str, Any]:
    """Return the JSON-ready view of one session."""
    return {
        "id": session_id,
        "version": version,
        "roster": [participant.to_dict() for participant in roster],
        "duplicateNames": roster.duplicate_names(),
        "allowRepeats": allow_repeats,
        "eligibleCount": eligible_count,
        "history": [entry.to_dict() for entry in history],
        "groupSize": group_size,
        "groups": [group.to_dict() for group in groups],
        "draw": {
            "status": reveal.status.value,
            "tick": reveal.tick,
            "display": reveal.display,
        },
        "meta": dict(meta),
    }
