"""Reducer for host roster actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .roster import Roster


@dataclass(frozen=True)
class ActionResult:
    roster: Roster
    engine_events: list[dict[str, Any]]


def apply_roster_action(roster: Roster, action: dict[str, Any]) -> ActionResult:
    """Apply a host action to a roster snapshot and describe what changed."""
    action_type = str(action.get("type", "")).upper()
    if action_type == "ADD_PARTICIPANTS":
        return _apply_add_participants(roster=roster, action=action)
    if action_type == "REMOVE_PARTICIPANT":
        return _apply_remove_participant(roster=roster, action=action)
    if action_type == "CLEAR_ROSTER":
        return _apply_clear_roster(roster=roster, action=action)
    if action_type == "REMOVE_DUPLICATES":
        return _apply_remove_duplicates(roster=roster, action=action)
    return ActionResult(roster=roster, engine_events=[])


def _apply_add_participants(roster: Roster, action: dict[str, Any]) -> ActionResult:
    raw_names = action.get("names")
    if not isinstance(raw_names, list):
        return ActionResult(roster=roster, engine_events=[])

    names = [name.strip() for name in raw_names if isinstance(name, str) and name.strip()]
    if not names:
        return ActionResult(roster=roster, engine_events=[])

    next_roster = roster.extend_names(names)
    added = next_roster.participants[len(roster) :]
    return ActionResult(
        roster=next_roster,
        engine_events=[
            {
                "kind": "participants_added",
                "participantIds": [participant.id for participant in added],
                "action": action,
            }
        ],
    )


def _apply_remove_participant(roster: Roster, action: dict[str, Any]) -> ActionResult:
    participant_id = action.get("participantId")
    if not isinstance(participant_id, str) or participant_id == "":
        return ActionResult(roster=roster, engine_events=[])
    if participant_id not in roster:
        return ActionResult(roster=roster, engine_events=[])

    return ActionResult(
        roster=roster.remove(participant_id),
        engine_events=[{"kind": "participant_removed", "participantId": participant_id, "action": action}],
    )


def _apply_clear_roster(roster: Roster, action: dict[str, Any]) -> ActionResult:
    if len(roster) == 0:
        return ActionResult(roster=roster, engine_events=[])
    return ActionResult(
        roster=roster.clear(),
        engine_events=[{"kind": "roster_cleared", "removed": len(roster), "action": action}],
    )


def _apply_remove_duplicates(roster: Roster, action: dict[str, Any]) -> ActionResult:
    deduped = roster.dedupe()
    removed_ids = [p.id for p in roster if p.id not in deduped]
    if not removed_ids:
        return ActionResult(roster=roster, engine_events=[])
    return ActionResult(
        roster=deduped,
        engine_events=[{"kind": "duplicates_removed", "participantIds": removed_ids, "action": action}],
    )
