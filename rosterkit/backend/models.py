"""Domain records shared by the draw and grouping engines."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Participant:
    id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class DrawHistoryEntry:
    timestamp: datetime
    winner: Participant

    def to_dict(self) -> dict[str, Any]:
        return {"timestamp": self.timestamp.isoformat(), "winner": self.winner.to_dict()}


@dataclass(frozen=True)
class Group:
    id: int
    members: tuple[Participant, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "members": [member.to_dict() for member in self.members]}


@dataclass(frozen=True)
class CreatedSession:
    session_id: str
