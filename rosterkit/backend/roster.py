"""Immutable roster snapshots and name normalization."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Iterator
import uuid

from .errors import DuplicateParticipantError, ParticipantNotFoundError
from .models import Participant


def normalize_name(name: str) -> str:
    """Key used for every duplicate-name comparison."""
    return name.strip().lower()


def new_participant(name: str) -> Participant:
    return Participant(id=str(uuid.uuid4()), name=name)


@dataclass(frozen=True)
class Roster:
    """Ordered participants with unique ids.

    Every mutation returns a new snapshot; the receiver is never changed.
    """

    participants: tuple[Participant, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for participant in self.participants:
            if participant.id in seen:
                raise DuplicateParticipantError(participant.id)
            seen.add(participant.id)

    def __len__(self) -> int:
        return len(self.participants)

    def __iter__(self) -> Iterator[Participant]:
        return iter(self.participants)

    def __contains__(self, participant_id: object) -> bool:
        return any(participant.id == participant_id for participant in self.participants)

    def get(self, participant_id: str) -> Participant | None:
        for participant in self.participants:
            if participant.id == participant_id:
                return participant
        return None

    def append(self, *participants: Participant) -> Roster:
        return Roster(participants=self.participants + tuple(participants))

    def extend_names(self, names: Iterable[str]) -> Roster:
        return self.append(*(new_participant(name) for name in names))

    def remove(self, participant_id: str) -> Roster:
        remaining = tuple(p for p in self.participants if p.id != participant_id)
        if len(remaining) == len(self.participants):
            raise ParticipantNotFoundError(participant_id)
        return Roster(participants=remaining)

    def clear(self) -> Roster:
        return Roster()

    def dedupe(self) -> Roster:
        """Drop later participants whose normalized name was already seen."""
        seen: set[str] = set()
        unique: list[Participant] = []
        for participant in self.participants:
            key = normalize_name(participant.name)
            if key in seen:
                continue
            seen.add(key)
            unique.append(participant)
        return Roster(participants=tuple(unique))

    def name_counts(self) -> Counter[str]:
        return Counter(normalize_name(p.name) for p in self.participants)

    def duplicate_names(self) -> list[str]:
        return sorted(key for key, count in self.name_counts().items() if count > 1)

    @property
    def has_duplicates(self) -> bool:
        return any(count > 1 for count in self.name_counts().values())

    def is_duplicate(self, participant: Participant) -> bool:
        return self.name_counts()[normalize_name(participant.name)] > 1
