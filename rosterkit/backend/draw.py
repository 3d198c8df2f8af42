"""Prize draw engine: candidate pool, winner selection and history."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import random
from typing import Iterable, Sequence

from .errors import EmptyPoolError
from .models import DrawHistoryEntry, Participant
from .sampling import pick

logger = logging.getLogger(__name__)

History = tuple[DrawHistoryEntry, ...]


def compute_eligible(
    roster: Iterable[Participant],
    history: Sequence[DrawHistoryEntry],
    allow_repeats: bool,
) -> list[Participant]:
    """Return the roster, minus previous winners unless repeats are allowed."""
    if allow_repeats:
        return list(roster)
    won_ids = {entry.winner.id for entry in history}
    return [participant for participant in roster if participant.id not in won_ids]


def draw(eligible: Sequence[Participant], rng: random.Random | None = None) -> Participant:
    if not eligible:
        raise EmptyPoolError()
    return pick(eligible, rng)


def record_winner(
    history: Sequence[DrawHistoryEntry],
    winner: Participant,
    now: datetime | None = None,
) -> History:
    """Return a new history with ``winner`` at the front."""
    entry = DrawHistoryEntry(timestamp=now or datetime.now(timezone.utc), winner=winner)
    return (entry, *history)


def reset_history() -> History:
    return ()


class DrawEngine:
    """Per-session draw state: the repeat setting and the winner history."""

    def __init__(self, *, allow_repeats: bool = False, rng: random.Random | None = None) -> None:
        self.allow_repeats = allow_repeats
        self.history: History = reset_history()
        self._rng = rng

    @property
    def rng(self) -> random.Random | None:
        return self._rng

    def eligible(self, roster: Iterable[Participant]) -> list[Participant]:
        return compute_eligible(roster, self.history, self.allow_repeats)

    def can_draw(self, roster: Iterable[Participant]) -> bool:
        return bool(self.eligible(roster))

    def commit(self, winner: Participant) -> DrawHistoryEntry:
        self.history = record_winner(self.history, winner)
        logger.info("Draw committed winner %s (%s)", winner.name, winner.id)
        return self.history[0]

    def draw_winner(self, roster: Iterable[Participant]) -> DrawHistoryEntry:
        winner = draw(self.eligible(roster), self._rng)
        return self.commit(winner)

    def reset(self) -> None:
        logger.info("Draw history reset (%d entries cleared)", len(self.history))
        self.history = reset_history()
