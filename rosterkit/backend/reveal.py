"""Cosmetic reveal animation that precedes a committed draw.

The reveal is a small state machine, ``IDLE -> SPINNING(tick n) -> COMMITTED``,
driven by a single scheduled callback. Each tick shows an independently sampled
name from the pool, except the last: that tick performs the one real ``draw()``
and shows its winner, so what is shown last is what is recorded.
``cancel()`` moves a spinning reveal to ``CANCELLED`` and drops the pending
callback.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Callable, Iterable, Protocol

from .draw import DrawEngine, draw
from .errors import DrawInProgressError, EmptyPoolError
from .models import DrawHistoryEntry, Participant
from .sampling import pick

logger = logging.getLogger(__name__)

IDLE_DISPLAY = "Ready to Draw"


class RevealStatus(str, Enum):
    IDLE = "idle"
    SPINNING = "spinning"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


class Cancellable(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Anything that can run a callback later; ``asyncio`` event loops qualify."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        ...


@dataclass(frozen=True)
class SpinTiming:
    duration_ms: int = 3000
    initial_delay_ms: int = 50
    slowdown_window_ms: int = 1000
    slowdown_step_ms: int = 10


TickListener = Callable[[int, str], None]
CommitListener = Callable[[DrawHistoryEntry], None]


class Reveal:
    def __init__(
        self,
        engine: DrawEngine,
        timing: SpinTiming | None = None,
        *,
        on_tick: TickListener | None = None,
        on_commit: CommitListener | None = None,
    ) -> None:
        self._engine = engine
        self._timing = timing or SpinTiming()
        self._on_tick = on_tick
        self._on_commit = on_commit
        self._scheduler: Scheduler | None = None
        self._handle: Cancellable | None = None
        self._pool: list[Participant] = []
        self._elapsed_ms = 0
        self._delay_ms = self._timing.initial_delay_ms
        self.status = RevealStatus.IDLE
        self.tick = 0
        self.display = IDLE_DISPLAY
        self.committed: DrawHistoryEntry | None = None

    @property
    def is_spinning(self) -> bool:
        return self.status is RevealStatus.SPINNING

    def start(self, roster: Iterable[Participant], scheduler: Scheduler) -> None:
        self._begin(roster)
        self._scheduler = scheduler
        logger.debug("Reveal started over %d candidates", len(self._pool))
        self._step()

    def commit_now(self, roster: Iterable[Participant]) -> DrawHistoryEntry:
        """Skip the cycling ticks and commit a winner immediately."""
        self._begin(roster)
        return self._commit()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self.is_spinning:
            self.status = RevealStatus.CANCELLED
            logger.info("Reveal cancelled at tick %d", self.tick)

    def reset(self) -> None:
        """Return a finished reveal to the idle display."""
        if self.is_spinning:
            raise DrawInProgressError()
        self.status = RevealStatus.IDLE
        self.tick = 0
        self.display = IDLE_DISPLAY
        self.committed = None

    def _begin(self, roster: Iterable[Participant]) -> None:
        if self.is_spinning:
            raise DrawInProgressError()
        pool = self._engine.eligible(roster)
        if not pool:
            raise EmptyPoolError()

        self._pool = pool
        self._elapsed_ms = 0
        self._delay_ms = self._timing.initial_delay_ms
        self.status = RevealStatus.SPINNING
        self.tick = 0
        self.committed = None

    def _step(self) -> None:
        self._handle = None
        if not self.is_spinning or self._scheduler is None:
            return

        self.tick += 1
        self._elapsed_ms += self._delay_ms
        if self._elapsed_ms >= self._timing.duration_ms:
            # the last tick shows the committed winner
            self._commit(announce=True)
            return

        self._show(pick(self._pool, self._engine.rng).name)
        if self._elapsed_ms > self._timing.duration_ms - self._timing.slowdown_window_ms:
            self._delay_ms += self._timing.slowdown_step_ms
        self._handle = self._scheduler.call_later(self._delay_ms / 1000, self._step)

    def _show(self, name: str) -> None:
        self.display = name
        if self._on_tick is not None:
            self._on_tick(self.tick, name)

    def _commit(self, announce: bool = False) -> DrawHistoryEntry:
        winner = draw(self._pool, self._engine.rng)
        if announce:
            self._show(winner.name)
        else:
            self.display = winner.name
        entry = self._engine.commit(winner)
        self.committed = entry
        self.status = RevealStatus.COMMITTED
        self._scheduler = None
        if self._on_commit is not None:
            self._on_commit(entry)
        return entry
