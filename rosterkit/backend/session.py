"""One host view: a roster plus its draw and grouping engines."""

from __future__ import annotations

from collections import deque
import logging
import random
from typing import Any, Callable

from .draw import DrawEngine
from .engine import apply_roster_action
from .errors import DrawInProgressError, EmptyRosterError
from .grouping import DEFAULT_GROUP_SIZE, GroupingEngine
from .models import DrawHistoryEntry, Group
from .reveal import Reveal, Scheduler, SpinTiming
from .roster import Roster
from .state import build_initial_meta, build_session_state, utc_now_iso

logger = logging.getLogger(__name__)

LOG_LIMIT = 200

ChangeListener = Callable[["Session"], None]
TickListener = Callable[["Session", int, str], None]


class Session:
    def __init__(
        self,
        session_id: str,
        name: str,
        *,
        group_size: int = DEFAULT_GROUP_SIZE,
        timing: SpinTiming | None = None,
        rng: random.Random | None = None,
        on_change: ChangeListener | None = None,
        on_tick: TickListener | None = None,
    ) -> None:
        self.session_id = session_id
        self.version = 1
        self.meta = build_initial_meta(name)
        self.log: deque[dict[str, Any]] = deque(maxlen=LOG_LIMIT)
        self.roster = Roster()
        self.draw_engine = DrawEngine(rng=rng)
        self.grouping_engine = GroupingEngine(group_size=group_size, rng=rng)
        self._on_change = on_change
        self._on_tick = on_tick
        self.reveal = Reveal(
            self.draw_engine,
            timing,
            on_tick=self._handle_tick,
            on_commit=self._handle_commit,
        )

    def to_state(self) -> dict[str, Any]:
        return build_session_state(
            session_id=self.session_id,
            version=self.version,
            meta=self.meta,
            roster=self.roster,
            allow_repeats=self.draw_engine.allow_repeats,
            eligible_count=len(self.draw_engine.eligible(self.roster)),
            history=self.draw_engine.history,
            group_size=self.grouping_engine.group_size,
            groups=self.grouping_engine.groups,
            reveal=self.reveal,
        )

    def apply_action(self, action: dict[str, Any]) -> dict[str, Any]:
        if self.reveal.is_spinning:
            raise DrawInProgressError()
        reduced = apply_roster_action(roster=self.roster, action=action)
        self.roster = reduced.roster
        self._touch({"kind": "action", "action": action}, *reduced.engine_events)
        return self.to_state()

    def add_names(self, names: list[str], source: str) -> dict[str, Any]:
        return self.apply_action({"type": "ADD_PARTICIPANTS", "names": names, "source": source})

    def set_allow_repeats(self, allow_repeats: bool) -> dict[str, Any]:
        self.draw_engine.allow_repeats = allow_repeats
        self._touch({"kind": "draw_settings", "allowRepeats": allow_repeats})
        return self.to_state()

    def start_draw(self, scheduler: Scheduler) -> dict[str, Any]:
        self._require_participants()
        self.reveal.start(self.roster, scheduler)
        self._touch({"kind": "draw_started"})
        return self.to_state()

    def draw_now(self) -> DrawHistoryEntry:
        self._require_participants()
        return self.reveal.commit_now(self.roster)

    def reset_history(self) -> dict[str, Any]:
        self.reveal.reset()
        self.draw_engine.reset()
        self._touch({"kind": "history_reset"})
        return self.to_state()

    def set_group_size(self, group_size: object) -> dict[str, Any]:
        self.grouping_engine.group_size = group_size
        self._touch({"kind": "group_settings", "groupSize": self.grouping_engine.group_size})
        return self.to_state()

    def generate_groups(self) -> tuple[Group, ...]:
        self._require_participants()
        groups = self.grouping_engine.generate(self.roster)
        self._touch({"kind": "groups_generated", "groupCount": len(groups)})
        return groups

    def close(self) -> None:
        self.reveal.cancel()
        self.grouping_engine.clear()
        logger.info("Session %s closed", self.session_id)

    def _require_participants(self) -> None:
        if len(self.roster) == 0:
            raise EmptyRosterError()

    def _touch(self, *events: dict[str, Any]) -> None:
        self.version += 1
        self.meta["updatedAt"] = utc_now_iso()
        self.log.extend(events)

    def _handle_tick(self, tick: int, display: str) -> None:
        if self._on_tick is not None:
            self._on_tick(self, tick, display)

    def _handle_commit(self, entry: DrawHistoryEntry) -> None:
        self._touch({"kind": "draw_committed", "winnerId": entry.winner.id})
        if self._on_change is not None:
            self._on_change(self)
