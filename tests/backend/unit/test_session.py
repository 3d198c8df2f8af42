import random

import pytest

from rosterkit.backend.errors import DrawInProgressError, EmptyPoolError, EmptyRosterError
from rosterkit.backend.reveal import IDLE_DISPLAY, SpinTiming
from rosterkit.backend.session import LOG_LIMIT, Session


def _session(**kwargs) -> Session:
    return Session("s-1", "Team day", rng=random.Random(5), **kwargs)


def test_new_session_state() -> None:
    state = _session().to_state()

    assert state["version"] == 1
    assert state["roster"] == []
    assert state["groupSize"] == 4
    assert state["draw"]["display"] == IDLE_DISPLAY


def test_add_names_bumps_version_and_logs() -> None:
    session = _session()

    state = session.add_names(["Alice", "Bob"], source="text")

    assert state["version"] == 2
    assert [p["name"] for p in state["roster"]] == ["Alice", "Bob"]
    assert state["eligibleCount"] == 2
    assert [event["kind"] for event in session.log] == ["action", "participants_added"]


def test_draw_on_empty_roster_raises_empty_roster() -> None:
    session = _session()

    with pytest.raises(EmptyRosterError):
        session.draw_now()
    with pytest.raises(EmptyRosterError):
        session.generate_groups()


def test_three_draws_then_pool_is_empty() -> None:
    session = _session()
    session.add_names(["A", "B", "C"], source="text")

    winners = {session.draw_now().winner.id for _ in range(3)}

    assert len(winners) == 3
    assert session.to_state()["eligibleCount"] == 0
    with pytest.raises(EmptyPoolError):
        session.draw_now()


def test_commit_notifies_change_listener() -> None:
    changes = []
    session = _session(on_change=changes.append)
    session.add_names(["A"], source="text")

    entry = session.draw_now()

    assert changes == [session]
    assert session.to_state()["history"][0]["winner"] == entry.winner.to_dict()
    assert session.to_state()["draw"]["display"] == entry.winner.name


def test_animated_draw_ticks_and_blocks_reset(scheduler) -> None:
    ticks = []
    session = _session(
        timing=SpinTiming(duration_ms=100, initial_delay_ms=50, slowdown_window_ms=0, slowdown_step_ms=10),
        on_tick=lambda s, tick, display: ticks.append(tick),
    )
    session.add_names(["A", "B"], source="text")

    state = session.start_draw(scheduler)

    assert state["draw"]["status"] == "spinning"
    with pytest.raises(DrawInProgressError):
        session.reset_history()
    with pytest.raises(DrawInProgressError):
        session.start_draw(scheduler)

    scheduler.run_all()

    assert ticks == [1, 2]
    assert session.to_state()["draw"]["status"] == "committed"
    assert len(session.draw_engine.history) == 1


def test_reset_history_restores_pool_and_display() -> None:
    session = _session()
    session.add_names(["A", "B"], source="text")
    session.draw_now()

    state = session.reset_history()

    assert state["history"] == []
    assert state["eligibleCount"] == 2
    assert state["draw"]["display"] == IDLE_DISPLAY


def test_close_cancels_spinning_reveal(scheduler) -> None:
    session = _session()
    session.add_names(["A", "B"], source="text")
    session.start_draw(scheduler)

    session.close()
    scheduler.run_all()

    assert session.to_state()["draw"]["status"] == "cancelled"
    assert session.draw_engine.history == ()


def test_group_size_is_clamped_and_groups_replace_previous() -> None:
    session = _session()
    session.add_names(["A", "B", "C", "D", "E"], source="text")

    state = session.set_group_size(0)
    assert state["groupSize"] == 1

    session.set_group_size(2)
    groups = session.generate_groups()

    assert [len(group.members) for group in groups] == [2, 2, 1]
    assert len(session.to_state()["groups"]) == 3


def test_roster_is_locked_while_a_reveal_spins(scheduler) -> None:
    session = _session()
    session.add_names(["A"], source="text")
    only_id = session.roster.participants[0].id
    session.start_draw(scheduler)

    with pytest.raises(DrawInProgressError):
        session.apply_action({"type": "REMOVE_PARTICIPANT", "participantId": only_id})
    with pytest.raises(DrawInProgressError):
        session.apply_action({"type": "CLEAR_ROSTER"})

    scheduler.run_all()

    assert all(entry.winner.id in session.roster for entry in session.draw_engine.history)
    state = session.apply_action({"type": "REMOVE_PARTICIPANT", "participantId": only_id})
    assert state["roster"] == []


def test_event_log_is_bounded() -> None:
    session = _session()

    for index in range(LOG_LIMIT + 50):
        session.set_group_size(index + 1)

    assert len(session.log) == LOG_LIMIT
    assert session.log[0] == {"kind": "group_settings", "groupSize": 51}
    assert session.log[-1] == {"kind": "group_settings", "groupSize": LOG_LIMIT + 50}
