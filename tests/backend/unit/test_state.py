from rosterkit.backend.draw import DrawEngine
from rosterkit.backend.models import Participant
from rosterkit.backend.reveal import IDLE_DISPLAY, Reveal
from rosterkit.backend.roster import Roster
from rosterkit.backend.state import build_initial_meta, build_session_state


def test_build_initial_meta_uses_shared_timestamp() -> None:
    meta = build_initial_meta("Quarterly Raffle")

    assert meta["name"] == "Quarterly Raffle"
    assert meta["createdAt"] == meta["updatedAt"]
    assert meta["createdAt"].endswith("+00:00")


def test_build_session_state_renders_roster_and_draw_status() -> None:
    roster = Roster(participants=(Participant(id="a", name="Ann"), Participant(id="b", name="ann")))
    engine = DrawEngine()

    state = build_session_state(
        session_id="s-1",
        version=3,
        meta=build_initial_meta("Offsite"),
        roster=roster,
        allow_repeats=False,
        eligible_count=2,
        history=(),
        group_size=4,
        groups=(),
        reveal=Reveal(engine),
    )

    assert state["id"] == "s-1"
    assert state["version"] == 3
    assert state["roster"] == [{"id": "a", "name": "Ann"}, {"id": "b", "name": "ann"}]
    assert state["duplicateNames"] == ["ann"]
    assert state["eligibleCount"] == 2
    assert state["history"] == []
    assert state["groupSize"] == 4
    assert state["groups"] == []
    assert state["draw"] == {"status": "idle", "tick": 0, "display": IDLE_DISPLAY}
    assert state["meta"]["name"] == "Offsite"
