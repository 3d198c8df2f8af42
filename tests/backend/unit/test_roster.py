import pytest

from rosterkit.backend.errors import DuplicateParticipantError, ParticipantNotFoundError
from rosterkit.backend.models import Participant
from rosterkit.backend.roster import Roster, normalize_name


def _roster(*names: str) -> Roster:
    return Roster(participants=tuple(Participant(id=f"p{index}", name=name) for index, name in enumerate(names)))


def test_normalize_name_trims_and_lowercases() -> None:
    assert normalize_name("  Alice Johnson ") == "alice johnson"
    assert normalize_name("BOB") == normalize_name("bob")


def test_roster_rejects_duplicate_ids() -> None:
    with pytest.raises(DuplicateParticipantError):
        Roster(participants=(Participant(id="x", name="A"), Participant(id="x", name="B")))

    roster = _roster("A")
    with pytest.raises(DuplicateParticipantError):
        roster.append(Participant(id="p0", name="Other"))


def test_mutations_return_new_snapshots() -> None:
    roster = _roster("A", "B")

    appended = roster.append(Participant(id="new", name="C"))
    removed = appended.remove("p0")
    cleared = removed.clear()

    assert [p.name for p in roster] == ["A", "B"]
    assert [p.name for p in appended] == ["A", "B", "C"]
    assert [p.name for p in removed] == ["B", "C"]
    assert len(cleared) == 0


def test_extend_names_mints_unique_ids() -> None:
    roster = Roster().extend_names(["Alice", "Alice", "Bob"])

    assert [p.name for p in roster] == ["Alice", "Alice", "Bob"]
    assert len({p.id for p in roster}) == 3


def test_remove_unknown_participant_raises() -> None:
    with pytest.raises(ParticipantNotFoundError):
        _roster("A").remove("missing")


def test_duplicate_flagging_and_dedupe_share_normalization() -> None:
    roster = _roster("Alice", " alice ", "Bob", "ALICE", "Carol")

    assert roster.has_duplicates is True
    assert roster.duplicate_names() == ["alice"]
    assert roster.is_duplicate(roster.participants[1]) is True
    assert roster.is_duplicate(roster.participants[2]) is False

    deduped = roster.dedupe()

    assert [p.id for p in deduped] == ["p0", "p2", "p4"]
    assert deduped.has_duplicates is False


def test_contains_and_get_use_ids() -> None:
    roster = _roster("A", "A")

    assert "p1" in roster
    assert "A" not in roster
    assert roster.get("p1") == Participant(id="p1", name="A")
    assert roster.get("nope") is None
