"""Exception types raised by the roster, draw and grouping engines."""

from __future__ import annotations


class RosterKitError(Exception):
    """Base class for recoverable rosterkit failures."""


class EmptyPoolError(RosterKitError):
    def __init__(self) -> None:
        super().__init__("No eligible participants left to draw from")


class EmptyRosterError(RosterKitError):
    def __init__(self) -> None:
        super().__init__("Please add participants first")


class InvalidGroupSizeError(RosterKitError):
    """Group size was not a positive integer; callers clamp instead of raising."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid group size: {value!r}")
        self.value = value


class DrawInProgressError(RosterKitError):
    def __init__(self) -> None:
        super().__init__("A draw is already in progress")


class ParticipantNotFoundError(RosterKitError):
    def __init__(self, participant_id: str) -> None:
        super().__init__(f"Participant not found: {participant_id}")
        self.participant_id = participant_id


class DuplicateParticipantError(RosterKitError):
    def __init__(self, participant_id: str) -> None:
        super().__init__(f"Participant id already in roster: {participant_id}")
        self.participant_id = participant_id


class SessionNotFoundError(RosterKitError):
    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id
