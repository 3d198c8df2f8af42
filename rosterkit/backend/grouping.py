"""Grouping engine: shuffle the roster and cut it into fixed-size groups."""

from __future__ import annotations

import logging
import math
import random
from typing import Iterable, Sequence

from .errors import InvalidGroupSizeError
from .models import Group, Participant
from .sampling import default_rng

logger = logging.getLogger(__name__)

DEFAULT_GROUP_SIZE = 4


def validate_group_size(value: object) -> int:
    """Return ``value`` as a positive int or raise ``InvalidGroupSizeError``."""
    if isinstance(value, bool):
        raise InvalidGroupSizeError(value)
    try:
        number = float(value) if isinstance(value, str) else value
        size = int(number)  # type: ignore[call-overload]
    except (TypeError, ValueError, OverflowError):
        raise InvalidGroupSizeError(value) from None
    if size < 1:
        raise InvalidGroupSizeError(value)
    return size


def coerce_group_size(value: object) -> int:
    """Clamp anything that is not a positive integer to 1."""
    try:
        return validate_group_size(value)
    except InvalidGroupSizeError as exc:
        logger.warning("%s; using 1", exc)
        return 1


def shuffle(participants: Iterable[Participant], rng: random.Random | None = None) -> list[Participant]:
    """Return a uniformly random permutation (Fisher-Yates, last index down to 1)."""
    rng = rng or default_rng()
    shuffled = list(participants)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def partition(shuffled: Sequence[Participant], group_size: object) -> tuple[Group, ...]:
    size = coerce_group_size(group_size)
    return tuple(
        Group(id=group_id, members=tuple(shuffled[start : start + size]))
        for group_id, start in enumerate(range(0, len(shuffled), size), start=1)
    )


def generate(
    roster: Iterable[Participant],
    group_size: object,
    rng: random.Random | None = None,
) -> tuple[Group, ...]:
    participants = list(roster)
    if not participants:
        return ()
    return partition(shuffle(participants, rng), group_size)


def expected_group_count(participant_count: int, group_size: object) -> int:
    if participant_count <= 0:
        return 0
    return math.ceil(participant_count / coerce_group_size(group_size))


class GroupingEngine:
    """Keeps the configured group size and the most recent partition."""

    def __init__(self, *, group_size: object = DEFAULT_GROUP_SIZE, rng: random.Random | None = None) -> None:
        self._group_size = coerce_group_size(group_size)
        self._rng = rng
        self.groups: tuple[Group, ...] = ()

    @property
    def group_size(self) -> int:
        return self._group_size

    @group_size.setter
    def group_size(self, value: object) -> None:
        self._group_size = coerce_group_size(value)

    def expected_group_count(self, roster: Sequence[Participant]) -> int:
        return expected_group_count(len(roster), self._group_size)

    def generate(self, roster: Iterable[Participant]) -> tuple[Group, ...]:
        self.groups = generate(roster, self._group_size, self._rng)
        logger.info("Generated %d groups of up to %d", len(self.groups), self._group_size)
        return self.groups

    def clear(self) -> None:
        self.groups = ()
