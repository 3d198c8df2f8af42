from __future__ import annotations

from typing import Callable

import pytest


class FakeHandle:
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Collects ``call_later`` requests and runs them on demand."""

    def __init__(self) -> None:
        self.pending: list[tuple[float, Callable[[], None], FakeHandle]] = []
        self.delays: list[float] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle()
        self.pending.append((delay, callback, handle))
        self.delays.append(delay)
        return handle

    def run_next(self) -> None:
        _, callback, handle = self.pending.pop(0)
        if not handle.cancelled:
            callback()

    def run_all(self) -> None:
        while self.pending:
            self.run_next()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()
