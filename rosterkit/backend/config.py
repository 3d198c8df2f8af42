"""Configuration helpers for backend runtime."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .reveal import SpinTiming


@dataclass(frozen=True)
class BackendSettings:
    host: str
    port: int
    log_level: str
    default_group_size: int
    demo_count: int
    spin_timing: SpinTiming


def _int_env(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def load_settings() -> BackendSettings:
    return BackendSettings(
        host=os.getenv("ROSTERKIT_HOST", "127.0.0.1"),
        port=_int_env("ROSTERKIT_PORT", 8000),
        log_level=os.getenv("ROSTERKIT_LOG_LEVEL", "INFO").upper(),
        default_group_size=_int_env("ROSTERKIT_DEFAULT_GROUP_SIZE", 4),
        demo_count=_int_env("ROSTERKIT_DEMO_COUNT", 20),
        spin_timing=SpinTiming(
            duration_ms=_int_env("ROSTERKIT_SPIN_DURATION_MS", 3000),
            initial_delay_ms=_int_env("ROSTERKIT_SPIN_INITIAL_DELAY_MS", 50),
            slowdown_window_ms=_int_env("ROSTERKIT_SPIN_SLOWDOWN_WINDOW_MS", 1000),
            slowdown_step_ms=_int_env("ROSTERKIT_SPIN_SLOWDOWN_STEP_MS", 10),
        ),
    )
