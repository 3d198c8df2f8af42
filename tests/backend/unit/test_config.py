from rosterkit.backend.config import load_settings
from rosterkit.backend.reveal import SpinTiming

ENV_NAMES = (
    "ROSTERKIT_HOST",
    "ROSTERKIT_PORT",
    "ROSTERKIT_LOG_LEVEL",
    "ROSTERKIT_DEFAULT_GROUP_SIZE",
    "ROSTERKIT_DEMO_COUNT",
    "ROSTERKIT_SPIN_DURATION_MS",
    "ROSTERKIT_SPIN_INITIAL_DELAY_MS",
    "ROSTERKIT_SPIN_SLOWDOWN_WINDOW_MS",
    "ROSTERKIT_SPIN_SLOWDOWN_STEP_MS",
)


def test_load_settings_reads_expected_env(monkeypatch) -> None:
    monkeypatch.setenv("ROSTERKIT_HOST", "localhost")
    monkeypatch.setenv("ROSTERKIT_PORT", "9000")
    monkeypatch.setenv("ROSTERKIT_LOG_LEVEL", "debug")
    monkeypatch.setenv("ROSTERKIT_DEFAULT_GROUP_SIZE", "6")
    monkeypatch.setenv("ROSTERKIT_DEMO_COUNT", "5")
    monkeypatch.setenv("ROSTERKIT_SPIN_DURATION_MS", "1500")
    monkeypatch.setenv("ROSTERKIT_SPIN_INITIAL_DELAY_MS", "30")
    monkeypatch.setenv("ROSTERKIT_SPIN_SLOWDOWN_WINDOW_MS", "500")
    monkeypatch.setenv("ROSTERKIT_SPIN_SLOWDOWN_STEP_MS", "20")

    settings = load_settings()

    assert settings.host == "localhost"
    assert settings.port == 9000
    assert settings.log_level == "DEBUG"
    assert settings.default_group_size == 6
    assert settings.demo_count == 5
    assert settings.spin_timing == SpinTiming(
        duration_ms=1500,
        initial_delay_ms=30,
        slowdown_window_ms=500,
        slowdown_step_ms=20,
    )


def test_load_settings_applies_defaults(monkeypatch) -> None:
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.host == "127.0.0.1"
    assert settings.port == 8000
    assert settings.log_level == "INFO"
    assert settings.default_group_size == 4
    assert settings.demo_count == 20
    assert settings.spin_timing == SpinTiming()
