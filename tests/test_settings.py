import pytest

from studyfocus.core.settings import FocusLevel, TimerSettings


def test_defaults_match_classic_pomodoro() -> None:
    settings = TimerSettings()

    assert settings.focus_seconds == 1500
    assert settings.short_break_seconds == 300
    assert settings.long_break_seconds == 900
    assert settings.periods_per_cycle == 4
    assert settings.auto_start_breaks is False
    assert settings.auto_start_focus is False


@pytest.mark.parametrize(
    "kwargs",
    [
        {"focus_seconds": 0},
        {"short_break_seconds": -1},
        {"long_break_seconds": 0},
        {"periods_per_cycle": 0},
        {"focus_seconds": 1.5},
        {"periods_per_cycle": True},
    ],
)
def test_invalid_values_fail_fast(kwargs) -> None:
    with pytest.raises(ValueError):
        TimerSettings(**kwargs)


def test_focus_level_presets() -> None:
    deep = TimerSettings().with_focus_level("deepWork")

    assert deep.focus_level == FocusLevel.DEEP_WORK
    assert deep.focus_seconds == 50 * 60
    assert deep.short_break_seconds == 10 * 60
    assert deep.long_break_seconds == 30 * 60
    assert deep.periods_per_cycle == 2

    custom = deep.with_focus_level(FocusLevel.CUSTOM)
    assert custom.focus_seconds == deep.focus_seconds
    assert custom.focus_level == FocusLevel.CUSTOM


def test_manual_edit_switches_to_custom() -> None:
    edited = TimerSettings().with_durations(focus_seconds=40 * 60)

    assert edited.focus_level == FocusLevel.CUSTOM
    assert edited.focus_seconds == 2400


def test_dict_roundtrip_uses_minutes() -> None:
    settings = TimerSettings.from_minutes(45, 10, 20, 3, auto_start_breaks=True, alarm_sound="bell.wav")

    payload = settings.to_dict()

    assert payload["focusTime"] == 45
    assert payload["autoStartBreaks"] is True
    assert TimerSettings.from_dict(payload) == settings


def test_from_dict_merges_partial_and_rejects_garbage() -> None:
    partial = TimerSettings.from_dict({"focusTime": 30, "unknown": "x"})
    assert partial.focus_seconds == 1800
    assert partial.short_break_seconds == 300

    assert TimerSettings.from_dict({"pomodorosPerCycle": 0}) == TimerSettings()
    assert TimerSettings.from_dict("not a dict") == TimerSettings()
    assert TimerSettings.from_dict({"focusLevel": "turbo"}) == TimerSettings()


def test_second_fields_win_over_minute_fields() -> None:
    payload = TimerSettings(90, 30, 900, 4).to_dict()

    assert payload["focusTime"] == 1
    assert TimerSettings.from_dict(payload).focus_seconds == 90
    assert TimerSettings.from_dict(payload).short_break_seconds == 30
