import pytest

from studyfocus.core.phases import (
    counter_after_leaving,
    duration_of,
    next_break_phase,
    periods_completed_in_cycle,
    progress_percent,
)
from studyfocus.core.settings import Phase, TimerSettings


def test_duration_of_each_phase() -> None:
    settings = TimerSettings(1500, 300, 900, 4)

    assert duration_of(Phase.FOCUS, settings) == 1500
    assert duration_of(Phase.SHORT_BREAK, settings) == 300
    assert duration_of(Phase.LONG_BREAK, settings) == 900


@pytest.mark.parametrize(
    ("count", "periods", "expected"),
    [
        (1, 4, Phase.SHORT_BREAK),
        (3, 4, Phase.SHORT_BREAK),
        (4, 4, Phase.LONG_BREAK),
        (8, 4, Phase.LONG_BREAK),
        (1, 1, Phase.LONG_BREAK),
        (5, 2, Phase.SHORT_BREAK),
    ],
)
def test_next_break_phase(count, periods, expected) -> None:
    assert next_break_phase(count, periods) == expected


def test_counter_resets_only_when_leaving_long_break() -> None:
    assert counter_after_leaving(Phase.LONG_BREAK, 4) == 0
    assert counter_after_leaving(Phase.SHORT_BREAK, 3) == 3
    assert counter_after_leaving(Phase.FOCUS, 2) == 2


def test_periods_completed_in_cycle_shows_full_cycle() -> None:
    assert periods_completed_in_cycle(0, 4) == 0
    assert periods_completed_in_cycle(3, 4) == 3
    assert periods_completed_in_cycle(4, 4) == 4
    assert periods_completed_in_cycle(5, 4) == 1


def test_progress_percent_guards_zero_and_clamps() -> None:
    assert progress_percent(0, 0) == 0.0
    assert progress_percent(100, 100) == 0.0
    assert progress_percent(100, 25) == 75.0
    assert progress_percent(60, 90) == 0.0
