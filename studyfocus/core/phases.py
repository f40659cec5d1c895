from __future__ import annotations

"""Pure phase arithmetic: durations and focus-cycle counting."""

from studyfocus.core.settings import Phase, TimerSettings


def duration_of(phase: Phase, settings: TimerSettings) -> int:
    if phase == Phase.FOCUS:
        return settings.focus_seconds
    if phase == Phase.SHORT_BREAK:
        return settings.short_break_seconds
    return settings.long_break_seconds


def next_break_phase(completed_focus_count: int, periods_per_cycle: int) -> Phase:
    """Break due after ``completed_focus_count`` focus periods (already incremented)."""
    if completed_focus_count > 0 and completed_focus_count % periods_per_cycle == 0:
        return Phase.LONG_BREAK
    return Phase.SHORT_BREAK


def counter_after_leaving(phase: Phase, completed_focus_count: int) -> int:
    if phase == Phase.LONG_BREAK:
        return 0
    return completed_focus_count


def periods_completed_in_cycle(completed_focus_count: int, periods_per_cycle: int) -> int:
    if completed_focus_count > 0 and completed_focus_count % periods_per_cycle == 0:
        return periods_per_cycle
    return completed_focus_count % periods_per_cycle


def progress_percent(total_seconds: int, remaining_seconds: int) -> float:
    if total_seconds <= 0:
        return 0.0
    progress = (total_seconds - remaining_seconds) / total_seconds * 100
    return max(0.0, min(100.0, progress))
