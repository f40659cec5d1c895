from __future__ import annotations

"""Timer configuration: phases, focus-level presets and validated settings."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from loguru import logger


class Phase(str, Enum):
    FOCUS = "focus"
    SHORT_BREAK = "shortBreak"
    LONG_BREAK = "longBreak"


class FocusLevel(str, Enum):
    POMODORO = "pomodoro"
    DEEP_WORK = "deepWork"
    EISENHOWER = "eisenhower"
    CUSTOM = "custom"


# focus, short break, long break (minutes), periods per cycle
FOCUS_LEVEL_PRESETS: dict[FocusLevel, tuple[int, int, int, int]] = {
    FocusLevel.POMODORO: (25, 5, 15, 4),
    FocusLevel.DEEP_WORK: (50, 10, 30, 2),
    FocusLevel.EISENHOWER: (90, 15, 30, 2),
}


def _require_positive_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class TimerSettings:
    """Read-only configuration consumed by the timer engine.

    Instances are validated on construction so the engine never sees a
    non-positive duration or an empty cycle.
    """

    focus_seconds: int = 25 * 60
    short_break_seconds: int = 5 * 60
    long_break_seconds: int = 15 * 60
    periods_per_cycle: int = 4
    auto_start_breaks: bool = False
    auto_start_focus: bool = False
    alarm_sound: str = ""
    focus_level: FocusLevel = FocusLevel.POMODORO

    def __post_init__(self) -> None:
        _require_positive_int("focus_seconds", self.focus_seconds)
        _require_positive_int("short_break_seconds", self.short_break_seconds)
        _require_positive_int("long_break_seconds", self.long_break_seconds)
        _require_positive_int("periods_per_cycle", self.periods_per_cycle)
        if not isinstance(self.focus_level, FocusLevel):
            object.__setattr__(self, "focus_level", FocusLevel(self.focus_level))

    @classmethod
    def from_minutes(
        cls,
        focus: int,
        short_break: int,
        long_break: int,
        periods_per_cycle: int = 4,
        **options: Any,
    ) -> TimerSettings:
        return cls(
            focus_seconds=focus * 60,
            short_break_seconds=short_break * 60,
            long_break_seconds=long_break * 60,
            periods_per_cycle=periods_per_cycle,
            **options,
        )

    def with_focus_level(self, level: FocusLevel | str) -> TimerSettings:
        level = FocusLevel(level)
        preset = FOCUS_LEVEL_PRESETS.get(level)
        if preset is None:
            return replace(self, focus_level=level)
        focus, short_break, long_break, periods = preset
        return replace(
            self,
            focus_seconds=focus * 60,
            short_break_seconds=short_break * 60,
            long_break_seconds=long_break * 60,
            periods_per_cycle=periods,
            focus_level=level,
        )

    def with_durations(self, **changes: int) -> TimerSettings:
        """Manual duration edits always leave preset mode."""
        return replace(self, focus_level=FocusLevel.CUSTOM, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "focusTime": self.focus_seconds // 60,
            "shortBreak": self.short_break_seconds // 60,
            "longBreak": self.long_break_seconds // 60,
            "focusSeconds": self.focus_seconds,
            "shortBreakSeconds": self.short_break_seconds,
            "longBreakSeconds": self.long_break_seconds,
            "pomodorosPerCycle": self.periods_per_cycle,
            "autoStartBreaks": self.auto_start_breaks,
            "autoStartPomodoros": self.auto_start_focus,
            "alarmSoundUrl": self.alarm_sound,
            "focusLevel": self.focus_level.value,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> TimerSettings:
        """Merges a persisted payload over the defaults.

        Exact second fields win over the minute fields when present. Unknown
        keys are ignored; a payload that fails validation yields the defaults
        so a corrupt settings row never blocks startup.
        """
        defaults = cls()
        if not isinstance(raw, dict):
            return defaults
        merged = {**defaults.to_dict(), **raw}

        def seconds(seconds_key: str, minutes_key: str) -> Any:
            if seconds_key in raw:
                return raw[seconds_key]
            return merged[minutes_key] * 60

        try:
            return cls(
                focus_seconds=seconds("focusSeconds", "focusTime"),
                short_break_seconds=seconds("shortBreakSeconds", "shortBreak"),
                long_break_seconds=seconds("longBreakSeconds", "longBreak"),
                periods_per_cycle=merged["pomodorosPerCycle"],
                auto_start_breaks=bool(merged["autoStartBreaks"]),
                auto_start_focus=bool(merged["autoStartPomodoros"]),
                alarm_sound=str(merged["alarmSoundUrl"] or ""),
                focus_level=FocusLevel(merged["focusLevel"]),
            )
        except (TypeError, ValueError) as exc:
            logger.warning("Ignoring invalid stored timer settings: {}", exc)
            return defaults
