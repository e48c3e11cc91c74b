"""
Proctoring Alerts - Warning levels and wording for live assessment sessions.

These helpers drive the warning shown to a student after each violation
and the notice sent to the instructor. They are stateless: the caller
keeps the running violation count.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

from .models import EventType
from shared_utils.common import format_clock_time, get_timestamp


DEFAULT_MAX_VIOLATIONS = 5


class WarningLevel(Enum):
    """Escalation level of a violation warning."""
    ALERT = "alert"
    APPROACHING = "approaching"
    FINAL = "final"


_TITLES = {
    WarningLevel.ALERT: "Assessment Integrity Alert",
    WarningLevel.APPROACHING: "Final Warning Approaching!",
    WarningLevel.FINAL: "FINAL WARNING - VIOLATION LIMIT REACHED!",
}

_DESCRIPTIONS = {
    EventType.TAB_SWITCH: "switched tabs or minimized the browser",
    EventType.FULLSCREEN_EXIT: "exited fullscreen mode",
    EventType.BLUR: "moved focus away from the assessment",
}

_MESSAGES = {
    EventType.TAB_SWITCH: "You switched tabs or minimized the browser. This activity has been logged.",
    EventType.FULLSCREEN_EXIT: "You exited fullscreen mode. Please return to fullscreen to continue.",
    EventType.BLUR: "The assessment window lost focus. Please keep this window active.",
}


@dataclass(frozen=True)
class WarningStatus:
    """Warning state after a given number of violations."""
    level: WarningLevel
    title: str
    violation_count: int
    max_violations: int
    remaining: int
    threshold_reached: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'level': self.level.value,
            'title': self.title,
            'violation_count': self.violation_count,
            'max_violations': self.max_violations,
            'remaining': self.remaining,
            'threshold_reached': self.threshold_reached
        }


def get_warning_status(violation_count: int,
                       max_violations: int = DEFAULT_MAX_VIOLATIONS) -> WarningStatus:
    """
    Determine the warning level for a running violation count.

    The level becomes APPROACHING two violations before the limit and
    FINAL once the limit is reached.

    Args:
        violation_count: Violations so far in the session
        max_violations: Violations allowed before the threshold callback

    Returns:
        WarningStatus for the count
    """
    if max_violations <= 0:
        raise ValueError(f"max_violations must be positive, got {max_violations}")
    if violation_count < 0:
        raise ValueError(f"violation_count must be non-negative, got {violation_count}")

    if violation_count >= max_violations:
        level = WarningLevel.FINAL
    elif violation_count >= max_violations - 2:
        level = WarningLevel.APPROACHING
    else:
        level = WarningLevel.ALERT

    return WarningStatus(
        level=level,
        title=_TITLES[level],
        violation_count=violation_count,
        max_violations=max_violations,
        remaining=max(0, max_violations - violation_count),
        threshold_reached=violation_count >= max_violations
    )


def describe_event(event_type: Union[EventType, str]) -> str:
    """Describe what the student did, for the instructor notice."""
    return _DESCRIPTIONS.get(EventType.parse(event_type), "triggered an integrity alert")


def warning_message(event_type: Union[EventType, str]) -> str:
    """Student-facing message shown after a violation."""
    return _MESSAGES.get(EventType.parse(event_type),
                         "Suspicious activity was detected. This activity has been logged.")


def teacher_notice(teacher_name: str, event_type: Union[EventType, str],
                   when: Optional[datetime] = None) -> str:
    """Notice telling the student their instructor has been informed."""
    when = when or get_timestamp()
    return f"{teacher_name} has been notified that you {describe_event(event_type)} at {format_clock_time(when)}"
