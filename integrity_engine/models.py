"""
Integrity Engine Models - Data models for proctoring events and integrity reports.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Optional, List
from enum import Enum

from shared_utils.common import parse_timestamp, get_timestamp_string


class EventType(Enum):
    """Enumeration of browser proctoring event types."""
    SESSION_START = "session_start"
    SESSION_END = "session_end"
    TAB_SWITCH = "tab_switch"
    FULLSCREEN_EXIT = "fullscreen_exit"
    FULLSCREEN_ENTER = "fullscreen_enter"
    BLUR = "blur"
    FOCUS_RETURN = "focus_return"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value) -> "EventType":
        """Map a wire value onto an event type, UNKNOWN when unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return cls.UNKNOWN


VIOLATION_TYPES = frozenset({
    EventType.TAB_SWITCH,
    EventType.FULLSCREEN_EXIT,
    EventType.BLUR,
})


class ProctoringEvent:
    """
    A single event observed by the browser during an assessment session.
    """

    def __init__(
        self,
        event_type,
        timestamp: datetime,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize a proctoring event."""
        self.event_type = EventType.parse(event_type)
        # Keep the wire name so unrecognized types can still be displayed
        self.raw_type = event_type.value if isinstance(event_type, EventType) else str(event_type)
        self.timestamp = timestamp
        self.details = details or {}

    @property
    def is_violation(self) -> bool:
        return self.event_type in VIOLATION_TYPES

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProctoringEvent":
        """
        Build an event from its wire representation.

        Args:
            data: Dictionary with 'event_type', 'timestamp' and optional 'details'

        Returns:
            ProctoringEvent instance

        Raises:
            ValueError: If the timestamp cannot be parsed
        """
        details = data.get('details')
        return cls(
            event_type=data.get('event_type', EventType.UNKNOWN.value),
            timestamp=parse_timestamp(data.get('timestamp')),
            details=details if isinstance(details, dict) else None
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'event_type': self.raw_type,
            'timestamp': get_timestamp_string(self.timestamp),
            'details': self.details
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, ProctoringEvent):
            return NotImplemented
        return (self.raw_type == other.raw_type
                and self.timestamp == other.timestamp
                and self.details == other.details)

    def __str__(self) -> str:
        return f"ProctoringEvent({self.raw_type}, {self.timestamp.isoformat()})"

    def __repr__(self) -> str:
        return (f"ProctoringEvent(event_type={self.event_type}, raw_type='{self.raw_type}', "
                f"timestamp={self.timestamp}, detail_keys={list(self.details.keys())})")


@dataclass(frozen=True)
class EventClassification:
    """Display classification of an event type for timelines."""
    icon_category: str
    label: str
    tone: str
    is_violation: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'icon_category': self.icon_category,
            'label': self.label,
            'tone': self.tone,
            'is_violation': self.is_violation
        }


class ScoreBand(Enum):
    """Qualitative banding of an integrity score."""
    EXCELLENT = ("excellent", "green")
    GOOD = ("good", "yellow")
    FAIR = ("fair", "orange")
    POOR = ("poor", "red")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def color(self) -> str:
        return self.value[1]


@dataclass(frozen=True)
class ScoreBreakdown:
    """Base score, deduction and final score shown under a report."""
    base_score: int
    violation_count: int
    deduction_per_violation: int
    total_deduction: int
    final_score: int
    is_clamped: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'base_score': self.base_score,
            'violation_count': self.violation_count,
            'deduction_per_violation': self.deduction_per_violation,
            'total_deduction': self.total_deduction,
            'final_score': self.final_score,
            'is_clamped': self.is_clamped
        }


@dataclass
class IntegrityReport:
    """
    Result of scoring one assessment session.

    The events list is the caller's input, passed through in order for
    timeline rendering.
    """
    integrity_score: int
    violation_count: int
    total_events: int
    total_time_away_seconds: float
    events: List[ProctoringEvent] = field(default_factory=list)
    violations: List[ProctoringEvent] = field(default_factory=list)

    def event_counts_by_type(self) -> Dict[str, int]:
        """Get count of events by their wire type."""
        counts = {}
        for event in self.events:
            counts[event.raw_type] = counts.get(event.raw_type, 0) + 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'integrity_score': self.integrity_score,
            'violation_count': self.violation_count,
            'total_events': self.total_events,
            'total_time_away_seconds': self.total_time_away_seconds,
            'event_counts_by_type': self.event_counts_by_type(),
            'events': [event.to_dict() for event in self.events]
        }

    def __str__(self) -> str:
        return f"IntegrityReport({self.integrity_score}, violations={self.violation_count})"
