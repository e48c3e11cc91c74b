"""
Integrity Scorer - Converts proctoring event streams into integrity reports.

The scorer is a pure function over the caller's event list: violations are
counted once each, every violation deducts a flat penalty from a base of
100, and the score is floored at zero.
"""

import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence, Union

from .config import BASE_SCORE, ScoringPolicy
from .models import (
    EventClassification, EventType, IntegrityReport, ProctoringEvent, ScoreBand
)


logger = logging.getLogger(__name__)


_CLASSIFICATIONS: Dict[EventType, EventClassification] = {
    EventType.TAB_SWITCH: EventClassification("eye", "Tab Switch", "orange", True),
    EventType.FULLSCREEN_EXIT: EventClassification("maximize", "Fullscreen Exit", "orange", True),
    EventType.BLUR: EventClassification("alert", "Window Blur", "yellow", True),
    EventType.FOCUS_RETURN: EventClassification("check", "Focus Return", "green", False),
    EventType.FULLSCREEN_ENTER: EventClassification("clock", "Fullscreen Enter", "muted", False),
    EventType.SESSION_START: EventClassification("clock", "Session Start", "muted", False),
    EventType.SESSION_END: EventClassification("clock", "Session End", "muted", False),
    EventType.UNKNOWN: EventClassification("clock", "unknown", "muted", False),
}

_unmapped = set(EventType) - set(_CLASSIFICATIONS)
if _unmapped:
    raise RuntimeError(f"Event types without a classification: {sorted(t.value for t in _unmapped)}")


def classify_event(event_type: Union[EventType, str]) -> EventClassification:
    """
    Classify an event type for display.

    Unrecognized types are labelled with their own name and are never
    violations.

    Args:
        event_type: EventType member or raw wire string

    Returns:
        EventClassification for the type
    """
    parsed = EventType.parse(event_type)
    if parsed is EventType.UNKNOWN:
        raw = event_type.value if isinstance(event_type, EventType) else str(event_type)
        fallback = _CLASSIFICATIONS[EventType.UNKNOWN]
        return EventClassification(fallback.icon_category, raw, fallback.tone, False)
    return _CLASSIFICATIONS[parsed]


def get_score_band(score: int, policy: Optional[ScoringPolicy] = None) -> ScoreBand:
    """
    Band a score by descending thresholds; the first match wins.

    Args:
        score: Integrity score
        policy: Scoring policy holding the thresholds

    Returns:
        ScoreBand for the score
    """
    policy = policy or ScoringPolicy()
    for threshold, band in policy.band_thresholds:
        if score >= threshold:
            return band
    return ScoreBand.POOR


class IntegrityScorer:
    """
    Scores assessment sessions against a ScoringPolicy.

    Instances hold only the policy, so one scorer may be shared between
    sessions and threads.
    """

    def __init__(self, policy: Optional[ScoringPolicy] = None):
        """
        Initialize the scorer.

        Args:
            policy: Penalty and banding policy, defaults to 10 points per violation
        """
        self.policy = policy or ScoringPolicy()
        logger.debug(f"IntegrityScorer initialized with {self.policy.deduction_per_violation} "
                     f"point deduction per violation")

    def is_violation(self, event: ProctoringEvent) -> bool:
        return event.is_violation

    def score_for(self, violation_count: int) -> int:
        """Integrity score for a number of violations, floored at zero."""
        return max(0, BASE_SCORE - violation_count * self.policy.deduction_per_violation)

    def compute_integrity_report(
        self,
        events: Sequence[ProctoringEvent],
        total_time_away_seconds: float = 0
    ) -> IntegrityReport:
        """
        Compute the integrity report for one session.

        Args:
            events: Session events in received order
            total_time_away_seconds: Caller supplied time away, non-negative

        Returns:
            IntegrityReport with the events passed through unmodified

        Raises:
            TypeError: If events is None
            ValueError: If total_time_away_seconds is not a finite non-negative number
        """
        if events is None:
            raise TypeError("events must be a sequence, not None")
        if (not isinstance(total_time_away_seconds, (int, float))
                or isinstance(total_time_away_seconds, bool)
                or not math.isfinite(total_time_away_seconds)
                or total_time_away_seconds < 0):
            raise ValueError(f"total_time_away_seconds must be a finite non-negative number, "
                             f"got {total_time_away_seconds!r}")

        events = list(events)
        violations = [event for event in events if self.is_violation(event)]
        violation_count = len(violations)

        report = IntegrityReport(
            integrity_score=self.score_for(violation_count),
            violation_count=violation_count,
            total_events=len(events),
            total_time_away_seconds=total_time_away_seconds,
            events=events,
            violations=violations
        )

        logger.debug(f"Scored session: {report.total_events} events, "
                     f"{violation_count} violations, score={report.integrity_score}")
        return report

    def score_band(self, report: IntegrityReport) -> ScoreBand:
        return get_score_band(report.integrity_score, self.policy)


def compute_integrity_report(
    events: Sequence[ProctoringEvent],
    total_time_away_seconds: float = 0,
    policy: Optional[ScoringPolicy] = None
) -> IntegrityReport:
    """Compute an integrity report with the given (or default) policy."""
    return IntegrityScorer(policy).compute_integrity_report(events, total_time_away_seconds)


def events_from_dicts(event_dicts: Iterable[dict]) -> List[ProctoringEvent]:
    """Build events from wire dictionaries, keeping their order."""
    return [ProctoringEvent.from_dict(data) for data in event_dicts]
