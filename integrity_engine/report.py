"""
Report Builder - Score breakdown, timeline and narrative for integrity reports.
"""

import logging
from typing import Any, Dict, List, Optional

from .config import BASE_SCORE, ScoringPolicy
from .models import IntegrityReport, ScoreBreakdown
from .scorer import classify_event, get_score_band
from shared_utils.common import format_clock_time


logger = logging.getLogger(__name__)


def build_score_breakdown(report: IntegrityReport,
                          policy: Optional[ScoringPolicy] = None) -> ScoreBreakdown:
    """
    Build the base/deduction/final breakdown for a report.

    total_deduction is the unclamped deduction, so a session with 15
    violations shows a deduction of 150 alongside a final score of 0.

    Args:
        report: Computed integrity report
        policy: Policy the report was scored with

    Returns:
        ScoreBreakdown with base_score - total_deduction == final_score
        whenever is_clamped is False
    """
    policy = policy or ScoringPolicy()
    total_deduction = report.violation_count * policy.deduction_per_violation
    unclamped = BASE_SCORE - total_deduction
    final_score = max(0, unclamped)

    return ScoreBreakdown(
        base_score=BASE_SCORE,
        violation_count=report.violation_count,
        deduction_per_violation=policy.deduction_per_violation,
        total_deduction=total_deduction,
        final_score=final_score,
        is_clamped=unclamped < 0
    )


def build_timeline(report: IntegrityReport) -> List[Dict[str, Any]]:
    """
    Build timeline entries for every event in the report, in order.

    Args:
        report: Computed integrity report

    Returns:
        List of timeline entry dictionaries
    """
    timeline = []
    for event in report.events:
        classification = classify_event(event.raw_type)
        entry = {
            'event_type': event.raw_type,
            'label': classification.label,
            'icon_category': classification.icon_category,
            'tone': classification.tone,
            'is_violation': classification.is_violation,
            'time': format_clock_time(event.timestamp),
            'timestamp': event.timestamp.isoformat()
        }
        if event.details:
            entry['details'] = event.details
        timeline.append(entry)
    return timeline


def summarize_report(report: IntegrityReport,
                     policy: Optional[ScoringPolicy] = None,
                     teacher_name: str = "Your Teacher") -> Dict[str, Any]:
    """
    Produce the written summary shown with a submitted report.

    Args:
        report: Computed integrity report
        policy: Policy the report was scored with
        teacher_name: Instructor receiving the report

    Returns:
        Dictionary of display lines and the qualitative band
    """
    policy = policy or ScoringPolicy()
    breakdown = build_score_breakdown(report, policy)
    band = get_score_band(report.integrity_score, policy)

    summary = {
        'headline': "Assessment Integrity Report",
        'submitted_to': f"This report has been submitted to {teacher_name}",
        'score_line': f"{report.integrity_score}% Integrity Score",
        'band': band.label,
        'color': band.color,
        'totals': {
            'violations': report.violation_count,
            'events': report.total_events,
            'time_away': f"{round(report.total_time_away_seconds)}s"
        }
    }

    if report.total_events == 0:
        summary['timeline_message'] = ("No suspicious activity detected. "
                                       "Assessment completed with full integrity")

    if report.violation_count > 0:
        summary['breakdown_lines'] = [
            f"Base Score: {breakdown.base_score}%",
            f"Violations ({breakdown.violation_count} × -{breakdown.deduction_per_violation}%): "
            f"-{breakdown.total_deduction}%",
            f"Final Integrity Score: {breakdown.final_score}%"
        ]

    return summary
