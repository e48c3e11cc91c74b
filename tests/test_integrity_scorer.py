"""
Tests for the integrity scorer

Covers score formula, monotonicity, event classification and the
handling of unknown event types.
"""

from datetime import datetime

import pytest

from integrity_engine.config import ScoringPolicy
from integrity_engine.models import EventType, ProctoringEvent, ScoreBand, VIOLATION_TYPES
from integrity_engine.scorer import (
    IntegrityScorer, classify_event, compute_integrity_report, get_score_band
)


class TestComputeIntegrityReport:
    """Test the score formula and report totals"""

    def test_empty_session_is_perfect(self):
        report = compute_integrity_report([], 0)
        assert report.integrity_score == 100
        assert report.violation_count == 0
        assert report.total_events == 0
        assert report.events == []

    def test_full_session_example(self, make_events):
        events = make_events(
            "session_start", "tab_switch", "blur", "tab_switch", "fullscreen_exit", "session_end"
        )
        report = compute_integrity_report(events, 12.5)
        assert report.violation_count == 4
        assert report.integrity_score == 60
        assert report.total_events == 6
        assert report.total_time_away_seconds == 12.5

    @pytest.mark.parametrize("violations", range(0, 11))
    def test_score_formula_up_to_ten_violations(self, make_events, violations):
        report = compute_integrity_report(make_events(*["blur"] * violations))
        assert report.integrity_score == 100 - 10 * violations

    @pytest.mark.parametrize("violations", [11, 15, 40])
    def test_score_floors_at_zero(self, make_events, violations):
        report = compute_integrity_report(make_events(*["tab_switch"] * violations))
        assert report.integrity_score == 0
        assert report.violation_count == violations

    def test_adding_a_violation_never_raises_score(self, make_events):
        types = ["session_start"]
        previous = compute_integrity_report(make_events(*types)).integrity_score
        for next_type in ["focus_return", "blur", "fullscreen_enter", "tab_switch"] * 5:
            types.append(next_type)
            score = compute_integrity_report(make_events(*types)).integrity_score
            assert 0 <= score <= 100
            assert score <= previous
            previous = score

    def test_non_violations_do_not_deduct(self, make_events):
        events = make_events("session_start", "fullscreen_enter", "focus_return", "session_end")
        report = compute_integrity_report(events)
        assert report.integrity_score == 100
        assert report.total_events == 4

    def test_repeated_violations_at_same_timestamp_all_count(self):
        events = [ProctoringEvent("blur", datetime(2026, 3, 2, 9, 0, 0)) for _ in range(3)]
        report = compute_integrity_report(events)
        assert report.violation_count == 3
        assert report.integrity_score == 70

    def test_unknown_event_types_count_but_never_violate(self, make_events):
        events = make_events("session_start", "copy_paste", "tab_switch", "mystery")
        report = compute_integrity_report(events)
        assert report.total_events == 4
        assert report.violation_count == 1
        assert report.integrity_score == 90
        assert events[1].event_type is EventType.UNKNOWN
        assert events[1].raw_type == "copy_paste"

    def test_details_do_not_affect_score(self, make_events):
        plain = make_events("tab_switch", "blur")
        detailed = make_events("tab_switch", "blur")
        detailed[0].details = {"action": "left_tab"}
        detailed[1].details = {}
        assert (compute_integrity_report(plain).integrity_score
                == compute_integrity_report(detailed).integrity_score)

    def test_events_pass_through_in_order(self, make_events):
        events = make_events("session_start", "blur", "focus_return")
        report = compute_integrity_report(events)
        assert [e.raw_type for e in report.events] == ["session_start", "blur", "focus_return"]
        assert [e.raw_type for e in report.violations] == ["blur"]

    def test_same_input_same_output(self, make_events):
        events = make_events("tab_switch", "session_end")
        assert compute_integrity_report(events, 3).to_dict() == compute_integrity_report(events, 3).to_dict()

    def test_none_events_fail_fast(self):
        with pytest.raises(TypeError):
            compute_integrity_report(None)

    def test_negative_time_away_rejected(self):
        with pytest.raises(ValueError):
            compute_integrity_report([], -1)

    @pytest.mark.parametrize("time_away", [float("nan"), float("inf"), "12", None, True])
    def test_invalid_time_away_rejected(self, time_away):
        with pytest.raises(ValueError):
            compute_integrity_report([], time_away)

    def test_violations_match_classification(self, make_events):
        report = compute_integrity_report(make_events("blur", "focus_return", "tab_switch"))
        assert [event.is_violation for event in report.events] == [
            classify_event(event.raw_type).is_violation for event in report.events
        ]
        assert report.violations == [event for event in report.events if event.is_violation]

    def test_custom_deduction(self, make_events):
        scorer = IntegrityScorer(ScoringPolicy(deduction_per_violation=25))
        report = scorer.compute_integrity_report(make_events("blur", "blur", "blur"))
        assert report.integrity_score == 25

    def test_event_counts_by_type(self, make_events):
        report = compute_integrity_report(make_events("blur", "focus_return", "blur", "odd"))
        assert report.event_counts_by_type() == {"blur": 2, "focus_return": 1, "odd": 1}


class TestClassifyEvent:
    """Test event classification"""

    @pytest.mark.parametrize("event_type,label,icon", [
        ("tab_switch", "Tab Switch", "eye"),
        ("fullscreen_exit", "Fullscreen Exit", "maximize"),
        ("blur", "Window Blur", "alert"),
        ("focus_return", "Focus Return", "check"),
        ("fullscreen_enter", "Fullscreen Enter", "clock"),
        ("session_start", "Session Start", "clock"),
        ("session_end", "Session End", "clock"),
    ])
    def test_known_types(self, event_type, label, icon):
        classification = classify_event(event_type)
        assert classification.label == label
        assert classification.icon_category == icon

    def test_only_three_types_are_violations(self):
        flagged = {t for t in EventType if classify_event(t).is_violation}
        assert flagged == set(VIOLATION_TYPES)
        assert flagged == {EventType.TAB_SWITCH, EventType.FULLSCREEN_EXIT, EventType.BLUR}

    def test_unknown_type_uses_its_own_name(self):
        classification = classify_event("screenshot_attempt")
        assert classification.label == "screenshot_attempt"
        assert classification.is_violation is False
        assert classification.icon_category == "clock"

    def test_every_enum_member_is_classified(self):
        for event_type in EventType:
            assert classify_event(event_type).label


class TestScoreBand:
    """Test qualitative banding"""

    @pytest.mark.parametrize("score,band", [
        (100, ScoreBand.EXCELLENT),
        (90, ScoreBand.EXCELLENT),
        (89, ScoreBand.GOOD),
        (70, ScoreBand.GOOD),
        (69, ScoreBand.FAIR),
        (50, ScoreBand.FAIR),
        (49, ScoreBand.POOR),
        (0, ScoreBand.POOR),
    ])
    def test_default_thresholds(self, score, band):
        assert get_score_band(score) is band

    def test_band_colors(self):
        assert ScoreBand.EXCELLENT.color == "green"
        assert ScoreBand.GOOD.color == "yellow"
        assert ScoreBand.FAIR.color == "orange"
        assert ScoreBand.POOR.color == "red"

    def test_custom_thresholds(self):
        policy = ScoringPolicy(band_thresholds=((95, ScoreBand.EXCELLENT), (80, ScoreBand.GOOD)))
        assert get_score_band(90, policy) is ScoreBand.GOOD
        assert get_score_band(70, policy) is ScoreBand.POOR

    def test_thresholds_must_descend(self):
        with pytest.raises(ValueError):
            ScoringPolicy(band_thresholds=((50, ScoreBand.FAIR), (90, ScoreBand.EXCELLENT)))
