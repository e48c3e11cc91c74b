"""
Integrity Engine Package - Assessment integrity scoring

This package scores browser proctoring event streams and builds the
integrity report submitted to the instructor.
"""

from .models import (
    EventType, ProctoringEvent, EventClassification, ScoreBand,
    ScoreBreakdown, IntegrityReport, VIOLATION_TYPES
)
from .config import (
    ScoringPolicy, StrictnessProfile, EngineConfiguration,
    ConfigurationService, ConfigurationError, load_engine_configuration
)
from .scorer import IntegrityScorer, classify_event, compute_integrity_report, get_score_band
from .report import build_score_breakdown, build_timeline, summarize_report
from .timing import derive_time_away_seconds, reported_time_away_seconds
from .alerts import WarningLevel, WarningStatus, get_warning_status

__all__ = [
    'EventType',
    'ProctoringEvent',
    'EventClassification',
    'ScoreBand',
    'ScoreBreakdown',
    'IntegrityReport',
    'VIOLATION_TYPES',
    'ScoringPolicy',
    'StrictnessProfile',
    'EngineConfiguration',
    'ConfigurationService',
    'ConfigurationError',
    'load_engine_configuration',
    'IntegrityScorer',
    'classify_event',
    'compute_integrity_report',
    'get_score_band',
    'build_score_breakdown',
    'build_timeline',
    'summarize_report',
    'derive_time_away_seconds',
    'reported_time_away_seconds',
    'WarningLevel',
    'WarningStatus',
    'get_warning_status',
]
