"""
Validation utilities for the integrity and poll analytics engines.

This module provides validation functions for configuration data and
incoming request payloads. Every validator returns a tuple of
(is_valid, list_of_errors) so callers can report all problems at once.
"""

import math
from typing import Dict, Any, List, Tuple


BAND_NAMES = ('excellent', 'good', 'fair', 'poor')
STRICTNESS_LEVELS = ('lenient', 'standard', 'strict')


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite_number(value: Any) -> bool:
    return _is_number(value) and math.isfinite(value)


def validate_score_threshold(threshold: Any) -> bool:
    """
    Validate a score band threshold.

    Args:
        threshold: Threshold value to validate

    Returns:
        True if valid, False otherwise
    """
    return _is_int(threshold) and 0 <= threshold <= 100


def validate_engine_configuration(config_dict: Dict[str, Any]) -> Tuple[bool, List[str]]:
    """
    Validate engine configuration data.

    Args:
        config_dict: Configuration data dictionary

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []

    scoring = config_dict.get('scoring', {})
    if not isinstance(scoring, dict):
        errors.append("Invalid scoring section: must be an object")
        scoring = {}

    deduction = scoring.get('deduction_per_violation', 10)
    if not _is_int(deduction) or not 0 <= deduction <= 100:
        errors.append(f"Invalid deduction_per_violation: {deduction}")

    thresholds = scoring.get('band_thresholds', {})
    if not isinstance(thresholds, dict):
        errors.append("Invalid band_thresholds: must be an object")
    else:
        for name, value in thresholds.items():
            if name not in BAND_NAMES:
                errors.append(f"Unknown score band: {name}")
            elif not validate_score_threshold(value):
                errors.append(f"Invalid threshold for {name}: {value}")

    proctoring = config_dict.get('proctoring', {})
    if not isinstance(proctoring, dict):
        errors.append("Invalid proctoring section: must be an object")
        proctoring = {}

    strictness = proctoring.get('strictness', 'standard')
    if strictness not in STRICTNESS_LEVELS:
        errors.append(f"Invalid strictness: {strictness}")

    max_violations = proctoring.get('max_violations', 5)
    if not _is_int(max_violations) or max_violations <= 0:
        errors.append(f"Invalid max_violations: {max_violations}")

    wordcloud = config_dict.get('wordcloud', {})
    if not isinstance(wordcloud, dict):
        errors.append("Invalid wordcloud section: must be an object")
        wordcloud = {}

    max_words = wordcloud.get('max_words', 50)
    if not _is_int(max_words) or max_words <= 0:
        errors.append(f"Invalid max_words: {max_words}")

    exclude_numbers = wordcloud.get('exclude_numbers', False)
    if not isinstance(exclude_numbers, bool):
        errors.append(f"Invalid exclude_numbers: {exclude_numbers}")

    for field in ('student_min_responses', 'teacher_min_responses'):
        if field in wordcloud:
            value = wordcloud[field]
            if not _is_int(value) or value < 0:
                errors.append(f"Invalid {field}: {value}")

    return len(errors) == 0, errors


def validate_event_data(event_dict: Any) -> Tuple[bool, List[str]]:
    """
    Validate a single proctoring event payload.

    Unknown event types are accepted; they are scored as non-violations.

    Args:
        event_dict: Event data dictionary

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []

    if not isinstance(event_dict, dict):
        return False, ["Event must be an object"]

    if not isinstance(event_dict.get('event_type'), str) or not event_dict['event_type']:
        errors.append("Missing required field: event_type")

    if event_dict.get('timestamp') in (None, ''):
        errors.append("Missing required field: timestamp")

    details = event_dict.get('details')
    if details is not None and not isinstance(details, dict):
        errors.append("Invalid details: must be an object")

    return len(errors) == 0, errors


def validate_report_request(payload: Any) -> Tuple[bool, List[str]]:
    """
    Validate an integrity report request body.

    Args:
        payload: Decoded JSON body

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    if not isinstance(payload, dict):
        return False, ["Request body must be a JSON object"]

    errors = []
    events = payload.get('events')
    if not isinstance(events, list):
        errors.append("Missing required field: events (list)")
    else:
        for index, event in enumerate(events):
            is_valid, event_errors = validate_event_data(event)
            if not is_valid:
                errors.extend(f"events[{index}]: {error}" for error in event_errors)

    time_away = payload.get('total_time_away_seconds', 0)
    if not _is_finite_number(time_away) or time_away < 0:
        errors.append(f"Invalid total_time_away_seconds: {time_away}")

    return len(errors) == 0, errors


def validate_wordcloud_request(payload: Any) -> Tuple[bool, List[str]]:
    """
    Validate a word cloud request body.

    Args:
        payload: Decoded JSON body

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    if not isinstance(payload, dict):
        return False, ["Request body must be a JSON object"]

    errors = []
    if not isinstance(payload.get('responses'), list):
        errors.append("Missing required field: responses (list)")

    view = payload.get('view', 'teacher')
    if view not in ('teacher', 'student'):
        errors.append(f"Invalid view: {view}")

    if 'max_words' in payload and payload['max_words'] is not None:
        max_words = payload['max_words']
        if not _is_int(max_words) or max_words <= 0:
            errors.append(f"Invalid max_words: {max_words}")

    if 'exclude_numbers' in payload and not isinstance(payload['exclude_numbers'], bool):
        errors.append(f"Invalid exclude_numbers: {payload['exclude_numbers']!r}")

    return len(errors) == 0, errors
