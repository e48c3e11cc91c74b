#!/usr/bin/env python3
"""
Assessment Integrity & Poll Analytics - Flask JSON API
Exposes the integrity scorer and the word cloud aggregator to the web client.
"""

import logging
import os
from datetime import datetime

from flask import Flask, request, jsonify

from integrity_engine import (
    EventType, IntegrityScorer, build_score_breakdown, build_timeline,
    classify_event, derive_time_away_seconds, get_warning_status,
    load_engine_configuration, summarize_report
)
from integrity_engine.scorer import events_from_dicts
from poll_analytics import (
    WordCloudAggregator, WordCloudOptions, top_responses
)
from shared_utils.common import parse_timestamp, setup_logging
from shared_utils.validation import validate_report_request, validate_wordcloud_request


logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['ENGINE_CONFIG'] = load_engine_configuration()


def _engine_config():
    return app.config['ENGINE_CONFIG']


@app.route('/health')
def health_check():
    """Health check endpoint."""
    config = _engine_config()
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now().isoformat(),
        'components': {
            'integrity_engine': True,
            'poll_analytics': True
        },
        'strictness': config.strictness.value
    })


@app.route('/api/integrity/event-types')
def event_types():
    """List the classification of every known event type."""
    return jsonify({
        event_type.value: classify_event(event_type).to_dict()
        for event_type in EventType
        if event_type is not EventType.UNKNOWN
    })


@app.route('/api/integrity/report', methods=['POST'])
def integrity_report():
    """Score a session's proctoring events and build its report."""
    data = request.get_json(silent=True)
    is_valid, errors = validate_report_request(data)
    if not is_valid:
        return jsonify({'error': 'Invalid request', 'details': errors}), 400

    try:
        events = events_from_dicts(data['events'])
        session_end = parse_timestamp(data['session_end']) if data.get('session_end') else None
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    try:
        config = _engine_config()
        policy = config.scoring_policy

        # Caller supplied time away always wins over derivation
        if 'total_time_away_seconds' in data:
            time_away = data['total_time_away_seconds']
            time_away_source = 'caller'
        elif data.get('derive_time_away'):
            time_away = derive_time_away_seconds(events, session_end=session_end)
            time_away_source = 'derived'
        else:
            time_away = 0
            time_away_source = 'none'

        scorer = IntegrityScorer(policy)
        report = scorer.compute_integrity_report(events, time_away)
        teacher_name = data.get('teacher_name') or 'Your Teacher'

        result = {
            'report': report.to_dict(),
            'time_away_source': time_away_source,
            'band': scorer.score_band(report).label,
            'breakdown': build_score_breakdown(report, policy).to_dict(),
            'timeline': build_timeline(report),
            'summary': summarize_report(report, policy, teacher_name),
            'warning': get_warning_status(report.violation_count, config.max_violations).to_dict()
        }

        logger.info(f"Integrity report computed: score={report.integrity_score}, "
                    f"violations={report.violation_count}, events={report.total_events}")
        return jsonify(result)

    except Exception as e:
        logger.error(f"Error computing integrity report: {e}")
        return jsonify({'error': str(e)}), 500


@app.route('/api/polls/wordcloud', methods=['POST'])
def poll_wordcloud():
    """Aggregate poll responses into a word cloud."""
    data = request.get_json(silent=True)
    is_valid, errors = validate_wordcloud_request(data)
    if not is_valid:
        return jsonify({'error': 'Invalid request', 'details': errors}), 400

    try:
        config = _engine_config()
        responses = data['responses']
        is_teacher = data.get('view', 'teacher') == 'teacher'
        min_responses = config.teacher_min_responses if is_teacher else config.student_min_responses

        options = WordCloudOptions(
            max_words=data.get('max_words') or config.wordcloud_max_words,
            min_responses=min_responses,
            exclude_numbers=data.get('exclude_numbers', config.wordcloud_exclude_numbers)
        )
        words = WordCloudAggregator(options).aggregate(responses)
        shown, remaining = top_responses(responses)

        return jsonify({
            'words': [entry.to_dict() for entry in words],
            'total_responses': len(responses),
            'min_responses': min_responses,
            'gated': len(responses) < min_responses,
            'top_responses': shown,
            'remaining_responses': remaining
        })

    except Exception as e:
        logger.error(f"Error aggregating word cloud: {e}")
        return jsonify({'error': str(e)}), 500


@app.errorhandler(404)
def not_found(error):
    """Handle 404 errors."""
    return jsonify({'error': 'Not found'}), 404


@app.errorhandler(405)
def method_not_allowed(error):
    """Handle 405 errors."""
    return jsonify({'error': 'Method not allowed'}), 405


if __name__ == '__main__':
    setup_logging('integrity_engine', log_file=os.environ.get('LOG_FILE'))
    setup_logging('poll_analytics', log_file=os.environ.get('LOG_FILE'))
    setup_logging(__name__, log_file=os.environ.get('LOG_FILE'))

    debug_mode = os.environ.get('FLASK_ENV') == 'development'
    port = int(os.environ.get('PORT', 5000))

    logger.info(f"Starting Flask server on port {port} (debug={debug_mode})")
    app.run(host='0.0.0.0', port=port, debug=debug_mode)
