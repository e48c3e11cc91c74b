"""
Poll Analytics Package - Word clouds and result helpers for live polls.
"""

from .text import STOPWORDS, normalize_text, tokenize
from .wordcloud import (
    WordCloudAggregator, WordCloudOptions, WordFrequencyEntry, aggregate,
    min_responses_for_view, STUDENT_MIN_RESPONSES, TEACHER_MIN_RESPONSES
)
from .results import top_responses, calculate_percentage, participation_percentage

__all__ = [
    'STOPWORDS',
    'normalize_text',
    'tokenize',
    'WordCloudAggregator',
    'WordCloudOptions',
    'WordFrequencyEntry',
    'aggregate',
    'min_responses_for_view',
    'STUDENT_MIN_RESPONSES',
    'TEACHER_MIN_RESPONSES',
    'top_responses',
    'calculate_percentage',
    'participation_percentage',
]
