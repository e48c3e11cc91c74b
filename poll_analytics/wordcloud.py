"""
Word Cloud Aggregator - Ranked term frequencies for free-text poll responses.

Each call recomputes the table from the full response list, so the live
poll view can simply re-run it whenever a new response arrives.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Optional, Sequence

from .text import STOPWORDS, build_stopword_set, is_numeric_token, tokenize


logger = logging.getLogger(__name__)

# Minimum responses before the cloud is shown
STUDENT_MIN_RESPONSES = 5
TEACHER_MIN_RESPONSES = 1

DEFAULT_MAX_WORDS = 50


def min_responses_for_view(is_teacher: bool) -> int:
    """Sample size gate for the instructor or the student view."""
    return TEACHER_MIN_RESPONSES if is_teacher else STUDENT_MIN_RESPONSES


@dataclass(frozen=True)
class WordCloudOptions:
    """
    Aggregation options.

    max_words of None disables truncation; stopwords of None uses the
    built-in English set.
    """
    max_words: Optional[int] = DEFAULT_MAX_WORDS
    min_responses: int = TEACHER_MIN_RESPONSES
    exclude_numbers: bool = False
    stopwords: Optional[FrozenSet[str]] = None

    def __post_init__(self):
        if self.max_words is not None and self.max_words <= 0:
            raise ValueError(f"max_words must be positive, got {self.max_words}")
        if self.min_responses < 0:
            raise ValueError(f"min_responses must be non-negative, got {self.min_responses}")


@dataclass(frozen=True)
class WordFrequencyEntry:
    """One word of the cloud and how often it occurred."""
    text: str
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {'text': self.text, 'value': self.value}


class WordCloudAggregator:
    """
    Builds word frequency tables from poll responses.
    """

    def __init__(self, options: Optional[WordCloudOptions] = None):
        """
        Initialize the aggregator.

        Args:
            options: Aggregation options, defaults to 50 words and no gate
        """
        self.options = options or WordCloudOptions()
        if self.options.stopwords is None:
            self.stopwords = STOPWORDS
        else:
            self.stopwords = build_stopword_set(self.options.stopwords)

    def _keep(self, token: str) -> bool:
        if token in self.stopwords:
            return False
        if self.options.exclude_numbers and is_numeric_token(token):
            return False
        return True

    def count_terms(self, responses: Sequence[str]) -> Dict[str, int]:
        """
        Count surviving tokens across the whole batch.

        The returned dict preserves first-seen order.
        """
        counts: Dict[str, int] = {}
        for response in responses:
            if not isinstance(response, str):
                logger.warning(f"Skipping non-text poll response of type {type(response).__name__}")
                continue
            for token in tokenize(response):
                if self._keep(token):
                    counts[token] = counts.get(token, 0) + 1
        return counts

    def aggregate(self, responses: Sequence[str]) -> List[WordFrequencyEntry]:
        """
        Aggregate responses into a ranked word frequency table.

        Args:
            responses: Free-text responses

        Returns:
            Entries sorted by count descending, ties in first-seen order,
            truncated to max_words; empty below the min_responses gate

        Raises:
            TypeError: If responses is None
        """
        if responses is None:
            raise TypeError("responses must be a sequence, not None")

        if len(responses) < self.options.min_responses:
            logger.debug(f"Word cloud gated: {len(responses)} of {self.options.min_responses} responses")
            return []

        counts = self.count_terms(responses)
        # sorted() is stable, so equal counts keep first-seen order
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        if self.options.max_words is not None:
            ranked = ranked[:self.options.max_words]

        logger.debug(f"Aggregated {len(responses)} responses into {len(counts)} distinct terms, "
                     f"returning {len(ranked)}")
        return [WordFrequencyEntry(text=text, value=value) for text, value in ranked]


def aggregate(responses: Sequence[str],
              options: Optional[WordCloudOptions] = None) -> List[WordFrequencyEntry]:
    """Aggregate responses with the given (or default) options."""
    return WordCloudAggregator(options).aggregate(responses)
