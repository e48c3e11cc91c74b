"""
Tests for word cloud aggregation and text normalization
"""

import pytest

from poll_analytics.text import is_numeric_token, normalize_text, tokenize
from poll_analytics.wordcloud import (
    WordCloudAggregator, WordCloudOptions, aggregate, min_responses_for_view
)


def as_pairs(entries):
    return [(entry.text, entry.value) for entry in entries]


class TestNormalization:

    def test_lowercases_and_strips_punctuation(self):
        assert tokenize("  Hello, World!!  It's GREAT.") == ["hello", "world", "its", "great"]

    def test_whitespace_variants_split_tokens(self):
        assert tokenize("one\ttwo\nthree") == ["one", "two", "three"]

    def test_unicode_letters_survive(self):
        assert tokenize("Café naïve, Привет! 日本語") == ["café", "naïve", "привет", "日本語"]

    def test_combining_marks_are_kept(self):
        assert normalize_text("नमस्ते।") == "नमस्ते"

    def test_numeric_tokens(self):
        assert is_numeric_token("2026")
        assert is_numeric_token("٣")
        assert not is_numeric_token("b12")
        assert not is_numeric_token("")


class TestAggregate:

    def test_basic_example(self):
        result = aggregate(["fun", "fun", "hard", "the fun"], WordCloudOptions(max_words=None, min_responses=0))
        assert [entry.to_dict() for entry in result] == [
            {"text": "fun", "value": 3},
            {"text": "hard", "value": 1},
        ]

    def test_counts_across_the_whole_batch(self):
        result = aggregate(["math math math", "Math, math!"])
        assert as_pairs(result) == [("math", 5)]

    def test_gate_returns_empty_below_minimum(self):
        options = WordCloudOptions(min_responses=5)
        assert aggregate(["photosynthesis", "chlorophyll", "sunlight", "leaves"], options) == []

    def test_gate_passes_at_minimum(self):
        options = WordCloudOptions(min_responses=2)
        assert as_pairs(aggregate(["energy", "energy"], options)) == [("energy", 2)]

    def test_view_gates(self):
        assert min_responses_for_view(is_teacher=True) == 1
        assert min_responses_for_view(is_teacher=False) == 5

    def test_stopword_only_response_contributes_nothing(self):
        assert aggregate(["the a an of"]) == []
        assert as_pairs(aggregate(["The A an OF", "gravity"])) == [("gravity", 1)]

    def test_empty_and_punctuation_only_responses(self):
        assert aggregate(["", "   ", "?!...", "---"]) == []
        assert aggregate([]) == []

    def test_truncation_keeps_first_seen_order_on_ties(self):
        words = [f"word{i}" for i in range(100)]
        result = aggregate([" ".join(words)], WordCloudOptions(max_words=50))
        assert len(result) == 50
        assert [entry.text for entry in result] == words[:50]

    def test_higher_counts_rank_first(self):
        result = aggregate(["alpha beta gamma", "gamma beta", "gamma"], WordCloudOptions(max_words=2))
        assert as_pairs(result) == [("gamma", 3), ("beta", 2)]

    def test_deterministic_output(self):
        responses = ["red blue", "blue green", "green red", "yellow"]
        first = aggregate(responses)
        second = aggregate(list(responses))
        assert first == second
        assert [entry.text for entry in first] == ["red", "blue", "green", "yellow"]

    def test_numbers_kept_unless_excluded(self):
        responses = ["42 is the answer", "answer 42"]
        assert as_pairs(aggregate(responses)) == [("42", 2), ("answer", 2)]
        excluded = aggregate(responses, WordCloudOptions(exclude_numbers=True))
        assert as_pairs(excluded) == [("answer", 2)]

    def test_custom_stopwords_are_normalized(self):
        options = WordCloudOptions(stopwords=frozenset({"Cells", "ATP!"}))
        result = aggregate(["cells make ATP", "the cells"], options)
        assert as_pairs(result) == [("make", 1), ("the", 1)]

    def test_unicode_responses_are_counted(self):
        result = aggregate(["Énergie solaire", "énergie", "太陽"])
        assert as_pairs(result) == [("énergie", 2), ("solaire", 1), ("太陽", 1)]

    def test_non_string_items_are_skipped(self):
        assert as_pairs(aggregate(["plants", None, 7, "plants"])) == [("plants", 2)]

    def test_none_responses_fail_fast(self):
        with pytest.raises(TypeError):
            aggregate(None)

    def test_invalid_options(self):
        with pytest.raises(ValueError):
            WordCloudOptions(max_words=0)
        with pytest.raises(ValueError):
            WordCloudOptions(min_responses=-1)

    def test_aggregator_is_reusable(self):
        aggregator = WordCloudAggregator(WordCloudOptions(max_words=3))
        first = aggregator.aggregate(["volcano"])
        second = aggregator.aggregate(["volcano", "magma"])
        assert as_pairs(first) == [("volcano", 1)]
        assert as_pairs(second) == [("volcano", 1), ("magma", 1)]
