"""
Poll result helpers for the response list and vote percentages.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import List, Sequence, Tuple


DEFAULT_TOP_RESPONSES = 20


def top_responses(responses: Sequence[str],
                  limit: int = DEFAULT_TOP_RESPONSES) -> Tuple[List[str], int]:
    """
    Distinct responses for the "top responses" list.

    Responses are trimmed, blanks dropped and duplicates removed with the
    first occurrence kept.

    Args:
        responses: Raw responses in arrival order
        limit: Number of responses to show

    Returns:
        Tuple of (shown_responses, remaining_count)
    """
    if responses is None:
        raise TypeError("responses must be a sequence, not None")

    seen = set()
    distinct = []
    for response in responses:
        if not isinstance(response, str):
            continue
        text = response.strip()
        if text and text not in seen:
            seen.add(text)
            distinct.append(text)

    shown = distinct[:limit]
    return shown, len(distinct) - len(shown)


def calculate_percentage(count: int, total: int) -> int:
    """
    Whole-number percentage, rounding halves up; 0 when total is 0.
    """
    if total <= 0:
        return 0
    ratio = Decimal(count) * 100 / Decimal(total)
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def participation_percentage(response_count: int, student_count: int) -> int:
    """Share of enrolled students who responded."""
    return calculate_percentage(response_count, student_count)
