"""
Time Away Helpers - Optional derivations of time spent away from an assessment.

The integrity report takes time away from the caller. These helpers let a
caller derive a figure from the event stream itself when it has no better
source.
"""

import logging
import numbers
from datetime import datetime
from typing import Iterable, Optional, Sequence

import numpy as np

from .models import EventType, ProctoringEvent


logger = logging.getLogger(__name__)


def derive_time_away_seconds(
    events: Sequence[ProctoringEvent],
    session_end: Optional[datetime] = None,
    away_types: Iterable[EventType] = (EventType.BLUR,)
) -> float:
    """
    Sum the gaps from each away-starting event to the event after it.

    A trailing away event is closed by session_end when one is given and
    otherwise contributes nothing.

    Args:
        events: Session events in received order
        session_end: Optional end of the session
        away_types: Event types that start a period away

    Returns:
        Total seconds away, never negative
    """
    if events is None:
        raise TypeError("events must be a sequence, not None")
    if not events:
        return 0.0

    away_types = frozenset(away_types)
    times = np.array([event.timestamp.timestamp() for event in events], dtype=float)
    if session_end is not None:
        times = np.append(times, session_end.timestamp())

    gaps = np.diff(times)
    starts = np.array([event.event_type in away_types for event in events], dtype=bool)
    if session_end is None:
        # the last event has no successor to close it
        starts = starts[:-1]

    # equal or out-of-order timestamps must not subtract time
    total = float(np.clip(gaps[starts], 0.0, None).sum())
    logger.debug(f"Derived {total:.1f}s away from {int(starts.sum())} away periods")
    return total


def reported_time_away_seconds(events: Sequence[ProctoringEvent]) -> float:
    """
    Sum the away_seconds the browser recorded on focus_return events.

    Non-numeric, non-finite or negative values are ignored.
    """
    if events is None:
        raise TypeError("events must be a sequence, not None")

    values = []
    for event in events:
        if event.event_type is not EventType.FOCUS_RETURN:
            continue
        value = event.details.get('away_seconds')
        if isinstance(value, numbers.Real) and not isinstance(value, bool) and np.isfinite(value) and value >= 0:
            values.append(float(value))
        elif value is not None:
            logger.warning(f"Ignoring invalid away_seconds on focus_return: {value!r}")

    return float(np.sum(values)) if values else 0.0
