"""SM-2 scheduling.

Quality ratings run from 0 (complete blackout) to 5 (perfect recall).
A rating below 3 is a failure: repetitions and interval reset and the ease
factor is left alone. A passing rating grows the ease factor (never below
1.3, no ceiling) and advances the interval: 1 day, then 6 days, then the
previous interval multiplied by the new ease factor.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from ..config import (
    FIRST_INTERVAL_DAYS,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    MIN_QUALITY,
    PASSING_QUALITY,
    SECOND_INTERVAL_DAYS,
)
from ..errors import ValidationError
from .state import ReviewRecord, ScheduleResult, ScheduleState


def validate_quality(quality) -> int:
    # bool is an int subclass but never a rating
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise ValidationError(
            f"Quality must be an integer between {MIN_QUALITY} and {MAX_QUALITY}",
            details={"quality": repr(quality)},
        )
    if quality < MIN_QUALITY or quality > MAX_QUALITY:
        raise ValidationError(
            f"Quality must be between {MIN_QUALITY} and {MAX_QUALITY}",
            details={"quality": quality},
        )
    return int(quality)


def round_half_away_from_zero(value: float) -> int:
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def next_ease_factor(ease_factor: float, quality: int) -> float:
    miss = MAX_QUALITY - quality
    updated = ease_factor + (0.1 - miss * (0.08 + miss * 0.02))
    return max(MIN_EASE_FACTOR, updated)


def _add_days(moment, days):
    try:
        return moment + timedelta(days=days)
    except OverflowError:
        # interval has outgrown the calendar
        return datetime.max.replace(tzinfo=moment.tzinfo)


def schedule_next(
    quality: int, previous: ScheduleState | None, now: datetime
) -> ScheduleResult:
    quality = validate_quality(quality)
    if previous is None:
        previous = ScheduleState.initial()

    if quality < PASSING_QUALITY:
        ease_factor = previous.ease_factor
        interval = FIRST_INTERVAL_DAYS
        repetitions = 0
    else:
        ease_factor = next_ease_factor(previous.ease_factor, quality)
        if previous.repetitions == 0:
            interval = FIRST_INTERVAL_DAYS
        elif previous.repetitions == 1:
            interval = SECOND_INTERVAL_DAYS
        else:
            interval = round_half_away_from_zero(previous.interval * ease_factor)
        repetitions = previous.repetitions + 1

    return ScheduleResult(
        ease_factor=ease_factor,
        interval=interval,
        repetitions=repetitions,
        next_review_at=_add_days(now, interval),
    )


def is_due(latest: ReviewRecord | None, as_of: datetime) -> bool:
    """A never-reviewed verse is always due."""
    if latest is None:
        return True
    return latest.next_review_at <= as_of
