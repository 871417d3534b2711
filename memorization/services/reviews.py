from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal

import structlog

from ..config import DEFAULT_HISTORY_LIMIT, DEFAULT_STATS_WINDOW_DAYS, MAX_HISTORY_LIMIT
from ..data.repos import DjangoReviewStore, DjangoVerseStore
from ..domain.sm2 import is_due, schedule_next, validate_quality
from ..domain.state import DayTally, ReviewStats, ScheduleState, VerseStats, VerseStatus
from ..errors import NotFoundError, ValidationError
from ..utils.time import utc_date_key, utc_now

logger = structlog.get_logger()


def _mean_to_one_decimal(values):
    """Mean rounded half away from zero to one decimal; 0.0 when empty."""
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return float(Decimal(str(mean)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class ReviewLedger:
    """Append-only review history and everything derived from it.

    ``record_review`` is the only write; every other method is a full-scan
    read over the stores at call time.
    """

    def __init__(self, verses, reviews, clock=utc_now):
        self.verses = verses
        self.reviews = reviews
        self.clock = clock

    def current_state_of(self, verse_id) -> ScheduleState:
        latest = self.reviews.latest_review(verse_id)
        return latest.state if latest else ScheduleState.initial()

    def status_of(self, verse, as_of=None) -> VerseStatus:
        as_of = as_of or self.clock()
        latest = self.reviews.latest_review(verse.id)
        return VerseStatus(verse=verse, latest_review=latest, due=is_due(latest, as_of))

    def is_due(self, verse_id, as_of=None) -> bool:
        return is_due(self.reviews.latest_review(verse_id), as_of or self.clock())

    def overview(self, user_id, as_of=None) -> list[VerseStatus]:
        as_of = as_of or self.clock()
        latest = self.reviews.latest_by_verse(user_id)
        return [
            VerseStatus(verse=v, latest_review=latest.get(v.id), due=is_due(latest.get(v.id), as_of))
            for v in self.verses.list_for_user(user_id)
        ]

    def due_set(self, user_id, as_of=None) -> list[VerseStatus]:
        return [status for status in self.overview(user_id, as_of) if status.due]

    def record_review(self, user_id, verse_id, quality, as_of=None):
        logger.info("review_received",
            user_id=str(user_id),
            verse_id=str(verse_id),
            quality=quality,
        )
        quality = validate_quality(quality)
        reviewed_at = as_of or self.clock()

        # Serialize read-compute-append per verse
        with self.verses.locked(verse_id, user_id) as verse:
            if verse is None:
                logger.info("review_rejected_unknown_verse",
                    user_id=str(user_id),
                    verse_id=str(verse_id),
                )
                raise NotFoundError("Verse not found")
            previous = self.current_state_of(verse.id)
            result = schedule_next(quality, previous, reviewed_at)
            review = self.reviews.append(verse.id, user_id, quality, result, reviewed_at)

        logger.info("review_scheduled",
            user_id=str(user_id),
            verse_id=str(verse_id),
            quality=quality,
            ease_factor=review.ease_factor,
            interval_days=review.interval,
            repetitions=review.repetitions,
            next_review_utc=review.next_review_at.isoformat(),
        )
        return review

    def reviews_for_verse(self, user_id, verse_id):
        if self.verses.get(verse_id, user_id) is None:
            raise NotFoundError("Verse not found")
        return self.reviews.scan(user_id, verse_id=verse_id, newest_first=True)

    def review_history(self, user_id, limit=DEFAULT_HISTORY_LIMIT):
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValidationError("Limit must be a positive integer", details={"limit": limit})
        limit = min(limit, MAX_HISTORY_LIMIT)
        return self.reviews.scan(user_id, newest_first=True, limit=limit)

    def review_stats(self, user_id, window_days=DEFAULT_STATS_WINDOW_DAYS) -> ReviewStats:
        if isinstance(window_days, bool) or not isinstance(window_days, int) or window_days < 0:
            raise ValidationError(
                "Days must be a non-negative integer", details={"days": window_days}
            )
        since = self.clock() - timedelta(days=window_days)
        reviews = self.reviews.scan(user_id, since=since)

        by_date = {}
        for review in reviews:
            tally = by_date.setdefault(utc_date_key(review.created_at), DayTally())
            tally.count += 1
            tally.total_quality += review.quality

        return ReviewStats(
            total_reviews=len(reviews),
            average_quality=_mean_to_one_decimal([r.quality for r in reviews]),
            reviews_by_date=dict(sorted(by_date.items())),
            days=window_days,
        )

    def verse_stats(self, user_id, as_of=None) -> VerseStats:
        overview = self.overview(user_id, as_of)
        return VerseStats(
            total_verses=len(overview),
            verses_due=sum(1 for status in overview if status.due),
            total_reviews=self.reviews.count_for_user(user_id),
        )


def get_ledger(clock=utc_now):
    return ReviewLedger(DjangoVerseStore(), DjangoReviewStore(), clock=clock)
