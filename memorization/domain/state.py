from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from ..config import DEFAULT_EASE_FACTOR, DEFAULT_INTERVAL_DAYS, DEFAULT_REPETITIONS


@dataclass(frozen=True)
class ScheduleState:
    """Scheduling parameters carried from one review to the next."""

    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = DEFAULT_INTERVAL_DAYS
    repetitions: int = DEFAULT_REPETITIONS

    @classmethod
    def initial(cls) -> "ScheduleState":
        return cls()


@dataclass(frozen=True)
class ScheduleResult:
    ease_factor: float
    interval: int
    repetitions: int
    next_review_at: datetime

    @property
    def state(self) -> ScheduleState:
        return ScheduleState(self.ease_factor, self.interval, self.repetitions)


@dataclass(frozen=True)
class VerseRecord:
    id: UUID
    user_id: Any
    reference: str
    text: str
    translation: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ReviewRecord:
    id: int
    verse_id: UUID
    user_id: Any
    quality: int
    ease_factor: float
    interval: int
    repetitions: int
    next_review_at: datetime
    created_at: datetime

    @property
    def state(self) -> ScheduleState:
        return ScheduleState(self.ease_factor, self.interval, self.repetitions)


@dataclass(frozen=True)
class VerseStatus:
    verse: VerseRecord
    latest_review: ReviewRecord | None
    due: bool

    @property
    def state(self) -> ScheduleState:
        if self.latest_review is None:
            return ScheduleState.initial()
        return self.latest_review.state


@dataclass
class DayTally:
    count: int = 0
    total_quality: int = 0


@dataclass(frozen=True)
class ReviewStats:
    total_reviews: int
    average_quality: float
    reviews_by_date: dict[str, DayTally] = field(default_factory=dict)
    days: int = 0


@dataclass(frozen=True)
class VerseStats:
    total_verses: int
    verses_due: int
    total_reviews: int
