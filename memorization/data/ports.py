"""Storage interfaces the ledger and catalogue are written against.

``repos`` implements them on the Django ORM, ``memory`` on plain dicts.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Any, Iterable
from uuid import UUID

from ..domain.state import ReviewRecord, ScheduleResult, VerseRecord


class VerseStore(ABC):
    @abstractmethod
    def add(self, user_id: Any, reference: str, text: str, translation: str,
            created_at: datetime) -> VerseRecord: ...

    @abstractmethod
    def get(self, verse_id: UUID, user_id: Any) -> VerseRecord | None:
        """Ownership-checked lookup."""

    @abstractmethod
    def list_for_user(self, user_id: Any) -> list[VerseRecord]:
        """Newest first."""

    @abstractmethod
    def update(self, verse_id: UUID, user_id: Any, fields: dict,
               updated_at: datetime) -> VerseRecord | None: ...

    @abstractmethod
    def delete(self, verse_id: UUID, user_id: Any) -> bool:
        """Delete the verse and every review of it."""

    @abstractmethod
    def count_for_user(self, user_id: Any) -> int: ...

    @abstractmethod
    def locked(self, verse_id: UUID, user_id: Any) -> AbstractContextManager[VerseRecord | None]:
        """Hold the verse exclusively for a read-compute-append sequence.

        Yields the owned verse, or None when it does not belong to the user.
        An exception raised inside the block must leave nothing written.
        """


class ReviewStore(ABC):
    @abstractmethod
    def append(self, verse_id: UUID, user_id: Any, quality: int,
               result: ScheduleResult, created_at: datetime) -> ReviewRecord: ...

    @abstractmethod
    def latest_review(self, verse_id: UUID) -> ReviewRecord | None:
        """Most recently created review, ties broken by insertion order."""

    @abstractmethod
    def latest_by_verse(self, user_id: Any) -> dict[UUID, ReviewRecord]: ...

    @abstractmethod
    def scan(self, user_id: Any, verse_id: UUID | None = None,
             since: datetime | None = None, newest_first: bool = False,
             limit: int | None = None) -> list[ReviewRecord]: ...

    @abstractmethod
    def count_for_user(self, user_id: Any) -> int: ...


def latest_per_verse(reviews: Iterable[ReviewRecord]) -> dict[UUID, ReviewRecord]:
    """Fold oldest-first reviews down to the last one per verse."""
    latest = {}
    for review in reviews:
        latest[review.verse_id] = review
    return latest
