"""Dictionary-backed stores, interchangeable with the ORM ones."""
import itertools
import threading
import uuid
from contextlib import contextmanager
from dataclasses import replace

from ..domain.state import ReviewRecord, VerseRecord
from .ports import ReviewStore, VerseStore, latest_per_verse


class InMemoryReviewStore(ReviewStore):
    def __init__(self):
        self._rows = []  # insertion order
        self._ids = itertools.count(1)
        self._mutex = threading.Lock()

    def append(self, verse_id, user_id, quality, result, created_at):
        with self._mutex:
            review = ReviewRecord(
                id=next(self._ids), verse_id=verse_id, user_id=user_id, quality=quality,
                ease_factor=result.ease_factor, interval=result.interval,
                repetitions=result.repetitions, next_review_at=result.next_review_at,
                created_at=created_at,
            )
            self._rows.append(review)
        return review

    def _ordered(self, rows):
        return sorted(rows, key=lambda r: (r.created_at, r.id))

    def _snapshot(self):
        with self._mutex:
            return list(self._rows)

    def latest_review(self, verse_id):
        rows = self._ordered(r for r in self._snapshot() if r.verse_id == verse_id)
        return rows[-1] if rows else None

    def latest_by_verse(self, user_id):
        return latest_per_verse(
            self._ordered(r for r in self._snapshot() if r.user_id == user_id)
        )

    def scan(self, user_id, verse_id=None, since=None, newest_first=False, limit=None):
        rows = [
            r for r in self._snapshot()
            if r.user_id == user_id
            and (verse_id is None or r.verse_id == verse_id)
            and (since is None or r.created_at >= since)
        ]
        rows = self._ordered(rows)
        if newest_first:
            rows.reverse()
        if limit is not None:
            rows = rows[:limit]
        return rows

    def count_for_user(self, user_id):
        return sum(1 for r in self._snapshot() if r.user_id == user_id)

    def purge_verse(self, verse_id):
        with self._mutex:
            self._rows = [r for r in self._rows if r.verse_id != verse_id]


class InMemoryVerseStore(VerseStore):
    def __init__(self, reviews: InMemoryReviewStore):
        self._reviews = reviews
        self._verses = {}
        self._mutex = threading.Lock()
        self._verse_locks = {}

    def add(self, user_id, reference, text, translation, created_at):
        verse = VerseRecord(
            id=uuid.uuid4(), user_id=user_id, reference=reference, text=text,
            translation=translation, created_at=created_at, updated_at=created_at,
        )
        with self._mutex:
            self._verses[verse.id] = verse
        return verse

    def get(self, verse_id, user_id):
        verse = self._verses.get(verse_id)
        if verse is None or verse.user_id != user_id:
            return None
        return verse

    def list_for_user(self, user_id):
        with self._mutex:
            owned = [v for v in self._verses.values() if v.user_id == user_id]
        return sorted(owned, key=lambda v: v.created_at, reverse=True)

    def update(self, verse_id, user_id, fields, updated_at):
        with self.locked(verse_id, user_id) as verse:
            if verse is None:
                return None
            updated = replace(verse, updated_at=updated_at, **fields)
            with self._mutex:
                self._verses[verse_id] = updated
            return updated

    def delete(self, verse_id, user_id):
        with self.locked(verse_id, user_id) as verse:
            if verse is None:
                return False
            with self._mutex:
                del self._verses[verse_id]
            self._reviews.purge_verse(verse_id)
            with self._mutex:
                self._verse_locks.pop(verse_id, None)
            return True

    def count_for_user(self, user_id):
        with self._mutex:
            return sum(1 for v in self._verses.values() if v.user_id == user_id)

    def _lock_for(self, verse_id):
        with self._mutex:
            return self._verse_locks.setdefault(verse_id, threading.Lock())

    @contextmanager
    def locked(self, verse_id, user_id):
        with self._lock_for(verse_id):
            yield self.get(verse_id, user_id)
