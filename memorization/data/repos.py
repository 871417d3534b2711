from contextlib import contextmanager

from django.db import transaction

from ..domain.state import ReviewRecord, VerseRecord
from .models import Review, Verse
from .ports import ReviewStore, VerseStore, latest_per_verse


def _verse_record(row):
    return VerseRecord(
        id=row.id, user_id=row.user_id, reference=row.reference, text=row.text,
        translation=row.translation, created_at=row.created_at, updated_at=row.updated_at,
    )


def _review_record(row):
    return ReviewRecord(
        id=row.id, verse_id=row.verse_id, user_id=row.user_id, quality=row.quality,
        ease_factor=row.ease_factor, interval=row.interval, repetitions=row.repetitions,
        next_review_at=row.next_review_at, created_at=row.created_at,
    )


class DjangoVerseStore(VerseStore):
    def add(self, user_id, reference, text, translation, created_at):
        row = Verse.objects.create(
            user_id=user_id, reference=reference, text=text, translation=translation,
            created_at=created_at, updated_at=created_at,
        )
        return _verse_record(row)

    def get(self, verse_id, user_id):
        row = Verse.objects.filter(pk=verse_id, user_id=user_id).first()
        return _verse_record(row) if row else None

    def list_for_user(self, user_id):
        rows = Verse.objects.filter(user_id=user_id).order_by("-created_at", "-pk")
        return [_verse_record(row) for row in rows]

    def update(self, verse_id, user_id, fields, updated_at):
        with transaction.atomic():
            row = (Verse.objects
                   .select_for_update()
                   .filter(pk=verse_id, user_id=user_id)
                   .first())
            if row is None:
                return None
            for name, value in fields.items():
                setattr(row, name, value)
            row.updated_at = updated_at
            row.save(update_fields=[*fields, "updated_at"])
        return _verse_record(row)

    def delete(self, verse_id, user_id):
        # Review rows go with the verse through the FK cascade
        deleted, _ = Verse.objects.filter(pk=verse_id, user_id=user_id).delete()
        return deleted > 0

    def count_for_user(self, user_id):
        return Verse.objects.filter(user_id=user_id).count()

    @contextmanager
    def locked(self, verse_id, user_id):
        """
        Lock the verse row for the duration of the block so concurrent
        reviews of the same verse serialize. The block runs in one
        transaction; an exception rolls back anything it appended.
        """
        with transaction.atomic():
            row = (Verse.objects
                   .select_for_update()
                   .filter(pk=verse_id, user_id=user_id)
                   .first())
            yield _verse_record(row) if row else None


class DjangoReviewStore(ReviewStore):
    def append(self, verse_id, user_id, quality, result, created_at):
        row = Review.objects.create(
            verse_id=verse_id, user_id=user_id, quality=quality,
            ease_factor=result.ease_factor, interval=result.interval,
            repetitions=result.repetitions, next_review_at=result.next_review_at,
            created_at=created_at,
        )
        return _review_record(row)

    def latest_review(self, verse_id):
        row = (Review.objects
               .filter(verse_id=verse_id)
               .order_by("-created_at", "-pk")
               .first())
        return _review_record(row) if row else None

    def latest_by_verse(self, user_id):
        rows = Review.objects.filter(user_id=user_id).order_by("created_at", "pk")
        return latest_per_verse(_review_record(row) for row in rows)

    def scan(self, user_id, verse_id=None, since=None, newest_first=False, limit=None):
        qs = Review.objects.filter(user_id=user_id)
        if verse_id is not None:
            qs = qs.filter(verse_id=verse_id)
        if since is not None:
            qs = qs.filter(created_at__gte=since)
        if newest_first:
            qs = qs.order_by("-created_at", "-pk")
        else:
            qs = qs.order_by("created_at", "pk")
        if limit is not None:
            qs = qs[:limit]
        return [_review_record(row) for row in qs]

    def count_for_user(self, user_id):
        return Review.objects.filter(user_id=user_id).count()
