import threading
from datetime import datetime, timedelta, timezone

import pytest
from django.db import connection

from memorization.data.models import Review, Verse
from memorization.data.repos import DjangoReviewStore, DjangoVerseStore
from memorization.errors import ImmutableReviewError, NotFoundError
from memorization.services.reviews import ReviewLedger, get_ledger
from memorization.services.verses import VerseCatalog

NOW = datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def orm_ledger():
    return ReviewLedger(DjangoVerseStore(), DjangoReviewStore(), clock=lambda: NOW)


@pytest.fixture
def orm_catalog():
    return VerseCatalog(DjangoVerseStore(), clock=lambda: NOW)


@pytest.mark.django_db
def test_record_review_persists_row(user, orm_ledger, orm_catalog):
    verse = orm_catalog.create_verse(user.pk, "John 3:16", "For God so loved the world")

    review = orm_ledger.record_review(user.pk, verse.id, 5)

    row = Review.objects.get(pk=review.id)
    assert row.verse_id == verse.id
    assert row.user_id == user.pk
    assert row.quality == 5
    assert row.interval == 1
    assert row.repetitions == 1
    assert row.created_at == NOW
    assert row.next_review_at == NOW + timedelta(days=1)


@pytest.mark.django_db
def test_latest_review_breaks_timestamp_ties_by_insertion(user, orm_ledger, orm_catalog):
    verse = orm_catalog.create_verse(user.pk, "John 3:16", "For God so loved the world")
    orm_ledger.record_review(user.pk, verse.id, 5)
    second = orm_ledger.record_review(user.pk, verse.id, 5)

    latest = orm_ledger.reviews.latest_review(verse.id)

    assert latest.id == second.id
    assert latest.repetitions == 2
    assert latest.interval == 6


@pytest.mark.django_db
def test_reviews_are_append_only(user, orm_ledger, orm_catalog):
    verse = orm_catalog.create_verse(user.pk, "John 3:16", "For God so loved the world")
    review = orm_ledger.record_review(user.pk, verse.id, 4)
    row = Review.objects.get(pk=review.id)

    row.quality = 0
    with pytest.raises(ImmutableReviewError):
        row.save()
    with pytest.raises(ImmutableReviewError):
        row.delete()

    assert Review.objects.get(pk=review.id).quality == 4


@pytest.mark.django_db
def test_delete_verse_cascades_reviews(user, orm_ledger, orm_catalog):
    verse = orm_catalog.create_verse(user.pk, "John 3:16", "For God so loved the world")
    orm_ledger.record_review(user.pk, verse.id, 4)
    orm_ledger.record_review(user.pk, verse.id, 1)

    orm_catalog.delete_verse(user.pk, verse.id)

    assert not Verse.objects.filter(pk=verse.id).exists()
    assert not Review.objects.filter(verse_id=verse.id).exists()
    assert orm_ledger.review_history(user.pk) == []


@pytest.mark.django_db
def test_ownership_is_enforced(user, django_user_model, orm_ledger, orm_catalog):
    other = django_user_model.objects.create_user(username="someone-else")
    verse = orm_catalog.create_verse(other.pk, "John 3:16", "For God so loved the world")

    with pytest.raises(NotFoundError):
        orm_catalog.get_verse(user.pk, verse.id)
    with pytest.raises(NotFoundError):
        orm_catalog.delete_verse(user.pk, verse.id)
    with pytest.raises(NotFoundError):
        orm_ledger.record_review(user.pk, verse.id, 5)

    assert Review.objects.count() == 0
    assert Verse.objects.filter(pk=verse.id).exists()


@pytest.mark.django_db
def test_failed_append_writes_nothing(user, orm_catalog, monkeypatch):
    verse = orm_catalog.create_verse(user.pk, "John 3:16", "For God so loved the world")
    store = DjangoReviewStore()
    ledger = ReviewLedger(DjangoVerseStore(), store, clock=lambda: NOW)

    def broken_append(*args, **kwargs):
        Review.objects.create(
            verse_id=verse.id, user_id=user.pk, quality=4, ease_factor=2.5,
            interval=1, repetitions=1, next_review_at=NOW, created_at=NOW,
        )
        raise RuntimeError("storage went away")

    monkeypatch.setattr(store, "append", broken_append)

    with pytest.raises(RuntimeError):
        ledger.record_review(user.pk, verse.id, 4)

    assert Review.objects.count() == 0


@pytest.mark.django_db
def test_update_verse_changes_fields_and_timestamp(user, orm_catalog):
    verse = orm_catalog.create_verse(user.pk, "John 3:16", "For God so loved the world", "KJV")
    later = NOW + timedelta(hours=2)
    orm_catalog.clock = lambda: later

    updated = orm_catalog.update_verse(user.pk, verse.id, text="  For God so loved  ")

    assert updated.text == "For God so loved"
    assert updated.reference == "John 3:16"
    assert updated.translation == "KJV"
    assert updated.updated_at == later
    assert Verse.objects.get(pk=verse.id).text == "For God so loved"


@pytest.mark.django_db
def test_verses_listed_newest_first(user):
    store = DjangoVerseStore()
    first = store.add(user.pk, "Psalm 23:1", "The LORD is my shepherd", "NIV", NOW)
    second = store.add(user.pk, "Romans 8:28", "And we know", "NIV", NOW + timedelta(minutes=1))

    assert [v.id for v in store.list_for_user(user.pk)] == [second.id, first.id]
    assert store.count_for_user(user.pk) == 2


def run_in_threads(targets):
    errors = []

    def run(target):
        try:
            target()
        except Exception as e:  # surfaced below
            errors.append(e)
        finally:
            connection.close()

    threads = [threading.Thread(target=run, args=(t,)) for t in targets]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return errors


@pytest.mark.django_db(transaction=True)
def test_concurrent_reviews_on_distinct_verses_all_commit(user, orm_catalog):
    verses = [
        orm_catalog.create_verse(user.pk, f"Psalm {n}:1", "The LORD is my shepherd")
        for n in range(8)
    ]
    per_verse = 5

    def review_many(verse_id):
        def target():
            for _ in range(per_verse):
                get_ledger().record_review(user.pk, verse_id, 4)
        return target

    errors = run_in_threads([review_many(v.id) for v in verses])

    assert errors == []
    assert Review.objects.count() == len(verses) * per_verse
    for verse in verses:
        latest = DjangoReviewStore().latest_review(verse.id)
        assert latest.repetitions == per_verse


@pytest.mark.django_db(transaction=True)
def test_concurrent_reviews_on_same_verse_serialize(user, orm_catalog):
    verse = orm_catalog.create_verse(user.pk, "John 3:16", "For God so loved the world")

    errors = run_in_threads(
        [lambda: get_ledger().record_review(user.pk, verse.id, 5) for _ in range(6)]
    )

    assert errors == []
    reps = sorted(Review.objects.filter(verse_id=verse.id).values_list("repetitions", flat=True))
    assert reps == [1, 2, 3, 4, 5, 6]
