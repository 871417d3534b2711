from datetime import datetime, timedelta, timezone

import pytest
from rest_framework.test import APIClient

from memorization.data.memory import InMemoryReviewStore, InMemoryVerseStore
from memorization.services.reviews import ReviewLedger
from memorization.services.verses import VerseCatalog


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def stores():
    reviews = InMemoryReviewStore()
    return InMemoryVerseStore(reviews), reviews


@pytest.fixture
def ledger(stores, clock):
    verses, reviews = stores
    return ReviewLedger(verses, reviews, clock=clock)


@pytest.fixture
def catalog(stores, clock):
    verses, _ = stores
    return VerseCatalog(verses, clock=clock)


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username="reader", email="reader@example.com")


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.credentials(HTTP_X_USER_NAME=user.username)
    return client
