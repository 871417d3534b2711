import logging
import os
import uuid
from datetime import datetime, timedelta, timezone

import pytest
import requests

BASE_URL = os.getenv("VERSEKEEPER_BASE_URL", "http://127.0.0.1:8000")
USERNAME = os.getenv("VERSEKEEPER_TEST_USER", "testuser")
HEADERS = {"X-User-NAME": USERNAME}
logger = logging.getLogger(__name__)

# Expects `manage.py seed_verses` to have created USERNAME.


def create_verse(reference):
    r = requests.post(
        f"{BASE_URL}/api/verses",
        json={"reference": reference, "text": f"Live text for {reference}"},
        headers=HEADERS,
    )
    logger.info("POST /api/verses reference=%s → status=%s", reference, r.status_code)
    return r


def post_review(verse_id, quality):
    r = requests.post(
        f"{BASE_URL}/api/reviews",
        json={"verse_id": str(verse_id), "quality": quality},
        headers=HEADERS,
    )
    data = r.json()
    logger.info(
        "POST /api/reviews quality=%s → status=%s interval=%s repetitions=%s",
        quality,
        r.status_code,
        data.get("interval"),
        data.get("repetitions"),
    )
    return r


def get_due(as_of):
    r = requests.get(
        f"{BASE_URL}/api/verses/due", params={"as_of": as_of.isoformat()}, headers=HEADERS
    )
    logger.info("GET /api/verses/due as_of=%s → status=%s", as_of.isoformat(), r.status_code)
    return r


@pytest.mark.integration
def test_failed_review_resets_live():
    verse_id = create_verse(f"Live {uuid.uuid4()}").json()["id"]
    post_review(verse_id, 5)
    post_review(verse_id, 5)

    d = post_review(verse_id, 1).json()
    assert d["interval"] == 1
    assert d["repetitions"] == 0
    logger.info("✓ Passed: quality=1 reset the schedule")


@pytest.mark.integration
def test_interval_progression_live():
    verse_id = create_verse(f"Live {uuid.uuid4()}").json()["id"]

    intervals = [post_review(verse_id, 5).json()["interval"] for _ in range(4)]

    assert intervals == [1, 6, 17, 49]
    logger.info("✓ Passed: interval progression %s", intervals)


@pytest.mark.integration
def test_invalid_quality_live():
    verse_id = create_verse(f"Live {uuid.uuid4()}").json()["id"]

    r = post_review(verse_id, 6)

    assert r.status_code == 400
    history = requests.get(f"{BASE_URL}/api/reviews/verse/{verse_id}", headers=HEADERS).json()
    assert history == []
    logger.info("✓ Passed: quality=6 rejected without a write")


@pytest.mark.integration
def test_due_verses_includes_and_excludes_live():
    fresh_id = create_verse(f"Live {uuid.uuid4()}").json()["id"]
    reviewed_id = create_verse(f"Live {uuid.uuid4()}").json()["id"]
    post_review(reviewed_id, 5)

    now_ids = {v["id"] for v in get_due(datetime.now(timezone.utc)).json()}
    assert fresh_id in now_ids
    assert reviewed_id not in now_ids

    later_ids = {v["id"] for v in get_due(datetime.now(timezone.utc) + timedelta(days=2)).json()}
    assert {fresh_id, reviewed_id} <= later_ids
    logger.info("✓ Passed: due verses include/exclude correctly")
