from rest_framework import serializers

from ..config import (
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_STATS_WINDOW_DAYS,
    MAX_HISTORY_LIMIT,
    MAX_QUALITY,
    MIN_QUALITY,
)
from ..domain.enums import QUALITY_LABELS


class ReviewInSerializer(serializers.Serializer):
    verse_id = serializers.UUIDField()
    quality = serializers.IntegerField(min_value=MIN_QUALITY, max_value=MAX_QUALITY)


class VerseInSerializer(serializers.Serializer):
    reference = serializers.CharField(max_length=128)
    text = serializers.CharField()
    translation = serializers.CharField(max_length=32, required=False, allow_blank=True)


class VerseUpdateSerializer(serializers.Serializer):
    reference = serializers.CharField(max_length=128, required=False)
    text = serializers.CharField(required=False)
    translation = serializers.CharField(max_length=32, required=False, allow_blank=True)


class DueQuerySerializer(serializers.Serializer):
    as_of = serializers.DateTimeField(required=False)  # ISO-8601


class HistoryQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(
        min_value=1, max_value=MAX_HISTORY_LIMIT, default=DEFAULT_HISTORY_LIMIT
    )


class StatsQuerySerializer(serializers.Serializer):
    days = serializers.IntegerField(min_value=0, default=DEFAULT_STATS_WINDOW_DAYS)


class ReviewOutSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    verse_id = serializers.UUIDField()
    quality = serializers.IntegerField()
    quality_label = serializers.SerializerMethodField()
    ease_factor = serializers.FloatField()
    interval = serializers.IntegerField()
    repetitions = serializers.IntegerField()
    next_review_at = serializers.DateTimeField()
    created_at = serializers.DateTimeField()

    def get_quality_label(self, review):
        return QUALITY_LABELS[review.quality]


class VerseOutSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="verse.id")
    reference = serializers.CharField(source="verse.reference")
    text = serializers.CharField(source="verse.text")
    translation = serializers.CharField(source="verse.translation")
    created_at = serializers.DateTimeField(source="verse.created_at")
    updated_at = serializers.DateTimeField(source="verse.updated_at")
    due = serializers.BooleanField()
    ease_factor = serializers.FloatField(source="state.ease_factor")
    interval = serializers.IntegerField(source="state.interval")
    repetitions = serializers.IntegerField(source="state.repetitions")
    latest_review = ReviewOutSerializer(allow_null=True)
