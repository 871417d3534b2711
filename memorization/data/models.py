import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone

from ..config import DEFAULT_TRANSLATION, MAX_QUALITY, MIN_EASE_FACTOR, MIN_QUALITY
from ..errors import ImmutableReviewError


class Verse(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="verses"
    )
    reference = models.CharField(max_length=128)
    text = models.TextField()
    translation = models.CharField(max_length=32, default=DEFAULT_TRANSLATION)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(fields=["user", "created_at"], name="memorizatio_user_id_5f3c2a_idx"),
        ]

    def __str__(self):
        return f"{self.reference} ({self.translation})"


class Review(models.Model):
    """One review event. Rows are append-only; they go away only when
    their verse is deleted."""

    verse = models.ForeignKey(Verse, on_delete=models.CASCADE, related_name="reviews")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews"
    )
    quality = models.PositiveSmallIntegerField()
    ease_factor = models.FloatField()
    interval = models.PositiveIntegerField()  # days
    repetitions = models.PositiveIntegerField()
    next_review_at = models.DateTimeField()  # UTC
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(fields=["verse", "created_at"], name="memorizatio_verse_i_8a1d4e_idx"),
            models.Index(fields=["user", "created_at"], name="memorizatio_user_id_c27b90_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quality__gte=MIN_QUALITY, quality__lte=MAX_QUALITY),
                name="review_quality_range",
            ),
            models.CheckConstraint(
                condition=models.Q(ease_factor__gte=MIN_EASE_FACTOR),
                name="review_ease_factor_floor",
            ),
            models.CheckConstraint(
                condition=models.Q(interval__gte=1),
                name="review_interval_positive",
            ),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableReviewError("Reviews cannot be modified once recorded")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutableReviewError("Reviews are removed only by deleting their verse")
