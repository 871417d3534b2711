from django.urls import path

from .views import (
    DueVersesView,
    ReviewHistoryView,
    ReviewStatsView,
    ReviewView,
    VerseDetailView,
    VerseListView,
    VerseReviewsView,
    VerseStatsView,
    health,
)

urlpatterns = [
    path("health", health, name="health"),
    path("verses", VerseListView.as_view(), name="verse-list"),
    path("verses/due", DueVersesView.as_view(), name="verse-due"),
    path("verses/stats", VerseStatsView.as_view(), name="verse-stats"),
    path("verses/<uuid:verse_id>", VerseDetailView.as_view(), name="verse-detail"),
    path("reviews", ReviewView.as_view(), name="review"),
    path("reviews/history", ReviewHistoryView.as_view(), name="review-history"),
    path("reviews/stats", ReviewStatsView.as_view(), name="review-stats"),
    path("reviews/verse/<uuid:verse_id>", VerseReviewsView.as_view(), name="verse-reviews"),
]
