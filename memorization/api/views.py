import uuid
from dataclasses import asdict

import structlog
from rest_framework import status, views
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from ..services.reviews import get_ledger
from ..services.verses import get_catalog
from .serializers import (
    DueQuerySerializer,
    HistoryQuerySerializer,
    ReviewInSerializer,
    ReviewOutSerializer,
    StatsQuerySerializer,
    VerseInSerializer,
    VerseOutSerializer,
    VerseUpdateSerializer,
)

base_logger = structlog.get_logger()


def _request_logger(request):
    return base_logger.bind(request_id=str(uuid.uuid4()), user_id=str(request.user.pk))


@api_view(["GET"])
@permission_classes([AllowAny])
def health(request):
    return Response({"status": "ok"})


class VerseListView(views.APIView):
    def get(self, request):
        statuses = get_ledger().overview(request.user.pk)
        return Response(VerseOutSerializer(statuses, many=True).data)

    def post(self, request):
        logger = _request_logger(request)

        s = VerseInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        verse = get_catalog().create_verse(request.user.pk, **s.validated_data)
        logger.info("verse_api_response", verse_id=str(verse.id), status=status.HTTP_201_CREATED)
        return Response(
            VerseOutSerializer(get_ledger().status_of(verse)).data,
            status=status.HTTP_201_CREATED,
        )


class VerseDetailView(views.APIView):
    def get(self, request, verse_id):
        verse = get_catalog().get_verse(request.user.pk, verse_id)
        return Response(VerseOutSerializer(get_ledger().status_of(verse)).data)

    def put(self, request, verse_id):
        s = VerseUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        verse = get_catalog().update_verse(request.user.pk, verse_id, **s.validated_data)
        return Response(VerseOutSerializer(get_ledger().status_of(verse)).data)

    patch = put

    def delete(self, request, verse_id):
        logger = _request_logger(request)
        get_catalog().delete_verse(request.user.pk, verse_id)
        logger.info("verse_api_response", verse_id=str(verse_id), status=status.HTTP_200_OK)
        return Response({"message": "Verse deleted successfully"})


class DueVersesView(views.APIView):
    def get(self, request):
        logger = _request_logger(request)

        qs = DueQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        as_of = qs.validated_data.get("as_of")

        due = get_ledger().due_set(request.user.pk, as_of=as_of)
        logger.info("due_verses_api_response",
            as_of_utc=as_of.isoformat() if as_of else None,
            verse_count=len(due),
        )
        return Response(VerseOutSerializer(due, many=True).data)


class VerseStatsView(views.APIView):
    def get(self, request):
        return Response(asdict(get_ledger().verse_stats(request.user.pk)))


class ReviewView(views.APIView):
    def post(self, request):
        logger = _request_logger(request)

        s = ReviewInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        verse_id = s.validated_data["verse_id"]
        quality = s.validated_data["quality"]

        review = get_ledger().record_review(request.user.pk, verse_id, quality)

        logger.info(
            "review_api_response",
            verse_id=str(verse_id),
            quality=quality,
            interval_days=review.interval,
            next_review_utc=review.next_review_at.isoformat(),
            status=status.HTTP_201_CREATED,
        )
        return Response(ReviewOutSerializer(review).data, status=status.HTTP_201_CREATED)


class ReviewHistoryView(views.APIView):
    def get(self, request):
        qs = HistoryQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)

        reviews = get_ledger().review_history(request.user.pk, qs.validated_data["limit"])
        return Response(ReviewOutSerializer(reviews, many=True).data)


class ReviewStatsView(views.APIView):
    def get(self, request):
        qs = StatsQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)

        stats = get_ledger().review_stats(request.user.pk, qs.validated_data["days"])
        return Response(asdict(stats))


class VerseReviewsView(views.APIView):
    def get(self, request, verse_id):
        reviews = get_ledger().reviews_for_verse(request.user.pk, verse_id)
        return Response(ReviewOutSerializer(reviews, many=True).data)
