import structlog
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from accounts.serializers import UserSerializer

logger = structlog.get_logger()


class UserViewSet(viewsets.ViewSet):
    """
    ViewSet for user-related operations.
    """

    @action(detail=False, methods=["get", "put", "patch"])
    def me(self, request):
        """
        Returns the logged-in user; PUT/PATCH updates the display name.
        """
        if request.method == "GET":
            return Response(UserSerializer(request.user).data, status=status.HTTP_200_OK)

        s = UserSerializer(request.user, data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        s.save()
        logger.info("user_updated", user_id=str(request.user.pk), fields=sorted(s.validated_data))
        return Response(s.data, status=status.HTTP_200_OK)
