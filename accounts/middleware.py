import logging

from django.conf import settings
from django.http import JsonResponse

from accounts.models import User

logger = logging.getLogger(__name__)


class MockLoginUserMiddleware:
    """Development login: trust the X-User-NAME header on /api requests.

    Only active when ``settings.MOCK_LOGIN_ENABLED`` is true. There is no
    fallback identity; a request without the header stays anonymous.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if getattr(settings, "MOCK_LOGIN_ENABLED", False) and request.path.startswith("/api"):
            username = request.headers.get("X-User-NAME")
            if username:
                logger.info("Mock login for user: %s", username)
                try:
                    user = User.objects.get(username=username)
                except User.DoesNotExist:
                    return JsonResponse(
                        {
                            "error": "User not found or invalid credentials.",
                            "code": "not_authenticated",
                            "type": "NotAuthenticated",
                        },
                        status=401,
                    )
                request.user = user
                request.mock_user = user
        return self.get_response(request)
