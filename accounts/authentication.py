from rest_framework.authentication import BaseAuthentication


class MockLoginAuthentication(BaseAuthentication):
    """Accept the user resolved by MockLoginUserMiddleware.

    Header identities are not session-backed, so no CSRF check applies.
    """

    def authenticate(self, request):
        user = getattr(request._request, "mock_user", None)
        if user is None or not user.is_active:
            return None
        return (user, None)
