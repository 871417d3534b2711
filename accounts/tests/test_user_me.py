import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

User = get_user_model()


@pytest.mark.django_db
class TestUserMeEndpoint:
    def setup_method(self):
        self.client = APIClient()
        self.url = reverse("user-me")
        self.test_username = "testuser"
        self.user = User.objects.create_user(
            username=self.test_username, email="testuser@example.com"
        )

    def test_me_endpoint_with_mock_middleware_authentication(self):
        """Test that user can authenticate via X-User-NAME header"""
        response = self.client.get(self.url, HTTP_X_USER_NAME=self.test_username)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["username"] == self.test_username
        assert response.data["email"] == "testuser@example.com"
        assert response.data["name"] == ""

    def test_me_endpoint_updates_name(self):
        """Test that PATCH changes the display name only"""
        response = self.client.patch(
            self.url,
            {"name": "Test User", "username": "hijack"},
            format="json",
            HTTP_X_USER_NAME=self.test_username,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["name"] == "Test User"
        self.user.refresh_from_db()
        assert self.user.name == "Test User"
        assert self.user.username == self.test_username

    def test_me_endpoint_with_non_existent_user_header(self):
        """Test that non-existent user in header returns 401"""
        response = self.client.get(self.url, HTTP_X_USER_NAME="nonexistentuser")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_me_endpoint_without_authentication(self):
        """Test that unauthenticated request returns 401"""
        response = self.client.get(self.url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error"] == "User not authenticated"

    def test_header_ignored_when_mock_login_disabled(self, settings):
        """Test that the header is not trusted outside development"""
        settings.MOCK_LOGIN_ENABLED = False

        response = self.client.get(self.url, HTTP_X_USER_NAME=self.test_username)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
