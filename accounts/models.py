from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Owner of verses and reviews. Extends the default Django user with a
    display name that the user can edit from the API.
    """

    name = models.CharField(max_length=150, blank=True)
