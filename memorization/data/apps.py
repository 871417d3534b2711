from django.apps import AppConfig


class MemorizationDataConfig(AppConfig):
    name = "memorization.data"
    label = "memorization"
    verbose_name = "Verse memorization"
    default_auto_field = "django.db.models.BigAutoField"
