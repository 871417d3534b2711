import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Verse",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("reference", models.CharField(max_length=128)),
                ("text", models.TextField()),
                ("translation", models.CharField(default="NIV", max_length=32)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="verses", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "indexes": [models.Index(fields=["user", "created_at"], name="memorizatio_user_id_5f3c2a_idx")],
            },
        ),
        migrations.CreateModel(
            name="Review",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quality", models.PositiveSmallIntegerField()),
                ("ease_factor", models.FloatField()),
                ("interval", models.PositiveIntegerField()),
                ("repetitions", models.PositiveIntegerField()),
                ("next_review_at", models.DateTimeField()),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="reviews", to=settings.AUTH_USER_MODEL)),
                ("verse", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="reviews", to="memorization.verse")),
            ],
            options={
                "indexes": [
                    models.Index(fields=["verse", "created_at"], name="memorizatio_verse_i_8a1d4e_idx"),
                    models.Index(fields=["user", "created_at"], name="memorizatio_user_id_c27b90_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("quality__gte", 0), ("quality__lte", 5)), name="review_quality_range"),
                    models.CheckConstraint(condition=models.Q(("ease_factor__gte", 1.3)), name="review_ease_factor_floor"),
                    models.CheckConstraint(condition=models.Q(("interval__gte", 1)), name="review_interval_positive"),
                ],
            },
        ),
    ]
