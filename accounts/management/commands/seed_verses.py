import json
import os

from django.core.management.base import BaseCommand, CommandError

from accounts.models import User
from memorization.errors import ValidationError
from memorization.services.verses import get_catalog


class Command(BaseCommand):
    help = "Create a development user and load sample verses for them"

    def add_arguments(self, parser):
        parser.add_argument(
            "--file", default="sample_verses.json", help="JSON file name to load verses from"
        )
        parser.add_argument(
            "--username", default="testuser", help="User who will own the verses"
        )
        parser.add_argument(
            "--reset", action="store_true", help="Delete the user's existing verses first"
        )

    def handle(self, *args, **options):
        file_name = options["file"]
        json_file_path = file_name
        if not os.path.isabs(file_name):
            json_file_path = os.path.join(os.path.dirname(__file__), file_name)

        try:
            with open(json_file_path) as json_file:
                entries = json.load(json_file)
        except (OSError, json.JSONDecodeError) as e:
            raise CommandError(f"Error loading data: {e}") from e

        username = options["username"]
        user, created = User.objects.get_or_create(
            username=username, defaults={"email": f"{username}@example.com"}
        )
        if created:
            user.set_unusable_password()
            user.save(update_fields=["password"])
            self.stdout.write(self.style.SUCCESS(f"Created user {username}"))

        catalog = get_catalog()
        if options["reset"]:
            for verse in catalog.list_verses(user.pk):
                catalog.delete_verse(user.pk, verse.id)
            self.stdout.write(self.style.SUCCESS(f"Deleted existing verses of {username}"))

        for entry in entries:
            try:
                verse = catalog.create_verse(
                    user.pk,
                    entry.get("reference"),
                    entry.get("text"),
                    entry.get("translation"),
                )
            except ValidationError as e:
                raise CommandError(f"Invalid verse entry {entry!r}: {e.message}") from e
            self.stdout.write(f"Created verse: {verse.reference}")

        self.stdout.write(
            self.style.SUCCESS(f"Loaded {len(entries)} verses from {file_name}")
        )
