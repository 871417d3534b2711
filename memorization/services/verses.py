import structlog

from ..config import DEFAULT_TRANSLATION
from ..data.repos import DjangoVerseStore
from ..errors import NotFoundError, ValidationError
from ..utils.time import utc_now

logger = structlog.get_logger()

EDITABLE_FIELDS = ("reference", "text", "translation")


def _required(name, value):
    if value is None or not str(value).strip():
        raise ValidationError("Reference and text are required", details={"field": name})
    return str(value).strip()


class VerseCatalog:
    def __init__(self, verses, clock=utc_now):
        self.verses = verses
        self.clock = clock

    def create_verse(self, user_id, reference, text, translation=None):
        reference = _required("reference", reference)
        text = _required("text", text)
        translation = (translation or "").strip() or DEFAULT_TRANSLATION

        verse = self.verses.add(user_id, reference, text, translation, self.clock())
        logger.info("verse_created",
            user_id=str(user_id),
            verse_id=str(verse.id),
            reference=verse.reference,
            translation=verse.translation,
        )
        return verse

    def get_verse(self, user_id, verse_id):
        verse = self.verses.get(verse_id, user_id)
        if verse is None:
            raise NotFoundError("Verse not found")
        return verse

    def list_verses(self, user_id):
        return self.verses.list_for_user(user_id)

    def update_verse(self, user_id, verse_id, **fields):
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError("Unknown verse fields", details={"fields": sorted(unknown)})

        changes = {}
        for name, value in fields.items():
            if value is None:
                continue
            if name == "translation":
                changes[name] = str(value).strip() or DEFAULT_TRANSLATION
            else:
                changes[name] = _required(name, value)

        verse = self.verses.update(verse_id, user_id, changes, self.clock())
        if verse is None:
            raise NotFoundError("Verse not found")
        logger.info("verse_updated",
            user_id=str(user_id),
            verse_id=str(verse_id),
            fields=sorted(changes),
        )
        return verse

    def delete_verse(self, user_id, verse_id):
        if not self.verses.delete(verse_id, user_id):
            raise NotFoundError("Verse not found")
        logger.info("verse_deleted", user_id=str(user_id), verse_id=str(verse_id))


def get_catalog(clock=utc_now):
    return VerseCatalog(DjangoVerseStore(), clock=clock)
