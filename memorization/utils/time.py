from datetime import timezone as dt_tz

from django.utils import timezone


def utc_now():
    return timezone.now()


def utc_date_key(dt):
    """ISO calendar date of ``dt`` on the UTC date boundary."""
    return dt.astimezone(dt_tz.utc).date().isoformat()
