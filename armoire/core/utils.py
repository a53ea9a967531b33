from datetime import datetime, timezone

from sqlalchemy import DateTime


def utcnow() -> datetime:
    """Horodatage UTC avec fuseau horaire."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Rattache UTC aux valeurs relues sans fuseau (SQLite ne le conserve pas)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# Type de colonne commun à tous les horodatages
UTC_DATETIME = DateTime(timezone=True)
