"""Utilidades de timestamps (RFC 3339)."""

from __future__ import annotations

from datetime import datetime, timezone


def ensure_utc(value: datetime) -> datetime:
    """Normaliza a UTC; un datetime naive se interpreta como UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_rfc3339(value: datetime) -> str:
    """Formato RFC 3339 con segundos y sufijo `Z` (p.ej. `2024-05-01T12:00:00Z`)."""

    return ensure_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")
