"""
Filtern, Sortieren und Kennzahlen für die Reservierungstabelle.

Reine Funktionen ohne Zustand und ohne I/O: gleiche Eingaben liefern
immer dieselbe Reihenfolge.
"""
import enum
from datetime import date, datetime, timezone
from typing import Iterable, Optional

from app.models.reservation import Reservation, ReservationStatus, SortField, SortDirection
from app.schemas.reservation import (
    FilterCriteria,
    SortCriteria,
    ReservationStats,
    ReservationProjection,
)


def utc_today() -> date:
    """Heutiges Datum in UTC, nicht in der lokalen Zeitzone des Servers."""
    return datetime.now(timezone.utc).date()


def matches_filters(reservation: Reservation, filters: FilterCriteria) -> bool:
    search = filters.search_text
    if search:
        needle = search.lower()
        # Telefonnummer: exakter Teilstring, keine Normalisierung
        matches_search = (
            needle in reservation.customer_name.lower()
            or needle in reservation.customer_email.lower()
            or search in reservation.customer_phone
        )
        if not matches_search:
            return False

    if filters.status_filter is not None and reservation.status != filters.status_filter:
        return False

    # reiner String-Vergleich mit YYYY-MM-DD, kein Datums-Parsing
    if filters.date_filter is not None and reservation.reservation_date.isoformat() != filters.date_filter:
        return False

    return True


def filter_reservations(collection: Iterable[Reservation], filters: FilterCriteria) -> list[Reservation]:
    return [r for r in collection if matches_filters(r, filters)]


def _sort_key(reservation: Reservation, field: SortField):
    value = getattr(reservation, field.value)
    if value is None:
        return ""
    if isinstance(value, enum.Enum):
        value = value.value
    if isinstance(value, str):
        return value.lower()
    return value


def sort_reservations(rows: Iterable[Reservation], sort: SortCriteria) -> list[Reservation]:
    """
    Stabil: gleiche Werte behalten ihre Eingabe-Reihenfolge,
    auch bei absteigender Sortierung (sorted mit reverse bleibt stabil).
    """
    return sorted(
        rows,
        key=lambda r: _sort_key(r, sort.field),
        reverse=sort.direction == SortDirection.DESC
    )


def compute_stats(collection: Iterable[Reservation], today: date) -> ReservationStats:
    """Kennzahlen immer über die komplette Collection, nicht über die gefilterte Ansicht."""
    total = 0
    today_count = 0
    confirmed = 0
    guests = 0
    for reservation in collection:
        total += 1
        if reservation.reservation_date == today:
            today_count += 1
        if reservation.status == ReservationStatus.CONFIRMED:
            confirmed += 1
        guests += reservation.party_size
    return ReservationStats(total=total, today=today_count, confirmed=confirmed, guests=guests)


def project(
    collection: Iterable[Reservation],
    filters: Optional[FilterCriteria] = None,
    sort: Optional[SortCriteria] = None,
    today: Optional[date] = None,
) -> ReservationProjection:
    collection = list(collection)
    filters = filters or FilterCriteria()
    sort = sort or SortCriteria()
    rows = sort_reservations(filter_reservations(collection, filters), sort)
    return ReservationProjection(
        rows=rows,
        stats=compute_stats(collection, today or utc_today())
    )


def toggle_sort(current: SortCriteria, field: SortField) -> SortCriteria:
    """Klick auf aktive Spalte dreht die Richtung, neue Spalte startet aufsteigend."""
    if current.field != field:
        return SortCriteria(field=field, direction=SortDirection.ASC)
    if current.direction == SortDirection.ASC:
        return SortCriteria(field=field, direction=SortDirection.DESC)
    return SortCriteria(field=field, direction=SortDirection.ASC)
