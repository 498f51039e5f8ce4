from datetime import date, datetime, time, timezone

from app.models.reservation import Reservation, ReservationStatus

# Fester Demo-Datensatz: ohne Supabase-Konfiguration oder wenn das Backend ausfällt
_DEMO_ROWS = [
    {
        "id": "1",
        "customer_name": "John Smith",
        "customer_email": "john.smith@email.com",
        "customer_phone": "+1 (555) 123-4567",
        "reservation_date": date(2024, 1, 15),
        "reservation_time": time(19, 0),
        "party_size": 4,
        "status": ReservationStatus.CONFIRMED,
        "special_requests": "Window table preferred",
        "created_at": datetime(2024, 1, 10, 10, 0, tzinfo=timezone.utc),
        "updated_at": datetime(2024, 1, 10, 10, 0, tzinfo=timezone.utc),
    },
    {
        "id": "2",
        "customer_name": "Emily Johnson",
        "customer_email": "emily.johnson@email.com",
        "customer_phone": "+1 (555) 987-6543",
        "reservation_date": date(2024, 1, 16),
        "reservation_time": time(18, 30),
        "party_size": 2,
        "status": ReservationStatus.CONFIRMED,
        "special_requests": "Birthday celebration",
        "created_at": datetime(2024, 1, 11, 14, 30, tzinfo=timezone.utc),
        "updated_at": datetime(2024, 1, 11, 14, 30, tzinfo=timezone.utc),
    },
    {
        "id": "3",
        "customer_name": "Michael Brown",
        "customer_email": "michael.brown@email.com",
        "customer_phone": "+1 (555) 456-7890",
        "reservation_date": date(2024, 1, 17),
        "reservation_time": time(20, 0),
        "party_size": 6,
        "status": ReservationStatus.CONFIRMED,
        "special_requests": "Business dinner",
        "created_at": datetime(2024, 1, 12, 9, 15, tzinfo=timezone.utc),
        "updated_at": datetime(2024, 1, 12, 9, 15, tzinfo=timezone.utc),
    },
]


def demo_reservations() -> list[Reservation]:
    """Gibt bei jedem Aufruf frische Objekte zurück, neueste zuerst."""
    rows = [Reservation(**row) for row in _DEMO_ROWS]
    return sorted(rows, key=lambda r: r.created_at, reverse=True)
