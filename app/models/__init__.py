from app.models.reservation import (
    Reservation,
    ReservationStatus,
    SortField,
    SortDirection,
    MIN_PARTY_SIZE,
    MAX_PARTY_SIZE,
)
