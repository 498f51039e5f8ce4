from fastapi import Request

from app.services.reservation_store import ReservationStore


def get_reservation_store(request: Request) -> ReservationStore:
    """Store wird im Lifespan angelegt und hier in die Router gereicht."""
    return request.app.state.reservation_store
