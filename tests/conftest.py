"""
Pytest Fixtures für die Reservierungsverwaltung.

Fixtures sind wiederverwendbare Setup-Funktionen für Tests.
Sie werden automatisch von pytest erkannt und injiziert.
"""
import asyncio
from datetime import date, datetime, time, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.dependencies import get_reservation_store
from app.models.reservation import Reservation, ReservationStatus
from app.services.reservation_backend import InMemoryBackend
from app.services.reservation_store import ReservationStore
from app.utils.errors import TransportError


FIXED_NOW = datetime(2024, 2, 1, 12, 0, tzinfo=timezone.utc)


# ============ HELPER ============

def run(coro):
    """Führt eine Store-Operation synchron aus"""
    return asyncio.run(coro)


def make_reservation(id: str, **overrides) -> Reservation:
    """Baut eine Reservierung mit sinnvollen Defaults"""
    data = {
        "id": id,
        "customer_name": f"Gast {id}",
        "customer_email": f"gast{id}@test.de",
        "customer_phone": "+49 40 123456",
        "reservation_date": date(2024, 3, 1),
        "reservation_time": time(19, 0),
        "party_size": 2,
        "status": ReservationStatus.CONFIRMED,
        "special_requests": None,
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "updated_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return Reservation(**data)


class TickingClock:
    """Jeder Aufruf liefert eine Minute später als der vorherige"""

    def __init__(self, start: datetime = FIXED_NOW):
        self._next = start

    def __call__(self) -> datetime:
        current = self._next
        self._next += timedelta(minutes=1)
        return current


class FailingBackend:
    """Backend das bei jedem Aufruf einen Transportfehler wirft"""
    is_demo = False

    async def select_all(self):
        raise TransportError("Backend nicht erreichbar: Connection refused")

    async def insert(self, reservation):
        raise TransportError("Backend nicht erreichbar: Connection refused")

    async def update(self, reservation_id, changes, updated_at):
        raise TransportError("Backend nicht erreichbar: Connection refused")

    async def delete(self, reservation_id):
        raise TransportError("Backend nicht erreichbar: Connection refused")


# ============ STORE FIXTURES ============

@pytest.fixture
def demo_backend():
    """In-Memory Backend mit Demo-Datensatz, ohne künstliche Latenz"""
    return InMemoryBackend(fetch_delay=0)


@pytest.fixture
def store(demo_backend):
    """Store im Demo-Modus, bereits geladen"""
    store = ReservationStore(demo_backend, clock=TickingClock())
    run(store.fetch_all())
    return store


@pytest.fixture
def draft() -> dict:
    return {
        "customer_name": "Anna Schmidt",
        "customer_email": "anna.schmidt@test.de",
        "customer_phone": "+49 40 987654",
        "reservation_date": "2024-02-14",
        "reservation_time": "19:30",
        "party_size": 2,
        "status": "confirmed",
        "special_requests": "Valentinstag",
    }


# ============ API FIXTURES ============

@pytest.fixture(scope="function")
def client(store):
    """
    FastAPI TestClient mit überschriebenem Store.

    Ohne "with": der Lifespan (echter Store aus den Settings) läuft nicht,
    alle Requests gehen an den Test-Store.
    """
    app.dependency_overrides[get_reservation_store] = lambda: store

    yield TestClient(app)

    app.dependency_overrides.clear()
