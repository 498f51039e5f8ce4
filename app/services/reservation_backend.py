"""
Persistenz-Backends für den ReservationStore.

SupabaseBackend spricht die PostgREST-API der Tabelle "reservations" an,
InMemoryBackend simuliert dasselbe Verhalten im Speicher (Demo-Modus).
Beide werfen nur ReservationError-Typen.
"""
import asyncio
import logging
from datetime import datetime
from typing import Optional

import requests
from pydantic import ValidationError

from app.config import Settings
from app.models.reservation import Reservation
from app.schemas.reservation import ReservationUpdate
from app.services.demo_data import demo_reservations
from app.utils.errors import NotFoundError, ReservationValidationError, TransportError

logger = logging.getLogger("app.services.reservation_backend")

TABLE_NAME = "reservations"


class SupabaseBackend:
    is_demo = False

    def __init__(self, url: str, api_key: str, timeout: Optional[float] = None):
        # Leerzeichen aus .env-Werten würden URL und Header kaputt machen
        self._endpoint = f"{url.strip().rstrip('/')}/rest/v1/{TABLE_NAME}"
        self._api_key = api_key.strip()
        self._timeout = timeout

    def _headers(self) -> dict:
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "content-type": "application/json",
            "Prefer": "return=representation",
        }

    def _request(self, method: str, params: dict, payload: dict | None = None) -> list:
        """Führt einen PostgREST-Request aus (blockierend, läuft im Thread)."""
        try:
            response = requests.request(
                method,
                self._endpoint,
                params=params,
                json=payload,
                headers=self._headers(),
                timeout=self._timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Supabase nicht erreichbar ({method}): {e}")
            raise TransportError(f"Backend nicht erreichbar: {e}") from e

        if not response.ok:
            message = _error_message(response)
            logger.error(f"Supabase-Fehler {response.status_code} ({method}): {message}")
            raise TransportError(f"Backend-Fehler {response.status_code}: {message}")

        if not response.content:
            return []
        try:
            data = response.json()
        except ValueError as e:
            raise TransportError("Ungültige Antwort vom Backend") from e
        if not isinstance(data, list):
            raise TransportError("Ungültige Antwort vom Backend")
        return data

    async def select_all(self) -> list[Reservation]:
        rows = await asyncio.to_thread(
            self._request, "GET", {"select": "*", "order": "created_at.desc"}
        )
        try:
            return [Reservation.model_validate(row) for row in rows]
        except ValidationError as e:
            logger.error(f"Ungültige Zeile vom Backend: {e}")
            raise TransportError("Ungültige Reservierungsdaten vom Backend") from e

    async def insert(self, reservation: Reservation) -> None:
        await asyncio.to_thread(
            self._request, "POST", {}, reservation.model_dump(mode="json")
        )

    async def update(self, reservation_id: str, changes: ReservationUpdate, updated_at: datetime) -> None:
        payload = changes.model_dump(mode="json", exclude_unset=True)
        payload["updated_at"] = updated_at.isoformat()
        rows = await asyncio.to_thread(
            self._request, "PATCH", {"id": f"eq.{reservation_id}"}, payload
        )
        # Leere Representation = keine Zeile getroffen
        if not rows:
            raise NotFoundError(reservation_id)

    async def delete(self, reservation_id: str) -> None:
        rows = await asyncio.to_thread(
            self._request, "DELETE", {"id": f"eq.{reservation_id}"}
        )
        if not rows:
            raise NotFoundError(reservation_id)


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:500] or response.reason or "Unbekannter Fehler"
    if isinstance(body, dict) and body.get("message"):
        return body["message"]
    return str(body)[:500]


class InMemoryBackend:
    """Demo-Backend, verhält sich wie Supabase nur ohne Persistenz."""
    is_demo = True

    def __init__(self, seed: list[Reservation] | None = None, fetch_delay: float = 0.5):
        rows = demo_reservations() if seed is None else seed
        self._rows: dict[str, Reservation] = {row.id: row for row in rows}
        self._fetch_delay = fetch_delay

    async def select_all(self) -> list[Reservation]:
        # künstliche Latenz wie beim echten Backend
        await asyncio.sleep(self._fetch_delay)
        return sorted(self._rows.values(), key=lambda r: r.created_at, reverse=True)

    async def insert(self, reservation: Reservation) -> None:
        if reservation.id in self._rows:
            raise TransportError(f"Reservierung {reservation.id} existiert bereits")
        self._rows[reservation.id] = reservation

    async def update(self, reservation_id: str, changes: ReservationUpdate, updated_at: datetime) -> None:
        current = self._rows.get(reservation_id)
        if current is None:
            raise NotFoundError(reservation_id)
        merged = {**current.model_dump(), **changes.changes(), "updated_at": updated_at}
        try:
            self._rows[reservation_id] = Reservation.model_validate(merged)
        except ValidationError as e:
            raise ReservationValidationError(f"Ungültige Änderung an Reservierung {reservation_id}: {e.errors()[0]['msg']}") from e

    async def delete(self, reservation_id: str) -> None:
        if self._rows.pop(reservation_id, None) is None:
            raise NotFoundError(reservation_id)


def create_backend(config: Settings):
    """Ohne Supabase-URL oder Key -> Demo-Modus (einziger Schalter)."""
    if config.is_demo_mode:
        logger.info("Keine Supabase-Konfiguration gefunden, starte im Demo-Modus")
        return InMemoryBackend(fetch_delay=config.demo_fetch_delay_seconds)
    return SupabaseBackend(
        config.supabase_url,
        config.supabase_anon_key,
        timeout=config.backend_timeout_seconds
    )
