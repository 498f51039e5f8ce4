"""
ReservationStore: einzige Quelle der Wahrheit für die Reservierungen.

Alle Mutationen laufen über das Backend, danach wird per fetch_all()
abgeglichen (kein optimistisches Patchen). Fehler werden hier abgefangen
und landen als Text in last_error, nach außen gibt es nur True/False.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import BaseModel, ValidationError

from app.config import Settings
from app.models.reservation import Reservation, MIN_PARTY_SIZE, MAX_PARTY_SIZE
from app.schemas.reservation import ReservationCreate, ReservationUpdate
from app.services.demo_data import demo_reservations
from app.services.reservation_backend import create_backend
from app.utils.errors import ReservationError, ReservationValidationError

logger = logging.getLogger("app.services.reservation_store")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def _coerce(model: type[BaseModel], payload):
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'payload'}: {err['msg']}"
            for err in e.errors()
        )
        raise ReservationValidationError(f"Ungültige Reservierung: {details}") from e


def _check_party_size(party_size: Optional[int]) -> None:
    # Auch für per model_construct gebaute Drafts
    if party_size is None:
        return
    if not MIN_PARTY_SIZE <= party_size <= MAX_PARTY_SIZE:
        raise ReservationValidationError(
            f"Personenzahl muss zwischen {MIN_PARTY_SIZE} und {MAX_PARTY_SIZE} liegen"
        )


class ReservationStore:

    def __init__(
        self,
        backend,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _new_id,
    ):
        self._backend = backend
        self._clock = clock
        self._id_factory = id_factory
        self._collection: list[Reservation] = []
        self._is_loading = False
        self._last_failure: Optional[ReservationError] = None
        # Nur der zuletzt gestartete fetch_all darf sein Ergebnis anwenden
        self._fetch_seq = 0

    @classmethod
    def from_settings(cls, config: Settings) -> "ReservationStore":
        return cls(create_backend(config))

    @property
    def collection(self) -> tuple[Reservation, ...]:
        return tuple(self._collection)

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def last_error(self) -> Optional[str]:
        return self._last_failure.message if self._last_failure else None

    @property
    def last_failure(self) -> Optional[ReservationError]:
        return self._last_failure

    @property
    def demo_mode(self) -> bool:
        return self._backend.is_demo

    def _fail(self, error: ReservationError, action: str) -> None:
        logger.warning(f"{action} fehlgeschlagen: {error.message}")
        self._last_failure = error

    async def fetch_all(self) -> bool:
        """
        Lädt alle Reservierungen (neueste zuerst).
        Bei Fehler: last_error setzen und Demo-Datensatz anzeigen.
        Gibt True zurück wenn das Ergebnis übernommen wurde.
        """
        self._fetch_seq += 1
        seq = self._fetch_seq
        self._is_loading = True
        self._last_failure = None

        try:
            try:
                rows = await self._backend.select_all()
            except ReservationError as e:
                if seq != self._fetch_seq:
                    logger.debug(f"Veralteter Fehler von fetch #{seq} verworfen")
                    return False
                self._fail(e, "Laden der Reservierungen")
                self._collection = demo_reservations()
                logger.info("Zeige Demo-Datensatz als Fallback")
                return False

            if seq != self._fetch_seq:
                logger.debug(f"Veraltete Antwort von fetch #{seq} verworfen")
                return False

            self._collection = list(rows)
            logger.info(f"{len(self._collection)} Reservierungen geladen")
            return True
        finally:
            # Auch bei Abbruch (CancelledError) oder unerwarteten Fehlern
            if seq == self._fetch_seq:
                self._is_loading = False

    async def create(self, draft: ReservationCreate | dict) -> bool:
        self._last_failure = None
        try:
            draft = _coerce(ReservationCreate, draft)
            _check_party_size(draft.party_size)
            now = self._clock()
            reservation = _coerce(Reservation, {
                **draft.model_dump(),
                "id": self._id_factory(),
                "created_at": now,
                "updated_at": now,
            })
            await self._backend.insert(reservation)
        except ReservationError as e:
            self._fail(e, "Anlegen der Reservierung")
            return False

        logger.info(f"Reservierung {reservation.id} angelegt")
        await self.fetch_all()
        return True

    async def update(self, reservation_id: str, partial: ReservationUpdate | dict) -> bool:
        """Übernimmt nur die übergebenen Felder, updated_at wird immer neu gesetzt."""
        self._last_failure = None
        try:
            changes = _coerce(ReservationUpdate, partial)
            _check_party_size(changes.party_size)
            await self._backend.update(reservation_id, changes, self._clock())
        except ReservationError as e:
            self._fail(e, f"Ändern der Reservierung {reservation_id}")
            return False

        logger.info(f"Reservierung {reservation_id} geändert: {sorted(changes.model_fields_set)}")
        await self.fetch_all()
        return True

    async def delete(self, reservation_id: str) -> bool:
        self._last_failure = None
        try:
            await self._backend.delete(reservation_id)
        except ReservationError as e:
            self._fail(e, f"Löschen der Reservierung {reservation_id}")
            return False

        self._collection = [r for r in self._collection if r.id != reservation_id]
        logger.info(f"Reservierung {reservation_id} gelöscht")
        await self.fetch_all()
        return True
