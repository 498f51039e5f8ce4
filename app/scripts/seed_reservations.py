import asyncio
import sys
import traceback

from app.config import settings
from app.schemas.reservation import ReservationCreate
from app.services.demo_data import demo_reservations
from app.services.reservation_store import ReservationStore
from app.utils.logging_config import setup_logging

logger = setup_logging()


async def seed(store: ReservationStore) -> int:
    """Legt den Demo-Datensatz im Backend an, gibt Anzahl Fehler zurück."""
    failed = 0
    for reservation in demo_reservations():
        draft = ReservationCreate(
            **reservation.model_dump(exclude={"id", "created_at", "updated_at"})
        )
        if await store.create(draft):
            logger.info(f"Angelegt: {draft.customer_name} am {draft.reservation_date}")
        else:
            failed += 1
            logger.error(f"Fehler bei {draft.customer_name}: {store.last_error}")
    return failed


def main() -> int:
    """
    Befüllt das Supabase-Backend mit den Demo-Reservierungen.
    Gibt Exit-Code zurück: 0 = Erfolg, 1 = Fehler
    """
    if settings.is_demo_mode:
        logger.error("Keine Supabase-Konfiguration (SUPABASE_URL / SUPABASE_ANON_KEY), Abbruch")
        return 1

    logger.info("Seed der Reservierungen gestartet")
    try:
        failed = asyncio.run(seed(ReservationStore.from_settings(settings)))
    except Exception as e:
        logger.error(f"Seed fehlgeschlagen: {e}")
        logger.error(traceback.format_exc())
        return 1
    finally:
        logger.info("Seed der Reservierungen beendet")

    return 0 if failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
