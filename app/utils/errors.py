"""
Fehlertypen der Reservierungs-Schicht.

Werden von Backends und Validierung geworfen und ausschließlich im
ReservationStore abgefangen (dort -> last_error).
"""


class ReservationError(Exception):
    """Basisklasse, message ist für die Anzeige im UI gedacht."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(ReservationError):
    """Backend nicht erreichbar, Constraint verletzt, Auth fehlgeschlagen, kaputte Antwort."""


class NotFoundError(ReservationError):
    """Ziel-ID einer Mutation existiert nicht."""

    def __init__(self, reservation_id: str):
        super().__init__(f"Reservierung {reservation_id} nicht gefunden")
        self.reservation_id = reservation_id


class ReservationValidationError(ReservationError):
    """Draft verletzt eine Regel (z.B. Personenzahl außerhalb 1-20)."""
