import enum
from datetime import date, datetime, time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

MIN_PARTY_SIZE = 1
MAX_PARTY_SIZE = 20


class ReservationStatus(enum.Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


# Anzeige-Texte, muss jeden Status abdecken
STATUS_LABELS = {
    ReservationStatus.CONFIRMED: "Confirmed",
    ReservationStatus.CANCELLED: "Cancelled",
    ReservationStatus.COMPLETED: "Completed",
    ReservationStatus.NO_SHOW: "No Show",
}


class SortField(enum.Enum):
    ID = "id"
    CUSTOMER_NAME = "customer_name"
    CUSTOMER_EMAIL = "customer_email"
    CUSTOMER_PHONE = "customer_phone"
    RESERVATION_DATE = "reservation_date"
    RESERVATION_TIME = "reservation_time"
    PARTY_SIZE = "party_size"
    STATUS = "status"
    SPECIAL_REQUESTS = "special_requests"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class SortDirection(enum.Enum):
    ASC = "asc"
    DESC = "desc"


def blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Reservation(BaseModel):
    """
    Eine Buchung. Wird nie verändert, nur ersetzt (frozen).
    id und Zeitstempel vergibt ausschließlich der ReservationStore.
    """
    id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    reservation_date: date
    reservation_time: time
    party_size: int = Field(ge=MIN_PARTY_SIZE, le=MAX_PARTY_SIZE)
    status: ReservationStatus = ReservationStatus.CONFIRMED
    special_requests: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(frozen=True)

    @field_validator('special_requests', mode='before')
    @classmethod
    def empty_special_requests(cls, v):
        return blank_to_none(v)

    @model_validator(mode='after')
    def updated_not_before_created(self):
        try:
            reversed_order = self.updated_at < self.created_at
        except TypeError:
            raise ValueError('created_at und updated_at brauchen beide eine Zeitzone oder beide keine')
        if reversed_order:
            raise ValueError('updated_at darf nicht vor created_at liegen')
        return self

    @field_serializer('reservation_time', when_used='json')
    def serialize_time(self, value: time) -> str:
        return value.strftime("%H:%M")
