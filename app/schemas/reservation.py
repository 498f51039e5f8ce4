from datetime import date, time
from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator
from typing import Optional

from app.models.reservation import (
    Reservation,
    ReservationStatus,
    SortField,
    SortDirection,
    MIN_PARTY_SIZE,
    MAX_PARTY_SIZE,
    blank_to_none,
)


class ReservationCreate(BaseModel):
    """Draft: alles außer id und Zeitstempel"""
    customer_name: str
    customer_email: str
    customer_phone: str
    reservation_date: date
    reservation_time: time
    party_size: int = Field(ge=MIN_PARTY_SIZE, le=MAX_PARTY_SIZE)
    status: ReservationStatus = ReservationStatus.CONFIRMED
    special_requests: Optional[str] = None

    @field_validator('customer_name', 'customer_email', 'customer_phone')
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError('Feld darf nicht leer sein')
        return v

    @field_validator('special_requests', mode='before')
    @classmethod
    def empty_special_requests(cls, v):
        return blank_to_none(v)


class ReservationUpdate(BaseModel):
    """Partieller Draft, nur gesetzte Felder werden übernommen (exclude_unset)"""
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    reservation_date: Optional[date] = None
    reservation_time: Optional[time] = None
    party_size: Optional[int] = Field(default=None, ge=MIN_PARTY_SIZE, le=MAX_PARTY_SIZE)
    status: Optional[ReservationStatus] = None
    special_requests: Optional[str] = None

    @field_validator('special_requests', mode='before')
    @classmethod
    def empty_special_requests(cls, v):
        return blank_to_none(v)

    @model_validator(mode='after')
    def only_special_requests_nullable(self):
        # null heißt "löschen" und ist nur für special_requests erlaubt
        for field in self.model_fields_set:
            if field != 'special_requests' and getattr(self, field) is None:
                raise ValueError(f'{field} darf nicht null sein')
        return self

    @field_serializer('reservation_time', when_used='json')
    def serialize_time(self, value: Optional[time]) -> Optional[str]:
        return value.strftime("%H:%M") if value is not None else None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class FilterCriteria(BaseModel):
    search_text: str = ""
    status_filter: Optional[ReservationStatus] = None
    date_filter: Optional[str] = None

    # "" aus dem Formular heißt "alle"
    @field_validator('status_filter', 'date_filter', mode='before')
    @classmethod
    def empty_means_any(cls, v):
        return blank_to_none(v)


class SortCriteria(BaseModel):
    field: SortField = SortField.RESERVATION_DATE
    direction: SortDirection = SortDirection.DESC


class ReservationStats(BaseModel):
    total: int
    today: int
    confirmed: int
    guests: int


class ReservationProjection(BaseModel):
    rows: list[Reservation]
    stats: ReservationStats


class ReservationListResponse(ReservationProjection):
    """Projection plus Store-Zustand für das Dashboard"""
    sort: SortCriteria
    is_loading: bool
    last_error: Optional[str] = None
    demo_mode: bool


class ReservationMutationResponse(BaseModel):
    success: bool
    last_error: Optional[str] = None


class SortToggleRequest(BaseModel):
    current: SortCriteria
    field: SortField
