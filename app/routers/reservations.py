import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from app.dependencies import get_reservation_store
from app.models.reservation import SortField, SortDirection
from app.schemas.reservation import (
    FilterCriteria,
    SortCriteria,
    ReservationCreate,
    ReservationUpdate,
    ReservationListResponse,
    ReservationMutationResponse,
    SortToggleRequest,
)
from app.services.reservation_store import ReservationStore
from app.services.reservation_view import project, toggle_sort
from app.utils.errors import NotFoundError, ReservationValidationError

logger = logging.getLogger("app.routers.reservations")

router = APIRouter(prefix="/reservations", tags=["reservations"])


def get_filter_criteria(
    search: str = Query(default=""),
    status: str = Query(default=""),
    date: str = Query(default=""),
) -> FilterCriteria:
    try:
        return FilterCriteria(search_text=search, status_filter=status, date_filter=date)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Ungültiger Filter: {e.errors()[0]['msg']}")


def _failure_response(store: ReservationStore) -> HTTPException:
    failure = store.last_failure
    if isinstance(failure, NotFoundError):
        status_code = 404
    elif isinstance(failure, ReservationValidationError):
        status_code = 422
    else:
        status_code = 502
    return HTTPException(status_code=status_code, detail=store.last_error or "Unbekannter Fehler")


@router.get("/", response_model=ReservationListResponse)
def get_reservations(
    filters: FilterCriteria = Depends(get_filter_criteria),
    sort_field: SortField = Query(default=SortField.RESERVATION_DATE),
    sort_direction: SortDirection = Query(default=SortDirection.DESC),
    store: ReservationStore = Depends(get_reservation_store)
):
    """
    Gefilterte und sortierte Ansicht der Reservierungen.
    Kennzahlen beziehen sich immer auf alle Reservierungen.
    """
    sort = SortCriteria(field=sort_field, direction=sort_direction)
    projection = project(store.collection, filters, sort)
    return ReservationListResponse(
        rows=projection.rows,
        stats=projection.stats,
        sort=sort,
        is_loading=store.is_loading,
        last_error=store.last_error,
        demo_mode=store.demo_mode
    )


@router.post("/refresh", response_model=ReservationMutationResponse)
async def refresh_reservations(store: ReservationStore = Depends(get_reservation_store)):
    # Fehler hier sind nicht fatal: Demo-Daten werden angezeigt
    applied = await store.fetch_all()
    return ReservationMutationResponse(success=applied, last_error=store.last_error)


@router.post("/sort/toggle", response_model=SortCriteria)
def toggle_sort_criteria(request: SortToggleRequest):
    return toggle_sort(request.current, request.field)


@router.post("/", response_model=ReservationMutationResponse)
async def create_reservation(
    reservation: ReservationCreate,
    store: ReservationStore = Depends(get_reservation_store)
):
    if not await store.create(reservation):
        raise _failure_response(store)
    return ReservationMutationResponse(success=True, last_error=store.last_error)


@router.patch("/{id}", response_model=ReservationMutationResponse)
async def update_reservation(
    id: str,
    reservation: ReservationUpdate,
    store: ReservationStore = Depends(get_reservation_store)
):
    if not await store.update(id, reservation):
        raise _failure_response(store)
    return ReservationMutationResponse(success=True, last_error=store.last_error)


@router.delete("/{id}", response_model=ReservationMutationResponse)
async def delete_reservation(
    id: str,
    store: ReservationStore = Depends(get_reservation_store)
):
    if not await store.delete(id):
        raise _failure_response(store)
    return ReservationMutationResponse(success=True, last_error=store.last_error)
