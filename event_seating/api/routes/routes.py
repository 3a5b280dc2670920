import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from event_seating.api.schemas.schemas import (
    AvailabilityResponse,
    BookingRequest,
    BookingResponse,
    ConfirmRequest,
    ConfirmResponse,
    EventAvailabilityResponse,
    EventCreate,
    EventDetailResponse,
    EventResponse,
)
from event_seating.application.container import Services
from event_seating.domain.exceptions import (
    CapacityError,
    NotFoundError,
    SeatingError,
    StorageError,
    ValidationError,
)
from event_seating.infrastructure.db.models import Booking, Event


router = APIRouter()
logger = logging.getLogger(__name__)


def get_services(request: Request) -> Services:
    return request.app.state.services


_STATUS_BY_ERROR = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    CapacityError: status.HTTP_409_CONFLICT,
}


def _http_error(exc: SeatingError) -> HTTPException:
    if isinstance(exc, StorageError):
        logger.warning("Storage unavailable while handling request: %s", exc)
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database is currently unavailable. Please retry after some time.",
        )

    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))

    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(exc),
    )


def _event_response(event: Event) -> EventResponse:
    return EventResponse(
        id=event.id,
        name=event.name,
        date=event.date.isoformat(),
        total_seats=event.total_seats,
        payment_time_minutes=event.payment_time_minutes,
        created_at=event.created_at.isoformat(),
    )


def _booking_response(booking: Booking) -> BookingResponse:
    return BookingResponse(
        id=booking.id,
        event_id=booking.event_id,
        user_name=booking.user_name,
        seats=booking.seats,
        status=booking.status.value,
        created_at=booking.created_at.isoformat(),
    )


@router.get("/health")
def health():
    return {"message": "Event Seating Engine is running"}


@router.post(
    "/events",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_event(
    request: EventCreate,
    services: Services = Depends(get_services),
):
    try:
        event = services.catalog.create_event(
            name=request.name,
            date=request.date,
            total_seats=request.total_seats,
            payment_time_minutes=request.payment_time_minutes,
        )
    except (ValidationError, StorageError) as exc:
        raise _http_error(exc) from exc

    return _event_response(event)


@router.get("/events", response_model=list[EventAvailabilityResponse])
def list_events(services: Services = Depends(get_services)):
    try:
        rows = services.queries.list_events_with_availability()
    except StorageError as exc:
        raise _http_error(exc) from exc

    return [
        EventAvailabilityResponse(
            **_event_response(row.event).model_dump(),
            available_seats=row.available_seats,
        )
        for row in rows
    ]


@router.get("/events/{event_id}", response_model=EventDetailResponse)
def get_event(event_id: int, services: Services = Depends(get_services)):
    try:
        detail = services.queries.get_event_detail(event_id)
    except (NotFoundError, StorageError) as exc:
        raise _http_error(exc) from exc

    return EventDetailResponse(
        event=_event_response(detail.event),
        bookings=[_booking_response(booking) for booking in detail.bookings],
        available_seats=detail.available_seats,
    )


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(event_id: int, services: Services = Depends(get_services)):
    try:
        services.catalog.delete_event(event_id)
    except (NotFoundError, StorageError) as exc:
        raise _http_error(exc) from exc

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/events/{event_id}/available", response_model=AvailabilityResponse)
def get_available_seats(event_id: int, services: Services = Depends(get_services)):
    try:
        available = services.inventory.get_available_seats(event_id)
    except (NotFoundError, StorageError) as exc:
        raise _http_error(exc) from exc

    return AvailabilityResponse(event_id=event_id, available_seats=available)


@router.post(
    "/events/{event_id}/book",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
def book_event(
    event_id: int,
    request: BookingRequest,
    services: Services = Depends(get_services),
):
    try:
        booking = services.inventory.book_seats(
            event_id=event_id,
            user_name=request.user_name,
            seats=request.seats,
        )
    except (ValidationError, NotFoundError, CapacityError, StorageError) as exc:
        raise _http_error(exc) from exc

    return _booking_response(booking)


@router.post("/events/{event_id}/confirm", response_model=ConfirmResponse)
def confirm_booking(
    event_id: int,
    request: ConfirmRequest,
    services: Services = Depends(get_services),
):
    try:
        confirmed = services.ledger.confirm_booking(
            event_id=event_id,
            user_name=request.user_name,
        )
    except (NotFoundError, CapacityError, StorageError) as exc:
        raise _http_error(exc) from exc

    return ConfirmResponse(status="confirmed", confirmed=confirmed)
