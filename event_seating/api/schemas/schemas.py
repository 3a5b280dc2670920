from datetime import datetime

from pydantic import BaseModel, Field


class EventCreate(BaseModel):
    name: str = Field(min_length=1)
    date: datetime
    total_seats: int = Field(gt=0)
    payment_time_minutes: int = Field(default=30, gt=0)


class EventResponse(BaseModel):
    id: int
    name: str
    date: str
    total_seats: int
    payment_time_minutes: int
    created_at: str


class EventAvailabilityResponse(EventResponse):
    available_seats: int


class BookingRequest(BaseModel):
    user_name: str = Field(min_length=1)
    seats: int = Field(gt=0)


class BookingResponse(BaseModel):
    id: int
    event_id: int
    user_name: str
    seats: int
    status: str
    created_at: str


class EventDetailResponse(BaseModel):
    event: EventResponse
    bookings: list[BookingResponse]
    available_seats: int


class ConfirmRequest(BaseModel):
    user_name: str = Field(min_length=1)


class ConfirmResponse(BaseModel):
    status: str
    confirmed: int


class AvailabilityResponse(BaseModel):
    event_id: int
    available_seats: int
