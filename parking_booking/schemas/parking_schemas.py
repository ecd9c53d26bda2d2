from datetime import datetime
from sqlmodel import SQLModel
from pydantic import model_validator
from typing import Optional, Any, List
from parking_booking.models.parking_models import SlotType, SlotStatus, BookingStatus
from parking_booking.utils.calculation import to_storage_time


class ParkingSectionResponse(SQLModel):
    id: int
    name: str
    description: Optional[str] = None


class ParkingSlotResponse(SQLModel):
    id: int
    slot_number: str
    section_id: int
    type: SlotType
    status: SlotStatus
    price_per_hour: float
    section_name: Optional[str] = None


class LotMapSlot(ParkingSlotResponse):
    effective_status: SlotStatus


class LotMapSection(SQLModel):
    id: int
    name: str
    description: Optional[str] = None
    slots: List[LotMapSlot] = []


class BookingResponse(SQLModel):
    id: int
    user_id: int
    slot_id: int
    start_time: datetime
    end_time: datetime
    status: BookingStatus
    total_price: float


class UserBookingResponse(BookingResponse):
    slot_number: str
    section_name: str


class BookingRequest(SQLModel):
    slot_id: int
    start_time: datetime
    end_time: datetime
    user_id: Optional[int] = None

    @model_validator(mode="after")
    def check_window(self):
        if to_storage_time(self.end_time) <= to_storage_time(self.start_time):
            raise ValueError("end_time must be after start_time")
        return self


class UserResponse(SQLModel):
    id: int
    email: str
    name: str


class LoginRequest(SQLModel):
    email: str


class RegisterRequest(SQLModel):
    email: str
    name: str


class ResetResponse(SQLModel):
    deleted_bookings: int
    released_slots: int


class GenericResponse(SQLModel):
    message: Optional[str] = None
    data: Optional[Any] = None
