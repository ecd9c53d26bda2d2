from enum import Enum
from typing import Optional
from pydantic import NaiveDatetime
from sqlmodel import SQLModel, Field


# MEMBER NAMES MATCH THEIR VALUES SO RAW SQL AND THE ORM STORE THE SAME TEXT
class SlotType(str, Enum):
    standard = "standard"
    handicap = "handicap"
    electric = "electric"


class SlotStatus(str, Enum):
    available = "available"
    booked = "booked"
    unavailable = "unavailable"
    maintenance = "maintenance"


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    # never set by any flow yet, reserved for marking past bookings
    completed = "completed"


# STATUSES THAT HOLD A SLOT FOR THEIR INTERVAL
ACTIVE_BOOKING_STATUSES = (BookingStatus.pending.value, BookingStatus.confirmed.value)


class ParkingSection(SQLModel, table=True):
    __tablename__ = "parking_sections"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    description: Optional[str] = None


class ParkingSlot(SQLModel, table=True):
    __tablename__ = "parking_slots"

    id: Optional[int] = Field(default=None, primary_key=True)
    slot_number: str
    section_id: int = Field(foreign_key="parking_sections.id", index=True)
    type: SlotType = Field(default=SlotType.standard)
    status: SlotStatus = Field(default=SlotStatus.available)
    price_per_hour: float


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    name: str
    password_hash: str


class Booking(SQLModel, table=True):
    __tablename__ = "bookings"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    slot_id: int = Field(foreign_key="parking_slots.id", index=True)
    # NAIVE UTC, SEE utils/calculation.to_storage_time
    start_time: NaiveDatetime
    end_time: NaiveDatetime
    status: BookingStatus = Field(default=BookingStatus.confirmed)
    total_price: float
