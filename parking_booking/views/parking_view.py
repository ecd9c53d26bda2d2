from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from parking_booking.controllers.parking_controller import ParkingController
from parking_booking.controllers.booking_controller import BookingController
from parking_booking.controllers.user_controller import UserController
from parking_booking.controllers.seed_controller import SeedController
from parking_booking.database import Store, get_store
from parking_booking.schemas.parking_schemas import (
    ParkingSectionResponse,
    ParkingSlotResponse,
    LotMapSection,
    BookingRequest,
    BookingResponse,
    UserBookingResponse,
    UserResponse,
    LoginRequest,
    RegisterRequest,
    ResetResponse,
    GenericResponse,
)


router = APIRouter()


def current_user(store: Store = Depends(get_store)) -> UserResponse:
    return UserController.get_current_user(store)


@router.get("/")
def hello():
    return {"message": "Parking Slot Booking"}


# LOT

@router.get("/sections", response_model=List[ParkingSectionResponse])
def list_sections(store: Store = Depends(get_store)):
    return ParkingController.list_sections(store)


@router.get("/slots", response_model=List[ParkingSlotResponse])
def list_slots(store: Store = Depends(get_store)):
    return ParkingController.list_slots(store)


@router.get("/slots/available", response_model=List[ParkingSlotResponse])
def find_available_slots(
    day: date = Query(..., alias="date"),
    start_time: str = Query(..., description="HH:MM"),
    duration: int = 1,
    show_handicap: bool = True,
    show_electric: bool = True,
    store: Store = Depends(get_store),
):
    return ParkingController.find_available(store, day, start_time, duration, show_handicap, show_electric)


@router.get("/lot-map", response_model=List[LotMapSection])
def lot_map(
    day: Optional[date] = Query(None, alias="date"),
    start_time: Optional[str] = None,
    duration: Optional[int] = None,
    show_handicap: bool = True,
    show_electric: bool = True,
    store: Store = Depends(get_store),
):
    return ParkingController.lot_map(store, day, start_time, duration, show_handicap, show_electric)


# BOOKINGS

@router.post("/bookings", response_model=BookingResponse, status_code=201)
def create_booking(request: BookingRequest, store: Store = Depends(get_store), user: UserResponse = Depends(current_user)):
    user_id = request.user_id if request.user_id is not None else user.id
    return BookingController.book_slot(store, request.slot_id, user_id, request.start_time, request.end_time)


@router.get("/bookings/me", response_model=List[UserBookingResponse])
def my_bookings(store: Store = Depends(get_store), user: UserResponse = Depends(current_user)):
    return BookingController.list_user_bookings(store, user.id)


@router.post("/bookings/{booking_id}/cancel", response_model=GenericResponse)
def cancel_booking(booking_id: int, store: Store = Depends(get_store)):
    BookingController.cancel_booking(store, booking_id)
    return GenericResponse(message=f"Booking {booking_id} has been cancelled.", data={"success": True})


# ADMIN / DEMO

@router.post("/admin/reset", response_model=ResetResponse)
def reset_all(store: Store = Depends(get_store)):
    return BookingController.reset_all(store)


@router.post("/admin/seed", response_model=GenericResponse)
def seed_parking_data(store: Store = Depends(get_store)):
    created = SeedController.seed_parking_data(store)
    message = "Demo parking data created." if created else "Parking data already exists."
    return GenericResponse(message=message, data={"created": created})


# MOCK AUTH

@router.get("/auth/me", response_model=UserResponse)
def me(user: UserResponse = Depends(current_user)):
    return user


@router.post("/auth/login", response_model=UserResponse)
def login(request: LoginRequest, store: Store = Depends(get_store)):
    return UserController.login(store, request.email)


@router.post("/auth/register", response_model=UserResponse, status_code=201)
def register(request: RegisterRequest, store: Store = Depends(get_store)):
    return UserController.register(store, request.email, request.name)
