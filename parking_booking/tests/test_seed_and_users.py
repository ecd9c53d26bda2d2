import random
import pytest
from collections import Counter
from parking_booking.config import Config
from parking_booking.controllers.parking_controller import ParkingController
from parking_booking.controllers.seed_controller import SeedController
from parking_booking.controllers.user_controller import UserController
from parking_booking.errors import InvalidStateError, NotFoundError
from parking_booking.models.parking_models import SlotStatus, SlotType


def test_seed_creates_demo_lot(store):
    assert SeedController.seed_parking_data(store, rng=random.Random(7)) is True

    sections = ParkingController.list_sections(store)
    assert [s.name for s in sections] == ["A", "B", "C"]

    slots = ParkingController.list_slots(store)
    per_section = Counter(slot.section_name for slot in slots)
    assert per_section == {"A": 10, "B": 8, "C": 12}

    by_number = {slot.slot_number: slot for slot in slots}
    assert by_number["B1"].type == SlotType.handicap
    assert by_number["B1"].price_per_hour == 6.5
    assert by_number["B3"].type == SlotType.standard
    assert by_number["C3"].type == SlotType.electric
    assert by_number["C3"].price_per_hour == 7.5
    assert by_number["C4"].price_per_hour == 5.0
    assert {slot.status for slot in slots} <= {SlotStatus.available, SlotStatus.booked, SlotStatus.unavailable}


def test_seed_is_idempotent(store):
    SeedController.seed_parking_data(store, rng=random.Random(7))
    assert SeedController.seed_parking_data(store) is False
    assert len(ParkingController.list_slots(store)) == 30


def test_current_user_is_created_once(store):
    first = UserController.get_current_user(store)
    second = UserController.get_current_user(store)

    assert first.email == Config.DEMO_USER_EMAIL
    assert first.name == Config.DEMO_USER_NAME
    assert first.id == second.id


def test_register_and_login(store):
    user = UserController.register(store, " Driver@Example.com ", "Driver")
    assert user.email == "driver@example.com"
    assert UserController.login(store, "driver@example.com").id == user.id


def test_register_duplicate_email(store):
    UserController.register(store, "driver@example.com", "Driver")
    with pytest.raises(InvalidStateError):
        UserController.register(store, "driver@example.com", "Someone Else")


def test_login_unknown_email(store):
    with pytest.raises(NotFoundError):
        UserController.login(store, "nobody@example.com")
