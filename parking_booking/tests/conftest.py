import pytest
from fastapi.testclient import TestClient
from sqlmodel import select
from parking_booking.config import Config
from parking_booking.database import Store
from parking_booking.main import app
from parking_booking.models.parking_models import (
    Booking,
    BookingStatus,
    ParkingSection,
    ParkingSlot,
    SlotStatus,
    SlotType,
    User,
)


class LotBuilder:
    # INSERTS ROWS STRAIGHT THROUGH THE ORM SO TESTS CAN SET UP ANY STATE

    def __init__(self, store: Store):
        self.store = store

    def section(self, name="A", description=None):
        with self.store.transaction() as session:
            section = ParkingSection(name=name, description=description)
            session.add(section)
            session.flush()
            return section.id

    def slot(self, section_id, slot_number, status=SlotStatus.available, type=SlotType.standard, price_per_hour=5.0):
        with self.store.transaction() as session:
            slot = ParkingSlot(
                slot_number=slot_number,
                section_id=section_id,
                type=type,
                status=status,
                price_per_hour=price_per_hour,
            )
            session.add(slot)
            session.flush()
            return slot.id

    def user(self, email="driver@example.com", name="Driver"):
        with self.store.transaction() as session:
            user = User(email=email, name=name, password_hash=Config.PLACEHOLDER_PASSWORD_HASH)
            session.add(user)
            session.flush()
            return user.id

    def booking(self, user_id, slot_id, start_time, end_time, status=BookingStatus.confirmed, total_price=0.0):
        with self.store.transaction() as session:
            booking = Booking(
                user_id=user_id,
                slot_id=slot_id,
                start_time=start_time,
                end_time=end_time,
                status=status,
                total_price=total_price,
            )
            session.add(booking)
            session.flush()
            return booking.id

    def get_slot(self, slot_id):
        with self.store.session() as session:
            return session.get(ParkingSlot, slot_id)

    def get_booking(self, booking_id):
        with self.store.session() as session:
            return session.get(Booking, booking_id)

    def count_bookings(self):
        with self.store.session() as session:
            return len(session.exec(select(Booking)).all())


@pytest.fixture(autouse=True)
def utc_lot(monkeypatch):
    monkeypatch.setattr(Config, "TIMEZONE", "UTC")


@pytest.fixture
def store():
    store = Store("sqlite://", read_retries=2)
    store.init_db()
    yield store
    store.close()


@pytest.fixture
def lot(store):
    return LotBuilder(store)


@pytest.fixture
def client(store):
    app.state.store = store
    with TestClient(app) as test_client:
        yield test_client
    app.state.store = None
