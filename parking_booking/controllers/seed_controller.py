import logging
import random
from typing import Optional
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from parking_booking.database import Store
from parking_booking.errors import StoreFailureError
from parking_booking.models.parking_models import ParkingSection, ParkingSlot, SlotType, SlotStatus

logger = logging.getLogger(__name__)

DEMO_SECTIONS = [
    ("A", "Ground Floor - Standard Parking"),
    ("B", "Ground Floor - Mixed Parking"),
    ("C", "First Floor - Mixed Parking"),
]

STANDARD_PRICE = 5.0


def _random_status(rng: random.Random, available_ratio: float) -> SlotStatus:
    if rng.random() < available_ratio:
        return SlotStatus.available
    return SlotStatus.booked if rng.random() < 0.5 else SlotStatus.unavailable


def _demo_slots(section_name: str):
    # YIELDS (slot_number, type, price_per_hour, available_ratio)
    if section_name == "A":
        for i in range(1, 11):
            yield f"A{i}", SlotType.standard, STANDARD_PRICE, 0.3
    elif section_name == "B":
        for i in range(1, 9):
            if i <= 2:
                yield f"B{i}", SlotType.handicap, 6.5, 0.4
            else:
                yield f"B{i}", SlotType.standard, STANDARD_PRICE, 0.4
    elif section_name == "C":
        for i in range(1, 13):
            if i <= 3:
                yield f"C{i}", SlotType.electric, 7.5, 0.5
            else:
                yield f"C{i}", SlotType.standard, STANDARD_PRICE, 0.5


class SeedController:
    @staticmethod
    def seed_parking_data(store: Store, rng: Optional[random.Random] = None) -> bool:
        # RETURNS False WHEN SECTIONS ALREADY EXIST
        rng = rng or random.Random()

        existing = store.fetch_one(text("SELECT COUNT(*) AS section_count FROM parking_sections"))
        if existing.section_count > 0:
            logger.info("Parking data already exists, skipping seed")
            return False

        try:
            with store.transaction() as session:
                for name, description in DEMO_SECTIONS:
                    section = ParkingSection(name=name, description=description)
                    session.add(section)
                    session.flush()

                    for slot_number, slot_type, price, available_ratio in _demo_slots(name):
                        session.add(ParkingSlot(
                            slot_number=slot_number,
                            section_id=section.id,
                            type=slot_type,
                            status=_random_status(rng, available_ratio),
                            price_per_hour=price,
                        ))
        except SQLAlchemyError as e:
            logger.error(f"Error seeding data: {e}")
            raise StoreFailureError(f"Internal error while seeding parking data: {e}") from e

        logger.info("Demo parking data seeded")
        return True
