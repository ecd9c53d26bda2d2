import logging
from datetime import date
from typing import List, Optional
from sqlalchemy import text, bindparam, DateTime
from parking_booking.config import Config
from parking_booking.database import Store
from parking_booking.errors import InvalidInputError
from parking_booking.models.parking_models import SlotType, SlotStatus
from parking_booking.schemas.parking_schemas import (
    ParkingSectionResponse,
    ParkingSlotResponse,
    LotMapSection,
    LotMapSlot,
)
from parking_booking.utils.calculation import build_time_window

logger = logging.getLogger(__name__)

SLOTS_WITH_SECTION_QUERY = text("""
    SELECT ps.id, ps.slot_number, ps.section_id, ps.type, ps.status, ps.price_per_hour,
           pse.name AS section_name
    FROM parking_slots ps
    JOIN parking_sections pse ON ps.section_id = pse.id
    ORDER BY ps.section_id, ps.slot_number
""")

# A BOOKING CONFLICTS WHEN IT COVERS THE START, COVERS THE END OR SITS INSIDE THE WINDOW
AVAILABLE_SLOTS_QUERY = text("""
    SELECT ps.id, ps.slot_number, ps.section_id, ps.type, ps.status, ps.price_per_hour,
           pse.name AS section_name
    FROM parking_slots ps
    JOIN parking_sections pse ON ps.section_id = pse.id
    WHERE ps.status = 'available'
    AND ps.id NOT IN (
        SELECT b.slot_id FROM bookings b
        WHERE b.status IN ('pending', 'confirmed')
        AND (
            (b.start_time <= :window_start AND b.end_time > :window_start) OR
            (b.start_time < :window_end AND b.end_time >= :window_end) OR
            (b.start_time >= :window_start AND b.end_time <= :window_end)
        )
    )
    ORDER BY ps.section_id, ps.slot_number
""").bindparams(
    bindparam("window_start", type_=DateTime),
    bindparam("window_end", type_=DateTime),
)


class ParkingController:
    @staticmethod
    def list_sections(store: Store) -> List[ParkingSectionResponse]:
        query = text("SELECT id, name, description FROM parking_sections ORDER BY name")
        sections = store.fetch_all(query)
        return [ParkingSectionResponse(**row._mapping) for row in sections]

    @staticmethod
    def list_slots(store: Store) -> List[ParkingSlotResponse]:
        slots = store.fetch_all(SLOTS_WITH_SECTION_QUERY)
        return [ParkingSlotResponse(**row._mapping) for row in slots]

    @staticmethod
    def find_available(
        store: Store,
        day: date,
        start_time,
        duration_hours: int,
        show_handicap: bool = True,
        show_electric: bool = True,
    ) -> List[ParkingSlotResponse]:
        window_start, window_end = build_time_window(day, start_time, duration_hours)

        rows = store.fetch_all(AVAILABLE_SLOTS_QUERY, {"window_start": window_start, "window_end": window_end})
        slots = [ParkingSlotResponse(**row._mapping) for row in rows]
        slots = [slot for slot in slots if not ParkingController._hidden_by_type(slot, show_handicap, show_electric)]

        logger.info(f"{len(slots)} slots available between {window_start} and {window_end} UTC")
        return slots

    @staticmethod
    def lot_map(
        store: Store,
        day: Optional[date] = None,
        start_time=None,
        duration_hours: Optional[int] = None,
        show_handicap: bool = True,
        show_electric: bool = True,
    ) -> List[LotMapSection]:
        sections = ParkingController.list_sections(store)
        slots = ParkingController.list_slots(store)

        # A DATE ALONE FILTERS WITH THE DEFAULT 09:00 START AND ONE HOUR
        filters_applied = day is not None
        if not filters_applied and (start_time is not None or duration_hours is not None):
            raise InvalidInputError("A date is required to filter the lot map by start time or duration.")

        available_ids = set()
        if filters_applied:
            available = ParkingController.find_available(
                store,
                day,
                start_time if start_time is not None else Config.DEFAULT_START_TIME,
                duration_hours if duration_hours is not None else Config.DEFAULT_DURATION_HOURS,
                show_handicap,
                show_electric,
            )
            available_ids = {slot.id for slot in available}

        lot = {section.id: LotMapSection(**section.model_dump(), slots=[]) for section in sections}
        for slot in slots:
            effective_status = slot.status
            # UNDER A WINDOW ONLY 'booked' AND 'unavailable' ARE KEPT, THE REST FOLLOWS THE AVAILABLE SET
            if filters_applied and slot.status not in (SlotStatus.booked, SlotStatus.unavailable):
                effective_status = SlotStatus.available if slot.id in available_ids else SlotStatus.unavailable

            lot[slot.section_id].slots.append(
                LotMapSlot(**slot.model_dump(), effective_status=effective_status)
            )
        return list(lot.values())

    @staticmethod
    def _hidden_by_type(slot: ParkingSlotResponse, show_handicap: bool, show_electric: bool) -> bool:
        if slot.type == SlotType.handicap and not show_handicap:
            return True
        if slot.type == SlotType.electric and not show_electric:
            return True
        return False
