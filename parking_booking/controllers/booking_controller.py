import logging
from datetime import datetime
from typing import List
from sqlalchemy import text, Integer, String, Float, DateTime
from sqlalchemy.exc import SQLAlchemyError
from parking_booking.database import Store
from parking_booking.errors import ParkingError, NotFoundError, InvalidStateError, InvalidInputError, StoreFailureError
from parking_booking.models.parking_models import Booking, BookingStatus, SlotStatus
from parking_booking.schemas.parking_schemas import BookingResponse, UserBookingResponse, ResetResponse
from parking_booking.utils.calculation import calculate_total_price, to_storage_time, format_local_time

logger = logging.getLogger(__name__)

USER_BOOKINGS_QUERY = text("""
    SELECT b.id, b.user_id, b.slot_id, b.start_time, b.end_time, b.status, b.total_price,
           ps.slot_number, pse.name AS section_name
    FROM bookings b
    JOIN parking_slots ps ON b.slot_id = ps.id
    JOIN parking_sections pse ON ps.section_id = pse.id
    WHERE b.user_id = :user_id
    ORDER BY b.start_time DESC
""").columns(
    id=Integer,
    user_id=Integer,
    slot_id=Integer,
    start_time=DateTime,
    end_time=DateTime,
    status=String,
    total_price=Float,
    slot_number=String,
    section_name=String,
)


class BookingController:
    @staticmethod
    def book_slot(store: Store, slot_id: int, user_id: int, start_time: datetime, end_time: datetime) -> BookingResponse:
        start = to_storage_time(start_time)
        end = to_storage_time(end_time)
        if end <= start:
            raise InvalidInputError("end_time must be after start_time")

        try:
            with store.transaction() as session:
                query_user = text("SELECT id FROM users WHERE id = :user_id")
                if not session.execute(query_user, {"user_id": user_id}).fetchone():
                    raise NotFoundError(f"User with ID '{user_id}' does not exist.")

                query_slot = text("SELECT id, slot_number, status, price_per_hour FROM parking_slots WHERE id = :slot_id")
                slot = session.execute(query_slot, {"slot_id": slot_id}).fetchone()

                if not slot:
                    raise NotFoundError(f"Parking slot with ID '{slot_id}' does not exist.")

                if slot.status != SlotStatus.available.value:
                    raise InvalidStateError(f"Parking slot {slot.slot_number} is not available.")

                total_price = calculate_total_price(start, end, slot.price_per_hour)

                # ONLY ONE REQUEST CAN MOVE THE SLOT OUT OF 'available'
                claim_slot = text("UPDATE parking_slots SET status = 'booked' WHERE id = :slot_id AND status = 'available'")
                if session.execute(claim_slot, {"slot_id": slot_id}).rowcount != 1:
                    raise InvalidStateError(f"Parking slot {slot.slot_number} was booked by another request.")

                booking = Booking(
                    user_id=user_id,
                    slot_id=slot_id,
                    start_time=start,
                    end_time=end,
                    status=BookingStatus.confirmed,
                    total_price=total_price,
                )
                session.add(booking)
                session.flush()
                response = BookingResponse(**booking.model_dump())

            logger.info(
                f"Booking {response.id} confirmed: slot {slot.slot_number} for user {user_id} "
                f"from {format_local_time(start)} to {format_local_time(end)}, total {total_price}"
            )
            return response

        except ParkingError as parking_exc:
            logger.warning(f"Booking rejected for slot {slot_id}: {parking_exc.message}")
            raise parking_exc

        except SQLAlchemyError as e:
            logger.error(f"Store failure while booking slot {slot_id}: {e}")
            raise StoreFailureError(f"Internal error while booking slot {slot_id}: {e}") from e

    @staticmethod
    def list_user_bookings(store: Store, user_id: int) -> List[UserBookingResponse]:
        rows = store.fetch_all(USER_BOOKINGS_QUERY, {"user_id": user_id})
        return [UserBookingResponse(**row._mapping) for row in rows]

    @staticmethod
    def cancel_booking(store: Store, booking_id: int) -> bool:
        try:
            with store.transaction() as session:
                query_booking = text("SELECT id, slot_id, status FROM bookings WHERE id = :booking_id")
                booking = session.execute(query_booking, {"booking_id": booking_id}).fetchone()

                if not booking:
                    raise NotFoundError(f"Booking with ID '{booking_id}' was not found.")

                update_booking = text("UPDATE bookings SET status = 'cancelled' WHERE id = :booking_id")
                session.execute(update_booking, {"booking_id": booking.id})

                # RELEASED EVEN IF THE SLOT HAS OTHER BOOKINGS
                release_slot = text("UPDATE parking_slots SET status = 'available' WHERE id = :slot_id")
                session.execute(release_slot, {"slot_id": booking.slot_id})

            logger.info(f"Booking {booking_id} cancelled, slot {booking.slot_id} released")
            return True

        except ParkingError as parking_exc:
            logger.warning(f"Cancellation rejected: {parking_exc.message}")
            raise parking_exc

        except SQLAlchemyError as e:
            logger.error(f"Store failure while cancelling booking {booking_id}: {e}")
            raise StoreFailureError(f"Internal error while cancelling booking {booking_id}: {e}") from e

    @staticmethod
    def reset_all(store: Store) -> ResetResponse:
        try:
            with store.transaction() as session:
                deleted = session.execute(text("DELETE FROM bookings")).rowcount
                released = session.execute(
                    text("UPDATE parking_slots SET status = 'available' WHERE status = 'booked'")
                ).rowcount
        except SQLAlchemyError as e:
            logger.error(f"Store failure while clearing bookings: {e}")
            raise StoreFailureError(f"Internal error while clearing bookings: {e}") from e

        logger.info(f"Cleared {deleted} bookings and released {released} slots")
        return ResetResponse(deleted_bookings=deleted, released_slots=released)
