"""
FastAPI dependencies that assemble the booking rule engine for a request.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.core.config import get_settings
from hotel_booking.db.session import get_db
from hotel_booking.infrastructure import (
    SqlRoomDirectory, SqlEnrollmentDirectory, SqlTicketDirectory, SqlBookingStore,
)
from hotel_booking.services.booking_service import BookingService


def get_booking_service(db: AsyncSession = Depends(get_db)) -> BookingService:
    settings = get_settings()
    return BookingService(
        rooms=SqlRoomDirectory(db, lock_room_rows=settings.BOOKING_LOCK_ROOM_ROWS),
        enrollments=SqlEnrollmentDirectory(db),
        tickets=SqlTicketDirectory(db),
        bookings=SqlBookingStore(db),
    )
