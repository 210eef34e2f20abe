"""
SQLAlchemy implementations of the booking collaborators.

All four share the request's AsyncSession, so every read and write made while
deciding one request runs inside the same transaction. Writes are flushed, not
committed: the write routes commit before they answer.

LOCKING
=======

By default the capacity rule is a plain read-then-write:

  1. SELECT the room
  2. SELECT COUNT(*) FROM bookings WHERE room_id = :room_id
  3. INSERT / UPDATE the booking

Two requests interleaving between 2 and 3 can both see a free seat and
overbook the room. With lock_room_rows=True step 1 becomes
SELECT ... FOR UPDATE, which holds a row lock on the room until the request
commits, so deciders for the same room run one after the other. Dialects
without row locks (SQLite) ignore the clause.
"""

from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel_booking.models.booking import Booking
from hotel_booking.models.enrollment import Enrollment
from hotel_booking.models.hotel import Room
from hotel_booking.models.ticket import Ticket
from hotel_booking.services.interfaces import (
    RoomDirectory, EnrollmentDirectory, TicketDirectory, BookingStore,
)
from hotel_booking.core.metrics import record_db_operation


class SqlRoomDirectory(RoomDirectory):

    def __init__(self, db: AsyncSession, lock_room_rows: bool = False):
        self.db = db
        self.lock_room_rows = lock_room_rows

    async def get_room_by_id(self, room_id: int) -> Optional[Room]:
        query = select(Room).where(Room.id == room_id)
        if self.lock_room_rows:
            query = query.with_for_update()
        record_db_operation("read")
        result = await self.db.execute(query)
        return result.scalar_one_or_none()


class SqlEnrollmentDirectory(EnrollmentDirectory):

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_enrollment_by_user_id(self, user_id: int) -> Optional[Enrollment]:
        record_db_operation("read")
        result = await self.db.execute(
            select(Enrollment).where(Enrollment.user_id == user_id)
        )
        return result.scalar_one_or_none()


class SqlTicketDirectory(TicketDirectory):

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_ticket_by_enrollment_id(self, enrollment_id: int) -> Optional[Ticket]:
        record_db_operation("read")
        result = await self.db.execute(
            select(Ticket)
            .where(Ticket.enrollment_id == enrollment_id)
            .options(selectinload(Ticket.ticket_type))
            .order_by(Ticket.id.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()


class SqlBookingStore(BookingStore):

    def __init__(self, db: AsyncSession):
        self.db = db

    async def count_bookings_for_room(self, room_id: int) -> int:
        record_db_operation("read")
        result = await self.db.execute(
            select(func.count(Booking.id)).where(Booking.room_id == room_id)
        )
        return result.scalar_one()

    async def get_booking_by_id(self, booking_id: int) -> Optional[Booking]:
        record_db_operation("read")
        result = await self.db.execute(select(Booking).where(Booking.id == booking_id))
        return result.scalar_one_or_none()

    async def get_first_booking_for_user(self, user_id: int) -> Optional[Booking]:
        record_db_operation("read")
        result = await self.db.execute(
            select(Booking)
            .where(Booking.user_id == user_id)
            .options(selectinload(Booking.room))
            .order_by(Booking.id.asc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def insert_booking(self, room_id: int, user_id: int) -> Booking:
        booking = Booking(room_id=room_id, user_id=user_id)
        self.db.add(booking)
        record_db_operation("write")
        await self.db.flush()
        await self.db.refresh(booking)
        return booking

    async def update_booking_room(self, booking_id: int, room_id: int) -> Booking:
        booking = await self.get_booking_by_id(booking_id)
        booking.room_id = room_id
        record_db_operation("write")
        await self.db.flush()
        await self.db.refresh(booking)
        return booking
