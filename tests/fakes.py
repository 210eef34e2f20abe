"""
In-memory implementations of the booking collaborators.

Records are the real ORM classes, left transient (never added to a session),
so the rule engine sees exactly the attributes it sees in production.
"""

import asyncio
import itertools
from typing import Optional

from sqlalchemy.exc import OperationalError

from hotel_booking.models.booking import Booking
from hotel_booking.models.enrollment import Enrollment
from hotel_booking.models.hotel import Room
from hotel_booking.models.ticket import Ticket, TicketType, TicketStatus
from hotel_booking.services.interfaces import (
    RoomDirectory, EnrollmentDirectory, TicketDirectory, BookingStore,
)
from hotel_booking.services.booking_service import BookingService


class InMemoryRoomDirectory(RoomDirectory):

    def __init__(self):
        self.rooms: dict[int, Room] = {}
        self._ids = itertools.count(1)

    def add(self, capacity: int = 3, hotel_id: int = 1) -> Room:
        room_id = next(self._ids)
        room = Room(id=room_id, name=f"Room {room_id}", capacity=capacity, hotel_id=hotel_id)
        self.rooms[room_id] = room
        return room

    async def get_room_by_id(self, room_id: int) -> Optional[Room]:
        return self.rooms.get(room_id)


class InMemoryEnrollmentDirectory(EnrollmentDirectory):

    def __init__(self):
        self.by_user: dict[int, Enrollment] = {}
        self._ids = itertools.count(1)

    def add(self, user_id: int) -> Enrollment:
        enrollment = Enrollment(id=next(self._ids), user_id=user_id, name=f"User {user_id}")
        self.by_user[user_id] = enrollment
        return enrollment

    async def get_enrollment_by_user_id(self, user_id: int) -> Optional[Enrollment]:
        return self.by_user.get(user_id)


class InMemoryTicketDirectory(TicketDirectory):

    def __init__(self):
        self.by_enrollment: dict[int, Ticket] = {}
        self._ids = itertools.count(1)

    def add(
        self,
        enrollment_id: int,
        status: TicketStatus = TicketStatus.PAID,
        includes_hotel: bool = True,
        is_remote: bool = False,
    ) -> Ticket:
        ticket_id = next(self._ids)
        ticket_type = TicketType(
            id=ticket_id,
            name="With hotel" if includes_hotel else "No hotel",
            price=500,
            includes_hotel=includes_hotel,
            is_remote=is_remote,
        )
        ticket = Ticket(
            id=ticket_id,
            enrollment_id=enrollment_id,
            ticket_type_id=ticket_type.id,
            status=status,
            ticket_type=ticket_type,
        )
        self.by_enrollment[enrollment_id] = ticket
        return ticket

    async def get_ticket_by_enrollment_id(self, enrollment_id: int) -> Optional[Ticket]:
        return self.by_enrollment.get(enrollment_id)


class InMemoryBookingStore(BookingStore):

    def __init__(self, rooms: InMemoryRoomDirectory):
        self.rooms = rooms
        self.bookings: dict[int, Booking] = {}
        self._ids = itertools.count(1)

    def add(self, user_id: int, room_id: int) -> Booking:
        booking = Booking(id=next(self._ids), user_id=user_id, room_id=room_id)
        self.bookings[booking.id] = booking
        return booking

    async def count_bookings_for_room(self, room_id: int) -> int:
        return sum(1 for b in self.bookings.values() if b.room_id == room_id)

    async def get_booking_by_id(self, booking_id: int) -> Optional[Booking]:
        return self.bookings.get(booking_id)

    async def get_first_booking_for_user(self, user_id: int) -> Optional[Booking]:
        for booking_id in sorted(self.bookings):
            booking = self.bookings[booking_id]
            if booking.user_id == user_id:
                booking.room = self.rooms.rooms[booking.room_id]
                return booking
        return None

    async def insert_booking(self, room_id: int, user_id: int) -> Booking:
        return self.add(user_id, room_id)

    async def update_booking_room(self, booking_id: int, room_id: int) -> Booking:
        booking = self.bookings[booking_id]
        booking.room_id = room_id
        return booking


class YieldingBookingStore(InMemoryBookingStore):
    """Suspends after every occupancy count, like a real database round trip."""

    async def count_bookings_for_room(self, room_id: int) -> int:
        count = await super().count_bookings_for_room(room_id)
        await asyncio.sleep(0)
        return count


class UnavailableBookingStore(InMemoryBookingStore):
    """Every call fails as if the database connection dropped."""

    def _down(self):
        return OperationalError("SELECT 1", {}, Exception("connection refused"))

    async def count_bookings_for_room(self, room_id: int) -> int:
        raise self._down()

    async def get_booking_by_id(self, booking_id: int) -> Optional[Booking]:
        raise self._down()

    async def get_first_booking_for_user(self, user_id: int) -> Optional[Booking]:
        raise self._down()


class FakeWorld:
    """All four in-memory collaborators plus helpers to set up eligible users."""

    def __init__(self, store_class=InMemoryBookingStore):
        self.rooms = InMemoryRoomDirectory()
        self.enrollments = InMemoryEnrollmentDirectory()
        self.tickets = InMemoryTicketDirectory()
        self.bookings = store_class(self.rooms)
        self.service = BookingService(
            rooms=self.rooms,
            enrollments=self.enrollments,
            tickets=self.tickets,
            bookings=self.bookings,
        )

    def eligible_user(self, user_id: int, **ticket_options) -> int:
        enrollment = self.enrollments.add(user_id)
        self.tickets.add(enrollment.id, **ticket_options)
        return user_id
