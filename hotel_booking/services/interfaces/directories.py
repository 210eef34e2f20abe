"""
Collaborator contracts for the booking rule engine.

Each directory is a narrow, read-mostly view of one table. Lookups return
None when the record does not exist; they never raise for absence.

Implementations:
- hotel_booking.infrastructure.sql_directories: SQLAlchemy, one AsyncSession per request
- tests.fakes: in-memory dictionaries
"""

from abc import ABC, abstractmethod
from typing import Optional

from hotel_booking.models.booking import Booking
from hotel_booking.models.enrollment import Enrollment
from hotel_booking.models.hotel import Room
from hotel_booking.models.ticket import Ticket


class RoomDirectory(ABC):

    @abstractmethod
    async def get_room_by_id(self, room_id: int) -> Optional[Room]:
        """Room with its capacity, or None."""
        pass


class EnrollmentDirectory(ABC):

    @abstractmethod
    async def get_enrollment_by_user_id(self, user_id: int) -> Optional[Enrollment]:
        pass


class TicketDirectory(ABC):

    @abstractmethod
    async def get_ticket_by_enrollment_id(self, enrollment_id: int) -> Optional[Ticket]:
        """Ticket with ``ticket_type`` loaded, or None."""
        pass


class BookingStore(ABC):

    @abstractmethod
    async def count_bookings_for_room(self, room_id: int) -> int:
        """Current occupancy of the room."""
        pass

    @abstractmethod
    async def get_booking_by_id(self, booking_id: int) -> Optional[Booking]:
        pass

    @abstractmethod
    async def get_first_booking_for_user(self, user_id: int) -> Optional[Booking]:
        """
        First booking owned by the user (lowest id), with ``room`` loaded.
        """
        pass

    @abstractmethod
    async def insert_booking(self, room_id: int, user_id: int) -> Booking:
        pass

    @abstractmethod
    async def update_booking_room(self, booking_id: int, room_id: int) -> Booking:
        pass
