"""
Booking rule engine: decides whether a room assignment may be created or changed.

VALIDATION ORDER
================

Checks short-circuit on the first failure, in a fixed order:

  create: room exists -> room has a free place -> user is enrolled
          -> ticket is paid -> ticket type includes hotel and is not remote
  update: booking exists -> caller owns it -> room exists -> room has a free place

Existence checks run before eligibility checks, so a request naming an
unknown room or booking gets NotFound rather than a business-rule rejection.
Ownership runs before capacity so a non-owner cannot learn a room's occupancy
from the error kind.

CONCURRENCY
===========

Capacity is checked with read-then-write (count occupants, then insert or
update) and nothing here spans the two steps. Two concurrent creates against
a room with one place left can both pass the count and both insert. The SQL
room directory can hold a row lock on the room for the duration of the
request (BOOKING_LOCK_ROOM_ROWS) to serialise deciders on PostgreSQL; the
engine itself stays lock-free.

The update capacity check counts the booking being moved when it already
sits in the target room, so "moving" a booking into its own full room is
rejected.
"""

import time
from contextlib import contextmanager
from typing import Union

from hotel_booking.core.logging import get_logger
from hotel_booking.core.metrics import booking_decision_latency, record_booking_decision
from hotel_booking.models.ticket import TicketStatus
from hotel_booking.services.interfaces import (
    RoomDirectory, EnrollmentDirectory, TicketDirectory, BookingStore,
)
from hotel_booking.services.results import (
    Ok, NotFoundError, ConflictError, PaymentRequiredError, BookingFailure, CurrentBooking,
    NO_VACANCY, TICKET_NOT_ELIGIBLE, OWNER_MISMATCH,
)

logger = get_logger(__name__)


class BookingService:
    """Booking decisions over injected room, enrollment, ticket and booking collaborators."""

    def __init__(
        self,
        rooms: RoomDirectory,
        enrollments: EnrollmentDirectory,
        tickets: TicketDirectory,
        bookings: BookingStore,
    ):
        self.rooms = rooms
        self.enrollments = enrollments
        self.tickets = tickets
        self.bookings = bookings

    async def get_current_booking(self, user_id: int) -> Union[Ok[CurrentBooking], NotFoundError]:
        with _decision("get") as decision:
            booking = await self.bookings.get_first_booking_for_user(user_id)
            if not booking:
                return decision.reject(NotFoundError(), user_id=user_id)

            return decision.accept(CurrentBooking(id=booking.id, room=booking.room))

    async def create_booking(self, user_id: int, room_id: int) -> Union[Ok[int], BookingFailure]:
        with _decision("create") as decision:
            room = await self.rooms.get_room_by_id(room_id)
            if not room:
                return decision.reject(NotFoundError(), user_id=user_id, room_id=room_id)

            occupants = await self.bookings.count_bookings_for_room(room.id)
            if occupants >= room.capacity:
                return decision.reject(
                    ConflictError(NO_VACANCY),
                    user_id=user_id,
                    room_id=room_id,
                    occupants=occupants,
                    capacity=room.capacity,
                )

            enrollment = await self.enrollments.get_enrollment_by_user_id(user_id)
            if not enrollment:
                return decision.reject(NotFoundError(), user_id=user_id, room_id=room_id)

            ticket = await self.tickets.get_ticket_by_enrollment_id(enrollment.id)
            if not ticket or ticket.status == TicketStatus.RESERVED:
                return decision.reject(PaymentRequiredError(), user_id=user_id, room_id=room_id)

            ticket_type = ticket.ticket_type
            if not ticket_type.includes_hotel or ticket_type.is_remote:
                return decision.reject(
                    ConflictError(TICKET_NOT_ELIGIBLE),
                    user_id=user_id,
                    room_id=room_id,
                    ticket_type_id=ticket_type.id,
                )

            booking = await self.bookings.insert_booking(room_id, user_id)

            logger.info(
                "booking_created",
                booking_id=booking.id,
                user_id=user_id,
                room_id=room_id,
                occupants=occupants + 1,
                capacity=room.capacity,
            )
            return decision.accept(booking.id)

    async def update_booking(
        self,
        user_id: int,
        room_id: int,
        booking_id: int,
    ) -> Union[Ok[int], NotFoundError, ConflictError]:
        with _decision("update") as decision:
            existing = await self.bookings.get_booking_by_id(booking_id)
            if not existing:
                return decision.reject(NotFoundError(), user_id=user_id, booking_id=booking_id)
            if existing.user_id != user_id:
                return decision.reject(
                    ConflictError(OWNER_MISMATCH),
                    user_id=user_id,
                    booking_id=booking_id,
                )

            room = await self.rooms.get_room_by_id(room_id)
            if not room:
                return decision.reject(NotFoundError(), user_id=user_id, room_id=room_id)

            occupants = await self.bookings.count_bookings_for_room(room.id)
            if occupants >= room.capacity:
                return decision.reject(
                    ConflictError(NO_VACANCY),
                    user_id=user_id,
                    booking_id=booking_id,
                    room_id=room_id,
                    occupants=occupants,
                    capacity=room.capacity,
                )

            previous_room_id = existing.room_id
            booking = await self.bookings.update_booking_room(booking_id, room_id)

            logger.info(
                "booking_room_changed",
                booking_id=booking.id,
                user_id=user_id,
                from_room_id=previous_room_id,
                to_room_id=room_id,
            )
            return decision.accept(booking.id)


class _Decision:
    """Records the outcome of one engine operation exactly once."""

    def __init__(self, operation: str):
        self.operation = operation
        self.outcome = None

    def accept(self, value) -> Ok:
        self.outcome = "success"
        return Ok(value)

    def reject(self, failure: BookingFailure, **context) -> BookingFailure:
        self.outcome = failure.kind
        logger.info(
            "booking_rejected",
            operation=self.operation,
            kind=failure.kind,
            reason=failure.message,
            **context,
        )
        return failure


@contextmanager
def _decision(operation: str):
    decision = _Decision(operation)
    start = time.perf_counter()
    try:
        yield decision
    finally:
        booking_decision_latency.labels(operation=operation).observe(time.perf_counter() - start)
        # No outcome means a collaborator raised; that is not a booking decision.
        if decision.outcome is not None:
            record_booking_decision(operation, decision.outcome)
