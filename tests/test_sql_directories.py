"""
Tests for the SQLAlchemy collaborators and the rule engine running on them.
"""

import pytest
from sqlalchemy.exc import InvalidRequestError

from hotel_booking.infrastructure import (
    SqlRoomDirectory, SqlEnrollmentDirectory, SqlTicketDirectory, SqlBookingStore,
)
from hotel_booking.models import TicketStatus
from hotel_booking.services.booking_service import BookingService
from hotel_booking.services.results import Ok, ConflictError, NO_VACANCY
from tests import factories


def sql_service(db_session, lock_room_rows: bool = False) -> BookingService:
    return BookingService(
        rooms=SqlRoomDirectory(db_session, lock_room_rows=lock_room_rows),
        enrollments=SqlEnrollmentDirectory(db_session),
        tickets=SqlTicketDirectory(db_session),
        bookings=SqlBookingStore(db_session),
    )


@pytest.mark.asyncio
async def test_room_lookup(db_session, test_room):
    rooms = SqlRoomDirectory(db_session)

    assert (await rooms.get_room_by_id(test_room.id)).capacity == 3
    assert await rooms.get_room_by_id(0) is None


@pytest.mark.asyncio
async def test_room_lookup_with_row_lock(db_session, test_room):
    """SQLite has no row locks; the locked read still returns the room."""
    rooms = SqlRoomDirectory(db_session, lock_room_rows=True)
    assert (await rooms.get_room_by_id(test_room.id)).id == test_room.id


@pytest.mark.asyncio
async def test_enrollment_lookup(db_session, test_user):
    enrollments = SqlEnrollmentDirectory(db_session)
    assert await enrollments.get_enrollment_by_user_id(test_user.id) is None

    enrollment = await factories.create_enrollment(db_session, test_user)
    assert (await enrollments.get_enrollment_by_user_id(test_user.id)).id == enrollment.id


@pytest.mark.asyncio
async def test_ticket_lookup_loads_ticket_type(db_session, test_user):
    enrollment = await factories.create_enrollment(db_session, test_user)
    ticket_type = await factories.create_ticket_type(db_session, includes_hotel=False, is_remote=True)
    await factories.create_ticket(db_session, enrollment.id, ticket_type.id, TicketStatus.RESERVED)
    db_session.expunge_all()

    ticket = await SqlTicketDirectory(db_session).get_ticket_by_enrollment_id(enrollment.id)

    assert ticket.status == TicketStatus.RESERVED
    assert ticket.ticket_type.is_remote is True
    assert ticket.ticket_type.includes_hotel is False


@pytest.mark.asyncio
async def test_ticket_lookup_missing(db_session):
    assert await SqlTicketDirectory(db_session).get_ticket_by_enrollment_id(0) is None


@pytest.mark.asyncio
async def test_count_bookings_for_room(db_session, test_user, test_room):
    store = SqlBookingStore(db_session)
    assert await store.count_bookings_for_room(test_room.id) == 0

    await factories.create_booking(db_session, test_user.id, test_room.id)
    await factories.create_booking(db_session, test_user.id, test_room.id)

    assert await store.count_bookings_for_room(test_room.id) == 2


@pytest.mark.asyncio
async def test_first_booking_for_user_loads_room(db_session, test_user, test_room):
    other_room = await factories.create_room(db_session, test_room.hotel_id)
    first = await factories.create_booking(db_session, test_user.id, test_room.id)
    await factories.create_booking(db_session, test_user.id, other_room.id)
    db_session.expunge_all()

    booking = await SqlBookingStore(db_session).get_first_booking_for_user(test_user.id)

    assert booking.id == first.id
    assert booking.room.id == test_room.id


@pytest.mark.asyncio
async def test_booking_by_id_leaves_room_unloaded(db_session, test_user, test_room):
    created = await factories.create_booking(db_session, test_user.id, test_room.id)
    db_session.expunge_all()

    booking = await SqlBookingStore(db_session).get_booking_by_id(created.id)

    assert booking.room_id == test_room.id
    with pytest.raises(InvalidRequestError):
        booking.room


@pytest.mark.asyncio
async def test_insert_and_update_booking(db_session, test_user, test_room):
    store = SqlBookingStore(db_session)
    other_room = await factories.create_room(db_session, test_room.hotel_id)

    booking = await store.insert_booking(test_room.id, test_user.id)
    assert booking.id is not None
    assert booking.created_at is not None

    updated = await store.update_booking_room(booking.id, other_room.id)

    assert updated.id == booking.id
    assert updated.room_id == other_room.id
    assert await store.count_bookings_for_room(test_room.id) == 0
    assert await store.count_bookings_for_room(other_room.id) == 1


@pytest.mark.asyncio
async def test_rule_engine_on_sql(db_session, eligible_user):
    """Book a single room, see a second user rejected, then move the booking."""
    hotel = await factories.create_hotel(db_session)
    single_room = await factories.create_room(db_session, hotel.id, capacity=1)
    spare_room = await factories.create_room(db_session, hotel.id, capacity=2)
    second_user = await factories.create_user(db_session)
    await factories.create_paid_hotel_ticket(db_session, second_user)
    service = sql_service(db_session, lock_room_rows=True)

    created = await service.create_booking(eligible_user.id, single_room.id)
    assert isinstance(created, Ok)

    rejected = await service.create_booking(second_user.id, single_room.id)
    assert rejected == ConflictError(NO_VACANCY)

    moved = await service.update_booking(eligible_user.id, spare_room.id, created.value)
    assert moved == Ok(created.value)

    current = await service.get_current_booking(eligible_user.id)
    assert current.value.room.id == spare_room.id
