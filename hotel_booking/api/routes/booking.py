"""
Booking endpoints: view, create and change the caller's room booking.

The rule engine returns failures as values; this module is where they become
HTTP responses.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.api.dependencies import get_booking_service
from hotel_booking.core.security import get_current_user_id
from hotel_booking.db.session import get_db
from hotel_booking.schemas.booking import BookingRequest, BookingIdResponse, CurrentBookingResponse
from hotel_booking.services.booking_service import BookingService
from hotel_booking.services.results import (
    Ok, NotFoundError, ConflictError, PaymentRequiredError,
)

router = APIRouter(prefix="/booking", tags=["Booking"])

FAILURE_STATUS = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_403_FORBIDDEN,
    PaymentRequiredError: status.HTTP_402_PAYMENT_REQUIRED,
}


def unwrap(result):
    """Return the value of an Ok result, raise the matching HTTPException otherwise."""
    if isinstance(result, Ok):
        return result.value
    raise HTTPException(status_code=FAILURE_STATUS[type(result)], detail=result.message)


@router.get("", response_model=CurrentBookingResponse)
async def get_booking(
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """Get the caller's booking together with its room."""
    current = unwrap(await service.get_current_booking(user_id))
    return CurrentBookingResponse.model_validate(current)


@router.post("", response_model=BookingIdResponse)
async def create_booking(
    booking_data: BookingRequest,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
    db: AsyncSession = Depends(get_db),
):
    """
    Book a place in a room.

    Requires an enrollment and a paid ticket whose type includes the hotel
    and is not remote. Fails with 403 when the room is full.
    """
    booking_id = unwrap(await service.create_booking(user_id, booking_data.room_id))
    await db.commit()
    return BookingIdResponse(booking_id=booking_id)


@router.put("/{booking_id}", response_model=BookingIdResponse)
async def update_booking(
    booking_id: int,
    booking_data: BookingRequest,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
    db: AsyncSession = Depends(get_db),
):
    """Move one of the caller's bookings to another room."""
    result = await service.update_booking(user_id, booking_data.room_id, booking_id)
    booking_id = unwrap(result)
    await db.commit()
    return BookingIdResponse(booking_id=booking_id)
