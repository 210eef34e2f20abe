"""
Pydantic schemas for booking request/response validation.

Request and response bodies use camelCase field names (roomId, bookingId,
and the nested room's hotelId, createdAt, updatedAt).
"""

from pydantic import BaseModel, Field

from hotel_booking.schemas.hotel import RoomResponse


class BookingRequest(BaseModel):
    room_id: int = Field(..., alias="roomId")

    model_config = {"populate_by_name": True}


class BookingIdResponse(BaseModel):
    booking_id: int = Field(..., alias="bookingId")

    model_config = {"populate_by_name": True}


class CurrentBookingResponse(BaseModel):
    id: int
    room: RoomResponse

    model_config = {"from_attributes": True}
