from hotel_booking.schemas.hotel import RoomResponse
from hotel_booking.schemas.booking import BookingRequest, BookingIdResponse, CurrentBookingResponse

__all__ = [
    "RoomResponse",
    "BookingRequest", "BookingIdResponse", "CurrentBookingResponse",
]
