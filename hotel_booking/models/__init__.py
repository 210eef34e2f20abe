from hotel_booking.models.user import User
from hotel_booking.models.session import UserSession
from hotel_booking.models.enrollment import Enrollment, Address
from hotel_booking.models.ticket import TicketType, Ticket, TicketStatus
from hotel_booking.models.hotel import Hotel, Room
from hotel_booking.models.booking import Booking

__all__ = [
    "User", "UserSession",
    "Enrollment", "Address",
    "TicketType", "Ticket", "TicketStatus",
    "Hotel", "Room",
    "Booking",
]
