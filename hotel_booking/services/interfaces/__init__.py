"""
Data-access interfaces consumed by the booking rule engine.
Allows swapping the SQL implementations for in-memory ones in tests.
"""

from .directories import RoomDirectory, EnrollmentDirectory, TicketDirectory, BookingStore

__all__ = ['RoomDirectory', 'EnrollmentDirectory', 'TicketDirectory', 'BookingStore']
