"""
Booking model: one user's place in one room.

Key design decisions:
- No unique constraint on (user_id) or (room_id); capacity is a business rule
  checked by the booking service, not a database constraint
- room_id is the only column that changes after creation
- room is never lazy-loaded; queries that need it ask for it with selectinload
"""

from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship

from hotel_booking.db.base import Base, TimestampMixin


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False, index=True)

    room = relationship("Room", lazy="raise")

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, user={self.user_id}, room={self.room_id})>"
