"""
Tickets and ticket types.

Key design decisions:
- Ticket status only moves RESERVED -> PAID, outside this service
- Hotel eligibility lives on the ticket type (includes_hotel, is_remote)
"""

import enum

from sqlalchemy import Column, Integer, String, Boolean, Enum, ForeignKey
from sqlalchemy.orm import relationship

from hotel_booking.db.base import Base, TimestampMixin


class TicketStatus(str, enum.Enum):
    RESERVED = "RESERVED"
    PAID = "PAID"


class TicketType(Base, TimestampMixin):
    __tablename__ = "ticket_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Integer, nullable=False)
    is_remote = Column(Boolean, nullable=False)
    includes_hotel = Column(Boolean, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<TicketType(id={self.id}, remote={self.is_remote}, "
            f"hotel={self.includes_hotel})>"
        )


class Ticket(Base, TimestampMixin):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    ticket_type_id = Column(Integer, ForeignKey("ticket_types.id"), nullable=False)
    enrollment_id = Column(Integer, ForeignKey("enrollments.id"), nullable=False, index=True)
    status = Column(
        Enum(TicketStatus, name="ticket_status"),
        nullable=False,
        default=TicketStatus.RESERVED,
    )

    ticket_type = relationship("TicketType")

    def __repr__(self) -> str:
        return f"<Ticket(id={self.id}, enrollment={self.enrollment_id}, status={self.status})>"
