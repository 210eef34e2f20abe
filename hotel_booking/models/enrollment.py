"""
Enrollment of a user in the event, with its postal address.

Key design decisions:
- Unique user_id: a user has at most one enrollment
- Address is kept for completeness; booking rules only check the enrollment exists
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from hotel_booking.db.base import Base, TimestampMixin


class Enrollment(Base, TimestampMixin):
    __tablename__ = "enrollments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    cpf = Column(String(14), nullable=False)
    birthday = Column(DateTime(timezone=True), nullable=False)
    phone = Column(String(20), nullable=False)

    address = relationship("Address", back_populates="enrollment", uselist=False, lazy="raise")

    def __repr__(self) -> str:
        return f"<Enrollment(id={self.id}, user={self.user_id})>"


class Address(Base, TimestampMixin):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, index=True)
    enrollment_id = Column(Integer, ForeignKey("enrollments.id"), nullable=False, unique=True)
    cep = Column(String(9), nullable=False)
    street = Column(String(255), nullable=False)
    city = Column(String(255), nullable=False)
    state = Column(String(2), nullable=False)
    number = Column(String(20), nullable=False)
    neighborhood = Column(String(255), nullable=False)
    address_detail = Column(String(255), nullable=True)

    enrollment = relationship("Enrollment", back_populates="address")
