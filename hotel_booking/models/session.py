"""
Issued access tokens. A bearer token is only honoured while its row exists.
"""

from sqlalchemy import Column, Integer, String, ForeignKey

from hotel_booking.db.base import Base, TimestampMixin


class UserSession(Base, TimestampMixin):
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    token = Column(String(512), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<UserSession(id={self.id}, user={self.user_id})>"
