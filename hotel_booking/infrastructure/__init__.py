"""
Infrastructure layer - external system integrations.
Keeps business logic clean from implementation details.
"""

from .sql_directories import (
    SqlRoomDirectory, SqlEnrollmentDirectory, SqlTicketDirectory, SqlBookingStore,
)

__all__ = ['SqlRoomDirectory', 'SqlEnrollmentDirectory', 'SqlTicketDirectory', 'SqlBookingStore']
