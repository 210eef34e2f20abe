"""
Outcome values returned by the booking rule engine.

Every operation returns either ``Ok`` wrapping its value or exactly one of
the three failure kinds. Failures are plain values: the engine never raises
them, and anything that *is* raised (storage down, programming error) is by
construction not one of these kinds.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from hotel_booking.models.hotel import Room

T = TypeVar("T")

NO_VACANCY = "no more available schedules for this room"
TICKET_NOT_ELIGIBLE = "ticket does not fulfill requirements"
OWNER_MISMATCH = "booking owner does not match"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFoundError:
    message: str = "No result for this search!"
    kind: str = "not_found"


@dataclass(frozen=True)
class ConflictError:
    reason: str
    kind: str = "conflict"

    @property
    def message(self) -> str:
        return self.reason


@dataclass(frozen=True)
class PaymentRequiredError:
    message: str = "Payment required for proceeding!"
    kind: str = "payment_required"


BookingFailure = Union[NotFoundError, ConflictError, PaymentRequiredError]


@dataclass(frozen=True)
class CurrentBooking:
    id: int
    room: Room
