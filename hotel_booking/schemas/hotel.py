"""
Pydantic schemas for hotel and room responses.

Room keys go out in camelCase (hotelId, createdAt, updatedAt), like the
booking bodies.
"""

from datetime import datetime
from pydantic import BaseModel, Field


class RoomResponse(BaseModel):
    id: int
    name: str
    capacity: int
    hotel_id: int = Field(..., alias="hotelId")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    model_config = {"from_attributes": True, "populate_by_name": True}
