"""Pydantic schemas for reservations."""

from datetime import datetime

from pydantic import BaseModel


class RequestResponse(BaseModel):
    """Schema for request responses."""

    id: int
    item_id: str
    card_number: str
    created_at: datetime

    model_config = {"from_attributes": True}
