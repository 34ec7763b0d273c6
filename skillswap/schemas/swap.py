"""Swap request schemas."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from skillswap.db.models.swap_request import SwapStatus
from skillswap.schemas.common import CamelModel


class SwapRequestCreate(CamelModel):
    recipient_id: int
    message: str = Field(default="", max_length=5000)


class SwapRespond(CamelModel):
    status: Literal["accepted", "rejected"]


class SwapCreatedResponse(CamelModel):
    message: str
    id: int


class SwapRequestResponse(CamelModel):
    id: int
    status: SwapStatus
    message: str | None = None
    created_at: datetime
    requester_id: int
    recipient_id: int
    requester_name: str | None = None
    requester_photo: str | None = None
    recipient_name: str | None = None
    recipient_photo: str | None = None
