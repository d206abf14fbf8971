from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Literal, Optional
from datetime import date


class RateCard(BaseModel):
    """Nightly contract prices for a room type and board, in cents"""
    model_config = ConfigDict(frozen=True)

    hotel_id: str
    room_type: str
    board: str  # RO, BB, HB, FB, AI
    single: int = Field(..., ge=0)
    double: int = Field(..., ge=0)
    extra_bed: int = Field(0, ge=0)
    child_price: int = Field(0, ge=0)
    currency: str = "EUR"
    valid_from: Optional[date] = None
    valid_until: Optional[date] = None  # inclusive

    @model_validator(mode="after")
    def check_window(self):
        if self.valid_from and self.valid_until and self.valid_until < self.valid_from:
            raise ValueError("valid_until must not be before valid_from")
        return self

    def covers(self, day: date) -> bool:
        if self.valid_from and day < self.valid_from:
            return False
        if self.valid_until and day > self.valid_until:
            return False
        return True


class NightlyPrice(BaseModel):
    date: date
    price: int  # cents
    source: Literal["override", "rate_card"]


class StayPriceBreakdown(BaseModel):
    room_id: str
    board: str
    nights: int
    total: int  # cents
    per_night: List[NightlyPrice]
