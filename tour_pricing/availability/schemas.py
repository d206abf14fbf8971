from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Literal, Optional
from datetime import date


class AvailabilityDay(BaseModel):
    """Inventory state of one room type on one calendar day"""
    model_config = ConfigDict(frozen=True)

    date: date
    room_id: str
    total_rooms: int = Field(..., ge=0)
    booked_rooms: int = Field(0, ge=0)
    price_override: Optional[int] = Field(None, ge=0)  # cents
    is_blocked: bool = False

    @model_validator(mode="after")
    def check_capacity(self):
        if self.booked_rooms > self.total_rooms:
            raise ValueError(
                f"booked_rooms {self.booked_rooms} exceeds total_rooms {self.total_rooms}"
            )
        return self

    @property
    def available_rooms(self) -> int:
        if self.is_blocked:
            return 0
        return self.total_rooms - self.booked_rooms

    def replace(self, **changes) -> "AvailabilityDay":
        """Copy with changes applied, re-validated"""
        return AvailabilityDay(**{**self.model_dump(), **changes})


# API Models
class CalendarEntry(BaseModel):
    """One day of the availability calendar as returned to clients"""
    date: date
    available_rooms: int
    booked_rooms: int
    total_rooms: int
    price: int  # cents
    price_override: Optional[int] = None
    is_blocked: bool


class AvailabilityCalendarResponse(BaseModel):
    room_id: str
    start_date: date
    end_date: date
    calendar: List[CalendarEntry]


class AvailabilityMutationRequest(BaseModel):
    """Admin mutation of a half-open date range"""
    action: Literal["initialize", "updatePricing", "setBlocked"]
    room_id: str
    start_date: date
    end_date: date
    total_rooms: Optional[int] = None
    price_override: Optional[int] = None
    is_blocked: Optional[bool] = None

    @model_validator(mode="after")
    def check_action_params(self):
        if self.action == "initialize" and self.total_rooms is None:
            raise ValueError("total_rooms is required for initialize")
        if self.action == "setBlocked" and self.is_blocked is None:
            raise ValueError("is_blocked is required for setBlocked")
        return self


class RoomBookingRequest(BaseModel):
    room_id: str
    start_date: date
    end_date: date
    rooms: int = Field(1, ge=1)


class MutationResult(BaseModel):
    success: bool = True
    room_id: str
    days_affected: int
