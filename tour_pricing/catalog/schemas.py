from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

from tour_pricing.core.dates import DateRange
from tour_pricing.core.errors import InvalidDateRange


class RoomInfo(BaseModel):
    """Catalog defaults for a room type at a hotel"""
    model_config = ConfigDict(frozen=True)

    room_id: str
    hotel_id: str
    room_type: str
    total_rooms: int = Field(..., ge=0)
    base_price: int = Field(0, ge=0)  # cents
    capacity: Optional[int] = Field(None, ge=1)  # guests per room; None is unlimited

    def fits(self, guests: int) -> bool:
        return self.capacity is None or guests <= self.capacity


class HotelInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    hotel_id: str
    name: str
    city_id: Optional[str] = None
    rating: Optional[int] = None
    rooms: List[RoomInfo] = Field(default_factory=list)


class FlightBlock(BaseModel):
    """A round-trip seat block; seat prices in cents per person"""
    model_config = ConfigDict(frozen=True)

    block_group_id: str
    outbound_price_per_seat: Optional[int] = Field(None, ge=0)
    return_price_per_seat: Optional[int] = Field(None, ge=0)
    outbound_arrival: Optional[datetime] = None
    return_departure: Optional[datetime] = None

    @property
    def has_seat_prices(self) -> bool:
        return self.outbound_price_per_seat is not None and self.return_price_per_seat is not None

    @property
    def price_per_seat(self) -> Optional[int]:
        if not self.has_seat_prices:
            return None
        return self.outbound_price_per_seat + self.return_price_per_seat

    def stay(self) -> DateRange:
        """Hotel stay from outbound arrival to return departure"""
        if self.outbound_arrival is None or self.return_departure is None:
            raise InvalidDateRange(f"Flight block {self.block_group_id} has no flight times")
        return DateRange.stay(self.outbound_arrival, self.return_departure)


class TransferOption(BaseModel):
    """Airport transfer; tiered by party size unless priced per person"""
    model_config = ConfigDict(frozen=True)

    transfer_id: str
    name: str = "Airport transfer"
    price_per_person: Optional[int] = Field(None, ge=0)  # cents, one way
    round_trip: bool = True
