from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import date


class OccupancyConfig(BaseModel):
    """One party shape to quote a package for"""
    model_config = ConfigDict(frozen=True)

    adults: int = Field(..., ge=1)
    child_ages: List[int] = Field(default_factory=list)
    label: Optional[str] = None

    @property
    def children(self) -> int:
        return len(self.child_ages)

    @property
    def total_people(self) -> int:
        return self.adults + self.children

    @property
    def occupancy_label(self) -> str:
        if self.label:
            return self.label
        text = f"{self.adults} Adult" + ("s" if self.adults > 1 else "")
        if self.child_ages:
            ages = ",".join(str(age) for age in self.child_ages)
            text += f", {self.children} Child" + ("ren" if self.children > 1 else "") + f" ({ages})"
        return text


DEFAULT_OCCUPANCY_CONFIGS = (
    OccupancyConfig(adults=1),
    OccupancyConfig(adults=1, child_ages=[5]),
    OccupancyConfig(adults=2),
    OccupancyConfig(adults=2, child_ages=[5]),
    OccupancyConfig(adults=2, child_ages=[5, 10]),
    OccupancyConfig(adults=3),
    OccupancyConfig(adults=3, child_ages=[5]),
    OccupancyConfig(adults=4),
)


class PackageQuote(BaseModel):
    """Computed package price for one hotel and occupancy; amounts in cents"""
    hotel_id: str
    hotel_name: str
    occupancy_label: str
    adults: int
    children: int
    child_ages: List[int]
    room_id: str
    room_type: str
    board: str
    nights: int
    flight_block_id: str
    flight_cost: int
    hotel_cost: int
    transfer_cost: int
    total_cost: int
    service_charge: int = 0
    profit_amount: int = 0
    selling_price: int
    available: bool = True


class QuoteSummary(BaseModel):
    check_in: date
    check_out: date
    nights: int
    adults: Optional[int] = None  # unset when every default occupancy is quoted
    children: Optional[int] = None
    total_hotels: int
    total_quotes: int


class CalculatePricesResponse(BaseModel):
    quotes: List[PackageQuote]
    summary: QuoteSummary
