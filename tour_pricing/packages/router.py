from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional
from datetime import date

from tour_pricing.availability.repository import AvailabilityRepository
from tour_pricing.catalog.repository import CatalogRepository
from tour_pricing.catalog.schemas import FlightBlock
from tour_pricing.config import PricingPolicy
from tour_pricing.core.dates import DateRange
from tour_pricing.core.errors import InvalidParty, MissingFlightSelection, PricingError
from tour_pricing.core.http import http_error
from tour_pricing.dependencies import (
    get_availability_repository, get_catalog, get_pricing_policy, get_rate_card_repository
)
from tour_pricing.occupancy.service import OccupancyClassifier
from tour_pricing.packages.schemas import (
    DEFAULT_OCCUPANCY_CONFIGS, CalculatePricesResponse, OccupancyConfig, QuoteSummary
)
from tour_pricing.packages.service import PackagePriceAggregator
from tour_pricing.rates.repository import RateCardRepository
from tour_pricing.rates.service import RateResolver

router = APIRouter()

FLAT_FARE_BLOCK_ID = "flat-fare"


def get_aggregator(
    rate_cards: RateCardRepository = Depends(get_rate_card_repository),
    availability: AvailabilityRepository = Depends(get_availability_repository),
    policy: PricingPolicy = Depends(get_pricing_policy)
) -> PackagePriceAggregator:
    resolver = RateResolver(rate_cards, availability, OccupancyClassifier(policy.child_age_bands))
    return PackagePriceAggregator(resolver, policy)


def parse_child_ages(value: str) -> List[int]:
    """Comma separated ages, e.g. "5,10" """
    if not value or not value.strip():
        return []
    try:
        return [int(age) for age in value.split(",") if age.strip()]
    except ValueError:
        raise InvalidParty(f"Invalid child ages: {value!r}") from None


@router.get("/calculate-prices", response_model=CalculatePricesResponse)
def calculate_prices(
    check_in: date = Query(..., description="Check-in date"),
    check_out: date = Query(..., description="Check-out date"),
    hotel_id: Optional[str] = Query(None, description="Quote a single hotel"),
    city_id: Optional[str] = Query(None, description="Quote all active hotels in a city"),
    adults: int = Query(2, description="Number of adults"),
    child_ages: str = Query("", description="Comma separated child ages"),
    board: str = Query("BB", description="Board type"),
    flight_block_id: Optional[str] = Query(None, description="Flight block; flat fare when omitted"),
    transfer_id: Optional[str] = Query(None, description="Transfer to include"),
    all_occupancies: bool = Query(False, description="Quote every standard occupancy"),
    catalog: CatalogRepository = Depends(get_catalog),
    aggregator: PackagePriceAggregator = Depends(get_aggregator)
):
    """Package prices for a hotel or every hotel in a city"""

    if not hotel_id and not city_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Either hotel_id or city_id is required"
        )

    try:
        stay = DateRange.stay(check_in, check_out)

        if all_occupancies:
            occupancies = DEFAULT_OCCUPANCY_CONFIGS
            ages = []
        else:
            ages = parse_child_ages(child_ages)
            aggregator.resolver.classifier.classify(adults, ages)
            occupancies = [OccupancyConfig(adults=adults, child_ages=ages)]

        if flight_block_id:
            flight_block = catalog.get_flight_block(flight_block_id)
            if not flight_block:
                raise MissingFlightSelection(f"Flight block {flight_block_id} not found")
        else:
            flight_block = FlightBlock(block_group_id=FLAT_FARE_BLOCK_ID)

        transfer = None
        if transfer_id:
            transfer = catalog.get_transfer(transfer_id)
            if not transfer:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="Transfer not found"
                )

        if hotel_id:
            hotel = catalog.get_hotel(hotel_id)
            if not hotel:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="Hotel not found"
                )
            hotels = [hotel]
            quotes = aggregator.calculate(hotel, flight_block, transfer, occupancies, stay, board)
        else:
            hotels = catalog.hotels_in_city(city_id)
            quotes = aggregator.calculate_for_hotels(hotels, flight_block, transfer, occupancies, stay, board)
    except PricingError as e:
        raise http_error(e)

    return CalculatePricesResponse(
        quotes=quotes,
        summary=QuoteSummary(
            check_in=stay.start,
            check_out=stay.end,
            nights=stay.nights,
            adults=None if all_occupancies else adults,
            children=None if all_occupancies else len(ages),
            total_hotels=len({quote.hotel_id for quote in quotes}),
            total_quotes=len(quotes)
        )
    )
