"""
Package Price Aggregation
=========================

Builds package quotes for every occupancy configuration of a hotel:

1. Flight cost   = paying travellers x seat price of the flight block (round trip)
2. Hotel cost    = cheapest stay price among rooms that fit the party,
                   preferring rooms free on every night
3. Transfer cost = vehicle tier by party size, doubled for round trip
4. Total cost    = flight + hotel + transfer
5. Selling price = total + service charge + profit margin

The child age bands apply to flights and hotels alike: infants travel free,
every other child pays the full seat price since blocks carry no child fare.
Transfers are sized by head count, infants included.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from tour_pricing.availability.repository import default_day
from tour_pricing.catalog.schemas import FlightBlock, HotelInfo, RoomInfo, TransferOption
from tour_pricing.config import PricingPolicy
from tour_pricing.core.dates import DateRange
from tour_pricing.core.errors import InvalidDateRange, MissingFlightSelection, RateNotFound
from tour_pricing.occupancy.schemas import ChildPolicy, Party
from tour_pricing.packages.schemas import DEFAULT_OCCUPANCY_CONFIGS, OccupancyConfig, PackageQuote
from tour_pricing.packages.transfer_service import TransferCostCalculator
from tour_pricing.rates.service import RateResolver

logger = logging.getLogger(__name__)


class PackagePriceAggregator:
    """Combines flight, hotel and transfer costs into package quotes"""

    def __init__(self, resolver: RateResolver, policy: PricingPolicy = None):
        self.resolver = resolver
        self.policy = policy or PricingPolicy()
        self.transfers = TransferCostCalculator(self.policy)

    def flight_price_per_person(self, flight_block: FlightBlock) -> int:
        if flight_block.has_seat_prices:
            return flight_block.price_per_seat
        return self.policy.flight_price_per_person

    def _profit(self, amount: int) -> int:
        margin = Decimal(str(self.policy.profit_margin_percent)) / Decimal("100")
        return int((Decimal(amount) * margin).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    def _cheapest_room(self, hotel: HotelInfo, board: str, stay: DateRange,
                       party: Party) -> Tuple[RoomInfo, int, bool]:
        """Cheapest free room that fits the party, else the cheapest that fits.

        RateNotFound when no room that fits the party is priced.
        """
        priced: List[Tuple[RoomInfo, int, bool]] = []
        for room in hotel.rooms:
            if not room.fits(party.total_people):
                continue
            if not self.resolver.has_rate(room, board):
                continue
            try:
                price = self.resolver.resolve_stay_price(room, board, stay, party)
            except RateNotFound as e:
                logger.debug("Room %s not priced for stay: %s", room.room_id, e)
                continue
            priced.append((room, price, self._is_available(room, stay)))

        if not priced:
            raise RateNotFound(
                f"No {board} rate for {party.total_people} guest(s) at hotel {hotel.name} "
                f"from {stay.start.isoformat()} to {stay.end.isoformat()}"
            )
        free = [option for option in priced if option[2]]
        return min(free or priced, key=lambda option: option[1])

    def _is_available(self, room: RoomInfo, stay: DateRange) -> bool:
        stored = self.resolver.availability.get_days(room.room_id, stay.start, stay.end)
        return all(
            (stored.get(day) or default_day(room, day)).available_rooms > 0
            for day in stay.days()
        )

    def _quote(self, hotel: HotelInfo, flight_block: FlightBlock, transfer: Optional[TransferOption],
               occupancy: OccupancyConfig, stay: DateRange, board: str) -> PackageQuote:
        party = Party.of(occupancy.adults, occupancy.child_ages)
        classification = self.resolver.classify(party)

        paying = party.total_people - classification.count(ChildPolicy.FREE)
        flight_cost = paying * self.flight_price_per_person(flight_block)
        room, hotel_cost, available = self._cheapest_room(hotel, board, stay, party)
        transfer_cost = self.transfers.calculate(transfer, party.total_people)

        total_cost = flight_cost + hotel_cost + transfer_cost
        service_charge = self.policy.service_charge
        profit_amount = self._profit(total_cost + service_charge)

        return PackageQuote(
            hotel_id=hotel.hotel_id,
            hotel_name=hotel.name,
            occupancy_label=occupancy.occupancy_label,
            adults=occupancy.adults,
            children=occupancy.children,
            child_ages=list(occupancy.child_ages),
            room_id=room.room_id,
            room_type=classification.room_type.value,
            board=board,
            nights=stay.nights,
            flight_block_id=flight_block.block_group_id,
            flight_cost=flight_cost,
            hotel_cost=hotel_cost,
            transfer_cost=transfer_cost,
            total_cost=total_cost,
            service_charge=service_charge,
            profit_amount=profit_amount,
            selling_price=total_cost + service_charge + profit_amount,
            available=available
        )

    def _validate(self, flight_block: Optional[FlightBlock], stay: Optional[DateRange]) -> DateRange:
        if flight_block is None:
            raise MissingFlightSelection("A flight block must be selected")
        if stay is None:
            stay = flight_block.stay()
        if stay.nights < 1:
            raise InvalidDateRange("A stay must be at least one night")
        return stay

    def calculate(
        self,
        hotel: HotelInfo,
        flight_block: Optional[FlightBlock],
        transfer: Optional[TransferOption] = None,
        occupancies: Sequence[OccupancyConfig] = DEFAULT_OCCUPANCY_CONFIGS,
        stay: Optional[DateRange] = None,
        board: str = "BB"
    ) -> List[PackageQuote]:
        """Quotes for every occupancy at one hotel.

        Without an explicit stay, the stay runs from the outbound flight's
        arrival to the return flight's departure. Any failure aborts the
        whole calculation; no partial list is returned.
        """
        stay = self._validate(flight_block, stay)

        quotes: Dict[Tuple[str, str], PackageQuote] = {}
        for occupancy in occupancies:
            quote = self._quote(hotel, flight_block, transfer, occupancy, stay, board)
            quotes[(quote.hotel_id, quote.occupancy_label)] = quote

        return list(quotes.values())

    def calculate_for_hotels(
        self,
        hotels: Iterable[HotelInfo],
        flight_block: Optional[FlightBlock],
        transfer: Optional[TransferOption] = None,
        occupancies: Sequence[OccupancyConfig] = DEFAULT_OCCUPANCY_CONFIGS,
        stay: Optional[DateRange] = None,
        board: str = "BB"
    ) -> List[PackageQuote]:
        """Quotes across hotels, cheapest selling price first.

        A hotel without a rate is left out of the results.
        """
        stay = self._validate(flight_block, stay)

        quotes: Dict[Tuple[str, str], PackageQuote] = {}
        for hotel in hotels:
            try:
                hotel_quotes = self.calculate(hotel, flight_block, transfer, occupancies, stay, board)
            except RateNotFound as e:
                logger.warning("Excluding hotel %s from quotes: %s", hotel.hotel_id, e)
                continue
            for quote in hotel_quotes:
                quotes[(quote.hotel_id, quote.occupancy_label)] = quote

        logger.info(
            "Calculated %d quote(s) for %s to %s", len(quotes), stay.start, stay.end
        )
        return sorted(quotes.values(), key=lambda quote: quote.selling_price)
