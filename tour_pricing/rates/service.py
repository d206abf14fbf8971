from datetime import date
from typing import List, Optional

from tour_pricing.availability.repository import AvailabilityRepository
from tour_pricing.availability.schemas import AvailabilityDay
from tour_pricing.catalog.schemas import RoomInfo
from tour_pricing.core.dates import DateRange
from tour_pricing.core.errors import InvalidDateRange, RateNotFound
from tour_pricing.occupancy.schemas import ChildPolicy, Classification, Party
from tour_pricing.occupancy.service import OccupancyClassifier
from tour_pricing.rates.repository import RateCardRepository, pick_rate_card
from tour_pricing.rates.schemas import NightlyPrice, RateCard, StayPriceBreakdown


class RateResolver:
    """Resolves nightly and stay hotel prices for a party.

    A price override stored in the availability calendar replaces the rate
    card price for that night entirely. Stays are priced night by night so
    that overrides on some nights do not leak into others.
    """

    def __init__(
        self,
        rate_cards: RateCardRepository,
        availability: AvailabilityRepository,
        classifier: OccupancyClassifier = None
    ):
        self.rate_cards = rate_cards
        self.availability = availability
        self.classifier = classifier or OccupancyClassifier()

    def classify(self, party: Party) -> Classification:
        return self.classifier.classify(party.adults, party.child_ages)

    @staticmethod
    def price_from_card(card: RateCard, classification: Classification) -> int:
        """Nightly rate card price for a classified party"""
        adults = classification.adults
        if adults == 1:
            price = card.single
        else:
            price = card.double + card.extra_bed * (adults - 2)

        price += card.child_price * classification.count(ChildPolicy.DISCOUNTED)
        price += card.extra_bed * classification.count(ChildPolicy.FULL)
        return price

    def _card_price(self, cards: List[RateCard], room: RoomInfo, board: str, day: date,
                    classification: Classification) -> int:
        card = pick_rate_card(cards, day)
        if not card:
            raise RateNotFound(
                f"No {board} rate for {room.room_type} at hotel {room.hotel_id} on {day.isoformat()}"
            )
        return self.price_from_card(card, classification)

    def resolve_nightly_price(self, room: RoomInfo, board: str, day: date, party: Party) -> int:
        """Price of one night in cents"""
        classification = self.classify(party)

        stored = self.availability.get_day(room.room_id, day)
        if stored and stored.price_override is not None:
            return stored.price_override

        card = self.rate_cards.find(room.hotel_id, room.room_type, board, day)
        if not card:
            raise RateNotFound(
                f"No {board} rate for {room.room_type} at hotel {room.hotel_id} on {day.isoformat()}"
            )
        return self.price_from_card(card, classification)

    def price_breakdown(self, room: RoomInfo, board: str, stay: DateRange, party: Party) -> StayPriceBreakdown:
        """Per-night prices for a stay with where each came from"""
        if stay.nights < 1:
            raise InvalidDateRange("A stay must be at least one night")
        classification = self.classify(party)

        overrides = self.availability.get_days(room.room_id, stay.start, stay.end)
        cards = self.rate_cards.cards_for(room.hotel_id, room.room_type, board)

        per_night = []
        for day in stay.days():
            stored: Optional[AvailabilityDay] = overrides.get(day)
            if stored and stored.price_override is not None:
                per_night.append(NightlyPrice(date=day, price=stored.price_override, source="override"))
            else:
                price = self._card_price(cards, room, board, day, classification)
                per_night.append(NightlyPrice(date=day, price=price, source="rate_card"))

        return StayPriceBreakdown(
            room_id=room.room_id,
            board=board,
            nights=stay.nights,
            total=sum(night.price for night in per_night),
            per_night=per_night
        )

    def resolve_stay_price(self, room: RoomInfo, board: str, stay: DateRange, party: Party) -> int:
        """Total price of a stay in cents, summed night by night"""
        return self.price_breakdown(room, board, stay, party).total

    def has_rate(self, room: RoomInfo, board: str) -> bool:
        return bool(self.rate_cards.cards_for(room.hotel_id, room.room_type, board))
