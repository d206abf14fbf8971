from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session

from tour_pricing.models import HotelRate
from tour_pricing.rates.schemas import RateCard


def pick_rate_card(cards: Iterable[RateCard], day: date) -> Optional[RateCard]:
    """Card valid on ``day``; a later-starting season wins over an open-ended one"""
    valid = [card for card in cards if card.covers(day)]
    if not valid:
        return None
    return max(valid, key=lambda card: card.valid_from or date.min)


class RateCardRepository(ABC):
    """Read-only access to hotel rate cards"""

    @abstractmethod
    def cards_for(self, hotel_id: str, room_type: str, board: str) -> List[RateCard]:
        ...

    def find(self, hotel_id: str, room_type: str, board: str, day: date) -> Optional[RateCard]:
        return pick_rate_card(self.cards_for(hotel_id, room_type, board), day)


class InMemoryRateCardRepository(RateCardRepository):
    def __init__(self, cards: Iterable[RateCard] = ()):
        self._cards: List[RateCard] = list(cards)

    def add(self, card: RateCard):
        self._cards.append(card)

    def cards_for(self, hotel_id: str, room_type: str, board: str) -> List[RateCard]:
        return [
            card for card in self._cards
            if card.hotel_id == hotel_id and card.room_type == room_type and card.board == board
        ]


class SqlRateCardRepository(RateCardRepository):
    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _to_card(rate: HotelRate) -> RateCard:
        return RateCard(
            hotel_id=rate.hotel_id,
            room_type=rate.room_type,
            board=rate.board,
            single=rate.single,
            double=rate.double,
            extra_bed=rate.extra_bed,
            child_price=rate.child_price,
            currency=rate.currency,
            valid_from=rate.valid_from,
            valid_until=rate.valid_until
        )

    def cards_for(self, hotel_id: str, room_type: str, board: str) -> List[RateCard]:
        rates = self.db.query(HotelRate).filter(
            HotelRate.hotel_id == hotel_id,
            HotelRate.room_type == room_type,
            HotelRate.board == board
        ).all()
        return [self._to_card(rate) for rate in rates]

    def find(self, hotel_id: str, room_type: str, board: str, day: date) -> Optional[RateCard]:
        rates = self.db.query(HotelRate).filter(
            HotelRate.hotel_id == hotel_id,
            HotelRate.room_type == room_type,
            HotelRate.board == board,
            or_(HotelRate.valid_from == None, HotelRate.valid_from <= day),  # noqa: E711
            or_(HotelRate.valid_until == None, HotelRate.valid_until >= day)  # noqa: E711
        ).all()
        return pick_rate_card((self._to_card(rate) for rate in rates), day)
