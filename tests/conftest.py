from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tour_pricing.availability.repository import InMemoryAvailabilityRepository
from tour_pricing.availability.service import AvailabilityCalendarService
from tour_pricing.catalog.repository import InMemoryCatalog
from tour_pricing.catalog.schemas import FlightBlock, HotelInfo, RoomInfo, TransferOption
from tour_pricing.database import Base
from tour_pricing.rates.repository import InMemoryRateCardRepository
from tour_pricing.rates.schemas import RateCard
from tour_pricing.rates.service import RateResolver

STANDARD_ROOM = RoomInfo(
    room_id="room-std", hotel_id="htl-1", room_type="Standard", total_rooms=10, base_price=10000
)
SUPERIOR_ROOM = RoomInfo(
    room_id="room-sup", hotel_id="htl-1", room_type="Superior", total_rooms=2, base_price=15000
)
SINGLE_ROOM = RoomInfo(
    room_id="room-one", hotel_id="htl-2", room_type="Standard", total_rooms=1, base_price=9000
)

HOTEL = HotelInfo(hotel_id="htl-1", name="Harbour Hotel", city_id="MLA", rooms=[STANDARD_ROOM, SUPERIOR_ROOM])
SMALL_HOTEL = HotelInfo(hotel_id="htl-2", name="Tiny Inn", city_id="MLA", rooms=[SINGLE_ROOM])
UNPRICED_HOTEL = HotelInfo(
    hotel_id="htl-3",
    name="No Rates Lodge",
    city_id="MLA",
    rooms=[RoomInfo(room_id="room-x", hotel_id="htl-3", room_type="Standard", total_rooms=3)],
)

STANDARD_BB = RateCard(
    hotel_id="htl-1", room_type="Standard", board="BB",
    single=10000, double=16000, extra_bed=5000, child_price=3000,
)
SUPERIOR_BB = RateCard(
    hotel_id="htl-1", room_type="Superior", board="BB",
    single=14000, double=22000, extra_bed=6000, child_price=3500,
)
SMALL_BB = RateCard(
    hotel_id="htl-2", room_type="Standard", board="BB",
    single=9000, double=12000, extra_bed=4000, child_price=2000,
)

FLIGHT_BLOCK = FlightBlock(
    block_group_id="blk-1", outbound_price_per_seat=6500, return_price_per_seat=5500
)
PRIVATE_TRANSFER = TransferOption(transfer_id="trf-private", name="Private transfer")


@pytest.fixture
def catalog() -> InMemoryCatalog:
    return InMemoryCatalog(
        hotels=[HOTEL, SMALL_HOTEL, UNPRICED_HOTEL],
        flight_blocks=[FLIGHT_BLOCK],
        transfers=[PRIVATE_TRANSFER],
    )


@pytest.fixture
def availability_repo() -> InMemoryAvailabilityRepository:
    return InMemoryAvailabilityRepository()


@pytest.fixture
def rate_cards() -> InMemoryRateCardRepository:
    return InMemoryRateCardRepository([STANDARD_BB, SUPERIOR_BB, SMALL_BB])


@pytest.fixture
def calendar(availability_repo, catalog) -> AvailabilityCalendarService:
    return AvailabilityCalendarService(availability_repo, catalog)


@pytest.fixture
def resolver(rate_cards, availability_repo) -> RateResolver:
    return RateResolver(rate_cards, availability_repo)


@pytest.fixture
def sql_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def sql_session_factory(tmp_path):
    """Independent sessions against one SQLite file"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'pricing.sqlite3'}",
        connect_args={"check_same_thread": False, "timeout": 5},
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    try:
        yield factory
    finally:
        engine.dispose()
