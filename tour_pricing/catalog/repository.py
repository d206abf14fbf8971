from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session, joinedload

from tour_pricing.catalog.schemas import FlightBlock, HotelInfo, RoomInfo, TransferOption
from tour_pricing.models import FlightBlockRecord, Hotel, Room, Transfer


class CatalogRepository(ABC):
    """Read-only view of the hotel, room, flight and transfer catalog"""

    @abstractmethod
    def get_room(self, room_id: str) -> Optional[RoomInfo]:
        ...

    @abstractmethod
    def get_hotel(self, hotel_id: str) -> Optional[HotelInfo]:
        ...

    @abstractmethod
    def hotels_in_city(self, city_id: str) -> List[HotelInfo]:
        ...

    @abstractmethod
    def get_flight_block(self, block_group_id: str) -> Optional[FlightBlock]:
        ...

    @abstractmethod
    def get_transfer(self, transfer_id: str) -> Optional[TransferOption]:
        ...


class InMemoryCatalog(CatalogRepository):
    def __init__(
        self,
        hotels: Iterable[HotelInfo] = (),
        flight_blocks: Iterable[FlightBlock] = (),
        transfers: Iterable[TransferOption] = ()
    ):
        self._hotels: Dict[str, HotelInfo] = {}
        self._rooms: Dict[str, RoomInfo] = {}
        for hotel in hotels:
            self.add_hotel(hotel)
        self._flight_blocks = {block.block_group_id: block for block in flight_blocks}
        self._transfers = {transfer.transfer_id: transfer for transfer in transfers}

    def add_hotel(self, hotel: HotelInfo):
        self._hotels[hotel.hotel_id] = hotel
        for room in hotel.rooms:
            self._rooms[room.room_id] = room

    def get_room(self, room_id: str) -> Optional[RoomInfo]:
        return self._rooms.get(room_id)

    def get_hotel(self, hotel_id: str) -> Optional[HotelInfo]:
        return self._hotels.get(hotel_id)

    def hotels_in_city(self, city_id: str) -> List[HotelInfo]:
        return [hotel for hotel in self._hotels.values() if hotel.city_id == city_id]

    def get_flight_block(self, block_group_id: str) -> Optional[FlightBlock]:
        return self._flight_blocks.get(block_group_id)

    def get_transfer(self, transfer_id: str) -> Optional[TransferOption]:
        return self._transfers.get(transfer_id)


class SqlCatalog(CatalogRepository):
    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _room_info(room: Room) -> RoomInfo:
        return RoomInfo(
            room_id=room.id,
            hotel_id=room.hotel_id,
            room_type=room.room_type,
            total_rooms=room.total_rooms,
            base_price=room.base_price,
            capacity=room.capacity
        )

    def _hotel_info(self, hotel: Hotel) -> HotelInfo:
        return HotelInfo(
            hotel_id=hotel.id,
            name=hotel.name,
            city_id=hotel.city_id,
            rating=hotel.rating,
            rooms=[self._room_info(room) for room in hotel.rooms]
        )

    def get_room(self, room_id: str) -> Optional[RoomInfo]:
        room = self.db.query(Room).filter(Room.id == room_id).first()
        return self._room_info(room) if room else None

    def get_hotel(self, hotel_id: str) -> Optional[HotelInfo]:
        hotel = self.db.query(Hotel).options(
            joinedload(Hotel.rooms)
        ).filter(Hotel.id == hotel_id).first()
        return self._hotel_info(hotel) if hotel else None

    def hotels_in_city(self, city_id: str) -> List[HotelInfo]:
        hotels = self.db.query(Hotel).options(
            joinedload(Hotel.rooms)
        ).filter(
            Hotel.city_id == city_id,
            Hotel.active == True  # noqa: E712
        ).order_by(Hotel.name).all()
        return [self._hotel_info(hotel) for hotel in hotels]

    def get_flight_block(self, block_group_id: str) -> Optional[FlightBlock]:
        record = self.db.query(FlightBlockRecord).filter(
            FlightBlockRecord.id == block_group_id
        ).first()
        if not record:
            return None
        return FlightBlock(
            block_group_id=record.id,
            outbound_price_per_seat=record.outbound_price_per_seat,
            return_price_per_seat=record.return_price_per_seat,
            outbound_arrival=record.outbound_arrival,
            return_departure=record.return_departure
        )

    def get_transfer(self, transfer_id: str) -> Optional[TransferOption]:
        transfer = self.db.query(Transfer).filter(
            Transfer.id == transfer_id,
            Transfer.active == True  # noqa: E712
        ).first()
        if not transfer:
            return None
        return TransferOption(
            transfer_id=transfer.id,
            name=transfer.name,
            price_per_person=transfer.price_per_person,
            round_trip=transfer.round_trip
        )
