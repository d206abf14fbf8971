from sqlalchemy import Column, Integer, BigInteger, String, Boolean, DateTime, Date, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from tour_pricing.database import Base

# ================================
# Hotels & Rooms
# ================================
class Hotel(Base):
    __tablename__ = "hotels"

    id = Column(String(64), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    city_id = Column(String(64), index=True)
    rating = Column(Integer)
    active = Column(Boolean, default=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    rooms = relationship("Room", back_populates="hotel")
    rates = relationship("HotelRate", back_populates="hotel")

class Room(Base):
    __tablename__ = "rooms"

    id = Column(String(64), primary_key=True, index=True)
    hotel_id = Column(String(64), ForeignKey("hotels.id"), nullable=False, index=True)
    room_type = Column(String(100), nullable=False)
    total_rooms = Column(Integer, nullable=False, default=0)
    base_price = Column(Integer, nullable=False, default=0)  # cents
    capacity = Column(Integer)  # max guests per room
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    hotel = relationship("Hotel", back_populates="rooms")
    availability = relationship("RoomAvailability", back_populates="room")

# ================================
# Rate Cards (per room type and board)
# ================================
class HotelRate(Base):
    __tablename__ = "hotel_rates"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    hotel_id = Column(String(64), ForeignKey("hotels.id"), nullable=False, index=True)
    room_type = Column(String(100), nullable=False)
    board = Column(String(10), nullable=False)
    single = Column(Integer, nullable=False)
    double = Column(Integer, nullable=False)
    extra_bed = Column(Integer, nullable=False, default=0)
    child_price = Column(Integer, nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="EUR")
    valid_from = Column(Date)
    valid_until = Column(Date)

    # Relationships
    hotel = relationship("Hotel", back_populates="rates")

    __table_args__ = (
        Index("ix_hotel_rates_lookup", "hotel_id", "room_type", "board"),
    )

# ================================
# Room Availability Calendar
# ================================
class RoomAvailability(Base):
    __tablename__ = "room_availability"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    room_id = Column(String(64), ForeignKey("rooms.id"), nullable=False)
    date = Column(Date, nullable=False)
    total_rooms = Column(Integer, nullable=False)
    booked_rooms = Column(Integer, nullable=False, default=0)
    price_override = Column(Integer)  # cents
    is_blocked = Column(Boolean, nullable=False, default=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    room = relationship("Room", back_populates="availability")

    __table_args__ = (
        UniqueConstraint("room_id", "date", name="uq_room_availability_room_date"),
    )

# ================================
# Flight Blocks & Transfers
# ================================
class FlightBlockRecord(Base):
    __tablename__ = "flight_blocks"

    id = Column(String(64), primary_key=True, index=True)
    outbound_price_per_seat = Column(Integer)  # cents
    return_price_per_seat = Column(Integer)  # cents
    outbound_arrival = Column(DateTime(timezone=True))
    return_departure = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class Transfer(Base):
    __tablename__ = "transfers"

    id = Column(String(64), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price_per_person = Column(Integer)  # cents, one way; tiered pricing when empty
    round_trip = Column(Boolean, nullable=False, default=True)
    active = Column(Boolean, default=True)
