#!/usr/bin/env python3

from datetime import date, datetime, timezone

from tour_pricing.database import Base, SessionLocal, engine
from tour_pricing.models import FlightBlockRecord, Hotel, HotelRate, Room, RoomAvailability, Transfer


def create_seed_data():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        print("🚀 Creating seed data for the tour pricing service...")

        # Clear existing data (in reverse dependency order)
        print("Clearing existing data...")
        db.query(RoomAvailability).delete()
        db.query(HotelRate).delete()
        db.query(Room).delete()
        db.query(Hotel).delete()
        db.query(FlightBlockRecord).delete()
        db.query(Transfer).delete()

        # 1. Create Hotels
        print("Creating hotels...")
        hotels = [
            Hotel(id="htl-malta-sea", name="Sea View Malta", city_id="MLA", rating=4),
            Hotel(id="htl-malta-old", name="Old Town Suites", city_id="MLA", rating=3),
        ]
        db.add_all(hotels)
        db.flush()

        # 2. Create Rooms
        print("Creating rooms...")
        rooms = [
            Room(id="room-sea-std", hotel_id="htl-malta-sea", room_type="Standard", total_rooms=10, base_price=10000, capacity=3),
            Room(id="room-sea-sup", hotel_id="htl-malta-sea", room_type="Superior", total_rooms=4, base_price=14000, capacity=6),
            Room(id="room-old-std", hotel_id="htl-malta-old", room_type="Standard", total_rooms=6, base_price=8000, capacity=4),
        ]
        db.add_all(rooms)
        db.flush()

        # 3. Create Rate Cards (cents per night)
        print("Creating rate cards...")
        season_start = date(2024, 4, 1)
        season_end = date(2024, 10, 31)
        rates = [
            HotelRate(hotel_id="htl-malta-sea", room_type="Standard", board="BB",
                      single=10000, double=16000, extra_bed=5000, child_price=3000),
            HotelRate(hotel_id="htl-malta-sea", room_type="Standard", board="HB",
                      single=13000, double=21000, extra_bed=6500, child_price=4000),
            HotelRate(hotel_id="htl-malta-sea", room_type="Superior", board="BB",
                      single=14000, double=22000, extra_bed=6000, child_price=3500),
            HotelRate(hotel_id="htl-malta-old", room_type="Standard", board="BB",
                      single=8000, double=12000, extra_bed=4000, child_price=2500,
                      valid_from=season_start, valid_until=season_end),
        ]
        db.add_all(rates)

        # 4. Create Flight Blocks
        print("Creating flight blocks...")
        flight_blocks = [
            FlightBlockRecord(
                id="blk-mla-jun",
                outbound_price_per_seat=6500,
                return_price_per_seat=5500,
                outbound_arrival=datetime(2024, 6, 1, 14, 30, tzinfo=timezone.utc),
                return_departure=datetime(2024, 6, 8, 10, 0, tzinfo=timezone.utc),
            ),
        ]
        db.add_all(flight_blocks)

        # 5. Create Transfers
        print("Creating transfers...")
        transfers = [
            Transfer(id="trf-mla-private", name="MLA airport private transfer"),
            Transfer(id="trf-mla-shuttle", name="MLA airport shuttle", price_per_person=1500),
        ]
        db.add_all(transfers)

        # Commit all changes
        db.commit()
        print("✅ Successfully created seed data!")
        print(f"Created:")
        print(f"  - {len(hotels)} hotels")
        print(f"  - {len(rooms)} rooms")
        print(f"  - {len(rates)} rate cards")
        print(f"  - {len(flight_blocks)} flight blocks")
        print(f"  - {len(transfers)} transfers")

    except Exception as e:
        print(f"❌ Error creating seed data: {e}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    create_seed_data()
