"""
Catalog Module

Read-only access to hotels, rooms, flight blocks and transfers. The catalog
is maintained elsewhere; pricing and availability only consume it.
"""

from .repository import CatalogRepository, InMemoryCatalog, SqlCatalog
from .schemas import FlightBlock, HotelInfo, RoomInfo, TransferOption

__all__ = [
    "CatalogRepository",
    "InMemoryCatalog",
    "SqlCatalog",
    "FlightBlock",
    "HotelInfo",
    "RoomInfo",
    "TransferOption",
]
