"""
Occupancy Module

Classifies a travelling party into the room bucket it is priced as and
assigns each child a pricing policy from configurable age bands.
"""

from .service import OccupancyClassifier
from .schemas import (
    Child, Party, ChildAgeBands, ChildPolicy, ChildPricing, Classification, RoomBucket
)

__all__ = [
    "OccupancyClassifier",
    "Child",
    "Party",
    "ChildAgeBands",
    "ChildPolicy",
    "ChildPricing",
    "Classification",
    "RoomBucket",
]
