from typing import List, Sequence

from tour_pricing.core.errors import InvalidParty
from tour_pricing.occupancy.schemas import (
    ChildAgeBands, ChildPricing, Classification, RoomBucket
)

MAX_ADULTS = 4
MAX_CHILDREN = 4
MAX_CHILD_AGE = 17


class OccupancyClassifier:
    """Maps a party to the room bucket it is priced as and a policy per child"""

    def __init__(
        self,
        bands: ChildAgeBands = None,
        max_adults: int = MAX_ADULTS,
        max_children: int = MAX_CHILDREN
    ):
        self.bands = bands or ChildAgeBands()
        self.max_adults = max_adults
        self.max_children = max_children

    def classify(self, adults: int, child_ages: Sequence[int] = ()) -> Classification:
        """Classify a party of ``adults`` plus children of the given ages"""
        child_ages = list(child_ages)
        self._validate(adults, child_ages)

        return Classification(
            room_type=self._room_bucket(adults, len(child_ages)),
            adults=adults,
            child_policies=[
                ChildPricing(age=age, policy=self.bands.policy_for(age))
                for age in child_ages
            ]
        )

    def _validate(self, adults: int, child_ages: List[int]):
        if adults < 1:
            raise InvalidParty("At least one adult is required")
        if adults > self.max_adults:
            raise InvalidParty(f"At most {self.max_adults} adults per room")
        if len(child_ages) > self.max_children:
            raise InvalidParty(f"At most {self.max_children} children per room")
        for age in child_ages:
            if age < 0 or age > MAX_CHILD_AGE:
                raise InvalidParty(f"Child age {age} is outside 0-{MAX_CHILD_AGE}")

    def _room_bucket(self, adults: int, children: int) -> RoomBucket:
        if adults == 1:
            if children == 0:
                return RoomBucket.SINGLE
            if children == 1:
                return RoomBucket.SINGLE_CHILD
            return RoomBucket.FAMILY
        if adults == 2:
            if children == 0:
                return RoomBucket.DOUBLE
            if children == 1:
                return RoomBucket.DOUBLE_EXTRA_BED
            return RoomBucket.FAMILY
        if adults == 3:
            return RoomBucket.TRIPLE
        return RoomBucket.QUAD
