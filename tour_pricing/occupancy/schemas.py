from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List
from enum import Enum


class ChildPolicy(str, Enum):
    """How a child is charged for a hotel stay"""
    FREE = "free"
    DISCOUNTED = "discounted"  # rate card child price
    FULL = "full"  # rate card extra bed price


class RoomBucket(str, Enum):
    """Room type a party is priced as"""
    SINGLE = "Single"
    SINGLE_CHILD = "Single + Child"
    DOUBLE = "Double"
    DOUBLE_EXTRA_BED = "Double + Extra Bed"
    FAMILY = "Family Room"
    TRIPLE = "Triple"
    QUAD = "Quad / 2 Doubles"


class ChildAgeBands(BaseModel):
    """Age thresholds (inclusive) separating infants, children and teens.

    With the defaults, ages 0-1 stay free, 2-11 pay the child price and
    12-17 pay the adult extra-bed price.
    """
    model_config = ConfigDict(frozen=True)

    infant_max_age: int = Field(1, ge=0, le=17)
    child_max_age: int = Field(11, ge=0, le=17)

    @model_validator(mode="after")
    def check_order(self):
        if self.infant_max_age >= self.child_max_age:
            raise ValueError("infant_max_age must be below child_max_age")
        return self

    def policy_for(self, age: int) -> ChildPolicy:
        if age <= self.infant_max_age:
            return ChildPolicy.FREE
        if age <= self.child_max_age:
            return ChildPolicy.DISCOUNTED
        return ChildPolicy.FULL


class Child(BaseModel):
    age: int = Field(..., ge=0, le=17)


class Party(BaseModel):
    """Travelling party for a single quote request"""
    adults: int = Field(..., ge=1)
    children: List[Child] = Field(default_factory=list)

    @classmethod
    def of(cls, adults: int, child_ages: List[int] = ()) -> "Party":
        return cls(adults=adults, children=[Child(age=age) for age in child_ages])

    @property
    def child_ages(self) -> List[int]:
        return [child.age for child in self.children]

    @property
    def total_people(self) -> int:
        return self.adults + len(self.children)


class ChildPricing(BaseModel):
    age: int
    policy: ChildPolicy


class Classification(BaseModel):
    """Result of classifying a party"""
    room_type: RoomBucket
    adults: int
    child_policies: List[ChildPricing]

    def count(self, policy: ChildPolicy) -> int:
        return sum(1 for child in self.child_policies if child.policy == policy)
