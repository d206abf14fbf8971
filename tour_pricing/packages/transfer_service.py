from typing import Optional

from tour_pricing.catalog.schemas import TransferOption
from tour_pricing.config import PricingPolicy


class TransferCostCalculator:
    """Airport transfer cost for a party, in cents"""

    def __init__(self, policy: PricingPolicy):
        self.policy = policy

    def vehicle_rate(self, total_people: int) -> int:
        """One-way flat rate of the smallest vehicle tier that fits the party"""
        for max_people, rate in self.policy.transfer_tiers:
            if total_people <= max_people:
                return rate
        return self.policy.transfer_max_rate

    def calculate(self, transfer: Optional[TransferOption], total_people: int) -> int:
        if transfer is None:
            return 0

        if transfer.price_per_person is not None:
            one_way = transfer.price_per_person * total_people
        else:
            one_way = self.vehicle_rate(total_people)

        return one_way * 2 if transfer.round_trip else one_way
