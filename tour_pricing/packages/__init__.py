"""
Packages Module

Package price aggregation for the admin price calculator and the search
flow. A package bundles a flight block, a hotel stay and an optional
airport transfer, quoted for one or more occupancy configurations.

Key Components:
- service.py: Flight + hotel + transfer aggregation with margins
- transfer_service.py: Vehicle-tier and per-person transfer costs
- router.py: FastAPI calculate-prices endpoint
- schemas.py: Occupancy configurations and quote models
"""

from .router import router
from .service import PackagePriceAggregator
from .transfer_service import TransferCostCalculator
from .schemas import (
    OccupancyConfig, PackageQuote, QuoteSummary, CalculatePricesResponse, DEFAULT_OCCUPANCY_CONFIGS
)

__all__ = [
    "router",
    "PackagePriceAggregator",
    "TransferCostCalculator",
    "OccupancyConfig",
    "PackageQuote",
    "QuoteSummary",
    "CalculatePricesResponse",
    "DEFAULT_OCCUPANCY_CONFIGS",
]
