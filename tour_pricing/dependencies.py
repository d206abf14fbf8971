from fastapi import Depends
from sqlalchemy.orm import Session

from tour_pricing.config import PricingPolicy, settings
from tour_pricing.database import get_db
from tour_pricing.catalog.repository import CatalogRepository, SqlCatalog
from tour_pricing.availability.repository import AvailabilityRepository, SqlAvailabilityRepository
from tour_pricing.rates.repository import RateCardRepository, SqlRateCardRepository


def get_catalog(db: Session = Depends(get_db)) -> CatalogRepository:
    return SqlCatalog(db)


def get_availability_repository(db: Session = Depends(get_db)) -> AvailabilityRepository:
    return SqlAvailabilityRepository(db)


def get_rate_card_repository(db: Session = Depends(get_db)) -> RateCardRepository:
    return SqlRateCardRepository(db)


def get_pricing_policy() -> PricingPolicy:
    return settings.pricing_policy()
