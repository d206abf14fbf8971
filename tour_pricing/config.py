from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Tuple

from tour_pricing.occupancy.schemas import ChildAgeBands


class PricingPolicy(BaseModel):
    """Business parameters for package pricing. All amounts in cents."""
    model_config = ConfigDict(frozen=True)

    flight_price_per_person: int = Field(12000, ge=0)  # round trip
    # (max_people, flat_rate) one-way, checked in order
    transfer_tiers: Tuple[Tuple[int, int], ...] = ((3, 5000), (7, 7500))
    transfer_max_rate: int = Field(10000, ge=0)
    child_age_bands: ChildAgeBands = ChildAgeBands()
    service_charge: int = Field(0, ge=0)
    profit_margin_percent: float = Field(0.0, ge=0)


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./tour_pricing.db"

    # Application
    PROJECT_NAME: str = "Tour Pricing Service"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Pricing defaults
    FLIGHT_PRICE_PER_PERSON: int = 12000
    TRANSFER_TIERS: List[Tuple[int, int]] = [(3, 5000), (7, 7500)]
    TRANSFER_MAX_RATE: int = 10000
    INFANT_MAX_AGE: int = 1
    CHILD_MAX_AGE: int = 11
    SERVICE_CHARGE: int = 0
    PROFIT_MARGIN_PERCENT: float = 0.0

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    def pricing_policy(self) -> PricingPolicy:
        return PricingPolicy(
            flight_price_per_person=self.FLIGHT_PRICE_PER_PERSON,
            transfer_tiers=tuple(tuple(tier) for tier in self.TRANSFER_TIERS),
            transfer_max_rate=self.TRANSFER_MAX_RATE,
            child_age_bands=ChildAgeBands(
                infant_max_age=self.INFANT_MAX_AGE,
                child_max_age=self.CHILD_MAX_AGE,
            ),
            service_charge=self.SERVICE_CHARGE,
            profit_margin_percent=self.PROFIT_MARGIN_PERCENT,
        )


settings = Settings()
