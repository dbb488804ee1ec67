"""Application configuration."""

from decimal import Decimal
from types import MappingProxyType
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from wattbill.core.models import (
    HouseholdTariff,
    InstitutionCategory,
    InstitutionTariff,
    TariffSchedule,
)


class Settings(BaseSettings):
    """Loads and validates application settings from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    BOT_TOKEN: str = "YOUR_TELEGRAM_BOT_TOKEN"
    LANGUAGE: Literal["ar", "en"] = "ar"
    LOG_LEVEL: str = "INFO"

    # Tariff schedule
    TARIFF_VERSION: str = "2025"
    TARIFF_CURRENCY: str = "SYP"
    HOUSEHOLD_THRESHOLD_KWH: Decimal = Field(default=Decimal("300"), gt=0)
    HOUSEHOLD_TIER1_RATE: Decimal = Field(default=Decimal("600"), gt=0)
    HOUSEHOLD_TIER2_RATE: Decimal = Field(default=Decimal("1400"), gt=0)
    INSTITUTION_STANDARD_RATE: Decimal = Field(default=Decimal("1700"), gt=0)
    INSTITUTION_PREMIUM_RATE: Decimal = Field(default=Decimal("1800"), gt=0)
    DEFAULT_MONTHS: Decimal = Field(default=Decimal("2"), gt=0)

    def tariff_schedule(self) -> TariffSchedule:
        """Builds the tariff schedule injected into the calculator."""
        return TariffSchedule(
            version=self.TARIFF_VERSION,
            currency=self.TARIFF_CURRENCY,
            household=HouseholdTariff(
                threshold=self.HOUSEHOLD_THRESHOLD_KWH,
                tier1_rate=self.HOUSEHOLD_TIER1_RATE,
                tier2_rate=self.HOUSEHOLD_TIER2_RATE,
            ),
            institution=InstitutionTariff(
                rates=MappingProxyType(
                    {
                        InstitutionCategory.STANDARD: self.INSTITUTION_STANDARD_RATE,
                        InstitutionCategory.PREMIUM: self.INSTITUTION_PREMIUM_RATE,
                    }
                )
            ),
            default_months=self.DEFAULT_MONTHS,
        )


settings = Settings()
