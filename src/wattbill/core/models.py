"""Domain models for the WattBill application."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping


class TariffScheme(str, enum.Enum):
    """Pricing scheme applied to a bill."""

    HOUSEHOLD = "household"
    INSTITUTION = "institution"


class InstitutionCategory(str, enum.Enum):
    """Flat-rate categories for institutions, facilities and industry."""

    STANDARD = "standard"
    PREMIUM = "premium"

    @classmethod
    def parse(cls, value: str | None) -> InstitutionCategory:
        """Returns the matching category, falling back to STANDARD."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.STANDARD


@dataclass(frozen=True)
class HouseholdTariff:
    """Two-tier household pricing."""

    threshold: Decimal = Decimal("300")
    tier1_rate: Decimal = Decimal("600")
    tier2_rate: Decimal = Decimal("1400")


@dataclass(frozen=True)
class InstitutionTariff:
    """Flat per-kWh rates keyed by institution category."""

    rates: Mapping[InstitutionCategory, Decimal] = field(
        default_factory=lambda: MappingProxyType(
            {
                InstitutionCategory.STANDARD: Decimal("1700"),
                InstitutionCategory.PREMIUM: Decimal("1800"),
            }
        )
    )

    def rate_for(self, category: InstitutionCategory) -> Decimal:
        """Rate of a category; unknown categories use the standard rate."""
        return self.rates.get(category, self.rates[InstitutionCategory.STANDARD])


@dataclass(frozen=True)
class TariffSchedule:
    """A versioned set of tariff constants injected into the calculator."""

    version: str = "2025"
    currency: str = "SYP"
    household: HouseholdTariff = field(default_factory=HouseholdTariff)
    institution: InstitutionTariff = field(default_factory=InstitutionTariff)
    default_months: Decimal = Decimal("2")


DEFAULT_SCHEDULE = TariffSchedule()


@dataclass(frozen=True)
class BillInput:
    """Raw, user-entered values for one calculation.

    Readings, months and the exchange rate are kept as text exactly as the
    user typed them; parsing happens during validation.
    """

    previous: str = ""
    current: str = ""
    months: str = "2"
    institution_mode: bool = False
    category: str = InstitutionCategory.STANDARD.value
    exchange_rate: str = ""

    @classmethod
    def for_schedule(cls, schedule: TariffSchedule) -> BillInput:
        """Default inputs, with the schedule's default billing period."""
        return cls(months=f"{schedule.default_months.normalize():f}")

    @property
    def scheme(self) -> TariffScheme:
        if self.institution_mode:
            return TariffScheme.INSTITUTION
        return TariffScheme.HOUSEHOLD


@dataclass(frozen=True)
class BillResult:
    """Represents the outcome of a single bill calculation."""

    consumption: Decimal
    months: Decimal
    average_per_month: Decimal
    tier1_kwh: Decimal
    tier2_kwh: Decimal
    total_local: Decimal
    total_foreign: Decimal | None  # None when no conversion was requested
    category_label: str
    scheme: TariffScheme
    category: InstitutionCategory | None = None
    tariff_version: str = DEFAULT_SCHEDULE.version
