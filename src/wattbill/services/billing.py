"""Service responsible for calculating electricity bills."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import NewType

from wattbill.core import calculations
from wattbill.core.errors import (
    BillValidationError,
    InvalidNumberError,
    InvalidPeriodError,
    NegativeReadingError,
    ReadingOrderError,
)
from wattbill.core.formatting import format_local
from wattbill.core.messages import DEFAULT_LANGUAGE, category_label
from wattbill.core.models import (
    DEFAULT_SCHEDULE,
    BillInput,
    BillResult,
    InstitutionCategory,
    TariffScheme,
    TariffSchedule,
)

Consumption = NewType("Consumption", Decimal)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedInput:
    """Numeric values of a BillInput that passed validation."""

    previous: Decimal
    current: Decimal
    months: Decimal
    exchange_rate: Decimal | None


@dataclass(frozen=True)
class CalculationOutcome:
    """Either a result or the first validation error, never both."""

    result: BillResult | None = None
    error: BillValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BillCalculator:
    """Validates raw bill input and applies the tariff schedule."""

    def __init__(
        self,
        schedule: TariffSchedule = DEFAULT_SCHEDULE,
        language: str = DEFAULT_LANGUAGE,
    ):
        self._schedule = schedule
        self._language = language

    @property
    def schedule(self) -> TariffSchedule:
        return self._schedule

    @property
    def language(self) -> str:
        return self._language

    def validate(self, inputs: BillInput) -> BillValidationError | None:
        """
        Checks raw input and returns the first violated rule, if any.

        Checks run in order: readings are numbers, readings are not negative,
        the current reading is not below the previous one, and the billing
        period is a positive number. A blank period uses the schedule default.
        """
        parsed_or_error = self._parse(inputs)
        if isinstance(parsed_or_error, BillValidationError):
            logger.info("Bill input rejected: %s", parsed_or_error.code)
            return parsed_or_error
        return None

    def compute(self, inputs: BillInput) -> BillResult:
        """
        Computes the bill for inputs that already passed ``validate``.

        Raises:
            BillValidationError: If the inputs are invalid.
        """
        parsed_or_error = self._parse(inputs)
        if isinstance(parsed_or_error, BillValidationError):
            raise parsed_or_error
        parsed = parsed_or_error

        with calculations.exact_context(
            parsed.previous, parsed.current, *self._tariff_constants()
        ):
            consumption = Consumption(
                calculations.calculate_consumption(parsed.current, parsed.previous)
            )

            if inputs.scheme is TariffScheme.INSTITUTION:
                category = InstitutionCategory.parse(inputs.category)
                tier1_kwh, tier2_kwh, total, label = self._bill_institution(
                    consumption, category
                )
            else:
                category = None
                tier1_kwh, tier2_kwh, total, label = self._bill_household(consumption)

            total_foreign = calculations.convert_currency(total, parsed.exchange_rate)
            average = calculations.average_per_month(consumption, parsed.months)

        result = BillResult(
            consumption=consumption,
            months=parsed.months,
            average_per_month=average,
            tier1_kwh=tier1_kwh,
            tier2_kwh=tier2_kwh,
            total_local=total,
            total_foreign=total_foreign,
            category_label=label,
            scheme=inputs.scheme,
            category=category,
            tariff_version=self._schedule.version,
        )
        logger.debug(
            "Computed %s bill: %s kWh, total %s", result.scheme.value, consumption, total
        )
        return result

    def calculate(self, inputs: BillInput) -> CalculationOutcome:
        """Validates and, when the input is valid, computes the bill."""
        error = self.validate(inputs)
        if error is not None:
            return CalculationOutcome(error=error)
        return CalculationOutcome(result=self.compute(inputs))

    def _parse(self, inputs: BillInput) -> ParsedInput | BillValidationError:
        previous = self._parse_reading(inputs.previous)
        current = self._parse_reading(inputs.current)
        if previous is None or current is None:
            return InvalidNumberError(self._language)
        if previous < 0 or current < 0:
            return NegativeReadingError(self._language)
        if current < previous:
            return ReadingOrderError(self._language)

        if not (inputs.months or "").strip():
            months = self._schedule.default_months
        else:
            months = calculations.parse_number(inputs.months)
        if months is None or months <= 0:
            return InvalidPeriodError(self._language)

        # A malformed rate means conversion was not requested.
        exchange_rate = calculations.parse_number(inputs.exchange_rate)
        return ParsedInput(
            previous=previous,
            current=current,
            months=months,
            exchange_rate=exchange_rate,
        )

    @staticmethod
    def _parse_reading(text: str | None) -> Decimal | None:
        """A blank reading counts as zero."""
        if not (text or "").strip():
            return calculations.ZERO
        return calculations.parse_number(text)

    def _tariff_constants(self) -> list[Decimal]:
        household = self._schedule.household
        return [
            household.threshold,
            household.tier1_rate,
            household.tier2_rate,
            *self._schedule.institution.rates.values(),
        ]

    def _bill_household(
        self, consumption: Decimal
    ) -> tuple[Decimal, Decimal, Decimal, str]:
        tariff = self._schedule.household
        tier1_kwh, tier2_kwh = calculations.split_tiers(consumption, tariff.threshold)
        total = calculations.calculate_tiered_cost(
            tier1_kwh, tier2_kwh, tariff.tier1_rate, tariff.tier2_rate
        )
        key = "household_low" if consumption <= tariff.threshold else "household_high"
        label = category_label(
            key, self._language, threshold=format_local(tariff.threshold)
        )
        return tier1_kwh, tier2_kwh, total, label

    def _bill_institution(
        self, consumption: Decimal, category: InstitutionCategory
    ) -> tuple[Decimal, Decimal, Decimal, str]:
        rate = self._schedule.institution.rate_for(category)
        total = calculations.calculate_cost(consumption, rate)
        label = category_label(category.value, self._language, rate=format_local(rate))
        return consumption, Decimal("0"), total, label
