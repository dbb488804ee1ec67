"""Core business logic for calculations."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, getcontext, localcontext

ZERO = Decimal("0")

# Range of a double-precision float: larger values are treated as
# infinite and smaller ones as zero.
MAX_ADJUSTED_EXPONENT = 308
MIN_ADJUSTED_EXPONENT = -324


def parse_number(text: str | None) -> Decimal | None:
    """
    Parses user-entered text into a finite Decimal.

    Args:
        text: Raw input; surrounding whitespace is ignored.

    Returns:
        The parsed value, or None for blank, malformed, NaN or infinite input.
        Magnitudes beyond ``MAX_ADJUSTED_EXPONENT`` count as infinite, those
        below ``MIN_ADJUSTED_EXPONENT`` are returned as zero.
    """
    if text is None:
        return None
    text = str(text).strip()
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    if value.is_zero():
        return value
    if value.adjusted() > MAX_ADJUSTED_EXPONENT:
        return None
    if value.adjusted() < MIN_ADJUSTED_EXPONENT:
        return ZERO
    return value


def exact_context(*values: Decimal):
    """
    Returns a decimal context precise enough for exact sums, differences and
    pairwise products of ``values``.

    Divisions inside the context are still rounded, at the same precision.
    """
    nonzero = [value for value in values if not value.is_zero()]
    context = getcontext().copy()
    if nonzero:
        span = max(v.adjusted() for v in nonzero) - min(
            v.as_tuple().exponent for v in nonzero
        ) + 1
        context.prec = max(context.prec, 2 * span + 28)
    return localcontext(context)


def calculate_consumption(current_reading: Decimal, previous_reading: Decimal) -> Decimal:
    """
    Calculates the consumption between two meter readings.

    Args:
        current_reading: The most recent meter reading.
        previous_reading: The previous meter reading.

    Returns:
        The consumed kWh.
    """
    return current_reading - previous_reading


def split_tiers(consumption: Decimal, threshold: Decimal) -> tuple[Decimal, Decimal]:
    """
    Splits consumption into the part billed at tier 1 and the excess.

    Consumption equal to the threshold is billed entirely at tier 1.
    """
    tier1 = min(consumption, threshold)
    tier2 = max(consumption - threshold, ZERO)
    return tier1, tier2


def calculate_cost(consumption: Decimal, rate: Decimal) -> Decimal:
    """
    Calculates the monetary cost based on consumption and a tariff rate.

    Args:
        consumption: The amount of resource consumed.
        rate: The monetary rate per unit of consumption.

    Returns:
        The calculated cost.
    """
    return consumption * rate


def calculate_tiered_cost(
    tier1_kwh: Decimal, tier2_kwh: Decimal, tier1_rate: Decimal, tier2_rate: Decimal
) -> Decimal:
    """Sums the cost of both tiers."""
    return calculate_cost(tier1_kwh, tier1_rate) + calculate_cost(tier2_kwh, tier2_rate)


def average_per_month(consumption: Decimal, months: Decimal) -> Decimal:
    """Average consumption per month of a positive billing period."""
    return consumption / months


def convert_currency(amount: Decimal, exchange_rate: Decimal | None) -> Decimal | None:
    """
    Converts a local amount into the foreign currency.

    Args:
        amount: Amount in local currency.
        exchange_rate: Local units per one foreign unit.

    Returns:
        The converted amount, or None when no usable rate was given.
    """
    if exchange_rate is None or exchange_rate <= 0:
        return None
    return amount / exchange_rate
