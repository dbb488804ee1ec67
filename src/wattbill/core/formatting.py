"""Number formatting helpers for display."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

ARABIC_INDIC_DIGITS = str.maketrans("0123456789,.", "٠١٢٣٤٥٦٧٨٩٬٫")


def _localize(text: str, language: str) -> str:
    if language == "ar":
        return text.translate(ARABIC_INDIC_DIGITS)
    return text


def _round(value: Decimal, step: str) -> Decimal:
    exponent = Decimal(step)
    with localcontext() as ctx:
        # Enough digits for the integer part plus the kept decimals.
        ctx.prec = max(ctx.prec, value.adjusted() - exponent.as_tuple().exponent + 2)
        return value.quantize(exponent, rounding=ROUND_HALF_UP)


def format_local(amount: Decimal, language: str = "en") -> str:
    """Rounds to whole units and groups thousands, e.g. ``740,000``."""
    return _localize(f"{_round(amount, '1'):,}", language)


def format_foreign(amount: Decimal, language: str = "en") -> str:
    """Formats a USD amount with two decimals, e.g. ``$51.03``."""
    return "$" + _localize(f"{_round(amount, '0.01'):,}", language)


def format_average(value: Decimal, language: str = "en") -> str:
    """One decimal place, e.g. ``350.0``."""
    return _localize(f"{_round(value, '0.1'):,}", language)
