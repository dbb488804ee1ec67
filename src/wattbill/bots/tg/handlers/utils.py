from __future__ import annotations

from decimal import Decimal

from wattbill.core.calculations import parse_number
from wattbill.core.formatting import format_average, format_foreign, format_local
from wattbill.core.models import (
    BillResult,
    InstitutionCategory,
    TariffScheme,
    TariffSchedule,
)


def _plain(value: Decimal) -> str:
    return f"{value.normalize():f}"


def render_result(
    result: BillResult,
    schedule: TariffSchedule,
    exchange_rate: str = "",
    language: str = "ar",
) -> str:
    """
    Builds the HTML message shown after a successful calculation.

    Args:
        result: The computed bill.
        schedule: Tariff schedule the bill was computed with.
        exchange_rate: The raw exchange rate the user entered, if any.
        language: Controls digit shaping of the numbers.

    Returns:
        The message text.
    """
    household = schedule.household
    lines = [
        "<b>النتائج</b>",
        f"الاستهلاك الكلي: <b>{format_local(result.consumption, language)} ك.و.س</b>",
        f"المتوسط شهريًا: {format_average(result.average_per_month, language)} ك.و.س"
        f" • المدة: {_plain(result.months)} أشهر",
        f"الفئة: {result.category_label}",
        "",
    ]

    if result.scheme is TariffScheme.HOUSEHOLD:
        lines.append(
            f"الشريحة 1 (≤ {format_local(household.threshold)} ك.و.س)"
            f" @ {format_local(household.tier1_rate)} ل.س/ك.و.س:"
            f" <b>{format_local(result.tier1_kwh, language)} ك.و.س</b>"
        )
        lines.append(
            f"الشريحة 2 (&gt; {format_local(household.threshold)} ك.و.س)"
            f" @ {format_local(household.tier2_rate)} ل.س/ك.و.س:"
            f" <b>{format_local(result.tier2_kwh, language)} ك.و.س</b>"
        )
    else:
        rate = schedule.institution.rate_for(result.category)
        lines.append(
            f"تعرفة ثابتة @ {format_local(rate)} ل.س/ك.و.س:"
            f" <b>{format_local(result.tier1_kwh, language)} ك.و.س</b>"
        )

    lines.append("")
    lines.append(f"💰 المجموع: <b>{format_local(result.total_local, language)} ل.س</b>")

    if result.total_foreign is not None:
        lines.append(
            f"💵 التحويل (دولار أمريكي): <b>{format_foreign(result.total_foreign, language)}</b>"
        )
    else:
        lines.append("💵 التحويل (دولار أمريكي): —")

    rate_value = parse_number(exchange_rate)
    if rate_value is not None:
        lines.append(f"<i>اعتماد سعر: {format_local(rate_value, language)} ل.س/دولار</i>")
    else:
        lines.append("<i>أدخل سعر الصرف لإظهار التحويل</i>")

    lines.append("")
    lines.append(
        f"ملاحظة: تطبق هذه الأداة الشرائح المنزلية أو التعرفة الثابتة للمؤسسات"
        f" كما هو مُعرّف لعام {result.tariff_version}. النتائج تقديرية فقط."
    )
    return "\n".join(lines)


def render_tariffs(schedule: TariffSchedule) -> str:
    """Describes the active tariff schedule."""
    household = schedule.household
    institution = schedule.institution
    return "\n".join(
        [
            f"<b>التعرفة ({schedule.version})</b>",
            f"حد الشريحة المنزلية: {format_local(household.threshold)} ك.و.س",
            f"الأسعار: {format_local(household.tier1_rate)}"
            f" و {format_local(household.tier2_rate)} ل.س/ك.و.س.",
            "فئات المؤسسات: "
            f"{format_local(institution.rate_for(InstitutionCategory.STANDARD))}"
            f" و {format_local(institution.rate_for(InstitutionCategory.PREMIUM))}"
            " ل.س/ك.و.س.",
        ]
    )
