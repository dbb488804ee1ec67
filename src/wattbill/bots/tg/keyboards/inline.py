"""Inline keyboard builders."""

from aiogram.filters.callback_data import CallbackData
from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from wattbill.core.formatting import format_local
from wattbill.core.models import InstitutionCategory, TariffScheme, TariffSchedule


class SchemeCallback(CallbackData, prefix="scheme"):
    """Callback data for choosing household or institution pricing."""

    scheme: TariffScheme


class CategoryCallback(CallbackData, prefix="cat"):
    """Callback data for choosing an institution category."""

    category: InstitutionCategory


class SkipCallback(CallbackData, prefix="skip"):
    """Callback data for skipping an optional step.

    - months: use the default billing period
    - fx: no currency conversion
    """

    field: str


def get_months_keyboard(default_months: str) -> InlineKeyboardMarkup:
    """Offers the default billing period as a button."""
    builder = InlineKeyboardBuilder()
    builder.row(
        InlineKeyboardButton(
            text=f"الافتراضي ({default_months} أشهر)",
            callback_data=SkipCallback(field="months").pack(),
        )
    )
    return builder.as_markup()


def get_scheme_keyboard() -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.row(
        InlineKeyboardButton(
            text="🏠 منزلي",
            callback_data=SchemeCallback(scheme=TariffScheme.HOUSEHOLD).pack(),
        ),
        InlineKeyboardButton(
            text="🏢 مؤسسة / منشأة / صناعة",
            callback_data=SchemeCallback(scheme=TariffScheme.INSTITUTION).pack(),
        ),
    )
    return builder.as_markup()


def get_category_keyboard(schedule: TariffSchedule) -> InlineKeyboardMarkup:
    """Builds one button per institution category with its rate."""
    names = {
        InstitutionCategory.STANDARD: "قياسي",
        InstitutionCategory.PREMIUM: "مميز",
    }
    builder = InlineKeyboardBuilder()
    for category in InstitutionCategory:
        rate = schedule.institution.rate_for(category)
        builder.row(
            InlineKeyboardButton(
                text=f"{names[category]} · {format_local(rate)}",
                callback_data=CategoryCallback(category=category).pack(),
            )
        )
    return builder.as_markup()


def get_exchange_rate_keyboard() -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.row(
        InlineKeyboardButton(
            text="تخطي (بدون تحويل)",
            callback_data=SkipCallback(field="fx").pack(),
        )
    )
    return builder.as_markup()
