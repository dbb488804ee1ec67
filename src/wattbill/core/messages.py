"""Localized texts used by the calculator core."""

from __future__ import annotations

DEFAULT_LANGUAGE = "ar"

ERROR_MESSAGES = {
    "ar": {
        "invalid_number": "يرجى إدخال أرقام صحيحة لقراءات العداد.",
        "negative_reading": "لا يمكن أن تكون القراءات سالبة.",
        "reading_order": "لا يجوز أن تكون القراءة الحالية أقل من السابقة.",
        "invalid_period": "مدة الفاتورة (بالأشهر) يجب أن تكون رقماً موجباً.",
    },
    "en": {
        "invalid_number": "Please enter valid numbers for the meter readings.",
        "negative_reading": "Meter readings cannot be negative.",
        "reading_order": "The current reading cannot be lower than the previous one.",
        "invalid_period": "The billing period (in months) must be a positive number.",
    },
}

CATEGORY_LABELS = {
    "ar": {
        "household_low": "منزلي – حتى {threshold} ك.و.س",
        "household_high": "منزلي – فوق {threshold} ك.و.س",
        "standard": "مؤسسة/منشأة – قياسي ({rate} ل.س/ك.و.س)",
        "premium": "مؤسسة/منشأة – مميز ({rate} ل.س/ك.و.س)",
    },
    "en": {
        "household_low": "Household – up to {threshold} kWh",
        "household_high": "Household – above {threshold} kWh",
        "standard": "Institution/facility – Standard ({rate} SYP/kWh)",
        "premium": "Institution/facility – Premium ({rate} SYP/kWh)",
    },
}


def _catalog(table: dict[str, dict[str, str]], language: str) -> dict[str, str]:
    return table.get(language, table[DEFAULT_LANGUAGE])


def error_message(code: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Returns the error text for ``code`` in ``language``."""
    return _catalog(ERROR_MESSAGES, language)[code]


def category_label(key: str, language: str = DEFAULT_LANGUAGE, **values: str) -> str:
    """Returns a formatted category label, e.g. ``household_low``."""
    return _catalog(CATEGORY_LABELS, language)[key].format(**values)
