"""Billing error taxonomy."""

from __future__ import annotations

from wattbill.core.messages import DEFAULT_LANGUAGE, error_message


class BillingError(Exception):
    """Base exception for billing errors."""


class BillValidationError(BillingError):
    """User input failed validation.

    Instances are returned as data by the calculator; they are raised only
    when ``compute`` is called with inputs that were never validated.
    """

    code = "invalid_input"

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        self.language = language
        self.message = error_message(self.code, language)
        super().__init__(self.message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BillValidationError):
            return NotImplemented
        return type(self) is type(other) and self.language == other.language

    def __hash__(self) -> int:
        return hash((type(self), self.language))


class InvalidNumberError(BillValidationError):
    """A meter reading is not a finite number."""

    code = "invalid_number"


class NegativeReadingError(BillValidationError):
    """A meter reading is negative."""

    code = "negative_reading"


class ReadingOrderError(BillValidationError):
    """The current reading precedes the previous one."""

    code = "reading_order"


class InvalidPeriodError(BillValidationError):
    """The billing period is not a positive finite number."""

    code = "invalid_period"
