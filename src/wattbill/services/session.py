"""Calculator session state: inputs plus the latest error or result."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace

from wattbill.core.errors import BillValidationError
from wattbill.core.models import BillInput, BillResult, TariffSchedule
from wattbill.services.billing import BillCalculator


class SessionStatus(str, enum.Enum):
    """Observable state of a calculator session."""

    EMPTY = "empty"
    EDITED = "edited"
    ERROR = "error"
    COMPUTED = "computed"


@dataclass(frozen=True)
class CalculatorSession:
    """
    Immutable snapshot of one user's calculator.

    Every transition returns a new session. An error and a result are never
    held at the same time, so a stale result cannot be shown next to a new
    error. ``defaults`` are the inputs ``reset`` returns to.
    """

    inputs: BillInput = field(default_factory=BillInput)
    error: BillValidationError | None = None
    result: BillResult | None = None
    defaults: BillInput = field(default_factory=BillInput)

    @classmethod
    def for_schedule(cls, schedule: TariffSchedule) -> CalculatorSession:
        """A fresh session whose defaults follow ``schedule``."""
        defaults = BillInput.for_schedule(schedule)
        return cls(inputs=defaults, defaults=defaults)

    @property
    def status(self) -> SessionStatus:
        if self.error is not None:
            return SessionStatus.ERROR
        if self.result is not None:
            return SessionStatus.COMPUTED
        if self.inputs == self.defaults:
            return SessionStatus.EMPTY
        return SessionStatus.EDITED

    def edit(self, **fields) -> CalculatorSession:
        """Replaces input fields and drops any previous error or result."""
        return CalculatorSession(
            inputs=replace(self.inputs, **fields), defaults=self.defaults
        )

    def submit(self, calculator: BillCalculator) -> CalculatorSession:
        """Runs the calculation for the current inputs."""
        outcome = calculator.calculate(self.inputs)
        return CalculatorSession(
            inputs=self.inputs,
            error=outcome.error,
            result=outcome.result,
            defaults=self.defaults,
        )

    def reset(self) -> CalculatorSession:
        """Returns every input to its default and clears error and result."""
        return CalculatorSession(inputs=self.defaults, defaults=self.defaults)
