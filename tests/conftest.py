"""Pytest configuration and fixtures."""

import pytest

from wattbill.core.models import BillInput
from wattbill.services.billing import BillCalculator


@pytest.fixture
def calculator() -> BillCalculator:
    """Provides a calculator with the default tariff schedule."""
    return BillCalculator()


@pytest.fixture
def english_calculator() -> BillCalculator:
    """Provides a calculator producing English messages and labels."""
    return BillCalculator(language="en")


@pytest.fixture
def household_input() -> BillInput:
    """The reference household bill: 700 kWh over two months."""
    return BillInput(previous="1000", current="1700", months="2")
