"""Tests for the bill calculation dialog handlers."""

from decimal import Decimal

import pytest

from wattbill.bots.tg.handlers import calculator as handlers
from wattbill.bots.tg.handlers.utils import render_result, render_tariffs
from wattbill.bots.tg.keyboards.inline import CategoryCallback, SchemeCallback
from wattbill.bots.tg.states import BillEntry
from wattbill.core.models import (
    DEFAULT_SCHEDULE,
    BillInput,
    InstitutionCategory,
    TariffScheme,
    TariffSchedule,
)
from wattbill.services.billing import BillCalculator


class FakeState:
    def __init__(self, data=None):
        self.data = dict(data or {})
        self.state = None

    async def get_data(self):
        return dict(self.data)

    async def set_data(self, data):
        self.data = dict(data)

    async def update_data(self, **kwargs):
        self.data.update(kwargs)

    async def set_state(self, state=None):
        self.state = state

    async def clear(self):
        self.data = {}
        self.state = None


class FakeMessage:
    def __init__(self, text=""):
        self.text = text
        self.answers = []
        self.markups = []

    async def answer(self, text, **kwargs):
        self.answers.append(text)
        self.markups.append(kwargs.get("reply_markup"))

    async def edit_text(self, text, **kwargs):
        await self.answer(text, **kwargs)


class FakeCallbackQuery:
    def __init__(self, message):
        self.message = message
        self.answered = False

    async def answer(self, *args, **kwargs):
        self.answered = True


@pytest.fixture
def chat(monkeypatch):
    """A chat message that handlers accept as a Telegram message."""
    monkeypatch.setattr(handlers, "Message", FakeMessage)
    return FakeMessage()


@pytest.mark.asyncio
async def test_calculate_command_starts_dialog(calculator):
    state = FakeState({"previous": "42"})
    message = FakeMessage("/calc")

    await handlers.handle_calculate_command(message, state, calculator)

    assert state.state == BillEntry.enter_previous
    assert state.data["previous"] == ""
    assert state.data["months"] == "2"
    assert message.answers == [handlers.PROMPT_PREVIOUS]


@pytest.mark.asyncio
async def test_readings_are_stored_raw(calculator):
    state = FakeState()

    await handlers.handle_previous_reading(FakeMessage("1000"), state)
    assert state.state == BillEntry.enter_current

    message = FakeMessage("1700")
    await handlers.handle_current_reading(message, state, calculator)
    assert state.state == BillEntry.enter_months
    assert message.answers == [handlers.PROMPT_MONTHS]

    await handlers.handle_months(FakeMessage("2"), state)
    assert state.state == BillEntry.choose_scheme
    assert state.data["previous"] == "1000"
    assert state.data["current"] == "1700"
    assert state.data["months"] == "2"


@pytest.mark.asyncio
async def test_exchange_rate_step_shows_result(english_calculator):
    state = FakeState(
        {"previous": "1000", "current": "1700", "months": "2", "institution_mode": False}
    )
    state.state = BillEntry.enter_exchange_rate
    message = FakeMessage("14500")

    await handlers.handle_exchange_rate(message, state, english_calculator)

    assert state.state is None
    assert len(message.answers) == 1
    assert "740,000" in message.answers[0]
    assert "$51.03" in message.answers[0]


@pytest.mark.asyncio
async def test_reading_order_error_restarts_at_readings(calculator):
    state = FakeState({"previous": "500", "current": "100"})
    message = FakeMessage("14500")

    await handlers.handle_exchange_rate(message, state, calculator)

    assert state.state == BillEntry.enter_previous
    assert "لا يجوز أن تكون القراءة الحالية أقل من السابقة." in message.answers[0]
    assert message.answers[1] == handlers.PROMPT_PREVIOUS


@pytest.mark.asyncio
async def test_period_error_restarts_at_months(calculator):
    state = FakeState({"previous": "0", "current": "100", "months": "0"})

    message = FakeMessage("abc")
    await handlers.handle_exchange_rate(message, state, calculator)

    assert state.state == BillEntry.enter_months
    assert message.answers[1] == handlers.PROMPT_MONTHS
    keyboard = message.markups[1].inline_keyboard
    assert keyboard[0][0].text == "الافتراضي (2 أشهر)"


@pytest.mark.asyncio
async def test_reset_restores_defaults(calculator):
    state = FakeState(
        {"previous": "0", "current": "500", "institution_mode": True, "category": "premium"}
    )
    state.state = BillEntry.enter_exchange_rate
    message = FakeMessage()

    await handlers.handle_reset(message, state, calculator)

    assert state.state is None
    assert state.data == {
        "previous": "",
        "current": "",
        "months": "2",
        "institution_mode": False,
        "category": "standard",
        "exchange_rate": "",
    }
    assert message.answers == [handlers.RESET_DONE]


def test_render_institution_result(calculator):
    result = calculator.compute(
        BillInput(previous="0", current="500", institution_mode=True)
    )
    text = render_result(result, DEFAULT_SCHEDULE, language="en")

    assert "تعرفة ثابتة @ 1,700" in text
    assert "850,000" in text
    assert "💵 التحويل (دولار أمريكي): —" in text
    assert "الشريحة 2" not in text


def test_render_household_result_with_arabic_digits(calculator):
    result = calculator.compute(BillInput(previous="1000", current="1700"))
    text = render_result(result, DEFAULT_SCHEDULE, exchange_rate="", language="ar")

    assert "٧٤٠٬٠٠٠" in text
    assert "الشريحة 2" in text
    assert "أدخل سعر الصرف لإظهار التحويل" in text
    assert result.total_local == Decimal("740000")


def test_render_tariffs():
    text = render_tariffs(DEFAULT_SCHEDULE)
    assert "2025" in text
    assert "1,400" in text
    assert "1,800" in text


async def _enter_readings(chat, state, calculator, previous, current):
    await handlers.handle_calculate_command(chat, state, calculator)
    chat.text = previous
    await handlers.handle_previous_reading(chat, state)
    chat.text = current
    await handlers.handle_current_reading(chat, state, calculator)


@pytest.mark.asyncio
async def test_household_flow_with_default_months(chat, english_calculator):
    state = FakeState()
    await _enter_readings(chat, state, english_calculator, "1000", "1700")

    query = FakeCallbackQuery(chat)
    await handlers.handle_default_months(query, state)
    assert query.answered
    assert state.state == BillEntry.choose_scheme
    assert state.data["months"] == ""

    await handlers.handle_scheme(
        query,
        SchemeCallback(scheme=TariffScheme.HOUSEHOLD),
        state,
        english_calculator,
    )
    assert state.state == BillEntry.enter_exchange_rate
    assert chat.answers[-1] == handlers.PROMPT_EXCHANGE_RATE

    await handlers.handle_skip_exchange_rate(query, state, english_calculator)

    assert state.state is None
    assert "740,000" in chat.answers[-1]
    assert "350.0" in chat.answers[-1]
    assert "💵 التحويل (دولار أمريكي): —" in chat.answers[-1]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "category, total",
    [
        (InstitutionCategory.STANDARD, "850,000"),
        (InstitutionCategory.PREMIUM, "900,000"),
    ],
)
async def test_institution_flow(chat, english_calculator, category, total):
    state = FakeState()
    await _enter_readings(chat, state, english_calculator, "0", "500")
    chat.text = "2"
    await handlers.handle_months(chat, state)

    query = FakeCallbackQuery(chat)
    await handlers.handle_scheme(
        query,
        SchemeCallback(scheme=TariffScheme.INSTITUTION),
        state,
        english_calculator,
    )
    assert state.state == BillEntry.choose_category
    assert chat.answers[-1] == handlers.PROMPT_CATEGORY

    await handlers.handle_category(query, CategoryCallback(category=category), state)
    assert state.state == BillEntry.enter_exchange_rate
    assert state.data["category"] == category.value

    chat.text = "14500"
    await handlers.handle_exchange_rate(chat, state, english_calculator)

    assert state.state is None
    assert total in chat.answers[-1]
    assert "تعرفة ثابتة" in chat.answers[-1]


@pytest.mark.asyncio
async def test_dialog_uses_configured_default_months(chat):
    calculator = BillCalculator(TariffSchedule(default_months=Decimal("3")))
    state = FakeState()
    await _enter_readings(chat, state, calculator, "0", "90")

    assert chat.markups[-1].inline_keyboard[0][0].text == "الافتراضي (3 أشهر)"

    await handlers.handle_reset(chat, state, calculator)
    assert state.data["months"] == "3"


def test_large_bill_is_rendered(english_calculator):
    result = english_calculator.compute(BillInput(previous="0", current="1e27"))
    text = render_result(result, DEFAULT_SCHEDULE, language="en")
    assert "1,000,000,000,000,000,000,000,000,000 ك.و.س" in text
    assert "1,399,999,999,999,999,999,999,999,760,000 ل.س" in text
