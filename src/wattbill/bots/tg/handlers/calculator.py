"""Handlers for the bill calculation dialog (FSM)."""

from __future__ import annotations

import logging
from dataclasses import asdict

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from wattbill.bots.tg.handlers.utils import render_result
from wattbill.bots.tg.keyboards.inline import (
    CategoryCallback,
    SchemeCallback,
    SkipCallback,
    get_category_keyboard,
    get_exchange_rate_keyboard,
    get_months_keyboard,
    get_scheme_keyboard,
)
from wattbill.bots.tg.keyboards.reply import BTN_CALCULATE, BTN_RESET, get_main_menu
from wattbill.bots.tg.states import BillEntry
from wattbill.core.errors import InvalidPeriodError
from wattbill.core.models import BillInput, TariffScheme
from wattbill.services.billing import BillCalculator
from wattbill.services.session import CalculatorSession

router = Router(name=__name__)
logger = logging.getLogger(__name__)

PROMPT_PREVIOUS = "أدخل قراءة العداد السابقة (ك.و.س)، مثال: 12500"
PROMPT_CURRENT = "أدخل قراءة العداد الحالية (ك.و.س)، مثال: 12980"
PROMPT_MONTHS = "مدة الفاتورة (بالأشهر)؟"
PROMPT_SCHEME = "اختر نوع الاشتراك:"
PROMPT_CATEGORY = "اختر فئة المؤسسة:"
PROMPT_EXCHANGE_RATE = (
    "سعر الصرف (ل.س لكل دولار)، اختياري.\n"
    "يُستخدم لتحويل المجموع إلى الدولار في حال إدخاله."
)
RESET_DONE = "تم مسح جميع الحقول."


async def _load_session(
    state: FSMContext, calculator: BillCalculator | None = None
) -> CalculatorSession:
    session = CalculatorSession()
    if calculator is not None:
        session = CalculatorSession.for_schedule(calculator.schedule)
    data = await state.get_data()
    known = asdict(session.inputs).keys()
    fields = {key: value for key, value in data.items() if key in known}
    return session.edit(**fields)


def _default_months(calculator: BillCalculator) -> str:
    return BillInput.for_schedule(calculator.schedule).months


async def _edit(state: FSMContext, **fields) -> CalculatorSession:
    session = (await _load_session(state)).edit(**fields)
    await state.set_data(asdict(session.inputs))
    return session


@router.message(Command("calc"))
@router.message(F.text == BTN_CALCULATE)
async def handle_calculate_command(
    message: Message, state: FSMContext, calculator: BillCalculator
) -> None:
    """Starts a new calculation with default inputs."""
    session = CalculatorSession.for_schedule(calculator.schedule)
    await state.set_data(asdict(session.inputs))
    await state.set_state(BillEntry.enter_previous)
    await message.answer(PROMPT_PREVIOUS)


@router.message(Command("reset"))
@router.message(F.text == BTN_RESET)
async def handle_reset(
    message: Message, state: FSMContext, calculator: BillCalculator
) -> None:
    """Returns all inputs to their defaults and clears any result."""
    session = (await _load_session(state, calculator)).reset()
    await state.clear()
    await state.set_data(asdict(session.inputs))
    await message.answer(RESET_DONE, reply_markup=get_main_menu())


@router.message(BillEntry.enter_previous)
async def handle_previous_reading(message: Message, state: FSMContext) -> None:
    if not message.text:
        return
    await _edit(state, previous=message.text)
    await state.set_state(BillEntry.enter_current)
    await message.answer(PROMPT_CURRENT)


@router.message(BillEntry.enter_current)
async def handle_current_reading(
    message: Message, state: FSMContext, calculator: BillCalculator
) -> None:
    if not message.text:
        return
    await _edit(state, current=message.text)
    await state.set_state(BillEntry.enter_months)
    await message.answer(
        PROMPT_MONTHS, reply_markup=get_months_keyboard(_default_months(calculator))
    )


async def _ask_scheme(message: Message, state: FSMContext) -> None:
    await state.set_state(BillEntry.choose_scheme)
    await message.answer(PROMPT_SCHEME, reply_markup=get_scheme_keyboard())


@router.message(BillEntry.enter_months)
async def handle_months(message: Message, state: FSMContext) -> None:
    if not message.text:
        return
    await _edit(state, months=message.text)
    await _ask_scheme(message, state)


@router.callback_query(BillEntry.enter_months, SkipCallback.filter(F.field == "months"))
async def handle_default_months(query: CallbackQuery, state: FSMContext) -> None:
    """Uses the default billing period."""
    if not isinstance(query.message, Message):
        return
    await query.answer()
    await _edit(state, months="")
    await _ask_scheme(query.message, state)


@router.callback_query(BillEntry.choose_scheme, SchemeCallback.filter())
async def handle_scheme(
    query: CallbackQuery,
    callback_data: SchemeCallback,
    state: FSMContext,
    calculator: BillCalculator,
) -> None:
    """Stores the pricing scheme and asks for a category when needed."""
    if not isinstance(query.message, Message):
        return
    await query.answer()
    institution_mode = callback_data.scheme is TariffScheme.INSTITUTION
    await _edit(state, institution_mode=institution_mode)

    if institution_mode:
        await state.set_state(BillEntry.choose_category)
        await query.message.edit_text(
            PROMPT_CATEGORY,
            reply_markup=get_category_keyboard(calculator.schedule),
        )
        return

    await state.set_state(BillEntry.enter_exchange_rate)
    await query.message.edit_text(
        PROMPT_EXCHANGE_RATE, reply_markup=get_exchange_rate_keyboard()
    )


@router.callback_query(BillEntry.choose_category, CategoryCallback.filter())
async def handle_category(
    query: CallbackQuery, callback_data: CategoryCallback, state: FSMContext
) -> None:
    if not isinstance(query.message, Message):
        return
    await query.answer()
    await _edit(state, category=callback_data.category.value)
    await state.set_state(BillEntry.enter_exchange_rate)
    await query.message.edit_text(
        PROMPT_EXCHANGE_RATE, reply_markup=get_exchange_rate_keyboard()
    )


@router.message(BillEntry.enter_exchange_rate)
async def handle_exchange_rate(
    message: Message, state: FSMContext, calculator: BillCalculator
) -> None:
    if not message.text:
        return
    await _edit(state, exchange_rate=message.text)
    await _finish(message, state, calculator)


@router.callback_query(BillEntry.enter_exchange_rate, SkipCallback.filter(F.field == "fx"))
async def handle_skip_exchange_rate(
    query: CallbackQuery, state: FSMContext, calculator: BillCalculator
) -> None:
    """Calculates without currency conversion."""
    if not isinstance(query.message, Message):
        return
    await query.answer()
    await _edit(state, exchange_rate="")
    await _finish(query.message, state, calculator)


async def _finish(message: Message, state: FSMContext, calculator: BillCalculator) -> None:
    """
    Runs the calculation and shows either the result or the first error.

    On an error the dialog restarts at the step that owns the failing field,
    keeping the other inputs.
    """
    session = (await _load_session(state, calculator)).submit(calculator)

    if session.error is not None:
        await message.answer(f"⚠️ <b>خطأ في الإدخال</b>\n{session.error.message}")
        if isinstance(session.error, InvalidPeriodError):
            await state.set_state(BillEntry.enter_months)
            await message.answer(
                PROMPT_MONTHS,
                reply_markup=get_months_keyboard(_default_months(calculator)),
            )
        else:
            await state.set_state(BillEntry.enter_previous)
            await message.answer(PROMPT_PREVIOUS)
        return

    logger.info(
        "Bill calculated: scheme=%s consumption=%s",
        session.result.scheme.value,
        session.result.consumption,
    )
    await state.set_state(None)
    await message.answer(
        render_result(
            session.result,
            calculator.schedule,
            exchange_rate=session.inputs.exchange_rate,
            language=calculator.language,
        ),
        reply_markup=get_main_menu(),
    )
