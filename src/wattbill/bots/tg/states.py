"""FSM states for the bot."""

from aiogram.fsm.state import State, StatesGroup


class BillEntry(StatesGroup):
    """States for the bill calculation dialog."""

    enter_previous = State()
    enter_current = State()
    enter_months = State()
    choose_scheme = State()
    choose_category = State()
    enter_exchange_rate = State()
