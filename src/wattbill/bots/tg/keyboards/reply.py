"""Reply keyboard builders."""

from aiogram.types import KeyboardButton, ReplyKeyboardMarkup
from aiogram.utils.keyboard import ReplyKeyboardBuilder

BTN_CALCULATE = "⚡ احسب"
BTN_RESET = "🧹 مسح"
BTN_TARIFFS = "📋 التعرفة"


def get_main_menu() -> ReplyKeyboardMarkup:
    """Builds the main menu reply keyboard."""
    builder = ReplyKeyboardBuilder()
    builder.row(
        KeyboardButton(text=BTN_CALCULATE),
        KeyboardButton(text=BTN_RESET),
    )
    builder.row(KeyboardButton(text=BTN_TARIFFS))
    return builder.as_markup(resize_keyboard=True)
