"""Common command handlers."""

from aiogram import F, Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from wattbill.bots.tg.handlers.utils import render_tariffs
from wattbill.bots.tg.keyboards.reply import BTN_TARIFFS, get_main_menu
from wattbill.services.billing import BillCalculator

router = Router(name=__name__)


@router.message(CommandStart())
async def handle_start(message: Message) -> None:
    """Greets the user and shows the main menu."""
    await message.answer(
        "⚡ حاسبة فاتورة الكهرباء – سوريا\n\n"
        "أدخل قراءتي العداد لحساب قيمة الفاتورة وفق التعرفة الحالية.",
        reply_markup=get_main_menu(),
    )


@router.message(Command("help"))
async def handle_help(message: Message) -> None:
    """Handler for the /help command."""
    await message.answer(
        "يحسب هذا البوت فاتورة الكهرباء من قراءتين للعداد.\n\n"
        "/calc – حساب جديد\n"
        "/reset – مسح الحقول\n"
        "/tariffs – عرض التعرفة"
    )


@router.message(Command("tariffs"))
@router.message(F.text == BTN_TARIFFS)
async def handle_tariffs(message: Message, calculator: BillCalculator) -> None:
    """Shows the active tariff schedule."""
    await message.answer(render_tariffs(calculator.schedule))
