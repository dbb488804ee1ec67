"""Main entry point for the Telegram bot."""

import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.fsm.storage.memory import MemoryStorage

from wattbill.bots.tg.handlers import calculator, common
from wattbill.config import settings
from wattbill.services.billing import BillCalculator

logger = logging.getLogger(__name__)


async def on_startup(dispatcher: Dispatcher, bot: Bot):
    """Actions on bot startup."""
    schedule = settings.tariff_schedule()
    dispatcher["calculator"] = BillCalculator(schedule, language=settings.LANGUAGE)
    logger.info("Tariff schedule %s loaded.", schedule.version)

    logger.info("Deleting webhook and dropping pending updates...")
    await bot.delete_webhook(drop_pending_updates=True)
    logger.info("Bot started.")


async def on_shutdown(bot: Bot):
    """Actions on bot shutdown."""
    logger.info("Closing connections...")
    await bot.session.close()
    logger.info("Connections closed.")


def build_dispatcher() -> Dispatcher:
    """Creates the dispatcher with hooks and routers registered."""
    dp = Dispatcher(storage=MemoryStorage())

    dp.startup.register(on_startup)
    dp.shutdown.register(on_shutdown)

    dp.include_router(common.router)
    dp.include_router(calculator.router)
    return dp


async def main():
    """Initializes and starts the bot."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    logger.info("Starting bot initialization...")

    bot = Bot(
        token=settings.BOT_TOKEN,
        default=DefaultBotProperties(parse_mode="HTML"),
    )
    dp = build_dispatcher()

    await dp.start_polling(bot, dispatcher=dp)


def run():
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logger.info("Bot stopped manually.")


if __name__ == "__main__":
    run()
