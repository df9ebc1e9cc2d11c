# bot.py
# -*- coding: utf-8 -*-
"""
Точка входа: Telegram-бот «Weather Now».
"""
import logging

from telegram import Update
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from app_context import app_context
from core.event_bus import SEARCH_STATE_EVENT, subscribe_async
from scripts.weather.weather_handler import (
    RECENT_CALLBACK_PATTERN,
    clear_recent,
    handle_search_text,
    on_search_state,
    recent_callback,
    start,
)


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE):
    logging.error(f"⚠️ Исключение при обработке: {context.error}", exc_info=context.error)
    if isinstance(update, Update):
        logging.error(f"Update ID: {update.update_id}")


async def post_init(application: Application):
    """После запуска: подписка на состояние и восстановление последнего поиска."""
    app_context.bot = application.bot
    subscribe_async(SEARCH_STATE_EVENT, on_search_state)
    await app_context.start()


# === Основная функция запуска ===
def main():
    app_context.initialize_sync()
    logging.info("🚀 Запуск бота")
    if not app_context.config.telegram_token:
        logging.critical("❌ TELEGRAM_BOT_TOKEN не задан")
        raise ValueError("TELEGRAM_BOT_TOKEN не задан в .env!")

    app = (
        Application.builder()
        .token(app_context.config.telegram_token)
        .post_init(post_init)
        .build()
    )

    # 1. Команды
    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("clear", clear_recent))

    # 2. Кнопки недавних поисков
    app.add_handler(CallbackQueryHandler(recent_callback, pattern=RECENT_CALLBACK_PATTERN))

    # 3. Любой текст — поиск города
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_search_text))

    app.add_error_handler(error_handler)
    print("🚀 Бот запущен. Отправьте название города.")
    print("Нажмите Ctrl+C для остановки.")

    try:
        app.run_polling(drop_pending_updates=True)
    except KeyboardInterrupt:
        print("\n🛑 Остановка по запросу пользователя.")
    finally:
        app_context.shutdown_sync()
        print("✅ Бот завершил работу.")


if __name__ == "__main__":
    main()
