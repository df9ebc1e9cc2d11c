# scripts/weather/weather_handler.py
import asyncio
import hashlib
import logging
from typing import Any, Dict, List, Optional

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.constants import ChatAction, ParseMode
from telegram.ext import ContextTypes

from app_context import app_context
from core.models.search_state import Error, Idle, Loading, SearchState, Success
from scripts.weather._processes.formatter import render_conditions_html, save_forecast_chart

RECENT_CALLBACK_PREFIX = "recent:"
RECENT_HASH_PREFIX = "recent#"
RECENT_CALLBACK_PATTERN = r"^recent[:#]"
# Лимит Telegram на callback_data
CALLBACK_DATA_LIMIT = 64


def _name_digest(name: str) -> str:
    return hashlib.sha1(name.encode("utf-8")).hexdigest()[:16]


def recent_callback_data(name: str) -> str:
    """Название целиком, если помещается в 64 байта, иначе короткий хеш."""
    data = f"{RECENT_CALLBACK_PREFIX}{name}"
    if len(data.encode("utf-8")) <= CALLBACK_DATA_LIMIT:
        return data
    return f"{RECENT_HASH_PREFIX}{_name_digest(name)}"


def resolve_recent_callback(data: str, recent: List[str]) -> Optional[str]:
    """Название из callback_data; None, если кнопка устарела."""
    if data.startswith(RECENT_CALLBACK_PREFIX):
        return data[len(RECENT_CALLBACK_PREFIX):] or None
    if data.startswith(RECENT_HASH_PREFIX):
        digest = data[len(RECENT_HASH_PREFIX):]
        return next((name for name in recent if _name_digest(name) == digest), None)
    return None


def recent_searches_keyboard(recent: List[str]) -> Optional[InlineKeyboardMarkup]:
    """Один ряд кнопок быстрого выбора; None, если история пуста."""
    if not recent:
        return None
    row = [
        InlineKeyboardButton(name[:20], callback_data=recent_callback_data(name))
        for name in recent
    ]
    return InlineKeyboardMarkup([row])


def render_state_text(state: SearchState) -> str:
    """Текст для состояний без графика."""
    if isinstance(state, Idle):
        return "🔎 Enter a city name to see the weather."
    if isinstance(state, Loading):
        return f"⏳ Loading weather for {state.query}..."
    if isinstance(state, Error):
        return f"❌ {state.message}"
    return render_conditions_html(state.conditions)


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """
    Приветствие и текущее состояние чата.

    Последний поиск восстанавливается при запуске без чата-инициатора
    (origin=None), поэтому его результат никуда не отправляется сам:
    чат, который ещё ничего не искал, получает его здесь.
    """
    pipeline = app_context.pipeline
    chat_id = update.effective_chat.id
    await context.bot.send_message(
        chat_id=chat_id,
        text="🌦️ <b>Weather Now</b>\n\nSend a city name, or tap a recent search.",
        parse_mode=ParseMode.HTML
    )
    await send_state(context.bot, chat_id, pipeline.state_for(chat_id), pipeline.recent_searches)


async def handle_search_text(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Текстовое сообщение = отправка формы поиска."""
    chat_id = update.effective_chat.id
    logging.info(f"⌨️ Чат {chat_id}: запрос '{update.message.text}'")
    await app_context.pipeline.submit(update.message.text, origin=chat_id)


async def recent_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Нажатие на кнопку недавнего поиска."""
    query = update.callback_query
    await query.answer()
    name = resolve_recent_callback(query.data, app_context.pipeline.recent_searches)
    if name is None:
        await context.bot.send_message(chat_id=update.effective_chat.id, text="❌ Recent search is no longer available.")
        return
    await app_context.pipeline.search(name, origin=update.effective_chat.id)


async def clear_recent(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Команда /clear — забыть недавние поиски."""
    app_context.pipeline.clear_recent()
    await context.bot.send_message(chat_id=update.effective_chat.id, text="🗑️ Recent searches cleared.")


async def on_search_state(event: Dict[str, Any]):
    """Подписчик event_bus: отправляет новое состояние в чат, из которого пришёл запрос."""
    chat_id = event.get("origin")
    if chat_id is None or app_context.bot is None:
        return
    await send_state(app_context.bot, chat_id, event["state"], app_context.pipeline.recent_searches)


async def send_state(bot, chat_id: int, state: SearchState, recent: List[str]):
    if isinstance(state, Loading):
        await bot.send_chat_action(chat_id=chat_id, action=ChatAction.TYPING)
        return

    await bot.send_message(
        chat_id=chat_id,
        text=render_state_text(state),
        reply_markup=recent_searches_keyboard(recent),
        parse_mode=ParseMode.HTML
    )

    if isinstance(state, Success) and state.forecast:
        # matplotlib рисует и пишет PNG вне event loop
        loop = asyncio.get_running_loop()
        chart_path = await loop.run_in_executor(None, save_forecast_chart, state.forecast, state.conditions.name)
        with open(chart_path, "rb") as photo:
            await bot.send_photo(chat_id=chat_id, photo=photo, caption="📈 Next 24 Hours")
