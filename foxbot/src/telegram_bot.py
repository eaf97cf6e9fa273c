"""
Telegram transport adapter built on python-telegram-bot.

Two event kinds reach the bot:
1. ``/start`` (or ``/menu``): reply with the greeting and an inline keyboard
   whose buttons carry the action tokens as callback data.
2. Callback query: route the token and send the report text back to the
   originating chat. Unknown tokens produce no message.

CHANGELOG:
- 2026-10-19: A failed callback answer no longer blocks the reply
- 2026-10-19: Initial creation (STORY-009)

TODO:
- None
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.error import TelegramError
from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes

from foxbot.src.router import CommandRouter

if TYPE_CHECKING:
    from foxbot.src.context import BotContext

logger = logging.getLogger(__name__)

START_COMMANDS = ("start", "menu")


class TelegramTransport:
    """Bridge between Telegram updates and the :class:`CommandRouter`.

    Args:
        router: Router that turns action tokens into report text.
    """

    def __init__(self, router: CommandRouter) -> None:
        self._router = router

    def keyboard(self) -> InlineKeyboardMarkup:
        """One button per row, one row per menu entry."""
        return InlineKeyboardMarkup(
            [[InlineKeyboardButton(label, callback_data=token)] for label, token in self._router.menu()]
        )

    async def on_start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Send the greeting with the action menu."""
        chat = update.effective_chat
        if chat is None:
            return
        logger.info("Greeting chat %s", chat.id)
        await context.bot.send_message(
            chat_id=chat.id,
            text=self._router.greeting(),
            reply_markup=self.keyboard(),
        )

    async def on_action(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Route a menu button press and reply with the report."""
        query = update.callback_query
        if query is None:
            return
        try:
            await query.answer()
        except TelegramError:
            logger.warning("Could not answer callback query %s", query.id, exc_info=True)

        chat = update.effective_chat
        if chat is None or not query.data:
            return

        text = await self._router.route(query.data)
        if text is None:
            return
        await context.bot.send_message(chat_id=chat.id, text=text)

    def register(self, application: Application) -> None:
        """Attach the command and callback handlers to *application*."""
        application.add_handler(CommandHandler(list(START_COMMANDS), self.on_start))
        application.add_handler(CallbackQueryHandler(self.on_action))


def build_application(context: BotContext) -> Application:
    """Build the Telegram application wired to a router over *context*.

    The context's HTTP client is closed when the application shuts down.
    """

    async def _close_context(_: Application) -> None:
        await context.aclose()

    application = (
        Application.builder()
        .token(context.settings.telegram_token)
        .post_shutdown(_close_context)
        .build()
    )
    TelegramTransport(CommandRouter(context)).register(application)
    return application
