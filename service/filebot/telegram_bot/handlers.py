"""
Telegram update handlers.

ARCHITECTURE: classify first, then act.
- dispatcher.classify_update decides (pure)
- process_update performs the outbound calls (search, then reply)

Telegram redelivers updates on non-2xx answers, so nothing here raises:
every failure becomes a user-facing message or a log line, and the
webhook always acknowledges with 200.
"""

import html
from urllib.parse import quote

from filebot.schemas import InlineButton, InlineKeyboard, SearchResult, Update
from filebot.services.file_search import FileSearchClient
from .dispatcher import NoAction, Notify, Search, classify_update
from .logging_config import bot_logger as logger
from .telegram_api import TelegramAPI

SEARCH_FAILED_TEXT = "Sorry, something went wrong while searching."
RESULTS_BUTTON_TEXT = "🔗 Get Results"

# Characters encodeURIComponent leaves alone, so links match the web UI
_URL_SAFE = "-_.!~*'()"


def build_results_url(results_page_url: str, query: str) -> str:
    """Link to the web results page for a query."""
    return f"{results_page_url}?q={quote(query, safe=_URL_SAFE)}&t=files"


def format_search_reply(query: str, result: SearchResult, results_page_url: str) -> tuple[str, InlineKeyboard | None]:
    """
    Build reply text and optional keyboard for a search result.

    Returns:
        (text, keyboard) - keyboard is None when nothing was found
    """
    # Query goes into an HTML message
    shown_query = html.escape(query, quote=False)

    if not result.files:
        return f'No results found for "{shown_query}". Please try a different search term.', None

    count = result.total_files or len(result.files)
    keyboard = InlineKeyboard(inline_keyboard=[[
        InlineButton(text=RESULTS_BUTTON_TEXT, url=build_results_url(results_page_url, query))
    ]])
    return f'Found {count} result(s) for "{shown_query}".', keyboard


async def process_update(
    update: Update,
    telegram: TelegramAPI,
    search: FileSearchClient,
    results_page_url: str
) -> None:
    """Classify the update and run the resulting action. Never raises."""
    outcome = classify_update(update)

    if isinstance(outcome, NoAction):
        logger.debug(f"Ignoring update_id={update.update_id}: {outcome.reason}")
        return

    if isinstance(outcome, Notify):
        try:
            await telegram.send_message(outcome.chat_id, outcome.text)
        except Exception as e:
            logger.error(f"Failed to send notice to chat_id={outcome.chat_id}: {e}", exc_info=True)
        return

    await handle_search(outcome, telegram, search, results_page_url)


async def handle_search(
    outcome: Search,
    telegram: TelegramAPI,
    search: FileSearchClient,
    results_page_url: str
) -> None:
    """Search for the query and reply in thread; apologise on any failure."""
    logger.info(f"Searching files for chat_id={outcome.chat_id}, query_len={len(outcome.query)}")

    try:
        result = await search.search(outcome.query)
        logger.info(f"Search returned {result.total_files} total, {len(result.files)} in page")

        text, keyboard = format_search_reply(outcome.query, result, results_page_url)
        await telegram.send_message(
            outcome.chat_id,
            text,
            reply_markup=keyboard,
            reply_to_message_id=outcome.message_id
        )

    except Exception as e:
        logger.error(f"Error during search or send: {e}", exc_info=True)
        try:
            await telegram.send_message(outcome.chat_id, SEARCH_FAILED_TEXT)
        except Exception as send_error:
            # Nothing left to tell the user with
            logger.error(f"Failed to send apology to chat_id={outcome.chat_id}: {send_error}")
