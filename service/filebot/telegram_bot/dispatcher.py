"""
Update dispatcher - decides what to do with an incoming update.

Pure function, no I/O. The returned outcome is executed by
handlers.process_update:
- NoAction: acknowledge and stay silent
- Notify: send a fixed notice to the chat
- Search: run the query against the file search API
"""

from dataclasses import dataclass
from typing import Union

from filebot.schemas import Update

GROUP_CHAT_TYPES = {"group", "supergroup"}
COMMAND_PREFIX = "/"

PRIVATE_CHAT_NOTICE = "I only work in group chats."


@dataclass(frozen=True)
class NoAction:
    reason: str


@dataclass(frozen=True)
class Notify:
    chat_id: int
    text: str


@dataclass(frozen=True)
class Search:
    chat_id: int
    message_id: int
    query: str


Outcome = Union[NoAction, Notify, Search]


def classify_update(update: Update) -> Outcome:
    """
    Classify an update.

    Order matters: content check, then chat scope, then command/empty text.
    """
    message = update.message
    if message is None or not message.text:
        return NoAction("no text message")

    chat = message.chat
    if chat.type not in GROUP_CHAT_TYPES:
        if chat.type == "private":
            return Notify(chat_id=chat.id, text=PRIVATE_CHAT_NOTICE)
        return NoAction(f"unsupported chat type: {chat.type}")

    query = message.text.strip()
    if not query or query.startswith(COMMAND_PREFIX):
        return NoAction("command or empty text")

    return Search(chat_id=chat.id, message_id=message.message_id, query=query)
