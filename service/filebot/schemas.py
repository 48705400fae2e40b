from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional


# Inbound Telegram update (only the fields the bot reads)

class Chat(BaseModel):
    id: int
    type: str = ""  # private, group, supergroup, channel; missing reads as "other"


class Message(BaseModel):
    message_id: int
    chat: Chat
    text: Optional[str] = None


class Update(BaseModel):
    update_id: Optional[int] = None
    message: Optional[Message] = None


# File search API

class SearchResult(BaseModel):
    total_files: int = 0
    files: list[Any] = Field(default_factory=list)

    @field_validator("total_files", "files", mode="before")
    @classmethod
    def empty_when_missing(cls, value, info):
        if info.field_name == "files" and not isinstance(value, list):
            return []
        if value is None:
            return 0
        return value


# Outbound Telegram payloads

class InlineButton(BaseModel):
    text: str
    url: str


class InlineKeyboard(BaseModel):
    inline_keyboard: list[list[InlineButton]]


class OutboundMessage(BaseModel):
    chat_id: int
    text: str
    parse_mode: str = "HTML"
    reply_markup: Optional[str] = None  # JSON-encoded InlineKeyboard
    reply_to_message_id: Optional[int] = None
