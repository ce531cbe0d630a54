"""
Webhook providers and their payload shapes.

The provider is picked from the URL prefix alone; anything that is not a known
chat platform endpoint receives the raw NotificationMessage.
"""
from __future__ import annotations
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple
from pydantic import BaseModel, Field
from ..config_resolver import ConfigResolver
from ..logging_setup import get_logger
from .errors import MissingChatIdError
from .events import EventStatus
from .message import NotificationMessage

log = get_logger("valheim.launcher.notify")

DISCORD_WEBHOOK_BASE = "https://discord.com/api/webhooks"
TELEGRAM_API_BASE = "https://api.telegram.org/bot"
TELEGRAM_CHAT_ID = "TELEGRAM_CHAT_ID"

class Provider(str, Enum):
    DISCORD = "discord"
    TELEGRAM = "telegram"
    GENERIC = "generic"

PROVIDER_PREFIXES: Tuple[Tuple[str, Provider], ...] = (
    (DISCORD_WEBHOOK_BASE, Provider.DISCORD),
    (TELEGRAM_API_BASE, Provider.TELEGRAM),
)

def classify(url: str) -> Provider:
    for prefix, provider in PROVIDER_PREFIXES:
        if url.startswith(prefix):
            return provider
    return Provider.GENERIC

# --- Discord -------------------------------------------------------------- #

STATUS_COLORS = {
    EventStatus.RUNNING.value: 0xFFFF00,
    EventStatus.SUCCESSFUL.value: 0x00FF00,
    EventStatus.FAILED.value: 0xFF0000,
}

class DiscordEmbedField(BaseModel):
    name: str
    value: str
    inline: bool = True

class DiscordEmbed(BaseModel):
    title: str
    description: str
    color: int
    fields: List[DiscordEmbedField] = Field(default_factory=list)

class DiscordWebhookBody(BaseModel):
    content: str = ""
    embeds: List[DiscordEmbed] = Field(default_factory=list)

    @classmethod
    def from_message(cls, message: NotificationMessage) -> "DiscordWebhookBody":
        status = message.event_type.status
        return cls(embeds=[
            DiscordEmbed(
                title=message.event_type.name,
                description=message.event_message,
                color=STATUS_COLORS.get(status, 0xD3D3D3),
                fields=[
                    DiscordEmbedField(name="Status", value=status),
                    DiscordEmbedField(name="Timestamp", value=message.timestamp),
                ],
            )
        ])

# --- Telegram ------------------------------------------------------------- #

class TelegramSendMessageBody(BaseModel):
    chat_id: str
    text: str

    @classmethod
    def from_message(cls, message: NotificationMessage, resolver: ConfigResolver) -> "TelegramSendMessageBody":
        chat_id = resolver.lookup(TELEGRAM_CHAT_ID)
        if chat_id is None:
            raise MissingChatIdError(f"{TELEGRAM_CHAT_ID} must be set to send Telegram notifications")
        return cls(chat_id=chat_id, text=f"{message.event_type.name}: {message.event_message}")

# --- dispatch table ------------------------------------------------------- #

PayloadBuilder = Callable[[NotificationMessage, ConfigResolver], Dict[str, Any]]

def _generic_payload(message: NotificationMessage, resolver: ConfigResolver) -> Dict[str, Any]:
    return message.model_dump()

def _discord_payload(message: NotificationMessage, resolver: ConfigResolver) -> Dict[str, Any]:
    return DiscordWebhookBody.from_message(message).model_dump()

def _telegram_payload(message: NotificationMessage, resolver: ConfigResolver) -> Dict[str, Any]:
    return TelegramSendMessageBody.from_message(message, resolver).model_dump()

PAYLOAD_BUILDERS: Dict[Provider, PayloadBuilder] = {
    Provider.GENERIC: _generic_payload,
    Provider.DISCORD: _discord_payload,
    Provider.TELEGRAM: _telegram_payload,
}

def build_payload(provider: Provider, message: NotificationMessage, resolver: ConfigResolver) -> Dict[str, Any]:
    """Raises MissingChatIdError for Telegram without TELEGRAM_CHAT_ID."""
    payload = PAYLOAD_BUILDERS[provider](message, resolver)
    log.debug("%s payload: %s", provider.value, payload)
    return payload
