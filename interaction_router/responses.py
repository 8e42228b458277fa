"""Outbound response envelopes and handler result shapes."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple

# Message flag hiding the response from everyone but the invoking user
EPHEMERAL_FLAG = 1 << 6

# Color constants
COLOR_SUCCESS = 0x00FF00
COLOR_INFO = 0x0066CC
COLOR_ERROR = 0xFF4C4C


class ResponseType(IntEnum):
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    DEFERRED_UPDATE_MESSAGE = 6
    UPDATE_MESSAGE = 7
    APPLICATION_COMMAND_AUTOCOMPLETE_RESULT = 8
    MODAL = 9


@dataclass(frozen=True)
class ResponseEnvelope:
    """The ``{type, data?}`` shape every interaction response must have."""

    type: int
    data: Optional[Dict[str, Any]] = None

    @classmethod
    def pong(cls) -> 'ResponseEnvelope':
        return cls(ResponseType.PONG)

    @classmethod
    def message(cls, content: str) -> 'ResponseEnvelope':
        return cls(ResponseType.CHANNEL_MESSAGE_WITH_SOURCE, {'content': content})

    @classmethod
    def deferred(cls, ephemeral: bool = False) -> 'ResponseEnvelope':
        data = {'flags': EPHEMERAL_FLAG} if ephemeral else None
        return cls(ResponseType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE, data)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {'type': int(self.type)}
        if self.data is not None:
            body['data'] = self.data
        return body


@dataclass(frozen=True)
class Message:
    """A channel message result with optional embeds."""

    content: Optional[str] = None
    embeds: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)
    ephemeral: bool = False

    def to_data(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.content is not None:
            data['content'] = self.content
        if self.embeds:
            data['embeds'] = list(self.embeds)
        if self.ephemeral:
            data['flags'] = EPHEMERAL_FLAG
        return data


def create_embed(
    title: str,
    description: str = None,
    color: int = COLOR_INFO,
    fields: List[Dict[str, Any]] = None,
    footer: Dict[str, str] = None,
    timestamp: bool = True
) -> Dict[str, Any]:
    """Create an embed with consistent formatting.

    Args:
        title: Embed title
        description: Embed description
        color: Embed color (hex integer)
        fields: List of field dicts with 'name', 'value', 'inline' keys
        footer: Footer dict with 'text' key
        timestamp: Whether to include timestamp (default: True)

    Returns:
        Embed dict
    """
    embed = {
        'title': title,
        'color': color
    }

    if description:
        embed['description'] = description

    if fields:
        embed['fields'] = fields

    if footer:
        embed['footer'] = footer

    if timestamp:
        embed['timestamp'] = datetime.now(timezone.utc).isoformat()

    return embed
