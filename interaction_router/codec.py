"""Decoding of authenticated interaction bodies and encoding of handler results.

Handlers may return any of the shapes registered on ``encode``; supporting a
new shape means registering one more function, the dispatcher is unchanged.
"""
from functools import singledispatch

from pydantic import ValidationError

from .errors import DecodeError
from .models import CommandData, Interaction, InteractionType
from .responses import Message, ResponseEnvelope, ResponseType


def decode(body: bytes) -> Interaction:
    """Parse an authenticated request body.

    Args:
        body: Raw request bytes, already signature-checked

    Returns:
        Interaction, with ``command_data`` set for application commands

    Raises:
        DecodeError: If the body is not valid JSON or not an interaction
    """
    try:
        interaction = Interaction.model_validate_json(body)
        if interaction.kind is InteractionType.APPLICATION_COMMAND:
            if interaction.data is None:
                raise DecodeError("Application command interaction without data")
            command_data = CommandData.model_validate(interaction.data)
            interaction = interaction.model_copy(update={'command_data': command_data})
    except ValidationError as e:
        raise DecodeError(str(e)) from e
    return interaction


@singledispatch
def encode(result) -> ResponseEnvelope:
    """Convert a handler result to a ResponseEnvelope."""
    raise TypeError(f"Unsupported handler result type: {type(result).__name__}")


@encode.register
def _(result: str) -> ResponseEnvelope:
    return ResponseEnvelope.message(result)


@encode.register
def _(result: ResponseEnvelope) -> ResponseEnvelope:
    return result


@encode.register
def _(result: Message) -> ResponseEnvelope:
    return ResponseEnvelope(ResponseType.CHANNEL_MESSAGE_WITH_SOURCE, result.to_data())


@encode.register
def _(result: dict) -> ResponseEnvelope:
    # Already-shaped response dict, as returned by plain handlers
    if 'type' not in result:
        raise TypeError("Handler returned a dict without a response 'type'")
    return ResponseEnvelope(result['type'], result.get('data'))
