"""Signed webhook router for chat-platform interactions."""
from .codec import decode, encode
from .command import CommandPath, RegisteredCommand, canonical_key
from .config import Config
from .dispatcher import InteractionDispatcher, build_command_path
from .errors import (
    AuthenticationError,
    ConfigurationError,
    DecodeError,
    DispatchError,
    HandlerError,
    InteractionError,
    UnsupportedKindError,
)
from .models import CommandData, CommandOption, CommandOptionType, Interaction, InteractionType
from .registry import CommandRegistry
from .responses import Message, ResponseEnvelope, ResponseType, create_embed
from .verifier import SignatureVerifier

__version__ = "1.0.0"

__all__ = [
    'AuthenticationError',
    'CommandData',
    'CommandOption',
    'CommandOptionType',
    'CommandPath',
    'CommandRegistry',
    'Config',
    'ConfigurationError',
    'DecodeError',
    'DispatchError',
    'HandlerError',
    'Interaction',
    'InteractionDispatcher',
    'InteractionError',
    'InteractionType',
    'Message',
    'RegisteredCommand',
    'ResponseEnvelope',
    'ResponseType',
    'SignatureVerifier',
    'UnsupportedKindError',
    'build_command_path',
    'canonical_key',
    'create_embed',
    'decode',
    'encode',
]
