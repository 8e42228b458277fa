"""Per-request interaction pipeline: verify, decode, classify, dispatch, encode."""
import asyncio
import inspect
from typing import Mapping, Optional, Tuple

from .codec import decode, encode
from .command import CommandPath
from .errors import (
    AuthenticationError,
    DecodeError,
    DispatchError,
    HandlerError,
    InteractionError,
    UnsupportedKindError,
)
from .models import CommandData, Interaction, InteractionType
from .observability import traced_function
from .registry import CommandRegistry
from .responses import ResponseEnvelope
from .verifier import SIGNATURE_HEADER, TIMESTAMP_HEADER, SignatureVerifier


def build_command_path(data: CommandData) -> CommandPath:
    """Path of the invoked command, including subcommand group and subcommand names."""
    segments = [data.name]
    options = data.options
    while True:
        nested = next((option for option in options if option.is_nested), None)
        if nested is None:
            break
        segments.append(nested.name)
        options = nested.options
    return CommandPath(tuple(segments))


def _get_header(headers: Mapping, name: str) -> Optional[str]:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


class InteractionDispatcher:
    """Routes authenticated interactions to handlers in a CommandRegistry."""

    def __init__(
        self,
        verifier: SignatureVerifier,
        registry: CommandRegistry,
        logger=None,
        handler_timeout: Optional[float] = None
    ):
        self.verifier = verifier
        self.registry = registry
        self.logger = logger
        self.handler_timeout = handler_timeout

    @traced_function("handle_interaction_request")
    async def handle_request(
        self,
        headers: Mapping,
        body: bytes,
        correlation_id: Optional[str] = None
    ) -> Tuple[dict, int]:
        """Process one interaction request.

        Args:
            headers: Request headers
            body: Raw request body bytes
            correlation_id: Correlation ID for logging

        Returns:
            Tuple of (response_dict, status_code)
        """
        try:
            self.authenticate(headers, body)
            interaction = self.decode(body, correlation_id=correlation_id)
            envelope = await self.dispatch(interaction, correlation_id=correlation_id)
        except InteractionError as e:
            return {'error': e.public_message}, e.status_code

        return envelope.to_dict(), 200

    def authenticate(self, headers: Mapping, body: bytes):
        """Raise AuthenticationError unless the body carries a valid signature."""
        timestamp = _get_header(headers, TIMESTAMP_HEADER)
        signature = _get_header(headers, SIGNATURE_HEADER)
        if not self.verifier.verify(body, timestamp, signature):
            raise AuthenticationError()

    def decode(self, body: bytes, correlation_id: Optional[str] = None) -> Interaction:
        try:
            interaction = decode(body)
        except DecodeError as e:
            self._log('warning', "Invalid interaction payload", correlation_id=correlation_id, error=str(e))
            raise

        self._log(
            'info',
            "Processing interaction",
            correlation_id=correlation_id,
            interaction_type=interaction.type,
            interaction_id=interaction.id,
            user_id=interaction.invoking_user.get('id')
        )
        return interaction

    @traced_function("dispatch_interaction")
    async def dispatch(self, interaction: Interaction, correlation_id: Optional[str] = None) -> ResponseEnvelope:
        """Classify a decoded interaction and produce its response envelope."""
        kind = interaction.kind

        if kind is InteractionType.PING:
            return ResponseEnvelope.pong()

        if kind is InteractionType.APPLICATION_COMMAND:
            return await self.handle_command(interaction.command_data, correlation_id=correlation_id)

        self._log(
            'error',
            "Unhandled interaction type received",
            correlation_id=correlation_id,
            interaction_type=interaction.type,
            interaction=interaction.model_dump(mode='json')
        )
        raise UnsupportedKindError(interaction.type)

    async def handle_command(self, data: CommandData, correlation_id: Optional[str] = None) -> ResponseEnvelope:
        key = build_command_path(data).key
        handler = self.registry.lookup(key)
        if handler is None:
            self._log('error', "No handler found for command", correlation_id=correlation_id, command_key=key)
            raise DispatchError(key)

        self._log('info', "Dispatching command", correlation_id=correlation_id, command_key=key)
        result = await self._invoke(key, handler, data, correlation_id)
        envelope = encode(result)
        self._log('debug', "Command response encoded", correlation_id=correlation_id, command_key=key,
                  response_type=envelope.type)
        return envelope

    async def _invoke(self, key: str, handler, data: CommandData, correlation_id: Optional[str]):
        try:
            # Pass the command data if the handler accepts it
            if inspect.signature(handler).parameters:
                result = handler(data)
            else:
                result = handler()
            if inspect.isawaitable(result):
                result = await asyncio.wait_for(result, timeout=self.handler_timeout)
        except asyncio.TimeoutError as e:
            self._log(
                'error',
                "Command handler timed out",
                correlation_id=correlation_id,
                command_key=key,
                timeout_seconds=self.handler_timeout
            )
            raise HandlerError(key, f"Handler for '{key}' timed out") from e
        except Exception as e:
            self._log('error', "Error in command handler", error=e, correlation_id=correlation_id, command_key=key)
            raise HandlerError(key, f"Handler for '{key}' raised {type(e).__name__}") from e
        return result

    def _log(self, level: str, message: str, **kwargs):
        if self.logger:
            getattr(self.logger, level)(message, **kwargs)
