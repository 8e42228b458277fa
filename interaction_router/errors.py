"""Error taxonomy for interaction handling.

Every ``InteractionError`` is converted to an HTTP response at the dispatcher
boundary. ``public_message`` is the only text sent back to the client.
"""
from typing import Optional


class ConfigurationError(Exception):
    """Invalid startup configuration. Fatal: the service must not serve traffic."""


class InteractionError(Exception):
    """Base class for per-request failures."""

    status_code = 500
    public_message = 'Internal server error'

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.public_message)


class AuthenticationError(InteractionError):
    """Missing signature headers, bad hex or signature mismatch."""

    status_code = 401
    public_message = 'Unauthorized'


class DecodeError(InteractionError):
    """Body is not a valid interaction payload."""

    status_code = 400
    public_message = 'Bad Request - Invalid interaction'


class DispatchError(InteractionError):
    """No handler registered for the computed command key."""

    public_message = 'Unknown command'

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"No handler registered for command '{key}'")


class UnsupportedKindError(InteractionError):
    """Interaction kind this router does not handle."""

    public_message = 'Unsupported interaction type'

    def __init__(self, interaction_type):
        self.interaction_type = interaction_type
        super().__init__(f"Unsupported interaction type: {interaction_type}")


class HandlerError(InteractionError):
    """A command handler raised or did not finish in time."""

    public_message = 'Command failed'

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(message)
