"""Configuration for the interaction router service."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError

DEFAULT_API_BASE_URL = "https://discord.com/api/v10"


@dataclass(frozen=True)
class Config:
    """Application configuration, read once at startup."""

    discord_public_key: Optional[str] = None
    discord_bot_token: Optional[str] = None
    discord_application_id: Optional[str] = None
    discord_guild_id: Optional[str] = None
    auto_register_commands: bool = False
    discord_api_base_url: str = DEFAULT_API_BASE_URL
    interactions_path: str = '/api/interactions'
    handler_timeout: float = 3.0
    service_name: str = 'interaction-router'
    environment: str = 'production'

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = None) -> 'Config':
        """Build configuration from environment variables."""
        env = os.environ if environ is None else environ

        timeout = env.get('HANDLER_TIMEOUT', '3.0')
        try:
            handler_timeout = float(timeout)
        except ValueError as e:
            raise ConfigurationError(f"HANDLER_TIMEOUT must be a number, got {timeout!r}") from e
        if handler_timeout <= 0:
            raise ConfigurationError("HANDLER_TIMEOUT must be positive")

        return cls(
            discord_public_key=env.get('DISCORD_PUBLIC_KEY'),
            discord_bot_token=env.get('DISCORD_BOT_TOKEN'),
            discord_application_id=env.get('DISCORD_APPLICATION_ID'),
            discord_guild_id=env.get('DISCORD_GUILD_ID') or None,
            auto_register_commands=env.get('AUTO_REGISTER_COMMANDS', 'false').lower() == 'true',
            discord_api_base_url=env.get('DISCORD_API_BASE_URL', DEFAULT_API_BASE_URL).rstrip('/'),
            interactions_path=env.get('INTERACTIONS_PATH', '/api/interactions'),
            handler_timeout=handler_timeout,
            service_name=env.get('SERVICE_NAME', 'interaction-router'),
            environment=env.get('ENVIRONMENT', 'production'),
        )

    @property
    def can_register_commands(self) -> bool:
        return bool(self.discord_bot_token and self.discord_application_id)
