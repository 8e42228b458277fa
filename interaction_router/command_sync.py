"""Publishes slash command definitions to the platform REST API."""
from typing import Any, Dict, List, Optional

import requests

from .config import DEFAULT_API_BASE_URL


class CommandSyncClient:
    """Registers command definitions for an application."""

    def __init__(
        self,
        application_id: str,
        bot_token: str,
        api_base_url: str = DEFAULT_API_BASE_URL,
        guild_id: Optional[str] = None,
        session: Optional[requests.Session] = None,
        logger=None,
        timeout: int = 5
    ):
        self.application_id = application_id
        self.bot_token = bot_token
        self.api_base_url = api_base_url.rstrip('/')
        self.guild_id = guild_id
        self.session = session or requests.Session()
        self.logger = logger
        self.timeout = timeout

    @property
    def commands_url(self) -> str:
        url = f"{self.api_base_url}/applications/{self.application_id}"
        if self.guild_id:
            url += f"/guilds/{self.guild_id}"
        return f"{url}/commands"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bot {self.bot_token}",
            "Content-Type": "application/json"
        }

    def register_command(self, command: Dict[str, Any]) -> Dict[str, Any]:
        """Register a single command definition.

        Args:
            command: Command definition dict ('name', 'description', 'options'...)

        Returns:
            Dict with 'status' ('success' or 'error') and 'message'
        """
        try:
            response = self.session.post(
                self.commands_url, headers=self._headers(), json=command, timeout=self.timeout
            )
        except requests.RequestException as e:
            self._log('error', "Command registration request failed", error=e, command=command.get('name'))
            return {'status': 'error', 'message': str(e)}

        if response.status_code in (200, 201):
            self._log('info', "Command registered", command=command.get('name'))
            return {
                'status': 'success',
                'message': f"Command '/{command['name']}' registered successfully"
            }

        self._log(
            'warning',
            "Command registration rejected",
            command=command.get('name'),
            status_code=response.status_code,
            response_text=response.text[:200]
        )
        return {
            'status': 'error',
            'message': f"Error: {response.status_code}",
            'details': response.text
        }

    def sync_commands(self, commands: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Replace the full command set with ``commands`` (bulk overwrite)."""
        try:
            response = self.session.put(
                self.commands_url, headers=self._headers(), json=commands, timeout=self.timeout
            )
        except requests.RequestException as e:
            self._log('error', "Command sync request failed", error=e)
            return {'status': 'error', 'message': str(e)}

        if response.status_code == 200:
            names = [command['name'] for command in commands]
            self._log('info', "Commands synced", commands=names, guild_id=self.guild_id)
            return {'status': 'success', 'message': f"Synced {len(names)} commands", 'commands': names}

        self._log(
            'warning',
            "Command sync rejected",
            status_code=response.status_code,
            response_text=response.text[:200]
        )
        return {
            'status': 'error',
            'message': f"Error: {response.status_code}",
            'details': response.text
        }

    def _log(self, level: str, message: str, **kwargs):
        if self.logger:
            getattr(self.logger, level)(message, **kwargs)
