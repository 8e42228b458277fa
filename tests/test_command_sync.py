from unittest.mock import MagicMock

import requests

from interaction_router.command_sync import CommandSyncClient
from interaction_router.handlers import COMMANDS


def _client(session, guild_id=None) -> CommandSyncClient:
    return CommandSyncClient('app-1', 'token-1', api_base_url='https://api.test/v10/', guild_id=guild_id,
                             session=session)


def test_register_command_success() -> None:
    session = MagicMock()
    session.post.return_value = MagicMock(status_code=201)

    result = _client(session).register_command(COMMANDS[0])

    assert result['status'] == 'success'
    session.post.assert_called_once_with(
        'https://api.test/v10/applications/app-1/commands',
        headers={'Authorization': 'Bot token-1', 'Content-Type': 'application/json'},
        json=COMMANDS[0],
        timeout=5
    )


def test_register_command_rejected() -> None:
    session = MagicMock()
    session.post.return_value = MagicMock(status_code=400, text='Invalid Form Body')

    result = _client(session).register_command({'name': 'bad'})

    assert result == {'status': 'error', 'message': 'Error: 400', 'details': 'Invalid Form Body'}


def test_register_command_network_error() -> None:
    session = MagicMock()
    session.post.side_effect = requests.ConnectionError('down')

    result = _client(session).register_command({'name': 'ping'})

    assert result['status'] == 'error'
    assert 'down' in result['message']


def test_sync_commands_to_guild() -> None:
    session = MagicMock()
    session.put.return_value = MagicMock(status_code=200)

    result = _client(session, guild_id='g-9').sync_commands(COMMANDS)

    assert result['status'] == 'success'
    assert result['commands'] == [command['name'] for command in COMMANDS]
    url = session.put.call_args.args[0]
    assert url == 'https://api.test/v10/applications/app-1/guilds/g-9/commands'


def test_sync_commands_failure() -> None:
    session = MagicMock()
    session.put.return_value = MagicMock(status_code=401, text='401: Unauthorized')

    result = _client(session).sync_commands(COMMANDS)

    assert result['status'] == 'error'
    assert result['message'] == 'Error: 401'
