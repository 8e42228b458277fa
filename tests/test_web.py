import json
from pathlib import Path
from unittest.mock import MagicMock

import functions_framework
import pytest

from interaction_router.config import Config
from interaction_router.web import create_app

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def client(dispatcher, logger):
    app = create_app(dispatcher, Config(service_name='router-test'), logger=logger)
    return app.test_client()


def test_ping_over_http(client, sign) -> None:
    body = b'{"type":1}'

    response = client.post('/api/interactions', data=body, headers=sign(body), content_type='application/json')

    assert response.status_code == 200
    assert response.get_json() == {'type': 1}
    assert response.headers['Content-Type'] == 'application/json'
    assert response.headers['X-Correlation-ID']


def test_command_over_http(client, registry, sign) -> None:
    registry.register('ping', lambda: 'Pong!')
    body = b'{"type":2,"data":{"name":"ping"}}'

    response = client.post(
        '/api/interactions',
        data=body,
        headers={**sign(body), 'X-Correlation-ID': 'corr-1'},
        content_type='application/json'
    )

    assert response.status_code == 200
    assert response.get_json() == {'type': 4, 'data': {'content': 'Pong!'}}
    assert response.headers['X-Correlation-ID'] == 'corr-1'


def test_signature_checked_against_raw_bytes(client, registry, sign) -> None:
    registry.register('ping', lambda: 'Pong!')
    signed = b'{"type":2,"data":{"name":"ping"}}'
    # Same JSON, different bytes
    sent = b'{"type": 2, "data": {"name": "ping"}}'

    response = client.post('/api/interactions', data=sent, headers=sign(signed), content_type='application/json')

    assert response.status_code == 401


def test_unauthorized_over_http(client) -> None:
    response = client.post('/api/interactions', data=b'{"type":1}', content_type='application/json')

    assert response.status_code == 401
    assert response.get_json() == {'error': 'Unauthorized'}


def test_decode_failure_over_http(client, sign) -> None:
    body = b'{"type":'

    response = client.post('/api/interactions', data=body, headers=sign(body), content_type='application/json')

    assert response.status_code == 400


def test_unknown_command_over_http(client, sign) -> None:
    body = b'{"type":2,"data":{"name":"nope"}}'

    response = client.post('/api/interactions', data=body, headers=sign(body), content_type='application/json')

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Unknown command'}


def test_health(client, registry) -> None:
    registry.register(['info', 'user'], lambda: 'user')

    response = client.get('/health')

    assert response.status_code == 200
    assert response.get_json() == {
        'status': 'healthy',
        'service': 'router-test',
        'commands': ['info|user'],
    }


def test_unknown_path_and_method(client) -> None:
    assert client.get('/nope').status_code == 404
    assert client.get('/api/interactions').status_code == 405


def test_functions_framework_entry_point(monkeypatch, public_key_hex, sign) -> None:
    monkeypatch.setenv('DISCORD_PUBLIC_KEY', public_key_hex)
    monkeypatch.setenv('AUTO_REGISTER_COMMANDS', 'false')
    monkeypatch.setenv('LOCAL_DEV', '1')
    app = functions_framework.create_app(target='interactions_handler', source=str(ROOT / 'main.py'))
    client = app.test_client()

    body = json.dumps({
        'type': 2,
        'guild_id': '77',
        'data': {'name': 'info', 'guild_id': '77', 'options': [{'name': 'server', 'type': 1}]},
    }).encode()
    response = client.post('/api/interactions', data=body, headers=sign(body), content_type='application/json')
    assert response.status_code == 200
    assert response.get_json() == {'type': 4, 'data': {'content': 'Server ID: 77'}}

    assert client.get('/health').status_code == 200
    assert client.get('/elsewhere').status_code == 404


def test_app_is_instrumented_for_tracing(dispatcher, logger) -> None:
    tracing = MagicMock()

    app = create_app(dispatcher, Config(service_name='router-test'), logger=logger, tracing=tracing)

    tracing.instrument_flask.assert_called_once_with(app)
