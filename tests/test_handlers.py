from interaction_router.codec import encode
from interaction_router.handlers import COMMANDS, register_base_commands
from interaction_router.models import CommandData
from interaction_router.registry import CommandRegistry


def test_every_registered_root_has_a_definition() -> None:
    registry = register_base_commands(CommandRegistry())

    roots = {key.split('|')[0] for key in registry.keys()}
    assert roots == {command['name'] for command in COMMANDS}
    assert 'info|user' in registry
    assert 'info|server' in registry


def test_echo_respects_private_flag() -> None:
    registry = register_base_commands(CommandRegistry())
    data = CommandData.model_validate({
        'name': 'echo',
        'options': [
            {'name': 'text', 'type': 3, 'value': 'hello'},
            {'name': 'private', 'type': 5, 'value': True},
        ],
    })

    envelope = encode(registry.lookup('echo')(data))

    assert envelope.to_dict() == {'type': 4, 'data': {'content': 'hello', 'flags': 64}}


def test_info_user_reads_resolved_user() -> None:
    registry = register_base_commands(CommandRegistry())
    data = CommandData.model_validate({
        'name': 'info',
        'options': [{'name': 'user', 'type': 1, 'options': [{'name': 'target', 'type': 6, 'value': '42'}]}],
        'resolved': {'users': {'42': {'id': '42', 'username': 'ada'}}},
    })

    envelope = encode(registry.lookup('info|user')(data)).to_dict()

    fields = envelope['data']['embeds'][0]['fields']
    assert fields[0]['value'] == 'ada'
    assert fields[1]['value'] == '42'


def test_help_lists_subcommands() -> None:
    registry = register_base_commands(CommandRegistry())

    envelope = encode(registry.lookup('help')()).to_dict()

    description = envelope['data']['embeds'][0]['description']
    assert '`/info user`' in description
    assert '`/ping`' in description
