"""Base commands (ping, hello, help, echo, info)."""
from ..command import KEY_SEPARATOR
from ..models import CommandData
from ..registry import CommandRegistry
from ..responses import COLOR_INFO, COLOR_SUCCESS, Message, create_embed

# Command definitions published to the platform
COMMANDS = [
    {
        "name": "ping",
        "description": "Test bot latency",
        "type": 1
    },
    {
        "name": "hello",
        "description": "Service greeting",
        "type": 1
    },
    {
        "name": "help",
        "description": "Show available commands",
        "type": 1
    },
    {
        "name": "echo",
        "description": "Repeat a message",
        "type": 1,
        "options": [
            {
                "name": "text",
                "description": "Text to repeat",
                "type": 3,  # String
                "required": True
            },
            {
                "name": "private",
                "description": "Only show the reply to you",
                "type": 5,  # Boolean
                "required": False
            }
        ]
    },
    {
        "name": "info",
        "description": "Show information",
        "type": 1,
        "options": [
            {
                "name": "user",
                "description": "Show information about a user",
                "type": 1,  # Subcommand
                "options": [
                    {
                        "name": "target",
                        "description": "User to inspect",
                        "type": 6,  # User
                        "required": True
                    }
                ]
            },
            {
                "name": "server",
                "description": "Show information about this server",
                "type": 1  # Subcommand
            }
        ]
    }
]


def handle_ping():
    """Handle ping command."""
    return "Pong!"


def handle_hello():
    """Handle hello command."""
    return Message(embeds=(create_embed(
        title='Hello!',
        description='Hello! I am up and listening for slash commands.',
        color=COLOR_INFO
    ),))


def handle_echo(data: CommandData):
    """Handle echo command."""
    return Message(
        content=str(data.get_option('text', '')),
        ephemeral=bool(data.get_option('private', False))
    )


def handle_info_user(data: CommandData):
    target_id = data.get_option('target')
    user = ((data.resolved or {}).get('users') or {}).get(str(target_id), {})
    username = user.get('username', 'unknown')
    return Message(embeds=(create_embed(
        title='User Info',
        color=COLOR_INFO,
        fields=[
            {'name': 'Username', 'value': username, 'inline': True},
            {'name': 'ID', 'value': str(target_id), 'inline': True}
        ]
    ),), ephemeral=True)


def handle_info_server(data: CommandData):
    return f"Server ID: {data.guild_id or 'direct message'}"


def register_base_commands(registry: CommandRegistry) -> CommandRegistry:
    """Register the base commands on ``registry``."""
    registry.register('ping', handle_ping)
    registry.register('hello', handle_hello)
    registry.register('echo', handle_echo)
    registry.register(['info', 'user'], handle_info_user)
    registry.register(['info', 'server'], handle_info_server)

    @registry.command('help')
    def handle_help():
        """Handle help command."""
        names = sorted({key.replace(KEY_SEPARATOR, ' ') for key in registry.keys()})
        return Message(embeds=(create_embed(
            title='Help - Available Commands',
            description='\n'.join(f'`/{name}`' for name in names),
            color=COLOR_SUCCESS
        ),), ephemeral=True)

    return registry
