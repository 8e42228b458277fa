"""Command handlers package."""
from .base_commands import COMMANDS, register_base_commands

__all__ = ['COMMANDS', 'register_base_commands']
