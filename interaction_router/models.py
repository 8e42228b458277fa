"""Inbound interaction payloads."""
from enum import IntEnum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class CommandOptionType(IntEnum):
    SUB_COMMAND = 1
    SUB_COMMAND_GROUP = 2
    STRING = 3
    INTEGER = 4
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7
    ROLE = 8
    MENTIONABLE = 9
    NUMBER = 10
    ATTACHMENT = 11


NESTED_OPTION_TYPES = (CommandOptionType.SUB_COMMAND, CommandOptionType.SUB_COMMAND_GROUP)

OptionValue = Union[bool, int, float, str]

# Names may not contain the command key separator
COMMAND_NAME_PATTERN = r'^[^|]+$'


class CommandOption(BaseModel):
    """A command option: either a scalar value or a nested subcommand (group)."""

    model_config = ConfigDict(extra='ignore')

    name: str = Field(min_length=1, pattern=COMMAND_NAME_PATTERN)
    type: CommandOptionType
    value: Optional[OptionValue] = None
    options: List['CommandOption'] = Field(default_factory=list)
    focused: Optional[bool] = None

    @model_validator(mode='after')
    def _check_shape(self):
        if self.is_nested and self.value is not None:
            raise ValueError(f"{self.type.name} option '{self.name}' cannot carry a value")
        if not self.is_nested and self.options:
            raise ValueError(f"{self.type.name} option '{self.name}' cannot carry nested options")
        return self

    @property
    def is_nested(self) -> bool:
        return self.type in NESTED_OPTION_TYPES


class CommandData(BaseModel):
    """Payload of an application command interaction."""

    model_config = ConfigDict(extra='ignore')

    id: Optional[str] = None
    name: str = Field(min_length=1, pattern=COMMAND_NAME_PATTERN)
    type: int = 1
    guild_id: Optional[str] = None
    target_id: Optional[str] = None
    options: List[CommandOption] = Field(default_factory=list)
    resolved: Optional[Dict[str, Any]] = None

    def leaf_options(self) -> List[CommandOption]:
        """Options of the deepest subcommand (or of the root command)."""
        options = self.options
        while True:
            nested = next((option for option in options if option.is_nested), None)
            if nested is None:
                return options
            options = nested.options

    def get_option(self, name: str, default=None):
        """Value of the scalar option ``name`` on the invoked (sub)command."""
        for option in self.leaf_options():
            if option.name == name:
                return option.value
        return default


class Interaction(BaseModel):
    """A single inbound event.

    ``data`` is kept raw; ``command_data`` is filled by the codec for
    application commands only.
    """

    model_config = ConfigDict(extra='ignore')

    type: StrictInt
    id: Optional[str] = None
    application_id: Optional[str] = None
    token: Optional[str] = None
    version: Optional[int] = None
    guild_id: Optional[str] = None
    channel_id: Optional[str] = None
    member: Optional[Dict[str, Any]] = None
    user: Optional[Dict[str, Any]] = None
    locale: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    command_data: Optional[CommandData] = Field(default=None, exclude=True)

    @property
    def kind(self) -> Optional[InteractionType]:
        """Known interaction type, or None for types this router does not know."""
        try:
            return InteractionType(self.type)
        except ValueError:
            return None

    @property
    def invoking_user(self) -> Dict[str, Any]:
        """User who triggered the interaction (guild member or DM user)."""
        if self.member and self.member.get('user'):
            return self.member['user']
        return self.user or {}
