"""Command paths and registered commands."""
from dataclasses import dataclass
from typing import Any, Callable, Sequence, Tuple, Union

KEY_SEPARATOR = '|'

Handler = Callable[..., Any]
PathLike = Union[str, Sequence[str], 'CommandPath']


@dataclass(frozen=True)
class CommandPath:
    """A root command name, optionally followed by subcommand group / subcommand names.

    The canonical key joins the segments with ``|``, a character that is not
    valid in a command name, so distinct paths never share a key.
    """

    segments: Tuple[str, ...]

    def __post_init__(self):
        if not self.segments:
            raise ValueError("Command path must have at least one segment")
        for segment in self.segments:
            if not isinstance(segment, str) or not segment:
                raise ValueError(f"Invalid command path segment: {segment!r}")
            if KEY_SEPARATOR in segment:
                raise ValueError(
                    f"Command path segment {segment!r} contains the separator {KEY_SEPARATOR!r}"
                )

    @classmethod
    def of(cls, value: PathLike) -> 'CommandPath':
        """Build a path from a root name, a sequence of names, or an existing path."""
        if isinstance(value, CommandPath):
            return value
        if isinstance(value, str):
            return cls((value,))
        return cls(tuple(value))

    @property
    def root(self) -> str:
        return self.segments[0]

    @property
    def key(self) -> str:
        return KEY_SEPARATOR.join(self.segments)

    def __str__(self) -> str:
        return self.key


def canonical_key(path: PathLike) -> str:
    """Return the registry key for ``path``."""
    return CommandPath.of(path).key


@dataclass(frozen=True)
class RegisteredCommand:
    """Immutable pairing of a canonical key and its handler."""

    key: str
    handler: Handler
