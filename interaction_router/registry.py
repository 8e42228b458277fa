"""Registry for slash command handlers."""
import threading
from contextlib import contextmanager
from typing import Dict, List, Optional

from .command import CommandPath, Handler, PathLike, RegisteredCommand


class ReadWriteLock:
    """Multiple-reader / single-writer lock.

    Readers never wait on each other. New readers queue behind a waiting
    writer so registrations are not starved by a steady stream of lookups.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False
        self._writers_waiting = 0

    @contextmanager
    def read(self):
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class CommandRegistry:
    """Maps canonical command keys to handlers.

    Populated at startup, then read concurrently by every request. Registering
    an existing key replaces its handler.
    """

    def __init__(self):
        self._commands: Dict[str, RegisteredCommand] = {}
        self._lock = ReadWriteLock()

    def register(self, path: PathLike, handler: Handler) -> RegisteredCommand:
        """Register ``handler`` under the canonical key of ``path``.

        Args:
            path: Root command name, or sequence of names for a subcommand
            handler: Callable invoked with the command data (or no arguments)

        Returns:
            The stored RegisteredCommand
        """
        if not callable(handler):
            raise TypeError(f"Handler for {path!r} is not callable")
        command = RegisteredCommand(CommandPath.of(path).key, handler)
        with self._lock.write():
            self._commands[command.key] = command
        return command

    def command(self, path: PathLike):
        """Decorator to register a command handler."""
        def decorator(func):
            self.register(path, func)
            return func
        return decorator

    def get(self, key: str) -> Optional[RegisteredCommand]:
        with self._lock.read():
            return self._commands.get(key)

    def lookup(self, key: str) -> Optional[Handler]:
        """Return the handler registered under ``key``, or None."""
        command = self.get(key)
        return command.handler if command else None

    def keys(self) -> List[str]:
        with self._lock.read():
            return sorted(self._commands)

    def __contains__(self, key) -> bool:
        with self._lock.read():
            return key in self._commands

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._commands)
