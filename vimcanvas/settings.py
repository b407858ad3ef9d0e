"""Global store of typed setting groups, kept in sync with editor variables."""

from __future__ import annotations

import contextlib
import copy
import logging
import threading
from typing import Any, Callable, Iterable, Protocol, TypeVar

logger = logging.getLogger(__name__)

VARIABLE_PREFIX = "vimcanvas_"

UpdateHandler = Callable[[Any], None]
Reader = Callable[[], Any]

T = TypeVar("T")


class SettingsError(Exception):
    """Raised when a setting cannot be found, read or watched."""


class EditorClient(Protocol):
    """The part of an editor RPC client the settings store talks to."""

    async def get_var(self, name: str) -> Any: ...

    async def set_var(self, name: str, value: Any) -> Any: ...

    async def command(self, text: str) -> Any: ...


def _watcher_script(name: str) -> str:
    notify = f"VimcanvasNotify{name}Changed"
    variable = f"{VARIABLE_PREFIX}{name}"
    return (
        'exe "'
        f"fun! {notify}(d, k, z)\n"
        f"call rpcnotify(1, 'setting_changed', '{name}', g:{variable})\n"
        "endf\n"
        f"call dictwatcheradd(g:, '{variable}', '{notify}')\""
    )


class Settings:
    """Holds one value per setting type plus update and read handlers per variable name."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._settings: dict[type, Any] = {}
        self._listeners: dict[str, UpdateHandler] = {}
        self._readers: dict[str, Reader] = {}

    def set_setting_handlers(
        self, property_name: str, update_func: UpdateHandler, reader_func: Reader
    ) -> None:
        """Register how a named variable is applied when it changes and read when it is missing."""
        with self._lock:
            self._listeners[property_name] = update_func
            self._readers[property_name] = reader_func

    def set(self, value: Any) -> None:
        """Store a copy of ``value``, replacing any earlier value of the same type."""
        stored = copy.deepcopy(value)
        with self._lock:
            self._settings[type(value)] = stored

    def get(self, setting_type: type[T]) -> T:
        """Return a copy of the stored value of ``setting_type``."""
        with self._lock:
            try:
                value = self._settings[setting_type]
            except KeyError:
                raise SettingsError(
                    "Trying to retrieve a settings object that doesn't exist: "
                    f"{getattr(setting_type, '__name__', setting_type)}"
                ) from None
            return copy.deepcopy(value)

    def _names(self) -> list[str]:
        with self._lock:
            return list(self._listeners)

    def _listener(self, name: str) -> UpdateHandler:
        with self._lock:
            try:
                return self._listeners[name]
            except KeyError:
                raise SettingsError(f"No listener registered for setting {name!r}") from None

    def _reader(self, name: str) -> Reader:
        with self._lock:
            try:
                return self._readers[name]
            except KeyError:
                raise SettingsError(f"No reader registered for setting {name!r}") from None

    async def read_initial_values(self, nvim: EditorClient) -> None:
        """Apply every variable the editor already defines; publish defaults for the rest."""
        for name in self._names():
            variable_name = f"{VARIABLE_PREFIX}{name}"
            try:
                value = await nvim.get_var(variable_name)
            except Exception as error:  # the editor reports a missing variable as an error
                logger.debug("Initial value load failed for %s: %s", name, error)
                setting = self._reader(name)()
                with contextlib.suppress(Exception):
                    await nvim.set_var(variable_name, setting)
            else:
                self._listener(name)(value)

    async def setup_changed_listeners(self, nvim: EditorClient) -> None:
        """Ask the editor to notify us whenever one of the registered variables changes."""
        for name in self._names():
            try:
                await nvim.command(_watcher_script(name))
            except Exception as error:
                raise SettingsError(f"Could not setup setting notifier for {name}") from error

    def handle_changed_notification(self, arguments: Iterable[Any]) -> None:
        """Apply a ``setting_changed`` notification whose arguments are ``[name, value]``."""
        items = iter(arguments)
        try:
            name = next(items)
            value = next(items)
        except StopIteration:
            raise SettingsError("Setting notification needs a name and a value") from None
        if not isinstance(name, str):
            raise SettingsError(f"Setting name must be a string, received {name!r}")
        self._listener(name)(value)


SETTINGS = Settings()