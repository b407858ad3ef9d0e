"""Persisted window placement and parsing of ``<width>x<height>`` geometry."""

from __future__ import annotations

import json
import logging
import os
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

SETTINGS_FILE = "vimcanvas-settings.json"

_I32_MIN = -(1 << 31)
_I32_MAX = (1 << 31) - 1
_U64_MAX = (1 << 64) - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class Dimensions:
    width: int = 0
    height: int = 0


DEFAULT_WINDOW_GEOMETRY = Dimensions(width=100, height=50)


@dataclass(frozen=True)
class Maximized:
    """The window was maximized."""


@dataclass(frozen=True)
class Windowed:
    """The window had this position in pixels and size in grid cells."""

    position: tuple[int, int] = (0, 0)
    size: Dimensions = field(default_factory=Dimensions)


PersistentWindowSettings = Union[Maximized, Windowed]


class WindowSettingsError(Exception):
    """Raised when saved window settings cannot be read."""


def neovim_data_path() -> Path:
    """The editor's standard data directory."""
    if sys.platform == "win32":
        return Path.home() / "AppData" / "local" / "nvim-data"
    xdg = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg) if xdg and Path(xdg).is_absolute() else Path.home() / ".local" / "share"
    return base / "nvim"


def settings_path(data_dir: Optional[os.PathLike | str] = None) -> Path:
    base = Path(data_dir) if data_dir is not None else neovim_data_path()
    return base / SETTINGS_FILE


def _int_field(data: dict, key: str, low: int, high: int) -> int:
    if key not in data:
        raise WindowSettingsError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, int) or isinstance(value, bool) or not low <= value <= high:
        raise WindowSettingsError(f"invalid value for `{key}`: {value!r}")
    return value


def _decode(document: Any) -> PersistentWindowSettings:
    if not isinstance(document, dict) or "window" not in document:
        raise WindowSettingsError("missing field `window`")
    window = document["window"]
    if window == "Maximized":
        return Maximized()
    if not isinstance(window, dict) or list(window) != ["Windowed"]:
        raise WindowSettingsError(f"unknown window settings: {window!r}")
    body = window["Windowed"]
    if not isinstance(body, dict):
        raise WindowSettingsError("invalid Windowed settings")

    position = (0, 0)
    if "position" in body:
        raw = body["position"]
        if not isinstance(raw, dict):
            raise WindowSettingsError("invalid position")
        position = (
            _int_field(raw, "x", _I32_MIN, _I32_MAX),
            _int_field(raw, "y", _I32_MIN, _I32_MAX),
        )

    size = Dimensions()
    if "size" in body:
        raw = body["size"]
        if not isinstance(raw, dict):
            raise WindowSettingsError("invalid size")
        size = Dimensions(
            _int_field(raw, "width", 0, _U64_MAX),
            _int_field(raw, "height", 0, _U64_MAX),
        )
    return Windowed(position=position, size=size)


def _encode(settings: PersistentWindowSettings) -> dict:
    if isinstance(settings, Maximized):
        return {"window": "Maximized"}
    x, y = settings.position
    return {
        "window": {
            "Windowed": {
                "position": {"x": x, "y": y},
                "size": {"width": settings.size.width, "height": settings.size.height},
            }
        }
    }


def load_last_window_settings(
    data_dir: Optional[os.PathLike | str] = None,
) -> PersistentWindowSettings:
    """Read the saved window settings; an empty saved size becomes the default size."""
    path = settings_path(data_dir)
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as error:
        raise WindowSettingsError(str(error)) from error
    loaded = _decode(document)
    logger.debug("Loaded window settings: %r", loaded)

    if isinstance(loaded, Windowed) and (loaded.size.width == 0 or loaded.size.height == 0):
        loaded = Windowed(position=loaded.position, size=DEFAULT_WINDOW_GEOMETRY)
    return loaded


def last_window_geometry(data_dir: Optional[os.PathLike | str] = None) -> Dimensions:
    """The saved window size, or the default when none is usable or the window was maximized."""
    try:
        loaded = load_last_window_settings(data_dir)
    except WindowSettingsError:
        return DEFAULT_WINDOW_GEOMETRY
    if isinstance(loaded, Windowed):
        return loaded.size
    return DEFAULT_WINDOW_GEOMETRY


def save_window_geometry(
    maximized: bool,
    grid_size: Optional[Dimensions],
    position: Optional[tuple[int, int]],
    remember_size: bool,
    remember_position: bool,
    data_dir: Optional[os.PathLike | str] = None,
) -> None:
    """Write the window placement, keeping only what the user asked to remember."""
    if maximized and remember_size:
        settings: PersistentWindowSettings = Maximized()
    else:
        size = grid_size if remember_size and grid_size is not None else DEFAULT_WINDOW_GEOMETRY
        if remember_position and position is not None:
            x, y = position
            saved_position = (int(x), int(y))
        else:
            saved_position = (0, 0)
        settings = Windowed(position=saved_position, size=size)

    path = settings_path(data_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(_encode(settings), separators=(",", ":"))
    logger.debug("Saved Window Settings: %s", text)
    path.write_text(text, encoding="utf-8")


def parse_window_geometry(input: str) -> Dimensions:
    """Parse ``<width>x<height>`` with both dimensions positive."""
    invalid = f"Invalid geometry: {input}\nValid format: <width>x<height>"
    dimensions = []
    for part in input.split("x"):
        if not _UNSIGNED.fullmatch(part) or int(part) > _U64_MAX:
            raise ValueError(invalid)
        value = int(part)
        if value == 0:
            raise ValueError("Invalid geometry: Window dimensions should be greater than 0.")
        dimensions.append(value)
    if len(dimensions) != 2:
        raise ValueError(invalid)
    width, height = dimensions
    return Dimensions(width=width, height=height)