"""Parsing of the ``guifont`` option into font options."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

DEFAULT_FONT_SIZE = 14.0
_EPSILON = 1.1920929e-07


def points_to_pixels(value: float) -> float:
    """Convert a size in points to pixels at the standard 96 ppi (points are pixels on macOS)."""
    if sys.platform == "darwin":
        return value
    pixels_per_inch = 96.0
    points_per_inch = 72.0
    return value * (pixels_per_inch / points_per_inch)


class FontEdging(Enum):
    ANTI_ALIAS = "antialias"
    SUBPIXEL_ANTI_ALIAS = "subpixelantialias"
    ALIAS = "alias"

    @classmethod
    def parse(cls, value: str) -> FontEdging:
        """Anything unrecognised means aliased edging."""
        if value == "antialias":
            return cls.ANTI_ALIAS
        if value == "subpixelantialias":
            return cls.SUBPIXEL_ANTI_ALIAS
        return cls.ALIAS


class FontHinting(Enum):
    FULL = "full"
    NORMAL = "normal"
    SLIGHT = "slight"
    NONE = "none"

    @classmethod
    def parse(cls, value: str) -> FontHinting:
        """Anything unrecognised means no hinting."""
        for member in (cls.FULL, cls.NORMAL, cls.SLIGHT):
            if value == member.value:
                return member
        return cls.NONE


def _parse_size(text: str) -> Optional[float]:
    if not text or text != text.strip() or "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


@dataclass(eq=False)
class FontOptions:
    font_list: list[str] = field(default_factory=list)
    size: float = field(default_factory=lambda: points_to_pixels(DEFAULT_FONT_SIZE))
    bold: bool = False
    italic: bool = False
    allow_float_size: bool = False
    hinting: FontHinting = FontHinting.FULL
    edging: FontEdging = FontEdging.ANTI_ALIAS

    @classmethod
    def parse(cls, guifont_setting: str) -> FontOptions:
        """Parse a setting such as ``Fira_Code,Console:h15:b:i:#h-slight:#e-alias``."""
        font_list: list[str] = []
        size = DEFAULT_FONT_SIZE
        bold = False
        italic = False
        allow_float_size = False
        hinting = FontHinting.FULL
        edging = FontEdging.ANTI_ALIAS

        parts = [part for part in guifont_setting.split(":") if part]
        if parts:
            parsed = [name.replace("_", " ") for name in parts[0].split(",") if name]
            if parsed:
                font_list = parsed

        for part in parts[1:]:
            if part.startswith("#h-"):
                hinting = FontHinting.parse(part[3:])
            elif part.startswith("#e-"):
                edging = FontEdging.parse(part[3:])
            elif part.startswith("h") and len(part) > 1:
                if "." in part:
                    allow_float_size = True
                parsed_size = _parse_size(part[1:])
                if parsed_size is not None:
                    size = parsed_size
            elif part == "b":
                bold = True
            elif part == "i":
                italic = True

        return cls(
            font_list=font_list,
            size=points_to_pixels(size),
            bold=bold,
            italic=italic,
            allow_float_size=allow_float_size,
            hinting=hinting,
            edging=edging,
        )

    def primary_font(self) -> Optional[str]:
        return self.font_list[0] if self.font_list else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FontOptions):
            return NotImplemented
        return (
            self.font_list == other.font_list
            and abs(self.size - other.size) < _EPSILON
            and self.bold == other.bold
            and self.italic == other.italic
            and self.edging == other.edging
            and self.hinting == other.hinting
        )

    __hash__ = None  # type: ignore[assignment]