"""Cursor visual effects: expanding highlights and particle trails."""

from __future__ import annotations

import logging
import math
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple, Optional, Union

from .animation import EPSILON, Point, ease, ease_in_quad

logger = logging.getLogger(__name__)

_U64_MASK = (1 << 64) - 1
_U32_MASK = (1 << 32) - 1


class VfxMode(Enum):
    SONIC_BOOM = "sonicboom"
    RIPPLE = "ripple"
    WIREFRAME = "wireframe"
    RAILGUN = "railgun"
    TORPEDO = "torpedo"
    PIXIE_DUST = "pixiedust"
    DISABLED = ""

    @property
    def is_highlight(self) -> bool:
        return self in (VfxMode.SONIC_BOOM, VfxMode.RIPPLE, VfxMode.WIREFRAME)

    @property
    def is_trail(self) -> bool:
        return self in (VfxMode.RAILGUN, VfxMode.TORPEDO, VfxMode.PIXIE_DUST)

    @classmethod
    def from_setting(cls, value: Any, current: VfxMode) -> VfxMode:
        """Mode named by ``value``; ``current`` (with an error logged) when it names none."""
        if not isinstance(value, str):
            logger.error("Expected a VfxMode string, but received %r", value)
            return current
        try:
            return cls(value)
        except ValueError:
            logger.error("Expected a VfxMode name, but received %r", value)
            return current


@dataclass
class VfxSettings:
    vfx_opacity: float = 200.0
    vfx_particle_lifetime: float = 1.2
    vfx_particle_density: float = 7.0
    vfx_particle_speed: float = 10.0
    vfx_particle_phase: float = 1.5
    vfx_particle_curl: float = 1.0


class Shape(Enum):
    OVAL = "oval"
    RECT = "rect"


class HighlightGeometry(NamedTuple):
    """What a highlight draws: ``rect`` is (x, y, width, height)."""

    alpha: int
    rect: tuple[float, float, float, float]
    shape: Shape
    stroke_width: Optional[float]


class ParticleShape(NamedTuple):
    """What one particle draws: ``rect`` is (x, y, width, height)."""

    alpha: int
    rect: tuple[float, float, float, float]
    shape: Shape
    stroked: bool


def _to_u8(value: float) -> int:
    if math.isnan(value):
        return 0
    return int(min(max(value, 0.0), 255.0))


def _to_f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def rotate_vec(v: Point, rot: float) -> Point:
    """Rotate ``v`` by ``rot`` radians."""
    sin = math.sin(rot)
    cos = math.cos(rot)
    return Point(v.x * cos - v.y * sin, v.x * sin + v.y * cos)


class PcgRng:
    """Small deterministic PCG (XSH-RR 64/32) generator."""

    def __init__(
        self,
        state: int = 0x853C_49E6_748F_EA9B,
        inc: int = ((0xDA3E_39CB_94B9_5BDB << 1) | 1) & _U64_MASK,
    ) -> None:
        self.state = state & _U64_MASK
        self.inc = inc & _U64_MASK

    def next_u32(self) -> int:
        old_state = self.state
        self.state = (old_state * 6_364_136_223_846_793_005 + self.inc) & _U64_MASK
        rot = old_state >> 59
        xsh = (((old_state >> 18) ^ old_state) >> 27) & _U32_MASK
        return ((xsh >> rot) | (xsh << ((32 - rot) & 31))) & _U32_MASK

    def next_f32(self) -> float:
        """Uniform value in [0, 1], rounded to single precision."""
        return _to_f32(math.ldexp(self.next_u32(), -32))

    def rand_dir(self) -> Point:
        """Vector with both coordinates in [-1, 1); not normalized."""
        x = self.next_f32()
        y = self.next_f32()
        return Point(x * 2.0 - 1.0, y * 2.0 - 1.0)

    def rand_dir_normalized(self) -> Point:
        return self.rand_dir().normalized()


@dataclass
class Particle:
    pos: Point
    speed: Point
    rotation_speed: float
    lifetime: float


def _rect_around(center: Point, size: float) -> tuple[float, float, float, float]:
    half = size * 0.5
    return (center.x - half, center.y - half, size, size)


class PointHighlight:
    """A shape that grows from the cursor and fades out."""

    def __init__(self, mode: VfxMode) -> None:
        if not mode.is_highlight:
            raise ValueError(f"{mode} is not a highlight mode")
        self.mode = mode
        self.t = 0.0
        self.center_position = Point(0.0, 0.0)

    def update(
        self, settings: VfxSettings, destination: Point, cursor_dimensions: Point, dt: float
    ) -> bool:
        """Advance the animation; return whether it is still running."""
        self.t = min(self.t + dt * 5.0, 1.0)
        return self.t < 1.0

    def restart(self, position: Point) -> None:
        self.t = 0.0
        self.center_position = position

    def geometry(self, settings: VfxSettings, cell_height: float) -> Optional[HighlightGeometry]:
        """What to draw now, or ``None`` once the animation is over."""
        if abs(self.t - 1.0) < EPSILON:
            return None
        alpha = _to_u8(ease(ease_in_quad, settings.vfx_opacity, 0.0, self.t))
        radius = self.t * (3 * cell_height)
        rect = _rect_around(self.center_position, radius)
        if self.mode is VfxMode.SONIC_BOOM:
            return HighlightGeometry(alpha, rect, Shape.OVAL, None)
        stroke = cell_height * 0.2
        if self.mode is VfxMode.RIPPLE:
            return HighlightGeometry(alpha, rect, Shape.OVAL, stroke)
        return HighlightGeometry(alpha, rect, Shape.RECT, stroke)


class ParticleTrail:
    """Particles left behind along the path the cursor travels."""

    def __init__(self, mode: VfxMode, rng: Optional[PcgRng] = None) -> None:
        if not mode.is_trail:
            raise ValueError(f"{mode} is not a trail mode")
        self.mode = mode
        self.particles: list[Particle] = []
        self.previous_cursor_dest = Point(0.0, 0.0)
        self.restart_position: Optional[Point] = None
        self.rng = rng if rng is not None else PcgRng()

    def _particle_speed(
        self, settings: VfxSettings, t: float, travel: Point, relative_distance: float
    ) -> Point:
        if self.mode is VfxMode.RAILGUN:
            phase = t / math.pi * settings.vfx_particle_phase * relative_distance
            return Point(math.sin(phase), math.cos(phase)) * 2.0 * settings.vfx_particle_speed
        if self.mode is VfxMode.TORPEDO:
            travel_dir = travel.normalized()
            direction = (self.rng.rand_dir_normalized() - travel_dir * 1.5).normalized()
            return direction * settings.vfx_particle_speed
        base = self.rng.rand_dir_normalized()
        return Point(base.x * 0.5, 0.4 + abs(base.y)) * 3.0 * settings.vfx_particle_speed

    def update(
        self, settings: VfxSettings, destination: Point, cursor_dimensions: Point, dt: float
    ) -> bool:
        """Age, move and spawn particles; return whether any are alive."""
        for particle in self.particles:
            particle.lifetime -= dt
        self.particles = [p for p in self.particles if p.lifetime > 0.0]

        for particle in self.particles:
            particle.pos = particle.pos + particle.speed * dt
            particle.speed = rotate_vec(particle.speed, dt * particle.rotation_speed)

        if destination != self.previous_cursor_dest:
            travel = destination - self.previous_cursor_dest
            travel_distance = travel.length()
            cell_height = cursor_dimensions.y
            relative_distance = travel_distance / cell_height if cell_height else math.inf
            raw_count = relative_distance**1.5 * settings.vfx_particle_density * 0.01
            count = int(raw_count) if math.isfinite(raw_count) and raw_count > 0 else 0

            prev_p = self.previous_cursor_dest
            for i in range(count):
                t = i / count
                speed = self._particle_speed(settings, t, travel, relative_distance)
                if self.mode is VfxMode.RAILGUN:
                    pos = prev_p + travel * t
                    rotation_speed = math.pi * settings.vfx_particle_curl
                else:
                    pos = (
                        prev_p
                        + travel * self.rng.next_f32()
                        + Point(0.0, cell_height * 0.5)
                    )
                    rotation_speed = (
                        (self.rng.next_f32() - 0.5) * (math.pi / 2) * settings.vfx_particle_curl
                    )
                self.particles.append(
                    Particle(pos, speed, rotation_speed, t * settings.vfx_particle_lifetime)
                )

            self.previous_cursor_dest = destination

        return bool(self.particles)

    def restart(self, position: Point) -> None:
        """Note where a restart was asked for; live particles keep running."""
        self.restart_position = position

    def particle_shapes(self, settings: VfxSettings, cell_width: float) -> list[ParticleShape]:
        """What to draw for each live particle."""
        stroked = self.mode is not VfxMode.PIXIE_DUST
        shapes = []
        for particle in self.particles:
            lifetime = particle.lifetime / settings.vfx_particle_lifetime
            alpha = _to_u8(lifetime * settings.vfx_opacity)
            if stroked:
                radius = cell_width * 0.5 * lifetime
                shape = Shape.OVAL
            else:
                radius = cell_width * 0.2
                shape = Shape.RECT
            shapes.append(ParticleShape(alpha, _rect_around(particle.pos, radius), shape, stroked))
        return shapes


CursorVfx = Union[PointHighlight, ParticleTrail]


def new_cursor_vfx(mode: VfxMode) -> Optional[CursorVfx]:
    """The effect for ``mode``, or ``None`` when effects are disabled."""
    if mode.is_highlight:
        return PointHighlight(mode)
    if mode.is_trail:
        return ParticleTrail(mode)
    return None