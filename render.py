import re
from dataclasses import dataclass, replace

import numpy as np

from config import (
    COLOR_FOOD_EMPTY, COLOR_FOOD_LOW, COLOR_FOOD_HIGH, COLOR_AGENT, OBSTACLE_DIM
)

_HEX = re.compile(r'^#?([0-9a-fA-F]{6})$')


def parse_hex(text):
    """'#rrggbb' -> (r, g, b), or None if the string is not a colour."""
    if not text:
        return None
    m = _HEX.match(text)
    if not m:
        return None
    h = m.group(1)
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


@dataclass(frozen=True)
class Theme:
    food_empty: tuple = COLOR_FOOD_EMPTY
    food_low: tuple = COLOR_FOOD_LOW
    food_high: tuple = COLOR_FOOD_HIGH
    agent: tuple = COLOR_AGENT
    gamma: float = 1.0

    def with_hex(self, gamma=None, **colors):
        """
        Returns a copy with colours given as hex strings. Malformed strings
        leave the old colour in place.
        """
        changes = {}
        for name, text in colors.items():
            if name not in ('food_empty', 'food_low', 'food_high', 'agent'):
                raise ValueError(f"unknown theme colour {name!r}")
            rgb = parse_hex(text)
            if rgb is not None:
                changes[name] = rgb
        if gamma is not None:
            changes['gamma'] = float(gamma)
        return replace(self, **changes)


DEFAULT_THEME = Theme()


def colorize(env, carrying_capacity, theme=DEFAULT_THEME):
    """
    One RGB pixel per grid cell, shape (height, width, 3).
    Food runs low -> high with the normalised concentration; empty cells get
    their own colour, obstacles are dimmed and agents drawn on top.
    """
    field = env.field
    v = field.normalized(carrying_capacity)
    if theme.gamma != 1.0 and theme.gamma > 0:
        v = v ** (1.0 / theme.gamma)

    low = np.asarray(theme.food_low, dtype=np.float64)
    high = np.asarray(theme.food_high, dtype=np.float64)
    rgb = (low + (high - low) * v[..., None]).astype(np.uint8)
    rgb[field.values <= 0] = theme.food_empty

    blocked = field.obstacles
    rgb[blocked] = (rgb[blocked] * OBSTACLE_DIM).astype(np.uint8)

    pos = env.population.positions()
    if len(pos):
        xs, ys = pos[:, 0], pos[:, 1]
        visible = ~blocked[ys, xs]
        rgb[ys[visible], xs[visible]] = theme.agent
    return rgb


def rasterize(env, carrying_capacity, theme=DEFAULT_THEME):
    """RGBA pixel buffer of shape (height * scale, width * scale, 4)."""
    rgb = colorize(env, carrying_capacity, theme)
    s = env.scale
    scaled = np.repeat(np.repeat(rgb, s, axis=0), s, axis=1)
    alpha = np.full(scaled.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate([scaled, alpha], axis=2)
