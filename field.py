import logging
import math

import numpy as np

from config import EPSILON

logger = logging.getLogger(__name__)


class ResourceField:
    """
    Double-buffered grid of food concentration with a static obstacle mask.

    Arrays are stored with shape (height, width) and indexed [y, x], so the
    flattened buffer follows the flat index x + y * width.
    """
    def __init__(self, width, height, obstacles=None):
        if not isinstance(width, (int, np.integer)) or not isinstance(height, (int, np.integer)):
            raise ValueError(f"grid size must be integers, got {width!r} x {height!r}")
        if width <= 0 or height <= 0:
            raise ValueError(f"grid size must be positive, got {width} x {height}")
        self.width = int(width)
        self.height = int(height)

        # Current buffer and scratch buffer, swapped after every step
        self._current = np.zeros((self.height, self.width), dtype=np.float64)
        self._scratch = np.zeros((self.height, self.width), dtype=np.float64)
        self._obstacles = np.zeros((self.height, self.width), dtype=bool)

        if obstacles is not None:
            self.set_obstacles(obstacles)

    # -- Read-only access --

    @property
    def values(self):
        """Read-only view of the current buffer. Do not hold it across a step."""
        view = self._current.view()
        view.flags.writeable = False
        return view

    @property
    def obstacles(self):
        view = self._obstacles.view()
        view.flags.writeable = False
        return view

    @property
    def shape(self):
        return (self.height, self.width)

    def in_bounds(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x, y):
        if not self.in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width} x {self.height} grid")

    def clamp_coords(self, x, y):
        """Clamps a coordinate pair onto the grid (no wrap-around)."""
        x = 0 if x < 0 else self.width - 1 if x >= self.width else x
        y = 0 if y < 0 else self.height - 1 if y >= self.height else y
        return x, y

    def value_at(self, x, y):
        self._check(x, y)
        return float(self._current[y, x])

    def is_obstacle(self, x, y):
        self._check(x, y)
        return bool(self._obstacles[y, x])

    def mean(self):
        return float(self._current.mean())

    def normalized(self, carrying_capacity):
        """Concentration as a fraction of the carrying capacity, clipped to [0, 1]."""
        return np.clip(self._current / max(carrying_capacity, EPSILON), 0.0, 1.0)

    # -- Mutation --

    def deplete(self, x, y, amount):
        """Removes food from one cell; the result never goes below zero."""
        self._check(x, y)
        left = self._current[y, x] - amount
        self._current[y, x] = left if left > 0.0 else 0.0

    def load(self, values):
        """Replaces the current buffer wholesale. Shape must match the grid."""
        values = np.asarray(values, dtype=np.float64)
        if values.shape != self.shape:
            raise ValueError(
                f"field shape {values.shape} does not match grid {self.shape}"
            )
        self._current[...] = values

    def set_obstacles(self, mask):
        mask = np.asarray(mask, dtype=bool)
        if mask.shape != self.shape:
            raise ValueError(
                f"obstacle mask shape {mask.shape} does not match grid {self.shape}"
            )
        self._obstacles[...] = mask
        logger.debug("Obstacle mask replaced: %d cells blocked", int(mask.sum()))

    def set_obstacle(self, x, y, blocked=True):
        self._check(x, y)
        self._obstacles[y, x] = bool(blocked)

    def clear_obstacles(self):
        self._obstacles.fill(False)

    def seed(self, carrying_capacity, noise, rng):
        """
        Fills the grid with a radial gradient (rich centre, poorer edges) plus
        uniform noise. One random draw is taken per cell, obstacles included,
        so the stream position does not depend on the mask. Obstacle cells
        keep their previous value.
        """
        fmax = carrying_capacity
        w, h = self.width, self.height
        blocked = self._obstacles
        cur = self._current
        for y in range(h):
            gy = y / h
            for x in range(w):
                gx = x / w
                base = 0.8 - 0.6 * math.hypot(gx - 0.5, gy - 0.5)
                v = base * fmax + (rng.random() * 2 - 1) * noise * fmax
                if blocked[y, x]:
                    continue
                cur[y, x] = min(max(v, 0.0), fmax)
        self._scratch.fill(0.0)

    def reset(self, clear_obstacles=True):
        self._current.fill(0.0)
        self._scratch.fill(0.0)
        if clear_obstacles:
            self.clear_obstacles()

    def step(self, diffusion, replenish_rate, carrying_capacity, decay):
        """
        Diffusion, replenishment and decay on the five-point stencil.
        Every cell reads the pre-step snapshot; the result lands in the
        scratch buffer, which then becomes current.
        """
        f = self._current
        out = self._scratch
        blocked = self._obstacles

        # 1. Neighbours with replicated edges
        padded = np.pad(f, 1, mode='edge')
        north = padded[0:-2, 1:-1]
        south = padded[2:,   1:-1]
        west  = padded[1:-1, 0:-2]
        east  = padded[1:-1, 2:]

        if blocked.any():
            # Obstacle neighbours act like the grid edge: the cell sees itself
            pb = np.pad(blocked, 1, mode='edge')
            north = np.where(pb[0:-2, 1:-1], f, north)
            south = np.where(pb[2:,   1:-1], f, south)
            west  = np.where(pb[1:-1, 0:-2], f, west)
            east  = np.where(pb[1:-1, 2:],   f, east)

        # 2. Diffusion
        # Huge coefficients can overflow; non-finite cells are cleared below
        with np.errstate(over='ignore', invalid='ignore'):
            laplacian = (north + south + west + east) - 4 * f
            np.multiply(laplacian, diffusion, out=out)
            out += f

            # 3. Replenish towards the carrying capacity
            out += replenish_rate * (carrying_capacity - out)

            # 4. Decay
            out *= (1 - decay)

        # 5. Clamping
        np.nan_to_num(out, copy=False, nan=0.0, posinf=carrying_capacity, neginf=0.0)
        np.clip(out, 0, carrying_capacity, out=out)

        # Obstacles are frozen
        out[blocked] = f[blocked]

        self._current, self._scratch = out, f
