import logging
from dataclasses import dataclass, asdict

import numpy as np

from agent import AgentPopulation
from config import GRID_WIDTH, GRID_HEIGHT, CELL_SIZE
from field import ResourceField
from rng import SeededRandom

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stats:
    """Snapshot of the aggregate state, computed fresh on every call."""
    ticks: int
    count: int
    mean_energy: float
    mean_food: float
    births: int
    deaths: int

    def as_dict(self):
        return asdict(self)


class Environment:
    """
    Owns the food field, the agent population, the RNG and the counters,
    and advances them one tick at a time.
    """
    def __init__(self, width=GRID_WIDTH, height=GRID_HEIGHT, scale=CELL_SIZE):
        if isinstance(scale, bool) or not isinstance(scale, (int, np.integer)) or scale <= 0:
            raise ValueError(f"pixel scale must be a positive integer, got {scale!r}")
        self.field = ResourceField(width, height)
        self.width = self.field.width
        self.height = self.field.height
        self.scale = int(scale)

        self.population = AgentPopulation()
        self.rng = SeededRandom()

        # Counters
        self.ticks = 0
        self.births_total = 0
        self.deaths_total = 0

    @property
    def agents(self):
        return self.population.agents

    def reset(self, seed, initial_population, noise, division_threshold,
              carrying_capacity=1.0, keep_obstacles=False):
        """
        Starts a new epoch: reseeds the RNG, zeroes the counters, refills
        the field and scatters `initial_population` agents, each holding
        half the division threshold.
        """
        self.rng.seed(seed)
        self.ticks = 0
        self.births_total = 0
        self.deaths_total = 0

        self.population.clear()
        self.field.reset(clear_obstacles=not keep_obstacles)
        self.field.seed(carrying_capacity, noise, self.rng)
        self.population.seed(initial_population, self.width, self.height,
                             0.5 * division_threshold, self.rng)

        logger.debug(
            "Reset %dx%d grid: seed=%r, agents=%d, noise=%.3f",
            self.width, self.height, str(seed), initial_population, noise,
        )

    def set_obstacles(self, mask):
        self.field.set_obstacles(mask)

    def set_obstacle(self, x, y, blocked=True):
        self.field.set_obstacle(x, y, blocked)

    def tick(self, params):
        """Agents first, then food physics, then the tick counter."""
        births, deaths = self.population.update(self.field, params, self.rng)
        self.births_total += births
        self.deaths_total += deaths

        self.field.step(params.diffusion, params.replenish_rate,
                        params.carrying_capacity, params.decay)
        self.ticks += 1

    def run(self, params, steps):
        for _ in range(steps):
            self.tick(params)

    def stats(self):
        return Stats(
            ticks=self.ticks,
            count=len(self.population),
            mean_energy=self.population.mean_energy(),
            mean_food=self.field.mean(),
            births=self.births_total,
            deaths=self.deaths_total,
        )
