import numpy as np

from config import MOORE_OFFSETS, UPTAKE_EPSILON


class Agent:
    """
    A point consumer living on one grid cell.
    """
    __slots__ = ('x', 'y', 'energy')

    def __init__(self, x, y, energy):
        self.x = x
        self.y = y
        self.energy = energy

    def __repr__(self):
        return f"Agent(x={self.x}, y={self.y}, energy={self.energy:.4f})"

    def uptake(self, food, params):
        """
        Monod-style consumption from a cell holding `food`.
        Updates energy and returns the amount taken (never more than `food`).
        """
        u = params.uptake_max * food / (params.half_saturation + food + UPTAKE_EPSILON)
        if u > food:
            u = food  # cannot consume more than available
        self.energy += params.yield_energy * u - params.maintenance
        return u

    def try_divide(self, field, params, rng):
        """
        Splits off an offspring into a random Moore neighbour.
        Returns the new Agent, or None if division did not happen this tick.
        """
        if self.energy < params.division_threshold:
            return None
        dx, dy = rng.choice(MOORE_OFFSETS)
        nx, ny = field.clamp_coords(self.x + dx, self.y + dy)
        if self.energy < params.offspring_energy or field.is_obstacle(nx, ny):
            return None
        self.energy -= params.offspring_energy
        return Agent(nx, ny, params.offspring_energy)

    def wander(self, field, params, rng):
        """Random Moore step, blocked by obstacles."""
        if params.move_probability <= 0:
            return
        if rng.random() < params.move_probability:
            dx, dy = rng.choice(MOORE_OFFSETS)
            mx, my = field.clamp_coords(self.x + dx, self.y + dy)
            if not field.is_obstacle(mx, my):
                self.x = mx
                self.y = my


class AgentPopulation:
    """
    The live agents. Storage order carries no meaning; survivors keep their
    relative order and offspring are appended after each tick's pass.
    """
    def __init__(self):
        self.agents = []

    def __len__(self):
        return len(self.agents)

    def __iter__(self):
        return iter(self.agents)

    def clear(self):
        self.agents = []

    def seed(self, n, width, height, energy, rng):
        """Scatters n agents uniformly over the grid (x draw, then y draw)."""
        if n < 0:
            raise ValueError(f"population size must be non-negative, got {n}")
        for _ in range(n):
            x = int(rng.random() * width)
            y = int(rng.random() * height)
            self.agents.append(Agent(x, y, energy))

    def add(self, agent):
        self.agents.append(agent)

    def positions(self):
        if not self.agents:
            return np.zeros((0, 2), dtype=np.int64)
        return np.array([(a.x, a.y) for a in self.agents], dtype=np.int64)

    def energies(self):
        return np.array([a.energy for a in self.agents], dtype=np.float64)

    def mean_energy(self):
        if not self.agents:
            return 0.0
        return sum(a.energy for a in self.agents) / len(self.agents)

    def update(self, field, params, rng):
        """
        One pass over the current agents: eat, die, divide, wander.
        Returns (births, deaths) for this tick.
        """
        survivors = []
        new_borns = []
        deaths = 0

        for agent in self.agents:
            # --- 1. UPTAKE ---
            # Co-located agents draw down the same stock one after another
            if field.is_obstacle(agent.x, agent.y):
                food = 0.0
            else:
                food = field.value_at(agent.x, agent.y)
            eaten = agent.uptake(food, params)
            if eaten:
                field.deplete(agent.x, agent.y, eaten)

            # --- 2. DEATH ---
            if agent.energy <= 0:
                deaths += 1
                continue

            # --- 3. DIVISION ---
            child = agent.try_divide(field, params, rng)
            if child is not None:
                new_borns.append(child)

            # --- 4. MOVEMENT ---
            agent.wander(field, params, rng)

            survivors.append(agent)

        # Offspring join only after the pass, so they are not visited this tick
        self.agents = survivors + new_borns
        return len(new_borns), deaths
