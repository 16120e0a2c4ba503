# =============================================================================
# CONFIGURATION & PARAMETERS
# =============================================================================
import dataclasses
from dataclasses import dataclass

# -- World Settings --
GRID_WIDTH = 150
GRID_HEIGHT = 100
CELL_SIZE = 4       # Pixel size of each grid cell
FPS = 60            # Target frames per second for rendering
MAX_SPEED = 50      # Upper bound on ticks per rendered frame

# -- Colors (R, G, B) --
COLOR_BG = (10, 10, 10)
COLOR_TEXT = (200, 200, 200)
COLOR_FOOD_EMPTY = (7, 10, 18)
COLOR_FOOD_LOW = (8, 30, 60)
COLOR_FOOD_HIGH = (110, 195, 255)
COLOR_AGENT = (170, 255, 190)
OBSTACLE_DIM = 0.3  # Brightness multiplier applied over obstacle cells

# -- Reset Defaults --
DEFAULT_SEED = "42"
INITIAL_POPULATION = 150
SEED_NOISE = 0.35           # Noise amplitude of the initial food field (fraction of Fmax)

# -- Numerics --
UPTAKE_EPSILON = 1e-9       # Keeps f / (K + f) finite when f = K = 0
EPSILON = 1e-12             # Guards normalisation by the carrying capacity

# Moore neighbourhood, row by row from the top-left.
MOORE_OFFSETS = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)


@dataclass(frozen=True)
class Params:
    """
    Per-tick parameter bundle. A fresh instance is handed to every tick;
    the engine never stores one.
    """
    uptake_max: float = 1.0          # u_max: uptake rate limit
    half_saturation: float = 0.2     # K: Monod half-saturation constant
    maintenance: float = 0.10        # c_maint: energy cost per tick
    yield_energy: float = 1.0        # Y_E: energy gained per unit of food
    division_threshold: float = 3.0  # E_div
    offspring_energy: float = 1.5    # E_new
    diffusion: float = 0.10          # D (stable for 0.0 - 0.25)
    replenish_rate: float = 0.01     # r: relaxation towards Fmax
    carrying_capacity: float = 1.0   # Fmax
    decay: float = 0.0               # delta: fraction lost per tick
    move_probability: float = 0.0    # Chance per tick of a random Moore step

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)

    def as_dict(self):
        return dataclasses.asdict(self)


# -- Presets --
# Each preset is a full parameter set plus the seed noise used on reset.
PRESETS = {
    'bloom': dict(
        uptake_max=1.0, half_saturation=0.2, maintenance=0.10, yield_energy=1.0,
        division_threshold=3.0, offspring_energy=1.5, diffusion=0.10,
        replenish_rate=0.01, carrying_capacity=1.0, decay=0.0, seed_noise=0.35,
    ),
    'patchy': dict(
        uptake_max=0.9, half_saturation=0.3, maintenance=0.12, yield_energy=0.95,
        division_threshold=3.4, offspring_energy=1.7, diffusion=0.04,
        replenish_rate=0.006, carrying_capacity=1.1, decay=0.0, seed_noise=0.55,
    ),
    'harsh': dict(
        uptake_max=0.8, half_saturation=0.25, maintenance=0.18, yield_energy=0.9,
        division_threshold=3.8, offspring_energy=1.6, diffusion=0.10,
        replenish_rate=0.004, carrying_capacity=0.8, decay=0.02, seed_noise=0.30,
    ),
    'fastdiff': dict(
        uptake_max=1.0, half_saturation=0.2, maintenance=0.10, yield_energy=1.0,
        division_threshold=3.0, offspring_energy=1.5, diffusion=0.25,
        replenish_rate=0.01, carrying_capacity=1.0, decay=0.0, seed_noise=0.30,
    ),
}
PRESET_ORDER = ('bloom', 'patchy', 'harsh', 'fastdiff')


def load_preset(name, move_probability=0.0):
    """Returns (Params, seed_noise) for a named preset."""
    try:
        values = dict(PRESETS[name])
    except KeyError:
        raise ValueError(
            f"unknown preset {name!r}; expected one of {', '.join(PRESET_ORDER)}"
        ) from None
    seed_noise = values.pop('seed_noise')
    return Params(move_probability=move_probability, **values), seed_noise
