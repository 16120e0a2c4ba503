"""
Deterministic random source for the simulation.

Seeds are arbitrary strings folded into 32 bits with FNV-1a; the stream
itself is mulberry32, a counter-based generator. Every stochastic choice in
the engine draws from one of these, so a seed string fully determines a run.
"""

MASK32 = 0xFFFFFFFF
FNV_OFFSET = 2166136261
FNV_PRIME = 16777619
GOLDEN_STEP = 0x6D2B79F5


def _imul(a, b):
    """32-bit wrapping multiply."""
    return (a * b) & MASK32


def fnv1a(text):
    """Hashes a string over its UTF-16 code units into an unsigned 32-bit int."""
    data = str(text).encode('utf-16-le', 'surrogatepass')
    h = FNV_OFFSET
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = _imul(h, FNV_PRIME)
    return h


class SeededRandom:
    """
    Reproducible float stream in [0, 1).
    Owns its own state; two instances never influence each other.
    """
    def __init__(self, seed="42"):
        self.state = 0
        self.seed(seed)

    def seed(self, value):
        self.state = fnv1a(value)

    def random(self):
        # Mulberry32: additive counter, then two multiply-xorshift rounds
        self.state = (self.state + GOLDEN_STEP) & MASK32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
        return ((t ^ (t >> 14)) & MASK32) / 4294967296.0

    def choice(self, seq):
        return seq[int(self.random() * len(seq))]
