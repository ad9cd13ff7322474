"""Deterministic pseudo-random stream for generation calls.

Park-Miller "minimal standard" Lehmer generator. The recurrence and seed
normalization are fixed: changing either breaks reproducibility of every
previously generated object.
"""

MODULUS = 2147483647
MULTIPLIER = 16807


def seed_state(value: int) -> int:
    """Normalize an integer seed into the generator state range [1, MODULUS - 1].

    The remainder keeps the sign of the seed (truncated division), so zero and
    negative seeds are wrapped by adding ``MODULUS - 1``.
    """
    value = int(value)
    state = abs(value) % MODULUS
    if value < 0:
        state = -state
    if state <= 0:
        state += MODULUS - 1
    return state


def next_state(state: int) -> tuple[float, int]:
    """Advance the state once.

    Returns:
        Tuple of (uniform value in [0, 1), new state)
    """
    state = (state * MULTIPLIER) % MODULUS
    return (state - 1) / (MODULUS - 1), state


class MinimalStandardRandom:
    """Seeded uniform stream with a small ``random.Random``-like surface.

    One instance is owned by exactly one generation call and is never shared
    between threads.
    """

    def __init__(self, seed: int = 0):
        self.seed = int(seed)
        self._state = seed_state(self.seed)
        self.draws = 0

    @property
    def state(self) -> int:
        return self._state

    def random(self) -> float:
        value, self._state = next_state(self._state)
        self.draws += 1
        return value

    def uniform(self, low: float, high: float) -> float:
        return low + self.random() * (high - low)

    def index(self, size: int) -> int:
        """Uniform index into a sequence of ``size`` items."""
        if size <= 0:
            raise ValueError("Cannot pick an index from an empty sequence")
        return int(self.random() * size)

    def choice(self, items):
        return items[self.index(len(items))]

    def __repr__(self) -> str:
        return f"MinimalStandardRandom(seed={self.seed}, state={self._state})"


def derive_seed(rng: MinimalStandardRandom) -> int:
    """Draw a child seed in [1, MODULUS - 1] for a sub-generation."""
    return 1 + rng.index(MODULUS - 1)
