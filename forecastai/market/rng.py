"""
Deterministic pseudo-random sequences for simulated market data.

A 31-bit linear congruential generator (glibc constants) seeded from a
ticker symbol. Each generator is a local object: create one per call and
discard it, so the same symbol always yields the same draws regardless of
call order or thread.
"""

MULTIPLIER = 1103515245
INCREMENT = 12345
MASK = 0x7fffffff


def seed_from_symbol(symbol: str) -> int:
  """
  Polynomial rolling hash of a string, kept within 31 bits.

  hash = (hash x 31 + code point) mod 2^31 over the characters.
  """
  h = 0
  for ch in symbol:
    h = (h * 31 + ord(ch)) & MASK
  return abs(h)


class DeterministicSequenceGenerator:
  """
  Seeded LCG producing reproducible uniform draws.

  Usage:
    rng = DeterministicSequenceGenerator(seed_from_symbol('AAPL'))
    price = rng.next_in_range(50.0, 500.0)
  """

  def __init__(self, seed: int):
    self._state = abs(int(seed))

  @property
  def state(self) -> int:
    return self._state

  def next(self) -> float:
    """Advance the state and return state / (2^31 - 1), a value in [0, 1]."""
    self._state = (self._state * MULTIPLIER + INCREMENT) & MASK
    return self._state / MASK

  def next_in_range(self, lower: float, upper: float) -> float:
    """Map the next draw linearly onto [lower, upper]."""
    return lower + self.next() * (upper - lower)
