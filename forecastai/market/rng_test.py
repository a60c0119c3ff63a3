import pytest

from forecastai.market.rng import DeterministicSequenceGenerator
from forecastai.market.rng import MASK
from forecastai.market.rng import seed_from_symbol


class TestSeedFromSymbol:
  """Tests for seed_from_symbol function."""

  def test_known_values(self):
    """'A' = 65, 'AB' = 65 x 31 + 66 = 2081"""
    assert seed_from_symbol('') == 0
    assert seed_from_symbol('A') == 65
    assert seed_from_symbol('AB') == 2081

  def test_stays_within_31_bits(self):
    seed = seed_from_symbol('A VERY LONG TICKER SYMBOL THAT OVERFLOWS')
    assert 0 <= seed <= MASK

  def test_distinct_symbols(self):
    assert seed_from_symbol('AAPL') != seed_from_symbol('MSFT')


class TestDeterministicSequenceGenerator:
  """Tests for DeterministicSequenceGenerator."""

  def test_first_draw(self):
    """state = (1 x 1103515245 + 12345) mod 2^31 = 1103527590"""
    rng = DeterministicSequenceGenerator(1)
    value = rng.next()

    assert rng.state == 1103527590
    assert value == pytest.approx(1103527590 / MASK)

  def test_same_seed_same_sequence(self):
    a = DeterministicSequenceGenerator(42)
    b = DeterministicSequenceGenerator(42)
    assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]

  def test_draws_in_unit_interval(self):
    rng = DeterministicSequenceGenerator(seed_from_symbol('AAPL'))
    for _ in range(1_000):
      assert 0.0 <= rng.next() <= 1.0

  def test_upper_end_inclusive(self):
    """230538014 x 1103515245 + 12345 masked to 31 bits is 2^31 - 1."""
    rng = DeterministicSequenceGenerator(230538014)

    assert rng.next() == 1.0
    assert rng.state == 0x7fffffff

  def test_next_in_range(self):
    rng = DeterministicSequenceGenerator(7)
    for _ in range(1_000):
      assert 50.0 <= rng.next_in_range(50.0, 500.0) <= 500.0

  def test_negative_seed_uses_magnitude(self):
    assert (DeterministicSequenceGenerator(-5).next() ==
            DeterministicSequenceGenerator(5).next())
