"""
Simulated market data keyed by ticker symbol.

Every quantity comes from its own DeterministicSequenceGenerator seeded by
the symbol hash plus a fixed offset, so quantities are independent of each
other and of call order:

  current_price   seed
  day_change      seed + 1000
  day_high_low    seed + 2000
  price_series    seed + hash(range value)

Prices are rounded half away from zero to cents.
"""

import math
from typing import Union

import pandas as pd

from forecastai.domain.types import DayChange
from forecastai.domain.types import DayHighLow
from forecastai.domain.types import PriceRange
from forecastai.domain.types import Quote
from forecastai.market.rng import DeterministicSequenceGenerator
from forecastai.market.rng import seed_from_symbol

PRICE_BOUNDS = (50.0, 500.0)
DAY_CHANGE_PERCENT_BOUNDS = (-5.0, 5.0)
HIGH_LOW_PERCENT_BOUNDS = (0.5, 3.0)
SERIES_VOLATILITY = 0.02
SERIES_PRICE_BAND = (0.5, 1.5)

DAY_CHANGE_SEED_OFFSET = 1000
HIGH_LOW_SEED_OFFSET = 2000


def round_cents(value: float) -> float:
  return math.copysign(math.floor(abs(value) * 100.0 + 0.5), value) / 100.0


def current_price(symbol: str) -> float:
  """Simulated price in [50, 500], rounded to cents."""
  rng = DeterministicSequenceGenerator(seed_from_symbol(symbol))
  return round_cents(rng.next_in_range(*PRICE_BOUNDS))


def day_change(symbol: str) -> DayChange:
  """Simulated day change: percent in [-5, 5] and absolute amount."""
  rng = DeterministicSequenceGenerator(
      seed_from_symbol(symbol) + DAY_CHANGE_SEED_OFFSET)
  price = current_price(symbol)

  percent = rng.next_in_range(*DAY_CHANGE_PERCENT_BOUNDS)
  absolute = price * percent / 100.0
  return DayChange(absolute=round_cents(absolute), percent=round_cents(percent))


def previous_close(symbol: str) -> float:
  return current_price(symbol) - day_change(symbol).absolute


def day_high_low(symbol: str) -> DayHighLow:
  """Intraday high/low 0.5-3% above/below the current price."""
  rng = DeterministicSequenceGenerator(
      seed_from_symbol(symbol) + HIGH_LOW_SEED_OFFSET)
  price = current_price(symbol)

  high_percent = rng.next_in_range(*HIGH_LOW_PERCENT_BOUNDS)
  low_percent = rng.next_in_range(*HIGH_LOW_PERCENT_BOUNDS)
  return DayHighLow(
      high=round_cents(price * (1.0 + high_percent / 100.0)),
      low=round_cents(price * (1.0 - low_percent / 100.0)),
  )


def price_series(
    symbol: str,
    price_range: Union[PriceRange, str],
) -> list[float]:
  """
  Simulated price path ending exactly at current_price(symbol).

  Starts at the previous close and takes price_range.point_count steps.
  Each step adds a drift that closes the remaining gap to the current
  price over the remaining steps, plus noise within +/-2% of the current
  price, and holds the price within 50%-150% of the current price.

  Args:
    symbol: Ticker symbol
    price_range: PriceRange or its value ('1D', '1W', '1M', '1Y')

  Returns:
    List of prices rounded to cents; the last one is the current price
  """
  price_range = PriceRange(price_range)
  rng = DeterministicSequenceGenerator(
      seed_from_symbol(symbol) + seed_from_symbol(price_range.value))

  current = current_price(symbol)
  count = price_range.point_count
  volatility = current * SERIES_VOLATILITY
  floor = current * SERIES_PRICE_BAND[0]
  ceiling = current * SERIES_PRICE_BAND[1]

  price = current - day_change(symbol).absolute
  series = []
  for i in range(count):
    drift = (current - price) / (count - i)
    noise = rng.next_in_range(-volatility, volatility)
    price = min(max(price + drift + noise, floor), ceiling)
    series.append(round_cents(price))

  if series:
    series[-1] = current
  return series


def quote(symbol: str) -> Quote:
  """All scalar quote fields for a symbol."""
  return Quote(
      symbol=symbol,
      current_price=current_price(symbol),
      day_change=day_change(symbol),
      previous_close=previous_close(symbol),
      day_high_low=day_high_low(symbol),
  )


def series_frame(
    symbols: list[str],
    price_range: Union[PriceRange, str],
) -> pd.DataFrame:
  """Price series for several symbols, one column per symbol."""
  df = pd.DataFrame({s: price_series(s, price_range) for s in symbols})
  df.index.name = 'step'
  return df
