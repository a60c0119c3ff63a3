"""Deterministic simulated market data."""

from forecastai.market.rng import DeterministicSequenceGenerator
from forecastai.market.rng import seed_from_symbol
from forecastai.market.simulator import current_price
from forecastai.market.simulator import day_change
from forecastai.market.simulator import day_high_low
from forecastai.market.simulator import price_series
from forecastai.market.simulator import quote

__all__ = [
    'DeterministicSequenceGenerator',
    'seed_from_symbol',
    'current_price',
    'day_change',
    'day_high_low',
    'price_series',
    'quote',
]
