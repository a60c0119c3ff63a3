'''Valuation and projection engines with pure math functions.'''

from forecastai.engine.dcf import (
    aggressiveness_score,
    confidence_label,
    evaluate,
    intrinsic_value_for,
    sparkline_data,
)
from forecastai.engine.forecast import forecast
from forecastai.engine.preview import preview

__all__ = [
    'aggressiveness_score',
    'confidence_label',
    'evaluate',
    'forecast',
    'intrinsic_value_for',
    'preview',
    'sparkline_data',
]
