'''
Valuation analysis utilities.

Note: To avoid RuntimeWarning when using -m flag, import directly:
  from forecastai.analysis.sensitivity import SensitivityAnalyzer
  from forecastai.analysis.plot_prices import plot_price_series
'''

__all__ = [
    'AssumptionChange',
    'SensitivityAnalyzer',
    'changed_fields',
    'return_grid',
]

from forecastai.analysis.drift import AssumptionChange
from forecastai.analysis.drift import changed_fields
from forecastai.analysis.sensitivity import SensitivityAnalyzer
from forecastai.analysis.sensitivity import return_grid
