"""Domain types for the forecast engine."""

from forecastai.domain.types import DCFInputs
from forecastai.domain.types import DCFOutputs
from forecastai.domain.types import DriverUnit
from forecastai.domain.types import ForecastAssumptions
from forecastai.domain.types import ForecastResult
from forecastai.domain.types import OperatingAssumptions
from forecastai.domain.types import PolicyOutput
from forecastai.domain.types import PriceRange
from forecastai.domain.types import RevenueDriver
from forecastai.domain.types import ScenarioPreset
from forecastai.domain.types import SensitivityResult
from forecastai.domain.types import ValuationAssumptions

__all__ = [
    'DCFInputs',
    'DCFOutputs',
    'DriverUnit',
    'ForecastAssumptions',
    'ForecastResult',
    'OperatingAssumptions',
    'PolicyOutput',
    'PriceRange',
    'RevenueDriver',
    'ScenarioPreset',
    'SensitivityResult',
    'ValuationAssumptions',
]
