"""
Scenario transform policies.

A scenario policy maps a base DCFInputs to an adjusted copy. The base
object is never modified; every adjusted field goes through
dataclasses.replace.
"""

from abc import ABC
from abc import abstractmethod
from dataclasses import replace
import logging
from typing import TYPE_CHECKING

from forecastai.domain.types import DCFInputs
from forecastai.domain.types import DriverUnit
from forecastai.domain.types import PolicyOutput
from forecastai.domain.types import RevenueDriver

if TYPE_CHECKING:
  from forecastai.scenarios.config import ScenarioConfig

logger = logging.getLogger(__name__)


def shift_toward_bound(value: float, delta: float, bound: float) -> float:
  """
  Add delta and hold the result at bound.

  bound is a floor for negative deltas and a ceiling for positive ones.
  A zero delta leaves the value untouched.
  """
  if delta == 0:
    return value
  shifted = value + delta
  if delta < 0:
    return max(shifted, bound)
  return min(shifted, bound)


def shift_driver(
    driver: RevenueDriver,
    direction: int,
    range_fraction: float,
    multiple_step: float,
) -> RevenueDriver:
  """
  Move a driver toward its floor (direction < 0) or ceiling (> 0).

  Multiple drivers move by a flat step; the other units move by a fraction
  of their range. The result is clamped at the driver's own bound.
  """
  if direction == 0:
    return driver

  if driver.unit is DriverUnit.MULTIPLE:
    step = multiple_step
  else:
    step = (driver.max - driver.min) * range_fraction

  if direction < 0:
    value = max(driver.min, driver.value - step)
  else:
    value = min(driver.max, driver.value + step)
  return replace(driver, value=value)


class ScenarioPolicy(ABC):
  """
  Base class for scenario transforms.

  Subclasses implement compute() to return adjusted inputs.
  """

  @abstractmethod
  def compute(self, inputs: DCFInputs) -> PolicyOutput[DCFInputs]:
    """
    Compute adjusted inputs for this scenario.

    Args:
      inputs: Base assumption set

    Returns:
      PolicyOutput with adjusted DCFInputs and diagnostics
    """


class UnchangedScenario(ScenarioPolicy):
  """Base case: returns the inputs as given."""

  def compute(self, inputs: DCFInputs) -> PolicyOutput[DCFInputs]:
    return PolicyOutput(value=inputs, diag={'scenario': 'base'})


class ShiftedScenario(ScenarioPolicy):
  """
  Deterministic shift of every assumption toward one end of its range.

  After shifting, terminal growth is forced below the discount rate by at
  least config.min_terminal_spread; if it is not, it is reset to
  discount_rate - config.fallback_terminal_spread.
  """

  def __init__(self, config: 'ScenarioConfig'):
    """
    Initialize shifted scenario policy.

    Args:
      config: ScenarioConfig with deltas and bounds
    """
    self.config = config

  def compute(self, inputs: DCFInputs) -> PolicyOutput[DCFInputs]:
    """Apply the configured shifts."""
    cfg = self.config

    drivers = tuple(
        shift_driver(d, cfg.driver_direction, cfg.driver_range_fraction,
                     cfg.multiple_step) for d in inputs.revenue_drivers)

    op = inputs.operating
    operating = replace(
        op,
        operating_margin=shift_toward_bound(op.operating_margin,
                                            cfg.operating_margin_delta,
                                            cfg.operating_margin_bound),
        capex_percent=shift_toward_bound(op.capex_percent, cfg.capex_delta,
                                         cfg.capex_bound),
        working_capital_percent=shift_toward_bound(
            op.working_capital_percent, cfg.working_capital_delta,
            cfg.working_capital_bound),
    )

    val = inputs.valuation
    discount_rate = shift_toward_bound(val.discount_rate,
                                       cfg.discount_rate_delta,
                                       cfg.discount_rate_bound)
    terminal_growth = shift_toward_bound(val.terminal_growth,
                                         cfg.terminal_growth_delta,
                                         cfg.terminal_growth_bound)

    terminal_adjusted = False
    if terminal_growth >= discount_rate - cfg.min_terminal_spread:
      logger.debug('%s: terminal growth %.2f too close to discount rate %.2f',
                   cfg.name, terminal_growth, discount_rate)
      terminal_growth = discount_rate - cfg.fallback_terminal_spread
      terminal_adjusted = True

    valuation = replace(val,
                        discount_rate=discount_rate,
                        terminal_growth=terminal_growth)

    drivers_at_bound = sum(
        1 for d in drivers
        if (cfg.driver_direction < 0 and d.value == d.min) or
        (cfg.driver_direction > 0 and d.value == d.max))

    return PolicyOutput(
        value=replace(inputs,
                      revenue_drivers=drivers,
                      operating=operating,
                      valuation=valuation),
        diag={
            'scenario': cfg.name,
            'terminal_adjusted': terminal_adjusted,
            'drivers_at_bound': drivers_at_bound,
        },
    )
