'''
Driver and operating presets.

These policies reset assumptions to fixed reference points rather than
shifting them: drivers to a position inside their range, operating
assumptions to a stored set.
'''

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import replace
from typing import Optional, Tuple

from forecastai.domain.types import OperatingAssumptions
from forecastai.domain.types import PolicyOutput
from forecastai.domain.types import RevenueDriver


class DriverPreset(ABC):
  '''
  Base class for revenue driver presets.

  Subclasses implement compute() to return the full driver sequence.
  '''

  @abstractmethod
  def compute(
      self,
      drivers: Sequence[RevenueDriver],
  ) -> PolicyOutput[Tuple[RevenueDriver, ...]]:
    '''
    Compute preset driver values.

    Args:
      drivers: Current drivers (ranges are kept, values replaced)

    Returns:
      PolicyOutput with the new driver tuple
    '''


class RangePositionPreset(DriverPreset):
  '''
  Place every driver at a fixed position inside its range.

  value = min + (max - min) x position, so 0.5 is the midpoint
  (consensus), 0.25 the lower quartile and 0.75 the upper quartile.
  '''

  def __init__(self, position: float = 0.5, name: str = 'consensus'):
    '''
    Initialize range position preset.

    Args:
      position: Fraction of the range, 0 = min, 1 = max (default: 0.5)
      name: Label recorded in diagnostics
    '''
    self.position = position
    self.name = name

  def compute(
      self,
      drivers: Sequence[RevenueDriver],
  ) -> PolicyOutput[Tuple[RevenueDriver, ...]]:
    '''Return drivers moved to the configured position.'''
    moved = tuple(
        replace(d, value=d.min + (d.max - d.min) * self.position)
        for d in drivers)
    return PolicyOutput(value=moved,
                        diag={
                            'driver_preset': self.name,
                            'position': self.position,
                        })


class OperatingPreset:
  '''
  Operating assumptions preset.

  With no override the caller's base snapshot is returned unchanged
  (consensus and base); otherwise the stored override replaces it.
  '''

  def __init__(self,
               override: Optional[OperatingAssumptions] = None,
               name: str = 'base'):
    self.override = override
    self.name = name

  def compute(
      self,
      base: OperatingAssumptions,
  ) -> PolicyOutput[OperatingAssumptions]:
    value = base if self.override is None else self.override
    return PolicyOutput(value=value,
                        diag={
                            'operating_preset': self.name,
                            'overridden': self.override is not None,
                        })


BEAR_OPERATING = OperatingAssumptions(
    gross_margin=48.0,
    operating_margin=16.0,
    tax_rate=24.0,
    capex_percent=6.0,
    working_capital_percent=2.0,
)

BULL_OPERATING = OperatingAssumptions(
    gross_margin=62.0,
    operating_margin=28.0,
    tax_rate=18.0,
    capex_percent=2.5,
    working_capital_percent=0.5,
)
