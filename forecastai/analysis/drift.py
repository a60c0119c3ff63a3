"""
Change tracking between an edited assumption set and its base snapshot.

Drivers are matched by title; a driver with no counterpart in the base is
not reported. Numeric fields count as changed when they differ by more
than the tolerance.
"""

from dataclasses import dataclass
from typing import Optional

from forecastai.domain.types import DCFInputs
from forecastai.domain.types import OperatingAssumptions
from forecastai.domain.types import RevenueDriver
from forecastai.domain.types import ValuationAssumptions

DEFAULT_TOLERANCE = 1e-4

OPERATING_FIELDS = (
    ('gross_margin', 'Gross Margin'),
    ('operating_margin', 'Operating Margin'),
    ('tax_rate', 'Tax Rate'),
    ('capex_percent', 'CapEx %'),
    ('working_capital_percent', 'Working Capital %'),
)

VALUATION_FIELDS = (
    ('discount_rate', 'Discount Rate'),
    ('terminal_growth', 'Terminal Growth'),
)


@dataclass(frozen=True)
class AssumptionChange:
  """One changed assumption, formatted for display."""
  section: str
  label: str
  base_value: str
  current_value: str


def _moved(current: float, base: float, tolerance: float) -> bool:
  return abs(current - base) > tolerance


def driver_changes(
    current: tuple[RevenueDriver, ...],
    base: tuple[RevenueDriver, ...],
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[AssumptionChange]:
  base_by_title = {d.title: d for d in base}
  changes = []
  for driver in current:
    base_driver: Optional[RevenueDriver] = base_by_title.get(driver.title)
    if base_driver is None:
      continue
    if _moved(driver.value, base_driver.value, tolerance):
      changes.append(
          AssumptionChange(
              section='revenue',
              label=driver.title,
              base_value=driver.unit.format(base_driver.value),
              current_value=driver.unit.format(driver.value),
          ))
  return changes


def operating_changes(
    current: OperatingAssumptions,
    base: OperatingAssumptions,
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[AssumptionChange]:
  changes = []
  for name, label in OPERATING_FIELDS:
    cur, ref = getattr(current, name), getattr(base, name)
    if _moved(cur, ref, tolerance):
      changes.append(
          AssumptionChange('operating', label, f'{ref:.1f}%', f'{cur:.1f}%'))
  return changes


def valuation_changes(
    current: ValuationAssumptions,
    base: ValuationAssumptions,
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[AssumptionChange]:
  changes = []
  for name, label in VALUATION_FIELDS:
    cur, ref = getattr(current, name), getattr(base, name)
    if _moved(cur, ref, tolerance):
      changes.append(
          AssumptionChange('valuation', label, f'{ref:.1f}%', f'{cur:.1f}%'))
  if current.terminal_method != base.terminal_method:
    changes.append(
        AssumptionChange('valuation', 'Terminal Method',
                         base.terminal_method.value,
                         current.terminal_method.value))
  return changes


def changed_fields(
    current: DCFInputs,
    base: DCFInputs,
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[AssumptionChange]:
  """
  Every assumption that differs between current and base.

  Args:
    current: Edited assumption set
    base: Snapshot to compare against
    tolerance: Minimum absolute difference that counts as a change

  Returns:
    Changes ordered revenue drivers, operating, valuation
  """
  return (driver_changes(current.revenue_drivers, base.revenue_drivers,
                         tolerance) +
          operating_changes(current.operating, base.operating, tolerance) +
          valuation_changes(current.valuation, base.valuation, tolerance))


def has_drift(
    current: DCFInputs,
    base: DCFInputs,
    tolerance: float = DEFAULT_TOLERANCE,
) -> bool:
  return bool(changed_fields(current, base, tolerance))
