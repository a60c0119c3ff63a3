"""
Sensitivity analysis for the valuation and projection engines.

Three sweeps:
  return_grid: 5x5 annualized returns over revenue CAGR and exit multiple
    offsets, computed with engine.forecast
  SensitivityAnalyzer.one_way: intrinsic value and upside at five offsets
    of one valuation variable
  SensitivityAnalyzer.two_way: 5x5 intrinsic values over two of
    {discount_rate, operating_margin}

The valuation sweeps call engine.dcf.intrinsic_value_for, the same formula
evaluate() uses, so the zero-offset cell always equals the live value.

CLI Usage:
  python -m forecastai.analysis.sensitivity --mode grid --horizon 5
  python -m forecastai.analysis.sensitivity --mode oneway \\
      --variable discount_rate --inputs inputs.json
  python -m forecastai.analysis.sensitivity --mode twoway \\
      --x discount_rate --y operating_margin
"""

import argparse
from collections.abc import Sequence
from dataclasses import replace
from enum import Enum
import json
import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from forecastai.domain.types import DCFInputs
from forecastai.domain.types import ForecastAssumptions
from forecastai.domain.types import OneWaySensitivity
from forecastai.domain.types import OperatingAssumptions
from forecastai.domain.types import SensitivityResult
from forecastai.domain.types import ValuationAssumptions
from forecastai.engine.dcf import compute_revenue_index
from forecastai.engine.dcf import compute_upside_percent
from forecastai.engine.dcf import intrinsic_value_for
from forecastai.engine.forecast import forecast
from forecastai.run import load_inputs

logger = logging.getLogger(__name__)

CAGR_OFFSETS = (-0.02, -0.01, 0.0, 0.01, 0.02)
MULTIPLE_OFFSETS = (-2.0, -1.0, 0.0, 1.0, 2.0)
MIN_EXIT_MULTIPLE = 0.1

ONE_WAY_OFFSETS = (-20.0, -10.0, 0.0, 10.0, 20.0)
TWO_WAY_OFFSETS = (-2.0, -1.0, 0.0, 1.0, 2.0)

# One-way rate offsets are in tenths of a point (-20 -> -2.0pts).
RATE_OFFSET_SCALE = 10.0
# Two-way margin offsets are doubled (-2 -> -4pts).
MARGIN_GRID_SCALE = 2.0


class SensitivityVariable(str, Enum):
  REVENUE_DRIVER = 'revenue_driver'
  OPERATING_MARGIN = 'operating_margin'
  DISCOUNT_RATE = 'discount_rate'
  TERMINAL_GROWTH = 'terminal_growth'


class GridVariable(str, Enum):
  DISCOUNT_RATE = 'discount_rate'
  OPERATING_MARGIN = 'operating_margin'


def return_grid(
    assumptions: ForecastAssumptions,
    horizon_years: int = 5,
    cagr_offsets: Sequence[float] = CAGR_OFFSETS,
    multiple_offsets: Sequence[float] = MULTIPLE_OFFSETS,
) -> SensitivityResult:
  """
  Annualized return at horizon_years across CAGR x exit multiple offsets.

  Args:
    assumptions: Base ForecastAssumptions
    horizon_years: Horizon whose annualized return fills each cell
    cagr_offsets: Offsets added to revenue_cagr (rows)
    multiple_offsets: Offsets added to exit_multiple (columns); the
      multiple used for projection is floored at 0.1

  Returns:
    SensitivityResult with rows = CAGR values, columns = multiple values

  Raises:
    ValueError: If either offset list is empty
  """
  if not cagr_offsets:
    raise ValueError('cagr_offsets cannot be empty')
  if not multiple_offsets:
    raise ValueError('multiple_offsets cannot be empty')

  cagr_values = tuple(assumptions.revenue_cagr + o for o in cagr_offsets)
  multiple_values = tuple(
      assumptions.exit_multiple + o for o in multiple_offsets)

  grid = []
  for cagr in cagr_values:
    row = []
    for multiple in multiple_values:
      cell_inputs = replace(assumptions,
                            revenue_cagr=cagr,
                            exit_multiple=max(multiple, MIN_EXIT_MULTIPLE),
                            horizon_years=horizon_years)
      result = forecast(cell_inputs, [horizon_years])
      row.append(result.returns_by_horizon[0].annualized_return)
    grid.append(tuple(row))

  return SensitivityResult(
      grid=tuple(grid),
      row_axis='revenue_cagr',
      row_values=cagr_values,
      column_axis='exit_multiple',
      column_values=multiple_values,
  )


class SensitivityAnalyzer:
  """
  Sweep valuation variables around a base assumption set.

  The analyzer keeps its own copy of the inputs and derives the base
  revenue index once; sweeps never modify either.
  """

  def __init__(self, inputs: DCFInputs):
    """
    Initialize sensitivity analyzer.

    Args:
      inputs: Base DCFInputs
    """
    self.inputs = inputs
    self.revenue_index = compute_revenue_index(inputs.revenue_drivers)

    logger.debug('Initialized SensitivityAnalyzer')
    logger.debug('  Revenue index: %.2f', self.revenue_index)
    logger.debug('  Operating margin: %.2f%%',
                 inputs.operating.operating_margin)
    logger.debug('  Discount rate: %.2f%%', inputs.valuation.discount_rate)
    logger.debug('  Terminal growth: %.2f%%', inputs.valuation.terminal_growth)

  def _one_way_value(
      self,
      variable: SensitivityVariable,
      offset: float,
  ) -> float:
    revenue_index = self.revenue_index
    operating = self.inputs.operating
    valuation = self.inputs.valuation

    if variable is SensitivityVariable.REVENUE_DRIVER:
      revenue_index = self.revenue_index * (1.0 + offset / 100.0)
    elif variable is SensitivityVariable.OPERATING_MARGIN:
      operating = replace(operating,
                          operating_margin=operating.operating_margin *
                          (1.0 + offset / 100.0))
    elif variable is SensitivityVariable.DISCOUNT_RATE:
      valuation = replace(valuation,
                          discount_rate=valuation.discount_rate +
                          offset / RATE_OFFSET_SCALE)
    else:
      valuation = replace(valuation,
                          terminal_growth=valuation.terminal_growth +
                          offset / RATE_OFFSET_SCALE)

    return intrinsic_value_for(revenue_index, operating, valuation)

  def one_way(
      self,
      variable: Union[SensitivityVariable, str],
      offsets: Sequence[float] = ONE_WAY_OFFSETS,
  ) -> OneWaySensitivity:
    """
    Intrinsic value and upside at each offset of one variable.

    revenue_driver and operating_margin offsets are relative percents
    (+10 -> x1.10); discount_rate and terminal_growth offsets are tenths of
    a point (+10 -> +1.0pt).

    Args:
      variable: SensitivityVariable or its string value
      offsets: Offsets to evaluate

    Returns:
      OneWaySensitivity

    Raises:
      ValueError: If the variable is unknown or offsets is empty
    """
    variable = SensitivityVariable(variable)
    if not offsets:
      raise ValueError('offsets cannot be empty')

    values = tuple(self._one_way_value(variable, o) for o in offsets)
    upsides = tuple(
        compute_upside_percent(v, self.inputs.current_price) for v in values)

    logger.info('One-way sensitivity on %s: %d points', variable.value,
                len(offsets))
    return OneWaySensitivity(
        variable=variable.value,
        offsets=tuple(offsets),
        intrinsic_values=values,
        upside_percents=upsides,
    )

  def _apply_grid_offset(
      self,
      variable: GridVariable,
      offset: float,
      operating: OperatingAssumptions,
      valuation: ValuationAssumptions,
  ) -> tuple[OperatingAssumptions, ValuationAssumptions]:
    if variable is GridVariable.DISCOUNT_RATE:
      valuation = replace(valuation,
                          discount_rate=self.inputs.valuation.discount_rate +
                          offset)
    else:
      operating = replace(
          operating,
          operating_margin=self.inputs.operating.operating_margin +
          offset * MARGIN_GRID_SCALE)
    return operating, valuation

  def _axis_value(self, variable: GridVariable, offset: float) -> float:
    if variable is GridVariable.DISCOUNT_RATE:
      return self.inputs.valuation.discount_rate + offset
    return self.inputs.operating.operating_margin + offset * MARGIN_GRID_SCALE

  def two_way(
      self,
      x_variable: Union[GridVariable, str] = GridVariable.DISCOUNT_RATE,
      y_variable: Union[GridVariable, str] = GridVariable.OPERATING_MARGIN,
      offsets: Sequence[float] = TWO_WAY_OFFSETS,
  ) -> SensitivityResult:
    """
    Intrinsic value grid over two variables.

    Discount rate offsets are points; operating margin offsets are doubled
    before being added. The x offset is applied first, then the y offset,
    so picking the same variable on both axes leaves only y effective.

    Args:
      x_variable: Column variable
      y_variable: Row variable
      offsets: Offsets used on both axes

    Returns:
      SensitivityResult with rows = y values, columns = x values

    Raises:
      ValueError: If a variable is unknown or offsets is empty
    """
    x_variable = GridVariable(x_variable)
    y_variable = GridVariable(y_variable)
    if not offsets:
      raise ValueError('offsets cannot be empty')

    grid = []
    for y_offset in offsets:
      row = []
      for x_offset in offsets:
        operating, valuation = self._apply_grid_offset(
            x_variable, x_offset, self.inputs.operating, self.inputs.valuation)
        operating, valuation = self._apply_grid_offset(
            y_variable, y_offset, operating, valuation)
        row.append(
            intrinsic_value_for(self.revenue_index, operating, valuation))
      grid.append(tuple(row))

    logger.info('Two-way sensitivity: %s x %s (%d x %d)', y_variable.value,
                x_variable.value, len(offsets), len(offsets))
    return SensitivityResult(
        grid=tuple(grid),
        row_axis=y_variable.value,
        row_values=tuple(self._axis_value(y_variable, o) for o in offsets),
        column_axis=x_variable.value,
        column_values=tuple(self._axis_value(x_variable, o) for o in offsets),
    )


def load_forecast_assumptions(path: Optional[Path]) -> ForecastAssumptions:
  """Load ForecastAssumptions from JSON, or the defaults if path is None."""
  if path is None:
    return ForecastAssumptions.default()
  if not path.exists():
    raise FileNotFoundError(f'Assumptions file not found: {path}')
  with open(path, 'r', encoding='utf-8') as f:
    return ForecastAssumptions.from_dict(json.load(f))


def format_table(table: pd.DataFrame, as_percent: bool = False) -> str:
  """Render a sensitivity table as percents (return grid) or prices."""
  if as_percent:
    return table.to_string(float_format=lambda x: f'{x:.1%}')
  return table.to_string(float_format=lambda x: f'{x:.2f}')


def main() -> None:
  """CLI entrypoint for sensitivity analysis."""
  parser = argparse.ArgumentParser(
      description='Valuation Sensitivity Analysis',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  # Annualized return grid for the default projection
  python -m forecastai.analysis.sensitivity --mode grid --horizon 5

  # One variable, custom inputs
  python -m forecastai.analysis.sensitivity --mode oneway \\
      --variable terminal_growth --inputs inputs.json

  # Two variables, saved to CSV
  python -m forecastai.analysis.sensitivity --mode twoway \\
      --x discount_rate --y operating_margin --output grid.csv
      """)

  parser.add_argument('--mode',
                      choices=['grid', 'oneway', 'twoway'],
                      default='grid',
                      help='Sweep to run (default: grid)')
  parser.add_argument('--inputs',
                      type=Path,
                      help='DCFInputs JSON for oneway/twoway (optional)')
  parser.add_argument('--forecast',
                      type=Path,
                      help='ForecastAssumptions JSON for grid (optional)')
  parser.add_argument('--horizon',
                      type=int,
                      default=5,
                      help='Horizon in years for grid (default: 5)')
  parser.add_argument('--variable',
                      choices=[v.value for v in SensitivityVariable],
                      default=SensitivityVariable.DISCOUNT_RATE.value,
                      help='Variable for oneway')
  parser.add_argument('--x',
                      choices=[v.value for v in GridVariable],
                      default=GridVariable.DISCOUNT_RATE.value,
                      help='Column variable for twoway')
  parser.add_argument('--y',
                      choices=[v.value for v in GridVariable],
                      default=GridVariable.OPERATING_MARGIN.value,
                      help='Row variable for twoway')
  parser.add_argument('--output', type=Path, help='Output CSV path (optional)')
  parser.add_argument('--verbose',
                      '-v',
                      action='store_true',
                      help='Verbose output')

  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(asctime)s [%(levelname)s] %(message)s',
      datefmt='%Y-%m-%d %H:%M:%S',
  )

  if args.mode == 'grid':
    assumptions = load_forecast_assumptions(args.forecast)
    result = return_grid(assumptions, horizon_years=args.horizon)
    table = result.to_frame()
    title = f'Annualized Return at {args.horizon}Y'
    as_percent = True
  else:
    analyzer = SensitivityAnalyzer(load_inputs(args.inputs))
    if args.mode == 'oneway':
      table = analyzer.one_way(args.variable).to_frame()
      title = f'Intrinsic Value by {args.variable}'
    else:
      table = analyzer.two_way(args.x, args.y).to_frame()
      title = 'Intrinsic Value Grid ($)'
    as_percent = False

  print('\n' + '=' * 80)
  print(title)
  print('=' * 80)
  print(format_table(table, as_percent))
  print('=' * 80 + '\n')

  if args.output:
    table.to_csv(args.output)
    logger.info('Saved to: %s', args.output)


if __name__ == '__main__':
  main()
