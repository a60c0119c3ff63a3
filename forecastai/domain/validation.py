"""
Boundary validation for assumption sets.

The engine never rejects inputs; every combination evaluates to a defined
number. These checks let callers flag questionable assumption sets before
showing results. They return CheckResult lists and never raise.
"""
from dataclasses import dataclass

from forecastai.domain.types import DCFInputs
from forecastai.domain.types import ForecastAssumptions


@dataclass(frozen=True)
class CheckResult:
  """Result of a single validation check."""

  name: str
  ok: bool
  details: str

  def __str__(self) -> str:
    status = '✓' if self.ok else '✗'
    return f'{status} {self.name}: {self.details}'


def pass_result(name: str, details: str) -> CheckResult:
  """Create a passing CheckResult."""
  return CheckResult(name=name, ok=True, details=details)


def fail_result(name: str, details: str) -> CheckResult:
  """Create a failing CheckResult."""
  return CheckResult(name=name, ok=False, details=details)


def is_valid_growth_rate(value: float) -> bool:
  return -0.5 <= value <= 1.0


def is_valid_margin(value: float) -> bool:
  return 0 <= value <= 0.8


def is_valid_horizon(value: int) -> bool:
  return 1 <= value <= 30


def validate_inputs(inputs: DCFInputs) -> list[CheckResult]:
  """
  Check a DCFInputs for inconsistent ranges and degenerate values.

  Checks:
  1. Each driver has min < max and min <= value <= max
  2. terminal_growth sits at least 0.5pt below discount_rate
  3. horizon_years > 0
  4. current_price > 0
  """
  results: list[CheckResult] = []

  bad_drivers = []
  for driver in inputs.revenue_drivers:
    if driver.min >= driver.max:
      bad_drivers.append(f'{driver.title}: empty range '
                         f'[{driver.min}, {driver.max}]')
    elif not driver.min <= driver.value <= driver.max:
      bad_drivers.append(f'{driver.title}: {driver.value} outside '
                         f'[{driver.min}, {driver.max}]')
  if bad_drivers:
    results.append(fail_result('revenue_drivers', '; '.join(bad_drivers)))
  else:
    results.append(
        pass_result('revenue_drivers',
                    f'{len(inputs.revenue_drivers)} drivers within range'))

  spread = inputs.valuation.discount_rate - inputs.valuation.terminal_growth
  if spread < 0.5:
    results.append(
        fail_result(
            'terminal_spread',
            f'terminal growth {inputs.valuation.terminal_growth:.2f} is within '
            f'0.5pt of discount rate {inputs.valuation.discount_rate:.2f}'))
  else:
    results.append(pass_result('terminal_spread', f'spread {spread:.2f}pt'))

  if inputs.horizon_years <= 0:
    results.append(
        fail_result('horizon_years',
                    f'horizon must be positive, got {inputs.horizon_years}'))
  else:
    results.append(
        pass_result('horizon_years', f'{inputs.horizon_years} years'))

  if inputs.current_price <= 0:
    results.append(
        fail_result('current_price',
                    f'price must be positive, got {inputs.current_price}'))
  else:
    results.append(
        pass_result('current_price', f'{inputs.current_price:.2f}'))

  return results


def validate_forecast_assumptions(
    assumptions: ForecastAssumptions) -> list[CheckResult]:
  """Check revenue growth, margin and horizon against their sane bands."""
  results: list[CheckResult] = []

  if is_valid_growth_rate(assumptions.revenue_cagr):
    results.append(
        pass_result('revenue_cagr', f'{assumptions.revenue_cagr:.2%}'))
  else:
    results.append(
        fail_result('revenue_cagr',
                    f'{assumptions.revenue_cagr:.2%} outside [-50%, 100%]'))

  if is_valid_margin(assumptions.operating_margin):
    results.append(
        pass_result('operating_margin', f'{assumptions.operating_margin:.2%}'))
  else:
    results.append(
        fail_result('operating_margin',
                    f'{assumptions.operating_margin:.2%} outside [0%, 80%]'))

  if is_valid_horizon(assumptions.horizon_years):
    results.append(
        pass_result('horizon_years', f'{assumptions.horizon_years} years'))
  else:
    results.append(
        fail_result('horizon_years',
                    f'{assumptions.horizon_years} outside [1, 30]'))

  return results
