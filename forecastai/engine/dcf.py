"""
Index-based valuation engine.

Pure functions that turn an assumption set into indexed outputs. No I/O and
no shared state: every call builds its result from its arguments alone, so
the functions can be re-run on every edit and called from any
thread.

This is not a period-by-period DCF. Cash flows are represented by a revenue
index (base 100) times an FCF margin, and the value is two closed-form
present-value factors applied to that index. Every output is clamped to a
documented band instead of failing.

Key functions:
  evaluate: Main entry point, DCFInputs -> DCFOutputs
  intrinsic_value_for: Canonical revenue-index -> intrinsic value formula
  aggressiveness_score: 0-100 position of the assumptions in their ranges
  confidence_label: Score label and alignment with an investment style
  sparkline_data: Six illustrative points for revenue or intrinsic value
"""

from collections.abc import Sequence
from typing import Optional

from forecastai.domain.types import ConfidenceLabel
from forecastai.domain.types import DCFInputs
from forecastai.domain.types import DCFOutputs
from forecastai.domain.types import DriverUnit
from forecastai.domain.types import InvestmentStyle
from forecastai.domain.types import OperatingAssumptions
from forecastai.domain.types import RevenueDriver
from forecastai.domain.types import SparklineMetric
from forecastai.domain.types import ValuationAssumptions

REVENUE_INDEX_BOUNDS = (30.0, 300.0)
FCF_MARGIN_BOUNDS = (0.0, 0.35)
FCF_INDEX_BOUNDS = (0.0, 120.0)
INTRINSIC_VALUE_BOUNDS = (20.0, 800.0)
CAGR_BOUNDS = (-50.0, 50.0)

BASE_SCALE = 1.2
FORECAST_WEIGHT = 0.9
TERMINAL_WEIGHT = 0.6
MIN_RATE = 0.01

# Not derived from forecast_pv / terminal_pv; see DCFOutputs.terminal_pv.
TERMINAL_SHARE_PERCENT = 65.0

SPARKLINE_POINTS = 6

STYLE_TARGETS = {
    InvestmentStyle.CONSERVATIVE: 25.0,
    InvestmentStyle.BASE: 50.0,
    InvestmentStyle.AGGRESSIVE: 75.0,
}
ALIGNMENT_TOLERANCE = 12.0


def clamp(value: float, lower: float, upper: float) -> float:
  return min(max(value, lower), upper)


def revenue_multiplier(driver: RevenueDriver) -> Optional[float]:
  """
  Revenue multiplier contributed by one driver.

  Args:
    driver: Revenue driver

  Returns:
    percent -> 1 + value/100, multiple -> value, number/currency -> a
    0.8-1.2 scale over the driver's range. None for number/currency
    drivers with an empty range (the driver is skipped).
  """
  if driver.unit is DriverUnit.PERCENT:
    return 1.0 + driver.value / 100.0
  if driver.unit is DriverUnit.MULTIPLE:
    return driver.value
  span = driver.max - driver.min
  if span <= 0:
    return None
  position = (driver.value - driver.min) / span
  return 0.8 + position * 0.4


def compute_revenue_index(drivers: Sequence[RevenueDriver]) -> float:
  """
  Revenue index (base 100) from the revenue-impacting drivers.

  Returns 100 for an empty driver list; otherwise 100 x the product of the
  driver multipliers, clamped to [30, 300].
  """
  if not drivers:
    return 100.0

  total = 1.0
  for driver in drivers:
    if not driver.impacts_revenue:
      continue
    multiplier = revenue_multiplier(driver)
    if multiplier is None:
      continue
    total *= multiplier

  return clamp(100.0 * total, *REVENUE_INDEX_BOUNDS)


def compute_fcf_margin(operating: OperatingAssumptions) -> float:
  """
  FCF margin as a fraction.

  after-tax operating margin minus capex and working capital (all in
  percent points), floored at zero, then clamped to [0, 0.35].
  """
  after_tax = operating.operating_margin * (1.0 - operating.tax_rate / 100.0)
  raw = max(0.0, after_tax - operating.capex_percent -
            operating.working_capital_percent) / 100.0
  return clamp(raw, *FCF_MARGIN_BOUNDS)


def compute_fcf_index(revenue_index: float, fcf_margin: float) -> float:
  return clamp(revenue_index * fcf_margin, *FCF_INDEX_BOUNDS)


def compute_present_values(
    fcf_index: float,
    valuation: ValuationAssumptions,
) -> tuple[float, float]:
  """
  Unclamped forecast and terminal components.

  forecast_pv = fcf_index x 1.2 x 0.9 / max(0.01, r)
  terminal_pv = fcf_index x 1.2 x 0.6 / max(0.01, r - g)

  r and g are the percent-scale discount rate and terminal growth divided
  by 100. An inverted pair (g >= r) hits the 0.01 floor rather than going
  negative.

  Returns:
    Tuple of (forecast_pv, terminal_pv)
  """
  pv_factor = 1.0 / max(MIN_RATE, valuation.discount_rate / 100.0)
  terminal_factor = 1.0 / max(
      MIN_RATE, (valuation.discount_rate - valuation.terminal_growth) / 100.0)

  forecast_pv = fcf_index * BASE_SCALE * FORECAST_WEIGHT * pv_factor
  terminal_pv = fcf_index * BASE_SCALE * TERMINAL_WEIGHT * terminal_factor
  return forecast_pv, terminal_pv


def compute_intrinsic_value(
    fcf_index: float,
    valuation: ValuationAssumptions,
) -> float:
  """Intrinsic value per share, clamped to [20, 800]."""
  forecast_pv, terminal_pv = compute_present_values(fcf_index, valuation)
  return clamp(forecast_pv + terminal_pv, *INTRINSIC_VALUE_BOUNDS)


def intrinsic_value_for(
    revenue_index: float,
    operating: OperatingAssumptions,
    valuation: ValuationAssumptions,
) -> float:
  """
  Canonical intrinsic value for an already-computed revenue index.

  evaluate() and every sensitivity sweep go through this function, so a
  sweep cell at zero offset always matches the live valuation.
  """
  fcf_index = compute_fcf_index(revenue_index, compute_fcf_margin(operating))
  return compute_intrinsic_value(fcf_index, valuation)


def compute_upside_percent(intrinsic: float, current: float) -> float:
  if current <= 0:
    return 0.0
  return (intrinsic - current) / current * 100.0


def compute_cagr_percent(intrinsic: float, current: float, years: int) -> float:
  """Annualized percent return from current to intrinsic, [-50, 50]."""
  if current <= 0 or years <= 0:
    return 0.0
  cagr = ((intrinsic / current)**(1.0 / years) - 1.0) * 100.0
  return clamp(cagr, *CAGR_BOUNDS)


def evaluate(inputs: DCFInputs) -> DCFOutputs:
  """
  Evaluate an assumption set.

  Total function: degenerate inputs (empty drivers, non-positive price or
  horizon, inverted rates) resolve to documented defaults.

  Args:
    inputs: DCFInputs

  Returns:
    DCFOutputs with clamped indices, value, upside and CAGR
  """
  revenue_index = compute_revenue_index(inputs.revenue_drivers)
  fcf_margin = compute_fcf_margin(inputs.operating)
  fcf_index = compute_fcf_index(revenue_index, fcf_margin)

  forecast_pv, terminal_pv = compute_present_values(fcf_index,
                                                    inputs.valuation)
  intrinsic = clamp(forecast_pv + terminal_pv, *INTRINSIC_VALUE_BOUNDS)

  return DCFOutputs(
      revenue_index=revenue_index,
      fcf_margin=fcf_margin,
      fcf_index=fcf_index,
      intrinsic_value=intrinsic,
      upside_percent=compute_upside_percent(intrinsic, inputs.current_price),
      cagr_percent=compute_cagr_percent(intrinsic, inputs.current_price,
                                        inputs.horizon_years),
      terminal_share_percent=TERMINAL_SHARE_PERCENT,
      forecast_pv=forecast_pv,
      terminal_pv=terminal_pv,
  )


def aggressiveness_score(inputs: DCFInputs) -> float:
  """
  Score how optimistic an assumption set is, 0-100.

  Weights: 45% revenue drivers (mean position in their ranges, 0.5 if no
  driver qualifies), 30% operating margin within 5-40%, 25% valuation
  (inverted discount rate within 5-20% averaged with terminal growth
  within 1-4%).
  """
  positions = [(d.value - d.min) / (d.max - d.min)
               for d in inputs.revenue_drivers
               if d.impacts_revenue and d.max - d.min > 0]
  revenue_avg = sum(positions) / len(positions) if positions else 0.5

  margin_pos = clamp((inputs.operating.operating_margin - 5.0) / 35.0, 0.0,
                     1.0)

  # Lower discount rate is more aggressive.
  discount_pos = clamp(1.0 - (inputs.valuation.discount_rate - 5.0) / 15.0,
                       0.0, 1.0)
  terminal_pos = clamp((inputs.valuation.terminal_growth - 1.0) / 3.0, 0.0,
                       1.0)
  valuation_pos = (discount_pos + terminal_pos) / 2.0

  score = 100.0 * (0.45 * revenue_avg + 0.30 * margin_pos +
                   0.25 * valuation_pos)
  return clamp(score, 0.0, 100.0)


def confidence_label(
    score: float,
    target_style: InvestmentStyle,
) -> ConfidenceLabel:
  """
  Label a score and compare it with the style's target.

  Conservative up to 33, Balanced up to 66, Aggressive above. Aligned when
  within 12 points of the target (25/50/75).
  """
  if score <= 33:
    label = 'Conservative'
  elif score <= 66:
    label = 'Balanced'
  else:
    label = 'Aggressive'

  target = STYLE_TARGETS[InvestmentStyle(target_style)]
  return ConfidenceLabel(
      label=label,
      is_aligned=abs(score - target) <= ALIGNMENT_TOLERANCE,
      target_score=target,
  )


def _progress_steps(points: int = SPARKLINE_POINTS) -> list[float]:
  return [i / (points - 1) for i in range(points)]


def sparkline_data(metric: SparklineMetric, inputs: DCFInputs) -> list[float]:
  """
  Six illustrative points for a sparkline.

  Revenue: 100 -> revenue index, eased with progress^0.9.
  Intrinsic: current price -> intrinsic value, eased with
  progress^(1 + r/2) so higher discount rates bend the curve more.

  These are display curves, not forecasts.
  """
  metric = SparklineMetric(metric)
  if metric is SparklineMetric.REVENUE:
    start = 100.0
    end = compute_revenue_index(inputs.revenue_drivers)
    return [start + (end - start) * p**0.9 for p in _progress_steps()]

  start = inputs.current_price
  end = evaluate(inputs).intrinsic_value
  exponent = 1.0 + inputs.valuation.discount_rate / 100.0 * 0.5
  return [start + (end - start) * p**exponent for p in _progress_steps()]
