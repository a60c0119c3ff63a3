"""
Multi-year projection engine.

Projects revenue at a constant CAGR, values each year at an exit multiple
of revenue, and summarizes the implied price return for requested
horizons. Inputs are fractions (0.08 = 8%), unlike the percent-scale
DCFInputs used by engine.dcf.
"""

from collections.abc import Sequence
from typing import Optional

from forecastai.domain.types import ForecastAssumptions
from forecastai.domain.types import ForecastResult
from forecastai.domain.types import ProjectionRow
from forecastai.domain.types import ReturnSummary

MIN_PROJECTION_YEARS = 10
EPSILON = 1e-6


def project(assumptions: ForecastAssumptions,
            max_year: int) -> list[ProjectionRow]:
  """
  Build projection rows for years 0..max_year.

  Args:
    assumptions: ForecastAssumptions
    max_year: Last projected year (inclusive)

  Returns:
    List of ProjectionRow, one per year
  """
  shares = max(assumptions.shares_outstanding, EPSILON)
  rows = []
  for year in range(max_year + 1):
    revenue = assumptions.current_revenue * (1.0 +
                                             assumptions.revenue_cagr)**year
    operating_income = revenue * assumptions.operating_margin
    enterprise_value = revenue * assumptions.exit_multiple
    equity_value = enterprise_value - assumptions.net_debt
    rows.append(
        ProjectionRow(
            year=year,
            revenue=revenue,
            operating_income=operating_income,
            after_tax_operating_income=operating_income *
            (1.0 - assumptions.tax_rate),
            enterprise_value=enterprise_value,
            equity_value=equity_value,
            implied_price=equity_value / shares,
        ))
  return rows


def summarize_return(
    row: ProjectionRow,
    horizon_years: int,
    current_price: float,
) -> ReturnSummary:
  """
  Total and annualized return from current_price to the row's price.

  Negative implied prices are floored at zero so the annualized root stays
  real; a non-positive current price is floored at a small epsilon.
  """
  price = max(row.implied_price, 0.0)
  current = max(current_price, EPSILON)
  ratio = price / current
  return ReturnSummary(
      horizon_years=horizon_years,
      total_return=ratio - 1.0,
      annualized_return=ratio**(1.0 / max(horizon_years, 1)) - 1.0,
  )


def forecast(
    assumptions: ForecastAssumptions,
    horizons: Optional[Sequence[int]] = None,
) -> ForecastResult:
  """
  Project the assumptions and summarize returns per horizon.

  Projects at least 10 years, or up to the largest requested horizon.
  A negative horizon has no row and is summarized against the last row.

  Args:
    assumptions: ForecastAssumptions
    horizons: Horizons in years (default: [assumptions.horizon_years])

  Returns:
    ForecastResult with projections, sorted return summaries, and the fair
    value at the last projected year
  """
  if horizons is None:
    horizons = [assumptions.horizon_years]

  max_year = max([MIN_PROJECTION_YEARS, *horizons])
  rows = project(assumptions, max_year)
  by_year = {row.year: row for row in rows}

  summaries = tuple(
      summarize_return(by_year.get(h, rows[-1]), h, assumptions.current_price)
      for h in sorted(horizons))

  fair_value = rows[-1].implied_price
  current = max(assumptions.current_price, EPSILON)

  return ForecastResult(
      fair_value=fair_value,
      current_price=assumptions.current_price,
      upside_percent=fair_value / current - 1.0,
      projections=tuple(rows),
      returns_by_horizon=summaries,
  )
