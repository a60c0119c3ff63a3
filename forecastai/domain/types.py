'''
Domain types for the forecast engine.

These frozen dataclasses are the only shapes that cross the engine
boundary. Callers hand in copies of their editable state and get fresh
result objects back; nothing here is mutated after construction.
'''

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Optional, Tuple, TypeVar

import pandas as pd

T = TypeVar('T')


class DriverUnit(str, Enum):
  '''How a revenue driver's value maps onto a revenue multiplier.'''
  PERCENT = 'percent'
  MULTIPLE = 'multiple'
  NUMBER = 'number'
  CURRENCY = 'currency'

  def format(self, value: float) -> str:
    '''Render a driver value for display.'''
    if self is DriverUnit.PERCENT:
      return f'{value:.1f}%'
    if self is DriverUnit.MULTIPLE:
      return f'{value:.2f}x'
    if self is DriverUnit.CURRENCY:
      return f'${value:.0f}'
    return f'{value:.0f}'


class TerminalMethod(str, Enum):
  PERPETUITY = 'perpetuity'
  EXIT_MULTIPLE = 'exit_multiple'


class ScenarioPreset(str, Enum):
  BEAR = 'bear'
  BASE = 'base'
  BULL = 'bull'

  @property
  def display_name(self) -> str:
    return self.value.capitalize()


class InvestmentStyle(str, Enum):
  CONSERVATIVE = 'conservative'
  BASE = 'base'
  AGGRESSIVE = 'aggressive'


class SparklineMetric(str, Enum):
  REVENUE = 'revenue'
  INTRINSIC = 'intrinsic'


class PriceRange(str, Enum):
  '''Chart range selector for simulated price series.'''
  ONE_DAY = '1D'
  ONE_WEEK = '1W'
  ONE_MONTH = '1M'
  ONE_YEAR = '1Y'

  @property
  def point_count(self) -> int:
    return _POINT_COUNTS[self.value]

  @property
  def display_name(self) -> str:
    return _DISPLAY_NAMES[self.value]


# 1D: every ~6.5 trading minutes, 1W: 7 trading days x 5, 1Y: weekly
_POINT_COUNTS = {'1D': 60, '1W': 35, '1M': 30, '1Y': 52}
_DISPLAY_NAMES = {
    '1D': '1 Day',
    '1W': '1 Week',
    '1M': '1 Month',
    '1Y': '1 Year',
}


@dataclass(frozen=True)
class RevenueDriver:
  '''
  A single user-adjustable revenue assumption.

  min <= value <= max holds after any engine-driven change, but is not
  checked on construction (see domain.validation).

  Attributes:
    title: Display title (e.g., 'Volume Growth')
    subtitle: One-line explanation
    unit: DriverUnit controlling the revenue multiplier
    value: Current value
    min: Lower bound of the allowed range
    max: Upper bound of the allowed range
    step: UI increment
    impacts_revenue: Whether the driver enters the revenue index
  '''
  title: str
  subtitle: str
  unit: DriverUnit
  value: float
  min: float
  max: float
  step: float = 1.0
  impacts_revenue: bool = True

  @property
  def span(self) -> float:
    return self.max - self.min

  def to_dict(self) -> Dict[str, Any]:
    result = asdict(self)
    result['unit'] = self.unit.value
    return result

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> 'RevenueDriver':
    return cls(
        title=data.get('title', ''),
        subtitle=data.get('subtitle', ''),
        unit=DriverUnit(data['unit']),
        value=float(data['value']),
        min=float(data['min']),
        max=float(data['max']),
        step=float(data.get('step', 1.0)),
        impacts_revenue=bool(data.get('impacts_revenue', True)),
    )


@dataclass(frozen=True)
class OperatingAssumptions:
  '''
  Operating assumptions, all percentages on a 0-100 scale.

  capex_percent and working_capital_percent are expressed as % of revenue.
  '''
  gross_margin: float = 55.0
  operating_margin: float = 22.0
  tax_rate: float = 21.0
  capex_percent: float = 4.0
  working_capital_percent: float = 1.0

  def to_dict(self) -> Dict[str, Any]:
    return asdict(self)

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> 'OperatingAssumptions':
    return cls(**{k: float(v) for k, v in data.items()})


@dataclass(frozen=True)
class ValuationAssumptions:
  '''
  Discount and terminal assumptions (percent scale).

  Only the perpetuity terminal method is evaluated; exit_multiple is carried
  for callers that store it.
  '''
  discount_rate: float = 9.0
  terminal_growth: float = 2.5
  terminal_method: TerminalMethod = TerminalMethod.PERPETUITY
  exit_multiple: Optional[float] = None

  def to_dict(self) -> Dict[str, Any]:
    result = asdict(self)
    result['terminal_method'] = self.terminal_method.value
    return result

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> 'ValuationAssumptions':
    exit_multiple = data.get('exit_multiple')
    return cls(
        discount_rate=float(data.get('discount_rate', 9.0)),
        terminal_growth=float(data.get('terminal_growth', 2.5)),
        terminal_method=TerminalMethod(
            data.get('terminal_method', TerminalMethod.PERPETUITY.value)),
        exit_multiple=float(exit_multiple)
        if exit_multiple is not None else None,
    )


@dataclass(frozen=True)
class DCFInputs:
  '''
  Full assumption set for one valuation.

  Attributes:
    revenue_drivers: Ordered drivers
    operating: OperatingAssumptions
    valuation: ValuationAssumptions
    horizon_years: Horizon used for the CAGR output
    current_price: Market price per share (ratios need > 0)
  '''
  revenue_drivers: Tuple[RevenueDriver, ...]
  operating: OperatingAssumptions
  valuation: ValuationAssumptions
  horizon_years: int = 5
  current_price: float = 100.0

  def __post_init__(self):
    # Lists from callers are copied so later edits on their side don't leak in.
    if not isinstance(self.revenue_drivers, tuple):
      object.__setattr__(self, 'revenue_drivers',
                         tuple(self.revenue_drivers))

  def to_dict(self) -> Dict[str, Any]:
    return {
        'revenue_drivers': [d.to_dict() for d in self.revenue_drivers],
        'operating': self.operating.to_dict(),
        'valuation': self.valuation.to_dict(),
        'horizon_years': self.horizon_years,
        'current_price': self.current_price,
    }

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> 'DCFInputs':
    return cls(
        revenue_drivers=tuple(
            RevenueDriver.from_dict(d)
            for d in data.get('revenue_drivers', [])),
        operating=OperatingAssumptions.from_dict(data.get('operating', {})),
        valuation=ValuationAssumptions.from_dict(data.get('valuation', {})),
        horizon_years=int(data.get('horizon_years', 5)),
        current_price=float(data.get('current_price', 100.0)),
    )


@dataclass(frozen=True)
class DCFOutputs:
  '''
  Result of evaluating a DCFInputs.

  Attributes:
    revenue_index: Revenue index, base 100, clamped to [30, 300]
    fcf_margin: Free cash flow margin as a fraction, clamped to [0, 0.35]
    fcf_index: revenue_index x fcf_margin, clamped to [0, 120]
    intrinsic_value: Estimated fair price per share, clamped to [20, 800]
    upside_percent: Intrinsic vs current price, in percent
    cagr_percent: Implied annual return over the horizon, [-50, 50]
    terminal_share_percent: Documented approximation (always 65.0)
    forecast_pv: Unclamped forecast-period component
    terminal_pv: Unclamped terminal component
  '''
  revenue_index: float
  fcf_margin: float
  fcf_index: float
  intrinsic_value: float
  upside_percent: float
  cagr_percent: float
  terminal_share_percent: float
  forecast_pv: float = 0.0
  terminal_pv: float = 0.0

  @property
  def implied_terminal_share_percent(self) -> float:
    '''Terminal share from the actual component split (0 if both are 0).'''
    total = self.forecast_pv + self.terminal_pv
    if total <= 0:
      return 0.0
    return self.terminal_pv / total * 100.0

  def to_dict(self) -> Dict[str, Any]:
    return asdict(self)


@dataclass(frozen=True)
class ConfidenceLabel:
  label: str
  is_aligned: bool
  target_score: float


@dataclass(frozen=True)
class ForecastAssumptions:
  '''
  Inputs for the multi-year projection table (fractions, not percents).

  Attributes:
    current_price: Market price per share
    current_revenue: Year-0 revenue
    revenue_cagr: Annual revenue growth (0.08 = 8%)
    operating_margin: Operating income / revenue
    tax_rate: Tax on operating income
    shares_outstanding: Share count used for per-share values
    net_debt: Debt net of cash, subtracted from enterprise value
    exit_multiple: Enterprise value / revenue
    horizon_years: Default horizon for return summaries
  '''
  current_price: float
  current_revenue: float
  revenue_cagr: float
  operating_margin: float
  tax_rate: float
  shares_outstanding: float
  net_debt: float
  exit_multiple: float
  horizon_years: int = 5

  @classmethod
  def default(cls) -> 'ForecastAssumptions':
    return cls(
        current_price=100.0,
        current_revenue=1_000.0,
        revenue_cagr=0.08,
        operating_margin=0.22,
        tax_rate=0.21,
        shares_outstanding=1_000.0,
        net_debt=0.0,
        exit_multiple=4.0,
        horizon_years=5,
    )

  def to_dict(self) -> Dict[str, Any]:
    return asdict(self)

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> 'ForecastAssumptions':
    defaults = cls.default().to_dict()
    defaults.update(data)
    defaults['horizon_years'] = int(defaults['horizon_years'])
    return cls(**defaults)


@dataclass(frozen=True)
class ProjectionRow:
  year: int
  revenue: float
  operating_income: float
  after_tax_operating_income: float
  enterprise_value: float
  equity_value: float
  implied_price: float


@dataclass(frozen=True)
class ReturnSummary:
  horizon_years: int
  total_return: float
  annualized_return: float


@dataclass(frozen=True)
class ForecastResult:
  '''
  Projection table plus horizon return summaries.

  Attributes:
    fair_value: Implied price at the last projected year
    current_price: Price the returns are measured against
    upside_percent: fair_value / current_price - 1 (a fraction)
    projections: One row per year, 0..max year
    returns_by_horizon: Summaries sorted by horizon
  '''
  fair_value: float
  current_price: float
  upside_percent: float
  projections: Tuple[ProjectionRow, ...]
  returns_by_horizon: Tuple[ReturnSummary, ...]

  def return_for(self, horizon_years: int) -> Optional[ReturnSummary]:
    for summary in self.returns_by_horizon:
      if summary.horizon_years == horizon_years:
        return summary
    return None

  def to_frame(self) -> pd.DataFrame:
    '''Projection rows as a DataFrame indexed by year.'''
    df = pd.DataFrame([asdict(row) for row in self.projections])
    return df.set_index('year')


@dataclass(frozen=True)
class SensitivityResult:
  '''
  2D sensitivity grid and the axis values that produced it.

  grid[i][j] corresponds to row_values[i] and column_values[j].
  '''
  grid: Tuple[Tuple[float, ...], ...]
  row_axis: str
  row_values: Tuple[float, ...]
  column_axis: str
  column_values: Tuple[float, ...]

  @property
  def shape(self) -> Tuple[int, int]:
    return len(self.grid), len(self.grid[0]) if self.grid else 0

  def to_frame(self) -> pd.DataFrame:
    df = pd.DataFrame([list(row) for row in self.grid],
                      index=list(self.row_values),
                      columns=list(self.column_values))
    df.index.name = self.row_axis
    df.columns.name = self.column_axis
    return df


@dataclass(frozen=True)
class OneWaySensitivity:
  '''Intrinsic value and upside at each offset of a single variable.'''
  variable: str
  offsets: Tuple[float, ...]
  intrinsic_values: Tuple[float, ...]
  upside_percents: Tuple[float, ...]

  def to_frame(self) -> pd.DataFrame:
    df = pd.DataFrame({
        'intrinsic_value': list(self.intrinsic_values),
        'upside_percent': list(self.upside_percents),
    }, index=list(self.offsets))
    df.index.name = self.variable
    return df


@dataclass(frozen=True)
class DayChange:
  absolute: float
  percent: float


@dataclass(frozen=True)
class DayHighLow:
  high: float
  low: float


@dataclass(frozen=True)
class Quote:
  '''Simulated quote snapshot for a ticker symbol.'''
  symbol: str
  current_price: float
  day_change: DayChange
  previous_close: float
  day_high_low: DayHighLow


@dataclass(frozen=True)
class PolicyOutput(Generic[T]):
  '''
  Standard output from any policy.

  Every policy returns both a computed value and diagnostic information
  explaining how the value was computed.

  Attributes:
    value: The computed value (type depends on policy)
    diag: Dictionary of diagnostic information
  '''
  value: T
  diag: Dict[str, Any] = field(default_factory=dict)
