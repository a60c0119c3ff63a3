import pytest

from forecastai.domain.types import DCFInputs
from forecastai.domain.types import DriverUnit
from forecastai.domain.types import ForecastAssumptions
from forecastai.domain.types import OperatingAssumptions
from forecastai.domain.types import RevenueDriver
from forecastai.domain.types import ValuationAssumptions


def _make_driver(
    value: float,
    min_value: float = 0.0,
    max_value: float = 20.0,
    unit: DriverUnit = DriverUnit.PERCENT,
    title: str = 'Volume Growth',
    impacts_revenue: bool = True,
) -> RevenueDriver:
  """Helper to create a RevenueDriver with placeholder text."""
  return RevenueDriver(
      title=title,
      subtitle='test driver',
      unit=unit,
      value=value,
      min=min_value,
      max=max_value,
      impacts_revenue=impacts_revenue,
  )


@pytest.fixture
def make_driver():
  """Factory fixture for RevenueDriver."""
  return _make_driver


@pytest.fixture
def simple_inputs() -> DCFInputs:
  """Single 8% driver with hand-checkable outputs.

  revenue_index = 108
  fcf_margin = (18 x 0.79 - 4 - 2) / 100 = 0.0822
  fcf_index = 8.8776
  intrinsic = 95.87808 + 79.8984 = 175.77648
  """
  return DCFInputs(
      revenue_drivers=(_make_driver(8.0),),
      operating=OperatingAssumptions(
          gross_margin=55.0,
          operating_margin=18.0,
          tax_rate=21.0,
          capex_percent=4.0,
          working_capital_percent=2.0,
      ),
      valuation=ValuationAssumptions(discount_rate=10.0, terminal_growth=2.0),
      horizon_years=5,
      current_price=100.0,
  )


@pytest.fixture
def multi_driver_inputs() -> DCFInputs:
  """Three drivers of different units with default assumptions."""
  return DCFInputs(
      revenue_drivers=(
          _make_driver(8.0, -15.0, 30.0, title='Volume Growth'),
          _make_driver(1.05,
                       0.8,
                       1.3,
                       unit=DriverUnit.MULTIPLE,
                       title='Price Multiple'),
          _make_driver(120.0,
                       100.0,
                       200.0,
                       unit=DriverUnit.NUMBER,
                       title='Stores'),
      ),
      operating=OperatingAssumptions(),
      valuation=ValuationAssumptions(),
  )


@pytest.fixture
def default_forecast() -> ForecastAssumptions:
  """ForecastAssumptions.default(): price at year y is 4 x 1.08^y."""
  return ForecastAssumptions.default()


@pytest.fixture
def parity_forecast() -> ForecastAssumptions:
  """Projection whose year-0 implied price equals the current price.

  revenue 1000 x multiple 4 / 40 shares = 100
  """
  return ForecastAssumptions(
      current_price=100.0,
      current_revenue=1_000.0,
      revenue_cagr=0.10,
      operating_margin=0.20,
      tax_rate=0.25,
      shares_outstanding=40.0,
      net_debt=0.0,
      exit_multiple=4.0,
      horizon_years=5,
  )
