import dataclasses
import json

import pytest

from forecastai.domain.types import DCFInputs
from forecastai.domain.types import DCFOutputs
from forecastai.domain.types import DriverUnit
from forecastai.domain.types import ForecastAssumptions
from forecastai.domain.types import OneWaySensitivity
from forecastai.domain.types import OperatingAssumptions
from forecastai.domain.types import PriceRange
from forecastai.domain.types import RevenueDriver
from forecastai.domain.types import ScenarioPreset
from forecastai.domain.types import SensitivityResult
from forecastai.domain.types import TerminalMethod
from forecastai.domain.types import ValuationAssumptions


class TestDriverUnit:
  """Tests for DriverUnit.format."""

  @pytest.mark.parametrize('unit,value,expected', [
      (DriverUnit.PERCENT, 8.0, '8.0%'),
      (DriverUnit.MULTIPLE, 1.05, '1.05x'),
      (DriverUnit.CURRENCY, 120.0, '$120'),
      (DriverUnit.NUMBER, 120.0, '120'),
  ])
  def test_format(self, unit, value, expected):
    assert unit.format(value) == expected


class TestPriceRange:
  """Tests for PriceRange properties."""

  def test_point_counts(self):
    assert PriceRange.ONE_DAY.point_count == 60
    assert PriceRange.ONE_WEEK.point_count == 35
    assert PriceRange.ONE_MONTH.point_count == 30
    assert PriceRange.ONE_YEAR.point_count == 52

  def test_from_value(self):
    assert PriceRange('1Y') is PriceRange.ONE_YEAR
    assert PriceRange('1W').display_name == '1 Week'

  def test_unknown_value(self):
    with pytest.raises(ValueError):
      PriceRange('5Y')


class TestRevenueDriver:
  """Tests for RevenueDriver dataclass."""

  def test_frozen(self, make_driver):
    driver = make_driver(8.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
      driver.value = 10.0  # type: ignore[misc]

  def test_dict_round_trip(self, make_driver):
    driver = make_driver(1.05, 0.8, 1.3, unit=DriverUnit.MULTIPLE)
    data = driver.to_dict()

    assert data['unit'] == 'multiple'
    assert RevenueDriver.from_dict(data) == driver

  def test_span(self, make_driver):
    assert make_driver(8.0, -15.0, 30.0).span == 45.0


class TestDCFInputs:
  """Tests for DCFInputs dataclass."""

  def test_list_converted_to_tuple(self, make_driver):
    drivers = [make_driver(8.0)]
    inputs = DCFInputs(revenue_drivers=drivers,
                       operating=OperatingAssumptions(),
                       valuation=ValuationAssumptions())
    drivers.append(make_driver(10.0))

    assert isinstance(inputs.revenue_drivers, tuple)
    assert len(inputs.revenue_drivers) == 1

  def test_json_round_trip(self, multi_driver_inputs):
    text = json.dumps(multi_driver_inputs.to_dict())
    assert DCFInputs.from_dict(json.loads(text)) == multi_driver_inputs

  def test_from_dict_defaults(self):
    inputs = DCFInputs.from_dict({})

    assert inputs.revenue_drivers == ()
    assert inputs.horizon_years == 5
    assert inputs.current_price == 100.0
    assert inputs.valuation.discount_rate == 9.0
    assert inputs.valuation.terminal_method is TerminalMethod.PERPETUITY

  def test_exit_multiple_carried(self):
    valuation = ValuationAssumptions(terminal_method=TerminalMethod.EXIT_MULTIPLE,
                                     exit_multiple=12.0)
    assert ValuationAssumptions.from_dict(valuation.to_dict()) == valuation


class TestDCFOutputs:
  """Tests for DCFOutputs.implied_terminal_share_percent."""

  def test_split(self):
    out = DCFOutputs(revenue_index=100.0,
                     fcf_margin=0.1,
                     fcf_index=10.0,
                     intrinsic_value=100.0,
                     upside_percent=0.0,
                     cagr_percent=0.0,
                     terminal_share_percent=65.0,
                     forecast_pv=40.0,
                     terminal_pv=60.0)
    assert out.implied_terminal_share_percent == pytest.approx(60.0)

  def test_zero_components(self):
    out = DCFOutputs(revenue_index=100.0,
                     fcf_margin=0.0,
                     fcf_index=0.0,
                     intrinsic_value=20.0,
                     upside_percent=-80.0,
                     cagr_percent=-27.5,
                     terminal_share_percent=65.0)
    assert out.implied_terminal_share_percent == 0.0


class TestForecastAssumptions:
  """Tests for ForecastAssumptions dataclass."""

  def test_default(self):
    defaults = ForecastAssumptions.default()

    assert defaults.current_revenue == 1_000.0
    assert defaults.revenue_cagr == 0.08
    assert defaults.exit_multiple == 4.0
    assert defaults.horizon_years == 5

  def test_from_dict_partial(self):
    result = ForecastAssumptions.from_dict({'revenue_cagr': 0.12})

    assert result.revenue_cagr == 0.12
    assert result.tax_rate == 0.21


class TestSensitivityFrames:
  """Tests for to_frame on sensitivity results."""

  def test_grid_frame(self):
    result = SensitivityResult(grid=((1.0, 2.0), (3.0, 4.0)),
                               row_axis='operating_margin',
                               row_values=(18.0, 20.0),
                               column_axis='discount_rate',
                               column_values=(9.0, 10.0))
    df = result.to_frame()

    assert result.shape == (2, 2)
    assert df.index.name == 'operating_margin'
    assert df.columns.name == 'discount_rate'
    assert df.loc[20.0, 9.0] == 3.0

  def test_one_way_frame(self):
    result = OneWaySensitivity(variable='discount_rate',
                               offsets=(-10.0, 0.0, 10.0),
                               intrinsic_values=(120.0, 100.0, 85.0),
                               upside_percents=(20.0, 0.0, -15.0))
    df = result.to_frame()

    assert df.index.name == 'discount_rate'
    assert list(df.columns) == ['intrinsic_value', 'upside_percent']
    assert df.loc[10.0, 'upside_percent'] == -15.0


def test_scenario_preset_display_name():
  assert ScenarioPreset.BULL.display_name == 'Bull'
