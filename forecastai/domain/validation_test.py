from dataclasses import replace

import pytest

from forecastai.domain.types import ValuationAssumptions
from forecastai.domain.validation import CheckResult
from forecastai.domain.validation import fail_result
from forecastai.domain.validation import is_valid_growth_rate
from forecastai.domain.validation import is_valid_horizon
from forecastai.domain.validation import is_valid_margin
from forecastai.domain.validation import pass_result
from forecastai.domain.validation import validate_forecast_assumptions
from forecastai.domain.validation import validate_inputs


def _by_name(results: list[CheckResult]) -> dict[str, CheckResult]:
  return {r.name: r for r in results}


class TestCheckResult:
  """Tests for CheckResult helpers."""

  def test_str(self):
    assert str(pass_result('a', 'fine')) == '✓ a: fine'
    assert str(fail_result('b', 'bad')) == '✗ b: bad'


class TestValidateInputs:
  """Tests for validate_inputs function."""

  def test_all_pass(self, simple_inputs):
    results = validate_inputs(simple_inputs)

    assert len(results) == 4
    assert all(r.ok for r in results)

  def test_value_outside_range(self, simple_inputs, make_driver):
    inputs = replace(simple_inputs, revenue_drivers=(make_driver(25.0),))
    result = _by_name(validate_inputs(inputs))['revenue_drivers']

    assert not result.ok
    assert 'outside' in result.details

  def test_empty_range(self, simple_inputs, make_driver):
    inputs = replace(simple_inputs,
                     revenue_drivers=(make_driver(5.0, 5.0, 5.0),))
    result = _by_name(validate_inputs(inputs))['revenue_drivers']

    assert not result.ok
    assert 'empty range' in result.details

  def test_terminal_spread(self, simple_inputs):
    inputs = replace(simple_inputs,
                     valuation=ValuationAssumptions(discount_rate=3.0,
                                                    terminal_growth=2.8))
    assert not _by_name(validate_inputs(inputs))['terminal_spread'].ok

  def test_non_positive_price_and_horizon(self, simple_inputs):
    inputs = replace(simple_inputs, current_price=0.0, horizon_years=0)
    results = _by_name(validate_inputs(inputs))

    assert not results['current_price'].ok
    assert not results['horizon_years'].ok

  def test_never_raises_on_degenerate_inputs(self, simple_inputs):
    inputs = replace(simple_inputs,
                     revenue_drivers=(),
                     current_price=-1.0,
                     horizon_years=-3)
    results = validate_inputs(inputs)
    assert len(results) == 4


class TestForecastValidators:
  """Tests for the forecast assumption range checks."""

  @pytest.mark.parametrize('value,expected', [
      (-0.5, True),
      (1.0, True),
      (-0.51, False),
      (1.01, False),
  ])
  def test_growth_rate(self, value, expected):
    assert is_valid_growth_rate(value) is expected

  @pytest.mark.parametrize('value,expected', [
      (0.0, True),
      (0.8, True),
      (-0.01, False),
      (0.81, False),
  ])
  def test_margin(self, value, expected):
    assert is_valid_margin(value) is expected

  @pytest.mark.parametrize('value,expected', [
      (1, True),
      (30, True),
      (0, False),
      (31, False),
  ])
  def test_horizon(self, value, expected):
    assert is_valid_horizon(value) is expected

  def test_validate_defaults(self, default_forecast):
    assert all(r.ok for r in validate_forecast_assumptions(default_forecast))

  def test_validate_bad_margin(self, default_forecast):
    results = _by_name(
        validate_forecast_assumptions(
            replace(default_forecast, operating_margin=0.9)))

    assert not results['operating_margin'].ok
    assert results['revenue_cagr'].ok
