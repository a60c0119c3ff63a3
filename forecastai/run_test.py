from dataclasses import replace
import json

import pytest

from forecastai.domain.types import InvestmentStyle
from forecastai.engine.dcf import evaluate
from forecastai.run import default_inputs
from forecastai.run import load_inputs
from forecastai.run import run_valuation


class TestLoadInputs:
  """Tests for load_inputs function."""

  def test_none_returns_sample(self):
    inputs = load_inputs(None)

    assert [d.title for d in inputs.revenue_drivers] == [
        'Volume Growth', 'Pricing Power', 'New Channels'
    ]
    assert inputs == default_inputs()

  def test_missing_file(self, tmp_path):
    with pytest.raises(FileNotFoundError, match='Inputs file not found'):
      load_inputs(tmp_path / 'missing.json')

  def test_from_file(self, tmp_path, simple_inputs):
    path = tmp_path / 'inputs.json'
    path.write_text(json.dumps(simple_inputs.to_dict()), encoding='utf-8')

    assert load_inputs(path) == simple_inputs


class TestRunValuation:
  """Tests for run_valuation function."""

  def test_outputs_per_scenario(self, simple_inputs):
    report = run_valuation(simple_inputs)

    assert list(report.outputs) == ['bear', 'base', 'bull']
    assert report.outputs['base'] == evaluate(simple_inputs)
    assert report.outputs['bear'].intrinsic_value == pytest.approx(79.44,
                                                                   abs=0.01)
    assert report.outputs['bull'].intrinsic_value == pytest.approx(308.0,
                                                                   abs=0.01)

  def test_score_and_label(self, simple_inputs):
    report = run_valuation(simple_inputs, style='conservative')

    assert report.score == pytest.approx(41.642857, abs=1e-5)
    assert report.label.label == 'Balanced'
    assert report.label.target_score == 25.0
    assert report.diag['style'] == 'conservative'

  def test_failed_checks_in_diag(self, simple_inputs, make_driver):
    inputs = replace(simple_inputs, revenue_drivers=(make_driver(25.0),))
    report = run_valuation(inputs, InvestmentStyle.BASE)

    assert 'check_revenue_drivers' in report.diag
    assert 'check_terminal_spread' not in report.diag

  def test_default_inputs(self):
    report = run_valuation(default_inputs())
    for out in report.outputs.values():
      assert 20.0 <= out.intrinsic_value <= 800.0
