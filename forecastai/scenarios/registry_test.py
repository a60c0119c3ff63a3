import pytest

from forecastai.domain.types import ScenarioPreset
from forecastai.policies.presets import OperatingPreset
from forecastai.policies.presets import RangePositionPreset
from forecastai.policies.scenario import ShiftedScenario
from forecastai.policies.scenario import UnchangedScenario
from forecastai.scenarios.config import ScenarioConfig
from forecastai.scenarios.registry import all_scenarios
from forecastai.scenarios.registry import create_driver_preset
from forecastai.scenarios.registry import create_operating_preset
from forecastai.scenarios.registry import create_scenario_policy
from forecastai.scenarios.registry import list_policies
from forecastai.scenarios.registry import scenario_inputs


class TestCreateScenarioPolicy:
  """Tests for create_scenario_policy function."""

  def test_base_is_unchanged(self):
    assert isinstance(create_scenario_policy('base'), UnchangedScenario)

  def test_bear_and_bull_shifted(self):
    bear = create_scenario_policy(ScenarioPreset.BEAR)
    bull = create_scenario_policy('bull')

    assert isinstance(bear, ShiftedScenario)
    assert bear.config == ScenarioConfig.bear()
    assert bull.config.name == 'bull'

  def test_config_override(self):
    config = ScenarioConfig(name='custom', discount_rate_delta=2.0,
                            discount_rate_bound=30.0)
    policy = create_scenario_policy('base', config)

    assert isinstance(policy, ShiftedScenario)
    assert policy.config is config

  def test_unknown_preset(self):
    with pytest.raises(KeyError, match='Unknown scenario preset'):
      create_scenario_policy('sideways')


class TestScenarioInputs:
  """Tests for scenario_inputs and all_scenarios."""

  def test_base_returns_input(self, simple_inputs):
    assert scenario_inputs(simple_inputs, 'base') is simple_inputs

  def test_bear_shifts(self, simple_inputs):
    bear = scenario_inputs(simple_inputs, 'bear')
    assert bear.valuation.discount_rate == pytest.approx(11.0)

  def test_all_scenarios(self, simple_inputs):
    result = all_scenarios(simple_inputs)

    assert list(result) == [
        ScenarioPreset.BEAR, ScenarioPreset.BASE, ScenarioPreset.BULL
    ]
    assert result[ScenarioPreset.BASE] is simple_inputs


class TestPresetFactories:
  """Tests for driver and operating preset factories."""

  def test_driver_presets(self):
    assert create_driver_preset('consensus').position == 0.5
    assert create_driver_preset('bear').position == 0.25
    assert isinstance(create_driver_preset('bull'), RangePositionPreset)

  def test_operating_presets(self):
    assert isinstance(create_operating_preset('bear'), OperatingPreset)
    assert create_operating_preset('consensus').override is None

  def test_unknown_driver_preset(self):
    with pytest.raises(KeyError, match='Unknown driver preset'):
      create_driver_preset('moonshot')

  def test_unknown_operating_preset(self):
    with pytest.raises(KeyError, match='Available'):
      create_operating_preset('moonshot')


def test_list_policies():
  policies = list_policies()

  assert policies['scenario'] == ['bear', 'base', 'bull']
  assert set(policies['drivers']) == {'consensus', 'bear', 'bull'}
  assert set(policies['operating']) == {'consensus', 'base', 'bear', 'bull'}
