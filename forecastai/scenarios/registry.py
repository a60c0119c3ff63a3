"""
Policy registry for mapping preset names to policy factories.

Scenarios, driver presets and operating presets are all addressed by
string names (JSON friendly) and instantiated through the dictionaries
below.

To add a new scenario:
1. Add a ScenarioConfig constructor in scenarios/config.py
2. Add a ScenarioPreset member in domain/types.py
3. Register the constructor in SCENARIO_CONFIGS

Example:
  SCENARIO_CONFIGS[ScenarioPreset.BEAR] = ScenarioConfig.bear
"""

from collections.abc import Callable
from typing import Any, Optional, Union, cast

from forecastai.domain.types import DCFInputs
from forecastai.domain.types import ScenarioPreset
from forecastai.policies.presets import BEAR_OPERATING
from forecastai.policies.presets import BULL_OPERATING
from forecastai.policies.presets import DriverPreset
from forecastai.policies.presets import OperatingPreset
from forecastai.policies.presets import RangePositionPreset
from forecastai.policies.scenario import ScenarioPolicy
from forecastai.policies.scenario import ShiftedScenario
from forecastai.policies.scenario import UnchangedScenario
from forecastai.scenarios.config import ScenarioConfig

SCENARIO_CONFIGS: dict[ScenarioPreset, Callable[[], ScenarioConfig]] = {
    ScenarioPreset.BEAR: ScenarioConfig.bear,
    ScenarioPreset.BASE: ScenarioConfig.base,
    ScenarioPreset.BULL: ScenarioConfig.bull,
}

DRIVER_PRESETS: dict[str, Callable[[], DriverPreset]] = {
    'consensus': lambda: RangePositionPreset(position=0.5, name='consensus'),
    'bear': lambda: RangePositionPreset(position=0.25, name='bear'),
    'bull': lambda: RangePositionPreset(position=0.75, name='bull'),
}

OPERATING_PRESETS: dict[str, Callable[[], OperatingPreset]] = {
    'consensus': lambda: OperatingPreset(name='consensus'),
    'base': lambda: OperatingPreset(name='base'),
    'bear': lambda: OperatingPreset(BEAR_OPERATING, name='bear'),
    'bull': lambda: OperatingPreset(BULL_OPERATING, name='bull'),
}

POLICY_REGISTRY = {
    'scenario': SCENARIO_CONFIGS,
    'drivers': DRIVER_PRESETS,
    'operating': OPERATING_PRESETS,
}


def _to_preset(preset: Union[ScenarioPreset, str]) -> ScenarioPreset:
  try:
    return ScenarioPreset(preset)
  except ValueError as e:
    raise KeyError(f"Unknown scenario preset: '{preset}'. "
                   f'Available: {[p.value for p in SCENARIO_CONFIGS]}') from e


def create_scenario_policy(
    preset: Union[ScenarioPreset, str],
    config: Optional[ScenarioConfig] = None,
) -> ScenarioPolicy:
  """
  Create the policy for a scenario preset.

  Args:
    preset: ScenarioPreset or its string value
    config: Override for the registered ScenarioConfig

  Returns:
    UnchangedScenario for base, ShiftedScenario otherwise

  Raises:
    KeyError: If the preset is not registered
  """
  key = _to_preset(preset)
  if key is ScenarioPreset.BASE and config is None:
    return UnchangedScenario()
  if config is None:
    config = SCENARIO_CONFIGS[key]()
  return ShiftedScenario(config)


def scenario_inputs(
    base: DCFInputs,
    preset: Union[ScenarioPreset, str],
    config: Optional[ScenarioConfig] = None,
) -> DCFInputs:
  """
  Adjusted copy of base for a preset; base returns the input unchanged.

  Args:
    base: Base assumption set
    preset: 'bear', 'base' or 'bull'
    config: Optional ScenarioConfig override

  Returns:
    Adjusted DCFInputs
  """
  return create_scenario_policy(preset, config).compute(base).value


def all_scenarios(base: DCFInputs) -> dict[ScenarioPreset, DCFInputs]:
  """Bear, base and bull inputs for side-by-side comparison."""
  return {preset: scenario_inputs(base, preset) for preset in SCENARIO_CONFIGS}


def create_driver_preset(name: str) -> DriverPreset:
  """
  Create a driver preset by name.

  Raises:
    KeyError: If the name is not registered
  """
  try:
    factory = DRIVER_PRESETS[name]
  except KeyError as e:
    raise KeyError(f"Unknown driver preset: '{name}'. "
                   f'Available: {list(DRIVER_PRESETS.keys())}') from e
  return factory()


def create_operating_preset(name: str) -> OperatingPreset:
  """
  Create an operating preset by name.

  Raises:
    KeyError: If the name is not registered
  """
  try:
    factory = OPERATING_PRESETS[name]
  except KeyError as e:
    raise KeyError(f"Unknown operating preset: '{name}'. "
                   f'Available: {list(OPERATING_PRESETS.keys())}') from e
  return factory()


def list_policies() -> dict[str, list[str]]:
  """
  List all available presets by category.

  Returns:
    Dictionary mapping category names to list of preset names
  """
  result: dict[str, list[str]] = {}
  for category, policies_dict in POLICY_REGISTRY.items():
    policy_dict = cast(dict[Any, object], policies_dict)
    result[category] = [getattr(k, 'value', k) for k in policy_dict.keys()]
  return result
