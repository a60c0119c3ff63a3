"""Scenario configuration and policy registry."""

from forecastai.scenarios.config import ScenarioConfig
from forecastai.scenarios.registry import create_scenario_policy
from forecastai.scenarios.registry import list_policies
from forecastai.scenarios.registry import POLICY_REGISTRY
from forecastai.scenarios.registry import scenario_inputs

__all__ = [
  'ScenarioConfig',
  'POLICY_REGISTRY',
  'create_scenario_policy',
  'list_policies',
  'scenario_inputs',
]
