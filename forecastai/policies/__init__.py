"""
Assumption policies for scenario and preset transforms.

Each policy turns one assumption set (or part of one) into an adjusted copy
and returns both the value and diagnostic information.

To add a new policy:
1. Create a new class inheriting from the appropriate base
   (e.g., ScenarioPolicy)
2. Implement the compute() method returning PolicyOutput
3. Register in scenarios/registry.py

Example:
  class FlatScenario(ScenarioPolicy):
    def compute(self, inputs: DCFInputs) -> PolicyOutput[DCFInputs]:
      return PolicyOutput(value=inputs, diag={'scenario': 'flat'})
"""

from forecastai.policies.presets import DriverPreset
from forecastai.policies.presets import OperatingPreset
from forecastai.policies.presets import RangePositionPreset
from forecastai.policies.scenario import ScenarioPolicy
from forecastai.policies.scenario import ShiftedScenario
from forecastai.policies.scenario import UnchangedScenario

__all__ = [
  'ScenarioPolicy', 'ShiftedScenario', 'UnchangedScenario',
  'DriverPreset', 'RangePositionPreset',
  'OperatingPreset',
]
