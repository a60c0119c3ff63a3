'''
Index-based valuation toolkit with policy-based scenarios.

This package evaluates a user-edited assumption set (revenue drivers,
operating assumptions, valuation assumptions) into an intrinsic value per
share, projects multi-year returns, sweeps sensitivity grids and simulates
deterministic market data for ticker symbols. Scenario transforms
(bear/base/bull) are independent policies that can be swapped or compared.

Usage:
  from forecastai.run import default_inputs, run_valuation
  from forecastai.scenarios.registry import scenario_inputs
  from forecastai.engine.dcf import evaluate

  inputs = default_inputs()
  bull = evaluate(scenario_inputs(inputs, 'bull'))
  report = run_valuation(inputs, style='aggressive')
'''
