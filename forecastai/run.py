'''
Single assumption set valuation entrypoint.

This module provides the main entry point for running valuations. It:
1. Loads an assumption set (JSON file or the built-in sample)
2. Applies the bear/base/bull scenario transforms
3. Runs the valuation engine on each scenario
4. Scores the base case and labels it against an investment style

Usage:
  from forecastai.run import default_inputs, run_valuation

  report = run_valuation(default_inputs(), style='base')
  print(f"IV: ${report.outputs['base'].intrinsic_value:.2f}")
'''

import argparse
from dataclasses import dataclass, field, replace
import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from forecastai.domain.types import ConfidenceLabel
from forecastai.domain.types import DCFInputs
from forecastai.domain.types import DCFOutputs
from forecastai.domain.types import DriverUnit
from forecastai.domain.types import InvestmentStyle
from forecastai.domain.types import OperatingAssumptions
from forecastai.domain.types import RevenueDriver
from forecastai.domain.types import ValuationAssumptions
from forecastai.domain.validation import validate_inputs
from forecastai.engine.dcf import aggressiveness_score
from forecastai.engine.dcf import confidence_label
from forecastai.engine.dcf import evaluate
from forecastai.scenarios.registry import all_scenarios

logger = logging.getLogger(__name__)


def sample_drivers() -> tuple[RevenueDriver, ...]:
  '''Revenue drivers used when no inputs file is given.'''
  return (
      RevenueDriver(title='Volume Growth',
                    subtitle='Units sold year over year',
                    unit=DriverUnit.PERCENT,
                    value=8.0,
                    min=-15.0,
                    max=30.0,
                    step=1.0),
      RevenueDriver(title='Pricing Power',
                    subtitle='Average selling price change',
                    unit=DriverUnit.PERCENT,
                    value=4.0,
                    min=-5.0,
                    max=15.0,
                    step=0.5),
      RevenueDriver(title='New Channels',
                    subtitle='Revenue from new distribution',
                    unit=DriverUnit.PERCENT,
                    value=10.0,
                    min=0.0,
                    max=30.0,
                    step=1.0),
  )


def default_inputs() -> DCFInputs:
  '''Sample assumption set with default operating and valuation values.'''
  return DCFInputs(
      revenue_drivers=sample_drivers(),
      operating=OperatingAssumptions(),
      valuation=ValuationAssumptions(),
  )


def load_inputs(path: Optional[Path]) -> DCFInputs:
  '''
  Load DCFInputs from a JSON file.

  Args:
    path: JSON file written by DCFInputs.to_dict(), or None for the sample

  Returns:
    DCFInputs

  Raises:
    FileNotFoundError: If path is given but does not exist
  '''
  if path is None:
    return default_inputs()
  if not path.exists():
    raise FileNotFoundError(f'Inputs file not found: {path}')
  with open(path, 'r', encoding='utf-8') as f:
    return DCFInputs.from_dict(json.load(f))


@dataclass
class ValuationReport:
  '''
  Outputs for every scenario plus the base case score.

  Attributes:
    outputs: Scenario name -> DCFOutputs ('bear', 'base', 'bull')
    score: Aggressiveness score of the given inputs (0-100)
    label: Confidence label against the requested style
    diag: Scenario diagnostics and failed validation checks
  '''
  outputs: Dict[str, DCFOutputs]
  score: float
  label: ConfidenceLabel
  diag: Dict[str, str] = field(default_factory=dict)


def run_valuation(
    inputs: DCFInputs,
    style: Union[InvestmentStyle, str] = InvestmentStyle.BASE,
) -> ValuationReport:
  '''
  Evaluate an assumption set under every scenario.

  Args:
    inputs: Base assumption set (left unchanged)
    style: Investment style the score is compared with

  Returns:
    ValuationReport
  '''
  style = InvestmentStyle(style)
  all_diag: Dict[str, str] = {'style': style.value}

  for check in validate_inputs(inputs):
    if not check.ok:
      logger.debug('Validation: %s', check)
      all_diag[f'check_{check.name}'] = check.details

  outputs = {
      preset.value: evaluate(scenario)
      for preset, scenario in all_scenarios(inputs).items()
  }

  score = aggressiveness_score(inputs)
  label = confidence_label(score, style)
  all_diag['label'] = label.label

  return ValuationReport(outputs=outputs,
                         score=score,
                         label=label,
                         diag=all_diag)


def main() -> None:
  '''CLI entrypoint.'''
  parser = argparse.ArgumentParser(description='Run index-based valuation')
  parser.add_argument('--inputs',
                      type=Path,
                      help='DCFInputs JSON file (default: sample drivers)')
  parser.add_argument('--style',
                      type=str,
                      default=InvestmentStyle.BASE.value,
                      choices=[s.value for s in InvestmentStyle],
                      help='Investment style for the confidence label')
  parser.add_argument('--horizon',
                      type=int,
                      help='Override horizon_years for the CAGR output')
  parser.add_argument('--verbose',
                      '-v',
                      action='store_true',
                      help='Verbose output')
  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(message)s',
  )

  inputs = load_inputs(args.inputs)
  if args.horizon is not None:
    inputs = replace(inputs, horizon_years=args.horizon)

  report = run_valuation(inputs, style=args.style)

  separator = '=' * 70
  logger.info('\n%s', separator)
  logger.info('Valuation - %d drivers, price $%.2f, %dY horizon',
              len(inputs.revenue_drivers), inputs.current_price,
              inputs.horizon_years)
  logger.info(separator)

  for name, out in report.outputs.items():
    logger.info('\n%s:', name.capitalize())
    logger.info('  Revenue Index: %.1f', out.revenue_index)
    logger.info('  FCF Margin: %.2f%%', out.fcf_margin * 100)
    logger.info('  Intrinsic Value: $%.2f', out.intrinsic_value)
    logger.info('  Upside: %.1f%%', out.upside_percent)
    logger.info('  CAGR: %.1f%%', out.cagr_percent)

  logger.info('\nAggressiveness: %.0f (%s)', report.score, report.label.label)
  logger.info('  Target for %s: %.0f, aligned: %s', args.style,
              report.label.target_score,
              'yes' if report.label.is_aligned else 'no')
  logger.info('%s\n', separator)


if __name__ == '__main__':
  main()
