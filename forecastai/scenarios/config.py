"""
Scenario configuration for bear/base/bull transforms.

ScenarioConfig is a serializable (JSON-friendly) record of every constant a
scenario transform applies, so a preset can be stored next to the results
it produced and replayed later.
"""

from dataclasses import asdict
from dataclasses import dataclass
import json
from typing import Any


@dataclass
class ScenarioConfig:
  """
  Adjustments applied by a scenario transform.

  Each *_delta is added to the base value and the result is held at the
  matching *_bound: a floor when the delta is negative, a ceiling when it
  is positive.

  Attributes:
    name: Preset name ('bear', 'base', 'bull')
    driver_direction: -1 moves drivers toward min, +1 toward max, 0 none
    driver_range_fraction: Share of (max - min) moved by percent, number
      and currency drivers
    multiple_step: Flat step for multiple drivers
    operating_margin_delta / operating_margin_bound: Operating margin (pts)
    capex_delta / capex_bound: Capex % of revenue (pts)
    working_capital_delta / working_capital_bound: Working capital (pts)
    discount_rate_delta / discount_rate_bound: Discount rate (pts)
    terminal_growth_delta / terminal_growth_bound: Terminal growth (pts)
    min_terminal_spread: Terminal growth must sit at least this far below
      the discount rate
    fallback_terminal_spread: Spread used when the minimum is violated
  """
  name: str = 'base'
  driver_direction: int = 0
  driver_range_fraction: float = 0.20
  multiple_step: float = 0.05
  operating_margin_delta: float = 0.0
  operating_margin_bound: float = 0.0
  capex_delta: float = 0.0
  capex_bound: float = 0.0
  working_capital_delta: float = 0.0
  working_capital_bound: float = 0.0
  discount_rate_delta: float = 0.0
  discount_rate_bound: float = 0.0
  terminal_growth_delta: float = 0.0
  terminal_growth_bound: float = 0.0
  min_terminal_spread: float = 0.5
  fallback_terminal_spread: float = 0.6

  @classmethod
  def base(cls) -> 'ScenarioConfig':
    """No adjustments."""
    return cls(name='base')

  @classmethod
  def bear(cls) -> 'ScenarioConfig':
    """
    Pessimistic preset.

    Uses:
      - Drivers down 20% of range (multiples down 0.05), floored at min
      - Operating margin -3pts (floor 5)
      - Capex +1pt (ceiling 15), working capital +0.5pt (ceiling 5)
      - Discount rate +1pt (ceiling 20), terminal growth -0.3pt (floor 1)
    """
    return cls(
        name='bear',
        driver_direction=-1,
        operating_margin_delta=-3.0,
        operating_margin_bound=5.0,
        capex_delta=1.0,
        capex_bound=15.0,
        working_capital_delta=0.5,
        working_capital_bound=5.0,
        discount_rate_delta=1.0,
        discount_rate_bound=20.0,
        terminal_growth_delta=-0.3,
        terminal_growth_bound=1.0,
    )

  @classmethod
  def bull(cls) -> 'ScenarioConfig':
    """
    Optimistic preset, the mirror image of bear().

    Uses:
      - Drivers up 20% of range (multiples up 0.05), capped at max
      - Operating margin +3pts (ceiling 40)
      - Capex -1pt (floor 1), working capital -0.5pt (floor 0)
      - Discount rate -1pt (floor 5), terminal growth +0.3pt (ceiling 4)
    """
    return cls(
        name='bull',
        driver_direction=1,
        operating_margin_delta=3.0,
        operating_margin_bound=40.0,
        capex_delta=-1.0,
        capex_bound=1.0,
        working_capital_delta=-0.5,
        working_capital_bound=0.0,
        discount_rate_delta=-1.0,
        discount_rate_bound=5.0,
        terminal_growth_delta=0.3,
        terminal_growth_bound=4.0,
    )

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary."""
    return asdict(self)

  def to_json(self) -> str:
    """Serialize to JSON string."""
    return json.dumps(self.to_dict(), indent=2)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> 'ScenarioConfig':
    """Create from dictionary."""
    return cls(**data)

  @classmethod
  def from_json(cls, json_str: str) -> 'ScenarioConfig':
    """Create from JSON string."""
    return cls.from_dict(json.loads(json_str))
