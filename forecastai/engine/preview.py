"""
Illustrative forecast preview for an assumption template.

A deliberately simple model used to show how template assumptions move
the outcome before a full valuation is run: compound revenue growth, an
FCF margin of operating margin x conversion, net buybacks applied to the
share count and a terminal P/E scalar on the starting price. Index values
start at 100 and are normalized to the default template (18% margin at
75% conversion, 18x P/E), so those values with zero growth and no net
buyback reproduce the starting price.

Key functions:
  preview: Assumption values + horizon -> PreviewResult
  key_drivers: Titles of the most important valuation-relevant items
"""

from collections.abc import Iterable, Mapping
from dataclasses import asdict
from dataclasses import dataclass
from typing import Any, Tuple

DEFAULTS = {
    'revenue_growth': 8.0,
    'operating_margin': 18.0,
    'fcf_conversion_rate': 75.0,
    'buyback_pct_share_count': 2.0,
    'sbc_dilution': 1.5,
    'starting_share_price': 100.0,
    'terminal_pe_multiple': 18.0,
}

BASE_MARGIN = 18.0
BASE_CONVERSION = 75.0
BASE_PE = 18.0

VALUATION_AFFECTS = frozenset({'FCF', 'Valuation', 'SharePrice', 'Multiple'})
KEY_DRIVER_LIMIT = 3


@dataclass(frozen=True)
class AssumptionItem:
  """One template assumption; affects names the outputs it moves."""
  key: str
  title: str
  value: float
  importance: int = 0
  affects: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PreviewResult:
  """
  Illustrative preview outputs.

  Attributes:
    revenue_index: Revenue at the horizon (base 100)
    fcf_margin_estimate: Operating margin x FCF conversion (%)
    fcf_index: FCF at the horizon (base 100 at the default margin)
    share_count_change: Cumulative share count change over the horizon (%)
    implied_share_price: Starting price scaled by FCF/share and P/E
    implied_total_return: Implied price vs starting price (%)
    key_drivers: Titles of up to three valuation-relevant assumptions
  """
  revenue_index: float
  fcf_margin_estimate: float
  fcf_index: float
  share_count_change: float
  implied_share_price: float
  implied_total_return: float
  key_drivers: Tuple[str, ...] = ()

  def to_dict(self) -> dict[str, Any]:
    return asdict(self)


def key_drivers(items: Iterable[AssumptionItem],
                limit: int = KEY_DRIVER_LIMIT) -> Tuple[str, ...]:
  """
  Titles of the highest-importance items that affect valuation.

  An item qualifies when any of its affects is FCF, Valuation, SharePrice
  or Multiple. Ties keep their input order.
  """
  relevant = [i for i in items if VALUATION_AFFECTS.intersection(i.affects)]
  relevant.sort(key=lambda i: i.importance, reverse=True)
  return tuple(i.title for i in relevant[:limit])


def preview(values: Mapping[str, float],
            horizon_years: int = 5,
            items: Iterable[AssumptionItem] = ()) -> PreviewResult:
  """
  Calculate the illustrative preview.

  Args:
    values: Assumption values by key (percent values in points); missing
      keys fall back to DEFAULTS
    horizon_years: Compounding horizon
    items: Template items used to pick the key drivers

  Returns:
    PreviewResult

  Raises:
    ValueError: If starting_share_price is zero
  """
  v = {**DEFAULTS, **values}
  years = float(horizon_years)
  start = v['starting_share_price']
  if start == 0:
    raise ValueError('starting_share_price cannot be zero')

  revenue_index = 100.0 * (1.0 + v['revenue_growth'] / 100.0)**years
  fcf_margin = v['operating_margin'] * v['fcf_conversion_rate'] / 100.0
  fcf_index = revenue_index * fcf_margin / (BASE_MARGIN * BASE_CONVERSION /
                                            100.0)

  # Net buyback compounds into the share count index as given (a positive
  # rate raises the index).
  net_buyback = (v['buyback_pct_share_count'] - v['sbc_dilution']) / 100.0
  share_factor = (1.0 + net_buyback)**years
  share_count_change = (share_factor - 1.0) * 100.0

  fcf_per_share_index = fcf_index / share_factor
  implied_price = (fcf_per_share_index / 100.0) * (
      v['terminal_pe_multiple'] / BASE_PE) * start

  return PreviewResult(
      revenue_index=revenue_index,
      fcf_margin_estimate=fcf_margin,
      fcf_index=fcf_index,
      share_count_change=share_count_change,
      implied_share_price=implied_price,
      implied_total_return=(implied_price - start) / start * 100.0,
      key_drivers=key_drivers(items),
  )
