'''
Chart simulated price series for one or more ticker symbols.

Creates one PNG per symbol with the simulated path for the selected range,
the previous close and the intraday high/low band.

Usage:
  python -m forecastai.analysis.plot_prices \\
      --symbols AAPL MSFT --range 1M

  python -m forecastai.analysis.plot_prices \\
      --symbols-file symbols.txt --output-dir charts/prices
'''

import argparse
import logging
from pathlib import Path
from typing import Union

import matplotlib.pyplot as plt

from forecastai.domain.types import PriceRange
from forecastai.market.simulator import price_series
from forecastai.market.simulator import quote

logger = logging.getLogger(__name__)


def plot_price_series(
    symbol: str,
    price_range: Union[PriceRange, str],
    output_dir: Path,
) -> Path:
  '''
  Plot the simulated series for one symbol and save it.

  Args:
    symbol: Ticker symbol
    price_range: PriceRange or its value ('1D', '1W', '1M', '1Y')
    output_dir: Directory for the PNG (must exist)

  Returns:
    Path of the saved chart
  '''
  price_range = PriceRange(price_range)
  series = price_series(symbol, price_range)
  snapshot = quote(symbol)

  _, ax = plt.subplots(figsize=(12, 6))

  color = 'green' if snapshot.day_change.absolute >= 0 else 'red'
  ax.plot(range(len(series)),
          series,
          '-',
          label=f'{symbol} ({price_range.display_name})',
          linewidth=2,
          color=color)
  ax.axhline(snapshot.previous_close,
             linestyle='--',
             linewidth=1,
             color='gray',
             label=f'Previous close ${snapshot.previous_close:.2f}')
  ax.axhspan(snapshot.day_high_low.low,
             snapshot.day_high_low.high,
             alpha=0.1,
             color='blue',
             label='Day range')

  ax.set_xlabel('Step', fontsize=12, fontweight='bold')
  ax.set_ylabel('Price ($)', fontsize=12, fontweight='bold')
  ax.set_title(f'{symbol} - Simulated Price, {price_range.display_name}',
               fontsize=14,
               fontweight='bold',
               pad=20)
  ax.legend(loc='best', fontsize=11, framealpha=0.9)
  ax.grid(True, alpha=0.3, linestyle='--')

  stats_text = (f'Price:  ${snapshot.current_price:.2f}\n'
                f'Change: {snapshot.day_change.absolute:+.2f} '
                f'({snapshot.day_change.percent:+.2f}%)\n'
                f'High:   ${snapshot.day_high_low.high:.2f}\n'
                f'Low:    ${snapshot.day_high_low.low:.2f}')
  ax.text(0.02,
          0.98,
          stats_text,
          transform=ax.transAxes,
          verticalalignment='top',
          fontsize=10,
          bbox=dict(boxstyle='round', facecolor='lightblue', alpha=0.8))

  plt.tight_layout()

  output_path = output_dir / f'{symbol}_{price_range.value}.png'
  plt.savefig(output_path, dpi=150, bbox_inches='tight')
  logger.info('Saved: %s', output_path)

  plt.close()
  return output_path


def main() -> None:
  '''CLI entrypoint for simulated price charts.'''
  parser = argparse.ArgumentParser(
      description='Chart simulated price series',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog='''
Examples:
  # Two symbols, one month
  python -m forecastai.analysis.plot_prices --symbols AAPL MSFT --range 1M

  # From symbol file
  python -m forecastai.analysis.plot_prices \\
      --symbols-file symbols.txt --range 1Y
      ''')

  parser.add_argument('--symbols',
                      nargs='+',
                      help='Symbols to chart (e.g., AAPL MSFT)')
  parser.add_argument('--symbols-file',
                      type=Path,
                      help='Path to file with symbol list (one per line)')
  parser.add_argument('--range',
                      dest='price_range',
                      choices=[r.value for r in PriceRange],
                      default=PriceRange.ONE_MONTH.value,
                      help='Chart range (default: 1M)')
  parser.add_argument('--output-dir',
                      type=Path,
                      default=Path('output/price_charts'),
                      help='Output directory for charts')
  parser.add_argument('--verbose',
                      '-v',
                      action='store_true',
                      help='Verbose output')

  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(asctime)s [%(levelname)s] %(message)s',
      datefmt='%Y-%m-%d %H:%M:%S',
  )

  if args.symbols_file:
    if not args.symbols_file.exists():
      raise FileNotFoundError(f'File not found: {args.symbols_file}')

    with open(args.symbols_file, 'r', encoding='utf-8') as f:
      symbols = [
          line.strip()
          for line in f
          if line.strip() and not line.strip().startswith('#')
      ]

    if not symbols:
      raise ValueError('No symbols found in file')

    logger.info('Loaded %d symbols from %s', len(symbols), args.symbols_file)
  elif args.symbols:
    symbols = args.symbols
  else:
    symbols = ['AAPL', 'MSFT']
    logger.warning('No symbols specified, using defaults: %s', symbols)

  args.output_dir.mkdir(parents=True, exist_ok=True)

  for symbol in symbols:
    plot_price_series(symbol, args.price_range, args.output_dir)

  logger.info('All charts saved to: %s', args.output_dir)


if __name__ == '__main__':
  main()
