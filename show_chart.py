"""Open the interactive bar chart in a matplotlib window.
Run:
  python show_chart.py --csv data/all_drinking_v2.csv
"""

import argparse
import logging
import sys
from pathlib import Path

from chart_builder.config import CSV_PATH
from chart_builder.errors import ChartError
from chart_builder.main import run_interactive


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Interactive alcohol consumption bar chart")
    parser.add_argument("--csv", type=Path, default=CSV_PATH, help="CSV with state, sex, type, percent columns")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        run_interactive(args.csv)
    except ChartError as e:
        logging.getLogger("show_chart").error("Couldn't show chart: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
