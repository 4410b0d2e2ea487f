"""Thin wrapper to build the static chart page using the chart_builder package.
Run:
  python build_chart.py --csv data/all_drinking_v2.csv --out docs [--png]
"""

import argparse
import logging
import sys
from pathlib import Path

from chart_builder.config import CSV_PATH, OUT_DIR
from chart_builder.errors import ChartError
from chart_builder.main import build_site


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Build the alcohol consumption bar chart page from CSV")
    parser.add_argument("--csv", type=Path, default=CSV_PATH, help="CSV with state, sex, type, percent columns")
    parser.add_argument("--out", type=Path, default=OUT_DIR, help="Output directory for index.html and assets")
    parser.add_argument("--png", action="store_true", help="Also write one PNG per sex/type combination")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        build_site(args.csv, args.out, png=args.png)
    except ChartError as e:
        logging.getLogger("build_chart").error("Build failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
