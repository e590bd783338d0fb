"""Driftwatch v1.0: CLI entry point.

    python main.py                  report on generated sample data
    python main.py data.csv [14]    report on a data file, optional window size
"""

import sys

from driftwatch import DriftConfig, InsufficientDataError, analyze, analyze_data, generate_report
from driftwatch.log import setup_logging
from driftwatch.sample import generate_sample_records


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)

    setup_logging()
    cfg = DriftConfig()
    if len(args) > 1:
        cfg = cfg.with_window(int(args[1]))

    try:
        if args:
            result = analyze(args[0], cfg)
        else:
            result = analyze_data(generate_sample_records(seed=7), cfg)
    except InsufficientDataError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    print(generate_report(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
