"""
Command-line interface for the running log dashboard.

This module handles CLI argument parsing, logging configuration,
and user interaction.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as ConfigValidationError

from running_dashboard.config_models import DashboardConfig, MilesParseMode
from running_dashboard.csv_writer import MetricsCSVWriter
from running_dashboard.observability import LoggingHook, ObservabilityManager
from running_dashboard.orchestrator import FileProcessingError
from running_dashboard.report import render_outcome, render_view
from running_dashboard.session import DashboardSession

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate a running log CSV and summarize miles run",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Expected columns: date (DD/MM/YYYY), person, miles run (positive number)

Examples:
  # Summarize every runner
  running-dashboard runs.csv

  # Filter to one runner and export the tables
  running-dashboard runs.csv --person Alice --out ./report
        """
    )
    parser.add_argument("input_file", type=Path, help="Running log CSV file")
    parser.add_argument("--person", help="Show metrics and chart for one runner only")
    parser.add_argument("--config", type=Path, help="Config JSON file")
    parser.add_argument("--out", type=Path, help="Export metric tables as CSV into this directory")
    parser.add_argument("--lenient-miles", action="store_true",
                        help="Accept a leading numeric prefix in 'miles run' (e.g. '12abc' as 12)")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point.

    Returns:
        Exit code: 0 = all rows valid, 1 = nothing usable, 2 = partial success
    """
    args = build_parser().parse_args(argv)
    logging.getLogger().setLevel(args.log_level)

    try:
        config = DashboardConfig.from_json_file(args.config) if args.config else DashboardConfig()
        if args.lenient_miles:
            config = config.model_copy(update={"miles_parse_mode": MilesParseMode.LENIENT})

        observability = ObservabilityManager()
        observability.register_hook(LoggingHook(log_metrics=args.log_level == "DEBUG"))
        session = DashboardSession(config, observability)
        outcome = session.load(args.input_file)

        print(render_outcome(outcome))
        if not outcome.rows:
            return 1

        if args.person is not None:
            session.select_person(args.person)

        view = session.view()
        print(render_view(view))

        if args.out:
            written = MetricsCSVWriter(args.out).write_view(view)
            logger.info(f"Output Location: {args.out.resolve()} ({len(written)} file(s))")

        return 0 if outcome.success else 2

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except ConfigValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    except FileProcessingError as e:
        logger.error(f"File processing error: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
