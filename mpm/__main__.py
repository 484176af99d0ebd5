"""
MPM Scheduler
=============

Earliest dates, latest dates and critical path of a task network, computed
with the Metra Potential Method.
"""

import argparse
import logging
import sys

from .domain.errors import MPMError
from .domain.network import TaskNetwork
from .examples.simple_project import create_sample_project
from .services.report import format_schedule_report
from .utils.csv_import import load_tasks_csv

logger = logging.getLogger("mpm")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Metra Potential Method scheduler")
    parser.add_argument(
        "--example", action="store_true", help="Run the example project"
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="CSV file with name,duration,predecessors columns",
    )
    parser.add_argument(
        "--delimiter", type=str, default=",", help="CSV field delimiter"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.example:
        print("Running example project...")
        create_sample_project()
        return 0
    elif args.csv:
        try:
            names, durations, predecessors = load_tasks_csv(
                args.csv, delimiter=args.delimiter
            )
            network = TaskNetwork(names, durations, predecessors)
            print(format_schedule_report(network))
        except (MPMError, OSError) as e:
            logger.error("Could not schedule %s: %s", args.csv, e)
            return 1
        return 0
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
