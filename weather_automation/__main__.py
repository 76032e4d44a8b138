"""Run one invocation of a scheduled unit locally and print its JSON result.

    python -m weather_automation daily-summary
    python -m weather_automation automation --condition Rain
"""
import argparse
import json
import sys

from weather_automation.handlers import automation_handler, daily_summary_handler
from weather_automation.domain import Condition


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="weather_automation", description=__doc__.splitlines()[0])
    sub = parser.add_subparsers(dest="unit", required=True)
    sub.add_parser("daily-summary", help="fetch the forecast for the configured city")
    automation = sub.add_parser("automation", help="run the automation simulation")
    automation.add_argument("--condition", choices=[c.value for c in Condition], default=None)
    args = parser.parse_args(argv)

    if args.unit == "daily-summary":
        result = daily_summary_handler({"source": "cli"})
    else:
        event = {"source": "cli"}
        if args.condition:
            event["condition"] = args.condition
        result = automation_handler(event)

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
