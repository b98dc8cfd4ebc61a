"""
Baby Care Report - Main Module
==============================

Turns a log of infant-care events into a 7-day rolling average timeline.

Key Design Decisions:
1. Every event is bucketed by the calendar date of its own timestamp, as
   recorded (no timezone conversion)
2. Sleep is attributed to the day it ended; unfinished sleep is ignored
3. Bottles given on the same day less than an hour apart count as one session
4. Windows slide over the days present in the log; days without events are
   not zero-filled

This module serves as the CLI entry point and orchestrates the workflow by
importing functions from the specialized modules.
"""

import argparse
import sys

from babyreport.data_loader import load_events
from babyreport.aggregator import aggregate_by_day
from babyreport.averager import rolling_means, WINDOW_DAYS
from babyreport.reporter import (
    print_windows,
    print_daily_summaries,
    generate_json_output,
    save_json_output
)


# =============================================================================
# CLI INTERFACE
# =============================================================================

def create_parser():
    """Create and return the argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog='babyreport',
        description='Summarizes an infant-care event log as a rolling average of daily totals.',
        epilog='Example: python main.py --events data/events.json --daily --output report.json',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--events',
        type=str,
        default='-',
        help="Path to the event log JSON file, or '-' for standard input (default: -)"
    )

    parser.add_argument(
        '--window-days',
        type=int,
        default=WINDOW_DAYS,
        help=f'Number of logged days averaged per window (default: {WINDOW_DAYS})'
    )

    parser.add_argument(
        '--daily',
        action='store_true',
        help='Also print the totals of every logged day before the windows'
    )

    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Also save the report as JSON to this path'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print progress messages to stderr'
    )

    return parser


def main(argv=None):
    """Main entry point for the application."""
    parser = create_parser()
    args = parser.parse_args(argv)

    def progress(message):
        if args.verbose:
            print(message, file=sys.stderr, flush=True)

    try:
        progress("Loading events...")
        events = load_events(args.events)
        progress(f"  Loaded {len(events)} events")

        progress("Aggregating by day...")
        daily = aggregate_by_day(events)
        progress(f"  Created {len(daily)} daily sums")

        windows = rolling_means(daily, args.window_days)
        progress(f"  Computed {len(windows)} rolling window(s) of {args.window_days} days")

        if args.daily:
            print_daily_summaries(daily)

        print_windows(windows)

        if args.output:
            save_json_output(generate_json_output(daily, windows, args.window_days), args.output)
            progress(f"JSON output saved to: {args.output}")

    except FileNotFoundError as e:
        print(f"\nFile Error: {e}", flush=True)
        print("   Check that the event log exists and the path is correct.\n", flush=True)
        return 1
    except (KeyError, TypeError) as e:
        print(f"\nData Structure Error: {e}", flush=True)
        print("   The JSON file structure is invalid.", flush=True)
        print("   The event log must be an object with an 'events' list.\n", flush=True)
        return 1
    except ValueError as e:
        print(f"\nData Validation Error: {e}", flush=True)
        print("   Check your input data for invalid values, missing fields, or incorrect formats.\n", flush=True)
        return 1
    except Exception as e:
        print(f"\nUnexpected error: {e}\n", flush=True)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
