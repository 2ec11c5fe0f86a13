"""Command-line interface for the shift insights engine."""

import argparse
import json
import logging
import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional, Union

from shiftinsights.analytics.engine import InsightsEngine
from shiftinsights.domain.models import (
    DateRange,
    EmployeeRecord,
    HistoryOrder,
    InvalidArgumentError,
    LocationRecord,
    ShiftRecord,
    ShiftStatus,
    parse_instant,
)
from shiftinsights.domain.stats import InsightsBundle
from shiftinsights.output.pdf_generator import InsightsPDFGenerator
from shiftinsights.output.text_report import InsightsTextReport

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_BAD_INPUT = 2


def load_dataset(
    path: Union[str, Path],
) -> tuple[list[ShiftRecord], list[EmployeeRecord], list[LocationRecord]]:
    """Load shifts, employees and locations from a JSON file.

    The file holds an object with ``shifts``, ``employees`` and
    ``locations`` arrays of backend rows; missing arrays load as empty.
    """
    data = json.loads(Path(path).read_text())
    if not isinstance(data, dict):
        raise ValueError("Data file must contain a JSON object")

    shifts = [ShiftRecord.from_dict(row) for row in data.get("shifts", [])]
    employees = [EmployeeRecord.from_dict(row) for row in data.get("employees", [])]
    locations = [LocationRecord.from_dict(row) for row in data.get("locations", [])]
    logger.debug(
        "Loaded %d shifts, %d employees, %d locations from %s",
        len(shifts), len(employees), len(locations), path,
    )
    return shifts, employees, locations


def create_sample_dataset(
    count: int = 10,
    now: Optional[datetime] = None,
    months: int = 6,
    seed: int = 7,
) -> tuple[list[ShiftRecord], list[EmployeeRecord], list[LocationRecord]]:
    """Create a deterministic sample dataset for demos.

    Args:
        count: Number of employees to create.
        now: Reference instant the history is generated back from.
        months: Months of shift history to generate.
        seed: Random seed, so repeated runs give the same data.
    """
    rng = random.Random(seed)
    if now is None:
        now = datetime.now().replace(second=0, microsecond=0)

    locations = [
        LocationRecord(id="loc-downtown", name="Downtown"),
        LocationRecord(id="loc-airport", name="Airport"),
    ]

    names = [
        "Alice", "Bob", "Carol", "David", "Eve", "Frank", "Grace", "Henry",
        "Ivy", "Jack", "Kate", "Leo", "Mia", "Noah", "Olivia", "Paul",
    ]
    employees = []
    for i in range(count):
        name = names[i % len(names)]
        if i >= len(names):
            name = f"{name}{i // len(names) + 1}"
        employees.append(
            EmployeeRecord(
                id=f"E{i + 1:03d}",
                name=name,
                # Every fifth employee has no rate on file
                hourly_rate=None if i % 5 == 4 else float(15 + (i % 4) * 2.5),
                hire_date=(now - timedelta(days=60 + 45 * i)).date() if i % 3 else None,
            )
        )

    # Typical start hours for morning, day and closing shifts
    start_hours = [6, 7, 9, 11, 14, 17, 22]
    shifts = []
    day = (now - timedelta(days=months * 30)).date()
    end_day = (now + timedelta(days=14)).date()
    shift_number = 0
    while day <= end_day:
        for _ in range(rng.randint(1, 4)):
            shift_number += 1
            start = datetime(day.year, day.month, day.day, rng.choice(start_hours))
            if now.tzinfo is not None:
                start = start.replace(tzinfo=now.tzinfo)
            end = start + timedelta(hours=rng.choice([4, 6, 8, 8, 8, 10]))
            employee = rng.choice(employees) if employees and rng.random() > 0.05 else None
            shifts.append(
                ShiftRecord(
                    id=f"S{shift_number:05d}",
                    start=start,
                    end=end,
                    status=_sample_status(rng, end, now),
                    location_id=rng.choice(locations).id,
                    employee_id=employee.id if employee else None,
                )
            )
        day += timedelta(days=1)

    return shifts, employees, locations


def _sample_status(
    rng: random.Random,
    end: datetime,
    now: datetime,
) -> Optional[ShiftStatus]:
    roll = rng.random()
    if roll < 0.05:
        return ShiftStatus.CANCELED
    if end >= now:
        return ShiftStatus.SCHEDULED
    if roll < 0.10:
        # Never closed out: counts as a no-show
        return None
    return ShiftStatus.COMPLETED


def default_now(shifts: list[ShiftRecord]) -> datetime:
    """Current time, timezone-aware when the shift data is."""
    if shifts and shifts[0].start.tzinfo is not None:
        return datetime.now(timezone.utc)
    return datetime.now()


def print_summary(bundle: InsightsBundle) -> None:
    """Print the headline figures of a bundle."""
    financial = bundle.financial
    reliability = bundle.reliability
    utilization = bundle.utilization
    window = bundle.distribution.busiest_window

    print(f"\n{'=' * 60}")
    print(f"Insights for {bundle.location_id or 'all locations'} "
          f"as of {bundle.generated_at.isoformat()}")
    print(f"{'=' * 60}")
    print(f"  Shifts: {bundle.overview.total_shifts} "
          f"({bundle.overview.completed_shifts} completed)")
    print(f"  Revenue: ${financial.total_revenue:,.2f} "
          f"({financial.revenue_growth_percent:+.1f}% vs prior period)")
    print(f"  Labor cost: ${financial.labor_cost:,.2f}")
    print(f"  Profit margin: {financial.profit_margin_percent:.1f}%")
    print(f"  Projected monthly earnings: ${financial.projected_monthly_earnings:,.2f}")
    print(f"  Completion rate: {reliability.completion_rate_percent:.1f}%")
    print(f"  No-show rate: {reliability.no_show_rate_percent:.1f}%")
    print(f"  Utilization: {utilization.utilization_percent:.1f}% "
          f"({utilization.employees_with_at_least_one_shift}"
          f"/{utilization.assigned_employee_count} employees)")
    print(f"  Busiest window: {window.start_hour:02d}:00-{window.end_hour:02d}:00 "
          f"({window.count} starts)")

    print("\nMonthly History:")
    for point in bundle.history:
        print(f"  {point.period_label}: {point.total_hours:.1f}h, "
              f"${point.total_earnings:,.2f}, {point.distinct_employee_count} employees")

    if bundle.warnings:
        print(f"\nWarnings ({len(bundle.warnings)}):")
        for warning in bundle.warnings[:5]:
            print(f"    - {warning}")
        if len(bundle.warnings) > 5:
            print(f"    ... and {len(bundle.warnings) - 5} more warnings")


def write_outputs(
    bundle: InsightsBundle,
    text_path: Optional[str] = None,
    pdf_path: Optional[str] = None,
) -> None:
    if text_path:
        InsightsTextReport().generate(bundle, text_path)
        print(f"\nText report written to {text_path}")
    if pdf_path:
        print(f"\nGenerating PDF: {pdf_path}")
        InsightsPDFGenerator().generate(bundle, pdf_path)
        print("  PDF created successfully!")


def run_report(args: argparse.Namespace) -> int:
    """Compute insights for a JSON data file."""
    try:
        shifts, employees, locations = load_dataset(args.data)
        now = parse_instant(args.now) if args.now else default_now(shifts)
        date_range = None
        if args.range_from or args.range_to:
            date_range = DateRange(
                start=parse_instant(args.range_from),
                end=parse_instant(args.range_to),
            )
        order = HistoryOrder.OLDEST_FIRST if args.oldest_first else HistoryOrder.NEWEST_FIRST

        bundle = InsightsEngine().compute_location_insights(
            shifts,
            employees,
            locations,
            args.location,
            now,
            date_range=date_range,
            history_order=order,
        )
    except (OSError, ValueError, KeyError) as exc:
        # InvalidArgumentError is a ValueError
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    if args.json:
        print(json.dumps(bundle.to_dict(), indent=2))
    else:
        print_summary(bundle)
    write_outputs(bundle, args.text, args.pdf)
    return EXIT_OK


def run_demo(count: int = 10, pdf_path: Optional[str] = None) -> int:
    """Compute insights for a generated sample dataset."""
    now = datetime.now().replace(second=0, microsecond=0)
    print(f"Generating sample data for {count} employees...")
    shifts, employees, locations = create_sample_dataset(count, now)

    try:
        bundle = InsightsEngine().compute_location_insights(
            shifts, employees, locations, locations[0].id, now
        )
    except InvalidArgumentError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    print_summary(bundle)
    write_outputs(bundle, pdf_path=pdf_path)
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Shift Insights - Workforce Analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s report data.json                     Insights across all locations
  %(prog)s report data.json --location loc-1    Insights for one location
  %(prog)s report data.json --now 2024-03-15T12:00:00 --json
  %(prog)s report data.json --from 2024-01-01 --to 2024-02-01 --pdf jan.pdf

  %(prog)s demo                                 Run demo with 10 employees
  %(prog)s demo --count 25 --pdf insights.pdf   Demo with PDF output
        """,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    report_parser = subparsers.add_parser(
        "report", parents=[common], help="Compute insights for a data file"
    )
    report_parser.add_argument(
        "data",
        type=str,
        help='JSON file with "shifts", "employees" and "locations" arrays',
    )
    report_parser.add_argument(
        "--location", "-l",
        type=str,
        default=None,
        help="Location id to scope shifts to (default: all locations)",
    )
    report_parser.add_argument(
        "--now",
        type=str,
        default=None,
        help="Reference time as ISO-8601 (default: current time)",
    )
    report_parser.add_argument(
        "--from",
        dest="range_from",
        type=str,
        default=None,
        help="Start of the date range, inclusive (ISO-8601)",
    )
    report_parser.add_argument(
        "--to",
        dest="range_to",
        type=str,
        default=None,
        help="End of the date range, exclusive (ISO-8601)",
    )
    report_parser.add_argument(
        "--oldest-first",
        action="store_true",
        help="List monthly history oldest month first",
    )
    report_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full bundle as JSON",
    )
    report_parser.add_argument(
        "--text",
        type=str,
        help="Output text report file path",
    )
    report_parser.add_argument(
        "--pdf",
        type=str,
        help="Output PDF file path",
    )

    demo_parser = subparsers.add_parser(
        "demo", parents=[common], help="Run insights on sample data"
    )
    demo_parser.add_argument(
        "--count", "-c",
        type=int,
        default=10,
        help="Number of employees to generate (default: 10)",
    )
    demo_parser.add_argument(
        "--pdf",
        type=str,
        help="Output PDF file path",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "report":
        return run_report(args)
    elif args.command == "demo":
        return run_demo(args.count, args.pdf)
    else:
        parser.print_help()
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
