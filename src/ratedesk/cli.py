"""Command-line interface for the rate desk.

Provides an argparse-based tool with two subcommands:

- ``view`` prints the rate desk for a scenario as a table or JSON.
- ``seed`` loads scenarios and inventory from a YAML seed file.

Usage::

    python -m ratedesk.cli view --scenario aggressive --window 90d
    python -m ratedesk.cli view --type podcast --format json
    python -m ratedesk.cli seed --file config/rate_desk_seed.yaml
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import structlog

from ratedesk.desk.inventory import ALL_TYPES, filter_inventory
from ratedesk.desk.view import get_rate_desk_view
from ratedesk.domain.errors import RateDeskError
from ratedesk.domain.models import PricedInventoryUnit, RateDeskOptions, RateDeskView
from ratedesk.domain.types import InventoryType, ScenarioSlug, TimeWindow
from ratedesk.pricing.formatting import format_compact_number, format_currency
from ratedesk.store.repository import RateDeskRepository
from ratedesk.store.schema import close_rate_desk_db, init_rate_desk_db
from ratedesk.store.seed import apply_seed, load_seed_file

DEFAULT_DB_PATH = "data/rate_desk.db"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for rate desk commands.

    Returns:
        A configured :class:`argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(description="Seeksy ad rate desk")
    parser.add_argument(
        "--db",
        type=str,
        default=DEFAULT_DB_PATH,
        help=f"Path to rate desk database (default: {DEFAULT_DB_PATH})",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    view = subparsers.add_parser("view", help="Show priced inventory for a scenario")
    view.add_argument(
        "--scenario",
        type=str,
        default=ScenarioSlug.BASE.value,
        help="Scenario slug (default: base)",
    )
    view.add_argument(
        "--months",
        type=int,
        default=1,
        help="Planning months (accepted, does not change pricing)",
    )
    view.add_argument(
        "--type",
        type=str,
        choices=[ALL_TYPES, *(t.value for t in InventoryType)],
        default=ALL_TYPES,
        dest="inventory_type",
        help="Only list units of this inventory type",
    )
    view.add_argument(
        "--window",
        type=str,
        choices=[w.value for w in TimeWindow],
        default=TimeWindow.DAYS_30.value,
        help="Projection window for summary and revenue column (default: 30d)",
    )
    view.add_argument(
        "--format",
        type=str,
        choices=["table", "json"],
        default="table",
        dest="output_format",
        help="Output format (default: table)",
    )

    seed = subparsers.add_parser("seed", help="Load scenarios and inventory from YAML")
    seed.add_argument("--file", type=str, required=True, help="Path to the seed file")

    return parser


def format_summary(view: RateDeskView, window: TimeWindow) -> str:
    """Format the scenario header and the portfolio totals for *window*."""
    totals = view.summary.for_window(window)
    return "\n".join([
        f"Scenario: {view.scenario.name} ({view.scenario.slug}) - {view.scenario.description}",
        f"Window: {window.value}",
        f"Sellable impressions: {format_compact_number(totals.sellable_impressions)}",
        f"Potential gross spend: {format_currency(totals.potential_gross_spend)}",
        f"Seeksy revenue: {format_currency(totals.seeksy_revenue)}",
        f"Average recommended CPM: {format_currency(view.summary.average_recommended_cpm)}",
    ])


def format_table(units: list[PricedInventoryUnit], window: TimeWindow) -> str:
    """Format priced units as a human-readable table.

    Columns: Unit, Type, Impressions, Rec. CPM, Floor-Ceiling, Revenue, Health.
    Long names are truncated to fit reasonable terminal width.

    Args:
        units: Priced inventory units to list.
        window: Window selecting the revenue column.

    Returns:
        Formatted table string with header row.
    """
    if not units:
        return "No inventory found."

    headers = ["Unit", "Type", "Impressions", "Rec. CPM", "Floor-Ceiling", "Revenue", "Health"]
    widths = [28, 13, 11, 9, 15, 12, 11]

    def truncate(value: str, width: int) -> str:
        if len(value) > width:
            return value[: width - 3] + "..."
        return value

    lines: list[str] = []

    header_line = "  ".join(h.ljust(w) for h, w in zip(headers, widths, strict=True))
    lines.append(header_line)
    lines.append("-" * len(header_line))

    for unit in units:
        cells = [
            truncate(unit.name, widths[0]),
            truncate(unit.type, widths[1]),
            format_compact_number(unit.expected_monthly_impressions),
            format_currency(unit.recommended_cpm),
            f"{format_currency(unit.adjusted_floor_cpm)}-{format_currency(unit.adjusted_ceiling_cpm)}",
            format_currency(unit.revenue_for_window(window)),
            unit.health_status.value,
        ]
        lines.append("  ".join(c.ljust(w) for c, w in zip(cells, widths, strict=True)))

    return "\n".join(lines)


def _run_view(args: argparse.Namespace, repository: RateDeskRepository) -> str:
    options = RateDeskOptions(scenario_slug=args.scenario, months=args.months)
    view = get_rate_desk_view(repository, options)
    units = filter_inventory(view.inventory, args.inventory_type)

    if args.output_format == "json":
        shown = RateDeskView(scenario=view.scenario, summary=view.summary, inventory=units)
        return shown.model_dump_json(indent=2)

    window = TimeWindow(args.window)
    return f"{format_summary(view, window)}\n\n{format_table(units, window)}"


def _run_seed(args: argparse.Namespace, repository: RateDeskRepository) -> str:
    counts = apply_seed(repository, load_seed_file(Path(args.file)))
    return (
        f"Seeded {counts['scenarios']} scenarios, {counts['assumptions']} assumption sets, "
        f"{counts['inventory']} inventory units"
    )


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the subcommand, and print its output.

    Returns:
        Process exit code: 0 on success, 1 on a rate desk error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # Keep stdout for command output; warnings and errors go to stderr
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )

    db_path = Path(args.db)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = init_rate_desk_db(db_path)

    try:
        repository = RateDeskRepository(conn)
        if args.command == "seed":
            output = _run_seed(args, repository)
        else:
            output = _run_view(args, repository)
    except RateDeskError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        close_rate_desk_db(conn)

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
