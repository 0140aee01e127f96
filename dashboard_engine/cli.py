"""CLI entry point for the dashboard engine.

Resolves template charts and KPI cards for a dataset file, inspects the
registry, and validates override bundles.

Usage::

    # Resolve the charts of a template against a CSV export
    python -m dashboard_engine.cli charts \\
        --industry finance --template template2 \\
        --data data/ledger.csv

    # KPI cards for a CRM export, with the source's metric column
    python -m dashboard_engine.cli kpis \\
        --industry "SFW CRM" --data data/leads.json \\
        --metric-col est_value

    # Show an industry's KPIs and template pool
    python -m dashboard_engine.cli inspect --industry hr -v

    # Validate override bundles (and optionally resolution against data)
    python -m dashboard_engine.cli validate \\
        --overrides config/industries \\
        --industry hr --data data/people.csv
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from dashboard_engine.engine import DashboardEngine, initialize
from dashboard_engine.exceptions import DashboardEngineError
from dashboard_engine.processor.dataset import DatasetView, load_dataset
from dashboard_engine.qa.validator import QAValidator
from dashboard_engine.schema.industries import normalize_industry
from dashboard_engine.schema.models import SourceMapping


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

def _configure_logging(args):
    level = logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING
    logging.basicConfig(level=level, format="  %(levelname)s %(name)s: %(message)s")


def _load_registry(args):
    """Build the registry, with override bundles from --overrides if given."""
    overrides = getattr(args, "overrides", None)
    if overrides:
        path = Path(overrides)
        if not path.is_dir():
            _error(f"Override directory not found: {path}")
        _info(f"Loading overrides from {path}")
    try:
        return initialize(overrides)
    except DashboardEngineError as e:
        _error(f"{e.message} {e.details}" if e.details else e.message)


def _load_data(args) -> DatasetView:
    path = getattr(args, "data", None)
    if path is None:
        _warn("No data file specified — resolving against an empty dataset")
        return DatasetView([])
    p = Path(path)
    if not p.exists():
        _error(f"Data file not found: {p}")
    try:
        view = load_dataset(p)
    except (ValueError, UnicodeDecodeError) as e:
        _error(f"Cannot read data file {p}: {e}")
    _info(f"Loaded {len(view)} row(s), {len(view.columns)} column(s) from {p}")
    return view


def _write_output(data, output):
    text = yaml.dump(data, default_flow_style=False, sort_keys=False,
                     allow_unicode=True, width=120)
    if output:
        out = Path(output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8")
        _info(f"Written: {out}")
    else:
        print(text, end="")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_charts(args):
    """Resolve a template's charts against a dataset."""
    registry = _load_registry(args)
    view = _load_data(args)
    engine = DashboardEngine(registry)
    key = normalize_industry(args.industry)
    _info(f"Industry: {key.value}, template: {args.template}")

    charts = engine.charts(args.industry, args.template, view, args.dataset_type)
    if not charts:
        _warn("Template 'default' carries no fixed charts")
    _write_output([c.to_dict() for c in charts], args.output)


def cmd_kpis(args):
    """Compute KPI cards for a dataset."""
    registry = _load_registry(args)
    view = _load_data(args)
    engine = DashboardEngine(registry)
    mapping = SourceMapping(metric_col=args.metric_col, category_col=args.category_col)

    cards = engine.kpis(args.industry, args.template, view, mapping)
    _write_output([c.to_dict() for c in cards], args.output)


def cmd_inspect(args):
    """Show an industry's KPI definitions and template pool."""
    registry = _load_registry(args)
    key = normalize_industry(args.industry)
    config = registry.get_industry_config(key)
    pool = registry.get_template_pool(key)

    print(f"Industry:    {key.value}")
    print(f"Name:        {config.name if config else '(generic KPI set)'}")
    print(f"KPIs:        {len(config.kpis) if config else 0}")
    print(f"Templates:   {len(pool)}")

    if args.verbose:
        print()
        for kpi in (config.kpis if config else []):
            print(f"  KPI  {kpi.title} — {kpi.aggregation.value}"
                  f" /{kpi.key_match.pattern}/")
        for idx, variation in enumerate(pool, start=1):
            print(f"  [template{idx}]")
            for bp in variation:
                y = ", ".join(bp.y_role) if isinstance(bp.y_role, list) else bp.y_role
                print(f"       {bp.type:<15} {bp.title}"
                      f" ({bp.x_role} x {y}, {bp.size.value})")


def cmd_validate(args):
    """Validate template pools, and resolved charts when data is given."""
    registry = _load_registry(args)
    validator = QAValidator(registry)

    if args.industry:
        result = validator.validate_pool(args.industry)
    else:
        result = validator.validate_registry()

    if args.data:
        view = _load_data(args)
        engine = DashboardEngine(registry)
        industry = args.industry or "retail"
        for idx in range(1, engine.template_count(industry) + 1):
            charts = engine.charts(industry, f"template{idx}", view, args.dataset_type)
            result.merge(validator.validate_charts(charts, view))

    print(result.report())
    sys.exit(0 if result.passed else 1)


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

def _info(msg):
    print(f"  {msg}", file=sys.stderr)


def _warn(msg):
    print(f"  WARNING: {msg}", file=sys.stderr)


def _error(msg):
    print(f"  ERROR: {msg}", file=sys.stderr)
    sys.exit(1)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dashboard-engine",
        description="Recommend dashboard charts and KPI cards for industry datasets.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---- charts ----
    charts = subparsers.add_parser(
        "charts",
        help="Resolve a template's charts against a dataset.",
    )
    _add_industry_args(charts)
    _add_data_args(charts)
    _add_common_args(charts)
    charts.set_defaults(func=cmd_charts)

    # ---- kpis ----
    kpis = subparsers.add_parser(
        "kpis",
        help="Compute KPI cards for a dataset.",
    )
    _add_industry_args(kpis)
    _add_data_args(kpis)
    kpis.add_argument(
        "--metric-col",
        dest="metric_col",
        help="Metric column configured on the data source.",
    )
    kpis.add_argument(
        "--category-col",
        dest="category_col",
        help="Category column configured on the data source.",
    )
    _add_common_args(kpis)
    kpis.set_defaults(func=cmd_kpis)

    # ---- inspect ----
    insp = subparsers.add_parser(
        "inspect",
        help="Show an industry's KPI definitions and template pool.",
    )
    insp.add_argument(
        "--industry",
        required=True,
        help="Industry identifier, e.g. 'finance' or 'SFW CRM'.",
    )
    _add_common_args(insp)
    insp.set_defaults(func=cmd_inspect)

    # ---- validate ----
    val = subparsers.add_parser(
        "validate",
        help="Validate template pools and resolved charts.",
    )
    val.add_argument(
        "--industry",
        help="Validate one industry only (default: all).",
    )
    _add_data_args(val)
    _add_common_args(val)
    val.set_defaults(func=cmd_validate)

    return parser


def _add_industry_args(parser):
    """Add --industry / --template args to a subparser."""
    parser.add_argument(
        "--industry",
        required=True,
        help="Industry identifier, e.g. 'finance' or 'SFW CRM'.",
    )
    parser.add_argument(
        "--template",
        default="template1",
        help="Template id, 'template1' to 'template10' (default: template1).",
    )


def _add_data_args(parser):
    """Add dataset arguments."""
    data = parser.add_argument_group("data")
    data.add_argument(
        "--data",
        help="Dataset file (.csv or .json rows).",
    )
    data.add_argument(
        "--dataset-type",
        dest="dataset_type",
        help="Dataset type tag, e.g. 'crm' to force the CRM column chain.",
    )


def _add_common_args(parser):
    """Add --overrides / --output / --verbose args."""
    parser.add_argument(
        "--overrides",
        help="Directory of YAML industry override bundles.",
    )
    parser.add_argument(
        "-o", "--output",
        help="Write YAML output to this file instead of stdout.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Show detailed output and debug logging.",
    )


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv=None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)
    args.func(args)


if __name__ == "__main__":
    main()
