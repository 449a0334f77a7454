"""Main CLI interface for the four factors win regression."""

import argparse
import logging
import sys

import pandas as pd

from .analysis.regression import DEFAULT_MODEL_SPECS, DIFFERENTIAL_COLUMNS
from .data.providers import HtmlTableProvider, JsonTableProvider, create_provider
from .data.roster import load_roster
from .errors import FourFactorsError, RetrievalError
from .pipeline.season import SeasonAnalysis, SeasonAnalysisConfig


def parse_model_specs(values):
    """
    Parse repeated ``NAME=col1,col2`` options into model specifications.

    Args:
        values: Raw option strings, or None for the default specifications

    Returns:
        Dict of model name to predictor columns
    """
    if not values:
        return dict(DEFAULT_MODEL_SPECS)
    specs = {}
    for value in values:
        name, sep, columns = value.partition("=")
        predictors = [c.strip() for c in columns.split(",") if c.strip()]
        if not sep or not name.strip() or not predictors:
            raise ValueError(f"Model spec must look like NAME=col1,col2: {value!r}")
        unknown = [c for c in predictors if c not in DIFFERENTIAL_COLUMNS]
        if unknown:
            raise ValueError(f"Unknown predictors {unknown}; choose from {list(DIFFERENTIAL_COLUMNS)}")
        specs[name.strip()] = predictors
    return specs


def _build_analysis(args):
    roster = load_roster(args.roster)
    provider = create_provider(args.tables_dir, args.format, table_id=args.table_id)
    config = SeasonAnalysisConfig(
        on_game_error="abort" if args.abort_on_error else "skip",
        model_specs=parse_model_specs(getattr(args, "model", None)),
    )
    return SeasonAnalysis(roster, provider, config)


def run_analysis(args):
    """Compute factors and fit every model specification."""
    print(f"Loading roster from {args.roster}...")
    try:
        report = _build_analysis(args).run()
    except (FourFactorsError, ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1

    print(f"Analyzed {len(report.teams)} teams "
          f"({len(report.skipped_games)} skipped games, {len(report.excluded_teams)} excluded teams)")

    for team, reason in report.excluded_teams.items():
        print(f"   - excluded {team}: {reason}")

    with pd.option_context("display.float_format", "{:.4f}".format):
        for name, result in report.models.items():
            print(f"\n{'='*60}")
            print(f"MODEL {name}: wins ~ {' + '.join(result.predictors)}")
            print(f"{'='*60}")
            print(result.summary_frame().to_string())
            print(f"R^2 = {result.r_squared:.4f}   adj. R^2 = {result.adj_r_squared:.4f}   "
                  f"n = {result.n_obs}   df = {result.df_resid}")

    for name, reason in report.model_errors.items():
        print(f"\nModel {name} failed: {reason}")

    if args.output:
        print(f"\nSaving report to {args.output}...")
        report.write_json(args.output)
    print("✓ Done!")
    return 0


def show_factors(args):
    """Print the per-team four factors table."""
    try:
        report = _build_analysis(args).run()
    except (FourFactorsError, ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1

    frame = report.factors_frame()
    if frame.empty:
        print("No team has defined four factors")
        return 1
    with pd.option_context("display.float_format", "{:.4f}".format):
        print(frame.to_string())
    return 0


def extract_tables(args):
    """Convert saved box-score pages into JSON game tables."""
    try:
        roster = load_roster(args.roster)
    except (FourFactorsError, OSError) as e:
        print(f"Error: {e}")
        return 1
    source = HtmlTableProvider(args.html_dir, table_id=args.table_id)
    target = JsonTableProvider(args.output_dir)

    failed = 0
    game_ids = roster.all_game_ids()
    for game_id in game_ids:
        try:
            target.save_table(source.get_table(game_id))
        except RetrievalError as e:
            print(f"   - {e}")
            failed += 1
    print(f"Extracted {len(game_ids) - failed}/{len(game_ids)} games to {args.output_dir}")
    return 0 if failed == 0 else 1


def _add_table_arguments(sub):
    sub.add_argument("--roster", "-r", required=True, help="Roster JSON mapping team labels to game ids")
    sub.add_argument("--tables-dir", "-t", required=True, help="Directory of cached game tables")
    sub.add_argument(
        "--format",
        choices=["json", "html"],
        default="json",
        help="Cached table format (default: json)"
    )
    sub.add_argument("--table-id", default=None, help="HTML id of the team stats table (html format only)")
    sub.add_argument(
        "--abort-on-error",
        action="store_true",
        help="Stop at the first bad game instead of skipping it"
    )


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Four Factors - explain team win totals from box-score ratios"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    analyze_parser = subparsers.add_parser("analyze", help="Compute factors and fit win regressions")
    _add_table_arguments(analyze_parser)
    analyze_parser.add_argument("--output", "-o", default=None, help="Write the full report to this JSON file")
    analyze_parser.add_argument(
        "--model", "-m",
        action="append",
        default=None,
        help="Model spec NAME=col1,col2 (repeatable; default: each factor alone plus all four)"
    )

    factors_parser = subparsers.add_parser("factors", help="Print per-team four factors")
    _add_table_arguments(factors_parser)

    extract_parser = subparsers.add_parser("extract", help="Convert saved box-score HTML pages to JSON tables")
    extract_parser.add_argument("--roster", "-r", required=True, help="Roster JSON listing the games to convert")
    extract_parser.add_argument("--html-dir", required=True, help="Directory of <game_id>.html pages")
    extract_parser.add_argument("--output-dir", required=True, help="Destination for <game_id>.json tables")
    extract_parser.add_argument("--table-id", default=None, help="HTML id of the team stats table")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "analyze":
        return run_analysis(args)
    elif args.command == "factors":
        return show_factors(args)
    elif args.command == "extract":
        return extract_tables(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
