"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import sys

import shiny

from species_mapper import __version__
from species_mapper.app import create_app, load_session_context
from species_mapper.config import get_settings
from species_mapper.exceptions import DataUnavailableError, MalformedRecordError
from species_mapper.flows.build import build_all
from species_mapper.flows.fetch import fetch_all
from species_mapper.store import DataStore


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="species-mapper",
        description="Map GBIF species occurrences over an elevation raster",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    # 'fetch' and 'build' run one flow each; 'refresh' runs both
    for name, text in (
        ("fetch", "Fetch boundary, occurrences and elevation"),
        ("build", "Build the static map page"),
    ):
        sub = subparsers.add_parser(name, help=text)
        sub.add_argument("--country", type=str, default=None, help="Country code (e.g. USA)")
        sub.add_argument("--region", type=str, default=None, help="Region name (e.g. Colorado)")

    subparsers.add_parser("refresh", help="Fetch data and build site")

    # 'serve' command - run the interactive filter app
    serve_parser = subparsers.add_parser("serve", help="Run the interactive map app")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: app_port from settings)",
    )

    return parser


def cmd_info(args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Region: {settings.region}, {settings.country}")
    print(f"Species: {', '.join(settings.species_labels)}")
    print(f"Data directory: {settings.data_dir}")
    if getattr(args, "debug", False):
        print(f"Debug mode enabled. Settings: {settings}")
    return 0


def cmd_fetch(args: argparse.Namespace) -> int:
    """Handle the 'fetch' command."""
    result = fetch_all(country=args.country, region=args.region)
    print(f"Fetched {result.get('occurrences', 0)} occurrences for {result.get('region')}.")
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    """Handle the 'build' command."""
    result = build_all(country=args.country, region=args.region)
    if "error" in result:
        print(f"Error: {result['error']}. Run 'species-mapper fetch' first.", file=sys.stderr)
        return 1
    print(f"Built {result['output']}")
    return 0


def cmd_refresh(_args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: fetch data then build site."""
    settings = get_settings()
    print(f"Fetching data for {settings.region}, {settings.country}...")
    fetch_all(country=settings.country, region=settings.region)

    print("Building site...")
    build_all()

    print("Done.")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: load the session and run the Shiny app."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.app_port

    try:
        context = load_session_context(DataStore(settings.data_dir), settings)
    except (DataUnavailableError, MalformedRecordError) as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Run 'species-mapper refresh' first.", file=sys.stderr)
        return 1

    print(f"Loaded {len(context.records)} occurrences for {settings.region}.")
    print(f"Serving app on http://{settings.app_host}:{port}/ (Ctrl+C to stop)")
    shiny.run_app(create_app(context, settings), host=settings.app_host, port=port)
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "fetch": cmd_fetch,
        "build": cmd_build,
        "refresh": cmd_refresh,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
