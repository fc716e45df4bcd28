"""
Command-line interface for finalstate.

Usage:
    finalstate info final_state_hadrons.dat
    finalstate check final_state_partons.dat.gz
    finalstate writers
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

import finalstate


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="finalstate",
        description="Inspect and check JETSCAPE final-state parton/hadron files.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {finalstate.__version__}"
    )
    parser.add_argument(
        "--verbose", "-v", action="count", default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- info ---
    info_parser = subparsers.add_parser(
        "info",
        help="Show information about a final-state file",
    )
    info_parser.add_argument("input", help="Input file path (plain or gzip)")
    info_parser.add_argument(
        "--json", dest="as_json", action="store_true",
        help="Output as JSON",
    )

    # --- check ---
    check_parser = subparsers.add_parser(
        "check",
        help="Check file framing and per-event particle counts",
    )
    check_parser.add_argument("input", help="Input file path (plain or gzip)")
    check_parser.add_argument(
        "--json", dest="as_json", action="store_true",
        help="Output check report as JSON",
    )

    # --- writers ---
    writers_parser = subparsers.add_parser(
        "writers",
        help="List registered writer names",
    )
    writers_parser.add_argument("--json", dest="as_json", action="store_true")

    return parser


def _cmd_info(args: argparse.Namespace) -> int:
    from .api import info

    try:
        result = info(args.input)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.as_json:
        print(json.dumps(result, indent=2))
    else:
        print(f"Schema:              {result['schema_tag'] or '(missing)'}")
        print(f"Events:              {result['n_events']}")
        print(f"Total particles:     {result['total_particles']}")
        print(f"Avg particles/event: {result['avg_particles_per_event']:.1f}")

        if result['labels']:
            print(f"Record kind:         {', '.join(result['labels'])}")
        if result['header_versions']:
            print(f"Header versions:     {', '.join(str(v) for v in result['header_versions'])}")
        print(f"pt_hat recorded:     {'yes' if result['has_pt_hat'] else 'no'}")

        if result['sigma_gen'] is not None:
            print(f"sigmaGen:            {result['sigma_gen']:g} +- {result['sigma_err']:g}")
        else:
            print("sigmaGen:            (no footer)")

        if result['status_counts']:
            print(f"Status codes:        {result['status_counts']}")

        if result['top_particles']:
            print("Top particles:")
            for name, count in result['top_particles'][:10]:
                print(f"  {name:>20s}: {count}")

    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    from .api import check

    try:
        report = check(args.input)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.as_json:
        print(json.dumps(report.to_dict(), indent=2, sort_keys=True))
    else:
        print(str(report))
    return 0 if report.is_valid else 2


def _cmd_writers(args: argparse.Namespace) -> int:
    from .api import load_plugins
    from .io.registry import list_writers

    load_plugins()
    entries = list_writers()
    if args.as_json:
        rows = [
            {
                "name": e.name,
                "kind": e.kind.label() if e.kind is not None else None,
                "encoding": e.encoding,
            }
            for e in entries
        ]
        print(json.dumps(rows, indent=2))
    else:
        for e in entries:
            kind = e.kind.label() if e.kind is not None else "-"
            print(f"{e.name:<45s} {kind:<8s} {e.encoding or '-'}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": _cmd_info,
        "check": _cmd_check,
        "writers": _cmd_writers,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
