"""
rpm-helpers command line interface.

Usage:
    rpm-helpers parse 1:3.0.7-24.el9
    rpm-helpers compare 5.1.8-6.el9 5.1.8-9.el9 [--epoch]
    rpm-helpers installed bash [5.1.8-6.el9] [--epoch] [--at-least]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence

import yaml

from .config import HelperConfig, load_config
from .query import RpmQuery, is_installed
from .rpm_utils import compare_versions, parse_version

EXIT_OK = 0
EXIT_FALSE = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="rpm-helpers",
        description="Parse and compare RPM versions, check installed packages",
    )
    parser.add_argument("--config", "-c", default=None,
                        help="Path to a YAML settings file")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Show the parsed fields of a version")
    parse_cmd.add_argument("version", help="[EPOCH:]VERSION[-RELEASE]")

    compare_cmd = subparsers.add_parser("compare", help="Compare two versions (-1, 0, 1)")
    compare_cmd.add_argument("a", help="First version")
    compare_cmd.add_argument("b", help="Second version")
    compare_cmd.add_argument("--epoch", action="store_true",
                             help="Include the epoch in the comparison")

    installed_cmd = subparsers.add_parser(
        "installed", help="Exit 0 if a package is installed (at a version)"
    )
    installed_cmd.add_argument("name", help="Package name")
    installed_cmd.add_argument("version", nargs="?", default=None,
                               help="Required [EPOCH:]VERSION[-RELEASE]")
    installed_cmd.add_argument("--epoch", action="store_true",
                               help="Include the epoch in the comparison")
    installed_cmd.add_argument("--at-least", action="store_true",
                               help="Accept any installed version >= VERSION")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the rpm-helpers command line and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "parse":
        print(json.dumps(parse_version(args.version).to_dict(), indent=2))
        return EXIT_OK

    if args.command == "compare":
        print(compare_versions(args.a, args.b, compare_epoch=args.epoch))
        return EXIT_OK

    try:
        config = load_config(args.config) if args.config else HelperConfig()
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except yaml.YAMLError as e:
        print(f"YAML Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except ValueError as e:
        print(f"Config Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    query = RpmQuery.from_config(config)
    result = is_installed(
        args.name,
        args.version,
        compare_epoch=args.epoch,
        exact=not args.at_least,
        query=query.run,
    )

    wanted = args.name if args.version is None else f"{args.name} {args.version}"
    print(f"{wanted}: {'installed' if result else 'not installed'}")
    return EXIT_OK if result else EXIT_FALSE


if __name__ == "__main__":
    sys.exit(main())
