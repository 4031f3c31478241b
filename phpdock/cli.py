"""phpdock command-line interface.

Usage::

    phpdock --app app1:8080:src/app1 --app app2:8081:src/app2 -o ./devenv
    phpdock -c apps.yaml --force
    python -m phpdock -c apps.json --dry-run

Exit status is 0 only when every artifact was written (or, with
``--dry-run``, rendered); any validation, template or write failure exits 1.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from phpdock.config import Config
from phpdock.descriptors import ApplicationDescriptor, load_descriptors, parse_app_flag
from phpdock.errors import PartialWriteError, ScaffoldError
from phpdock.scaffolder import ScaffoldGenerator, WriteReport
from phpdock.utils import console, print_error, print_success, print_summary_table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phpdock",
        description="Scaffold an Nginx + PHP-FPM development environment for Docker Compose",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  phpdock --app app1:8080:src/app1 --app app2:8081:src/app2\n"
            "  phpdock --app shop:8082:src/shop:public@intl,gd -o ./devenv\n"
            "  phpdock -c apps.yaml --force\n"
        ),
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="JSON or YAML file listing the applications",
    )
    parser.add_argument(
        "--app",
        action="append",
        default=[],
        metavar="APP",
        help="Add an application as name:port:path[:docroot][@ext,...] (repeatable; appended after --config entries)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output directory (default: current directory)",
    )
    parser.add_argument(
        "--settings",
        default=None,
        help="JSON file with generator settings (images, names, ini limits)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite files that already exist",
    )
    parser.add_argument(
        "--seed-index",
        action="store_true",
        help="Also write a phpinfo() index.php into each document root",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Render and list the artifacts without writing anything",
    )
    return parser


def _load_config(args: argparse.Namespace) -> Config:
    config = Config.load(Path(args.settings)) if args.settings else Config.from_env()
    if args.output is not None:
        config.output_dir = Path(args.output)
    if args.force:
        config.overwrite = True
    if args.seed_index:
        config.seed_index = True
    return config


def _collect_descriptors(args: argparse.Namespace) -> list[ApplicationDescriptor]:
    descriptors: list[ApplicationDescriptor] = []
    if args.config:
        descriptors.extend(load_descriptors(args.config))
    descriptors.extend(parse_app_flag(value) for value in args.app)
    return descriptors


def _print_report(report: WriteReport) -> None:
    table = Table(title=f"Artifacts in {escape(str(report.target_dir))}", header_style="bold cyan")
    table.add_column("File", no_wrap=True)
    table.add_column("Status")
    for path in report.written:
        table.add_row(escape(path), "[green]written[/green]")
    for path, reason in report.failed.items():
        table.add_row(escape(path), f"[red]failed: {escape(reason)}[/red]")
    console.print(table)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``phpdock`` and ``python -m phpdock``."""
    args = build_parser().parse_args(argv)

    try:
        config = _load_config(args)
    except (OSError, ValidationError) as exc:
        print_error(f"Error: cannot load settings: {escape(str(exc))}")
        sys.exit(1)

    try:
        descriptors = _collect_descriptors(args)
        if not descriptors:
            print_error("Error: no applications given (use --config or --app)")
            sys.exit(1)

        generator = ScaffoldGenerator(config)

        if args.dry_run:
            artifacts = generator.build_artifacts(descriptors)
            print_summary_table(
                {a.path: f"{len(a.content.encode('utf-8'))} bytes" for a in artifacts},
                title="Dry run",
            )
            return

        report = asyncio.run(generator.generate(descriptors))
    except PartialWriteError as exc:
        _print_report(exc.report)
        print_error(f"Error ({exc.code}): {escape(str(exc))}")
        sys.exit(1)
    except ScaffoldError as exc:
        print_error(f"Error ({exc.code}): {escape(str(exc))}")
        sys.exit(1)

    _print_report(report)
    print_success(
        f"Scaffolded {len(descriptors)} application(s) into {escape(str(report.target_dir))}"
    )


if __name__ == "__main__":
    main()
