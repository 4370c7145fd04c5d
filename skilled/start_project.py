#!/usr/bin/env python3
import argparse
import os
import subprocess
import sys
from typing import List, Optional

from skilled.cli import CliParser, add_project_root, project_root_from, run_cli
from skilled.errors import UsageError
from skilled.site_scaffold import DEFAULT_BASE_URL, DEFAULT_LOCALE, scaffold_project

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
BUILD_SCRIPT = os.environ.get("SKILLED_BUILD_SCRIPT") or os.path.join(
    PACKAGE_DIR, "skills", "build", "scripts", "build.py"
)


def build_parser() -> CliParser:
    parser = CliParser(
        prog="skilled-start-project",
        description="Legacy scaffolding fallback for start-project.",
    )
    parser.add_argument("-n", "--name", metavar="<text>", help="Site name (required)")
    parser.add_argument("-d", "--description", metavar="<text>", help="Default site description")
    parser.add_argument(
        "-u",
        "--base-url",
        metavar="<url>",
        default=DEFAULT_BASE_URL,
        help=f"Canonical base URL (default: {DEFAULT_BASE_URL})",
    )
    parser.add_argument(
        "-l",
        "--locale",
        metavar="<locale>",
        default=DEFAULT_LOCALE,
        help=f"Locale for OG metadata (default: {DEFAULT_LOCALE})",
    )
    add_project_root(parser, "Root directory to scaffold (default: current directory)")
    parser.add_argument("--force", action="store_true", help="Overwrite existing scaffold files")
    parser.add_argument("--build", action="store_true", help="Run build after scaffolding (uses the installed build skill script)")
    return parser


def run_build(project_root: str) -> int:
    if not os.path.exists(BUILD_SCRIPT):
        print("Build skill script not found.", file=sys.stderr)
        print(f"Expected: {BUILD_SCRIPT}", file=sys.stderr)
        print("Install the build skill before using --build.", file=sys.stderr)
        return 1
    result = subprocess.run(
        [sys.executable, BUILD_SCRIPT, "--project-root", project_root],
        cwd=project_root,
    )
    if result.returncode < 0:
        return 1
    return result.returncode


def start_command(args: argparse.Namespace) -> int:
    if not args.name or not args.name.strip():
        raise UsageError("--name is required.")

    print("Note: start-project is now agent-first. This CLI is a legacy fallback scaffold path.")

    result = scaffold_project(
        project_root_from(args),
        args.name,
        description=args.description,
        base_url=args.base_url,
        locale=args.locale,
        force=args.force,
    )

    print(f"Scaffolded project in {result.root}")
    print(f"  Created/updated: {len(result.created)}")
    for path in result.created:
        print(f"    - {path}")
    if result.skipped:
        print(f"  Skipped existing: {len(result.skipped)}")
        for path in result.skipped:
            print(f"    - {path}")
        print("  Use --force to overwrite skipped files.")

    if args.build:
        print("Running build...")
        return run_build(result.root)
    if os.path.exists(BUILD_SCRIPT):
        print(f'Next step: python "{BUILD_SCRIPT}" --project-root "{result.root}"')
    else:
        print("Next step: install the build skill, then run its build script.")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    return run_cli(build_parser(), start_command, argv)


if __name__ == "__main__":
    sys.exit(main())
