#!/usr/bin/env python3
import argparse
import os
import sys
from typing import List, Optional

from skilled.agents import agent_dir_name, select_agents
from skilled.cli import CliParser, add_project_root, project_root_from, run_cli
from skilled.skill_links import SyncResult, sync_skills

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_SKILLS_DIR = os.environ.get("SKILLED_SKILLS_DIR") or os.path.join(PACKAGE_DIR, "skills")
AGENT_ENV_VAR = "SKILLED_AGENT"

EPILOG = """Examples:
  skilled-setup-skills --agent claude
  skilled-setup-skills --project-root . --agent codex
  SKILLED_AGENT=claude,codex skilled-setup-skills
"""


def build_parser() -> CliParser:
    parser = CliParser(
        prog="skilled-setup-skills",
        description="Link core skills into agent skills directories.",
        epilog=EPILOG,
    )
    add_project_root(parser, "Project root where agent skills directories should be updated")
    parser.add_argument(
        "-a",
        "--agent",
        dest="agents",
        action="append",
        default=[],
        metavar="<value>",
        help=f"Target agent(s): claude, codex, or all (repeat or comma-separate). Defaults to ${AGENT_ENV_VAR} or all.",
    )
    parser.add_argument(
        "--skills-dir",
        metavar="<path>",
        help="Core skills directory. Defaults to SKILLED_SKILLS_DIR or the skills/ directory shipped inside the skilled package.",
    )
    return parser


def print_result(result: SyncResult) -> None:
    stats = result.stats
    print(f"Synced core skills into {result.agent_skills_dir}")
    print(f"  Linked: {stats.linked}")
    print(f"  Updated: {stats.updated}")
    print(f"  Skipped ejected: {stats.skipped_ejected}")
    if stats.skipped_other > 0:
        print(f"  Skipped non-directory entries: {stats.skipped_other}")


def setup_command(args: argparse.Namespace) -> int:
    agents = select_agents(args.agents, os.environ.get(AGENT_ENV_VAR))
    project_root = os.path.realpath(project_root_from(args))
    skills_dir = os.path.realpath(args.skills_dir or DEFAULT_SKILLS_DIR)

    results = sync_skills(project_root, skills_dir, [agent_dir_name(agent) for agent in agents])
    for result in results:
        print_result(result)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    return run_cli(build_parser(), setup_command, argv)


if __name__ == "__main__":
    sys.exit(main())
