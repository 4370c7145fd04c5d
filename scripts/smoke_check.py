#!/usr/bin/env python3
from __future__ import annotations

import argparse
import os
import re
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from skilled.agents import agent_dir_name, select_agents  # noqa: E402
from skilled.errors import UsageError  # noqa: E402
from skilled.skill_links import ACTION_CREATE, ACTION_UPDATE, list_skills, plan_agent_skills  # noqa: E402

SKILLS_DIR = ROOT / "skilled" / "skills"
AGENT_ENV_VAR = "SKILLED_AGENT"

REQUIRED_PATHS = [
    SKILLS_DIR,
    ROOT / "skilled" / "schemas" / "site_config.schema.json",
    ROOT / "pyproject.toml",
]

FRONT_MATTER = re.compile(r"\A---\n(.*?)\n---", re.DOTALL)
SKILL_NAME = re.compile(r"^[a-z0-9-]+$")


def validate_required_paths(root: Path = ROOT) -> list[str]:
    missing = []
    for path in REQUIRED_PATHS:
        if not path.exists():
            missing.append(str(path.relative_to(root)))
    return missing


def parse_front_matter(text: str) -> dict[str, str] | None:
    match = FRONT_MATTER.match(text)
    if not match:
        return None
    fields: dict[str, str] = {}
    for line in match.group(1).splitlines():
        if ":" not in line or line.lstrip().startswith("#"):
            continue
        key, value = line.split(":", 1)
        fields[key.strip()] = value.strip()
    return fields


def validate_skill(skill_dir: Path) -> list[str]:
    skill_md = skill_dir / "SKILL.md"
    if not skill_md.exists():
        return [f"{skill_dir.name}: SKILL.md not found"]
    fields = parse_front_matter(skill_md.read_text(encoding="utf-8"))
    if fields is None:
        return [f"{skill_dir.name}: SKILL.md has no front matter"]
    problems = []
    name = fields.get("name", "")
    if name != skill_dir.name:
        problems.append(f"{skill_dir.name}: front matter name '{name}' does not match directory")
    elif not SKILL_NAME.match(name):
        problems.append(f"{skill_dir.name}: name must be lowercase letters, digits and hyphens")
    if not fields.get("description"):
        problems.append(f"{skill_dir.name}: description is missing")
    return problems


def validate_skills(skills_dir: Path = SKILLS_DIR) -> list[str]:
    problems = []
    for name in list_skills(str(skills_dir)):
        problems.extend(validate_skill(skills_dir / name))
    return problems


def stale_links(project_root: str, agents: list[str], skills_dir: Path = SKILLS_DIR) -> list[str]:
    stale = []
    for agent in agents:
        plan = plan_agent_skills(project_root, str(skills_dir), agent_dir_name(agent))
        for skill, action in plan.items():
            if action in (ACTION_CREATE, ACTION_UPDATE):
                stale.append(f"{agent}/{skill} ({action})")
    return stale


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Smoke check the skilled repo.")
    parser.add_argument(
        "--check-links",
        action="store_true",
        help="Fail if agent skill links under --project-root are missing or stale.",
    )
    parser.add_argument("--project-root", default=os.getcwd(), help="Project root holding agent directories.")
    parser.add_argument("--agent", action="append", default=[], help="Agent(s) to check (claude, codex, all). Defaults to SKILLED_AGENT or all.")
    args = parser.parse_args(argv)

    errors = []
    missing = validate_required_paths()
    if missing:
        errors.append(f"Missing required paths: {', '.join(missing)}")

    if SKILLS_DIR.exists():
        errors.extend(validate_skills())

        if args.check_links:
            try:
                agents = select_agents(args.agent, os.environ.get(AGENT_ENV_VAR))
            except UsageError as exc:
                parser.error(str(exc))
            stale = stale_links(os.path.realpath(args.project_root), agents)
            if stale:
                errors.append(
                    f"Skill links out of date: {', '.join(stale)}. Run 'skilled-setup-skills'."
                )

    if errors:
        for error in errors:
            print(f"ERROR: {error}")
        return 1

    print("Smoke check passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
