import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

ERROR = "error"
WARN = "warn"


@dataclass
class Issue:
    level: str
    file: str
    message: str


def add_issue(issues: List[Issue], level: str, file, message: str) -> None:
    issues.append(Issue(level=level, file=os.fspath(file), message=message))


def load_json(path: Path, issues: List[Issue]) -> Optional[object]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        add_issue(issues, ERROR, path, f"Invalid JSON: {exc}")
        return None


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def find_html_files(directory: Path) -> List[Path]:
    files: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(directory):
        dirnames.sort()
        for filename in sorted(filenames):
            if filename.endswith(".html"):
                files.append(Path(dirpath) / filename)
    return files


def posix_relative(path: Path, start: Path) -> str:
    return path.relative_to(start).as_posix()


def errors_in(issues: List[Issue]) -> List[Issue]:
    return [issue for issue in issues if issue.level == ERROR]


def warnings_in(issues: List[Issue]) -> List[Issue]:
    return [issue for issue in issues if issue.level == WARN]


def print_report(title: str, issues: List[Issue]) -> int:
    """
    Print issues in the shared lint/validate format and return the exit code.
    """
    print(f"\n{title}\n")
    errors = errors_in(issues)
    warnings = warnings_in(issues)
    if not errors and not warnings:
        print("No issues found.")
        return 0

    for issue in issues:
        prefix = "error" if issue.level == ERROR else "warn "
        print(f"{prefix}  {issue.file}: {issue.message}")

    print("")
    print(f"Summary: {len(errors)} error(s), {len(warnings)} warning(s)")
    return 1 if errors else 0
