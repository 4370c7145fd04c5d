#!/usr/bin/env python3
import argparse
import re
import sys
from pathlib import Path
from typing import Dict, List, Optional

from skilled.cli import CliParser, add_project_root, project_root_from, run_cli
from skilled.site_config import SITE_CONFIG_FILE, config_errors, config_warnings
from skilled.site_report import ERROR, WARN, Issue, add_issue, find_html_files, load_json, posix_relative, print_report, read_text

HEADER_MARKER_TEXT = "HEADER (from _partials/header.html)"
FOOTER_MARKER_TEXT = "FOOTER (from _partials/footer.html)"

STRUCTURE_CHECKS = [
    (re.compile(r"<!DOCTYPE html>", re.IGNORECASE), ERROR, "Missing <!DOCTYPE html>"),
    (re.compile(r"<html\b", re.IGNORECASE), ERROR, "Missing <html> tag"),
    (re.compile(r"<head\b", re.IGNORECASE), ERROR, "Missing <head> tag"),
    (re.compile(r"<body\b", re.IGNORECASE), ERROR, "Missing <body> tag"),
    (re.compile(r"<title>[\s\S]*?</title>", re.IGNORECASE), ERROR, "Missing <title> tag"),
    (re.compile(r'<meta name="description"[^>]*>', re.IGNORECASE), WARN, 'Missing <meta name="description"> tag'),
]

META_BLOCK = re.compile(r"<!--\s*meta\b([\s\S]*?)-->")
META_LINE = re.compile(r"^\s*(\w[\w_]*)\s*:\s*(.+?)\s*$")


def parse_meta_block(html: str) -> Optional[Dict[str, str]]:
    match = META_BLOCK.search(html)
    if not match:
        return None
    fields: Dict[str, str] = {}
    for line in match.group(1).split("\n"):
        line_match = META_LINE.match(line)
        if line_match:
            fields[line_match.group(1)] = line_match.group(2)
    return fields


def lint_html(html: str, rel_path: str, file_name: str, issues: List[Issue]) -> None:
    for pattern, level, message in STRUCTURE_CHECKS:
        if not pattern.search(html):
            add_issue(issues, level, rel_path, message)

    meta = parse_meta_block(html)
    if meta is None:
        add_issue(issues, WARN, rel_path, "Missing <!-- meta --> block")
    else:
        if not meta.get("title"):
            add_issue(issues, WARN, rel_path, "Meta block missing title")
        if not meta.get("description"):
            add_issue(issues, WARN, rel_path, "Meta block missing description")

    if file_name == "index.html":
        if HEADER_MARKER_TEXT not in html:
            add_issue(issues, WARN, rel_path, "index.html missing header marker comment (partial injection may be skipped)")
        if FOOTER_MARKER_TEXT not in html:
            add_issue(issues, WARN, rel_path, "index.html missing footer marker comment (partial injection may be skipped)")


def _lint_partial(path: Path, partials_dir: Path, issues: List[Issue]) -> None:
    if path.exists():
        if read_text(path).strip() == "":
            add_issue(issues, ERROR, path, f"{path.name} is empty")
    elif partials_dir.exists():
        add_issue(issues, ERROR, path, f"Missing _partials/{path.name}")


def lint_site(project_root: str) -> List[Issue]:
    root = Path(project_root).resolve()
    src_dir = root / "src"
    partials_dir = root / "_partials"
    config_path = root / SITE_CONFIG_FILE

    issues: List[Issue] = []

    if not src_dir.exists():
        add_issue(issues, ERROR, src_dir, "Missing src/ directory")
    if not partials_dir.exists():
        add_issue(issues, ERROR, partials_dir, "Missing _partials/ directory")
    if not config_path.exists():
        add_issue(issues, ERROR, config_path, f"Missing {SITE_CONFIG_FILE}")
    else:
        config = load_json(config_path, issues)
        if config is not None:
            for message in config_errors(config):
                add_issue(issues, ERROR, config_path, message)
            for message in config_warnings(config):
                add_issue(issues, WARN, config_path, message)

    _lint_partial(partials_dir / "header.html", partials_dir, issues)
    _lint_partial(partials_dir / "footer.html", partials_dir, issues)

    if src_dir.exists():
        html_files = find_html_files(src_dir)
        if not html_files:
            add_issue(issues, ERROR, src_dir, "No HTML files found under src/")
        for path in html_files:
            html = read_text(path)
            lint_html(html, posix_relative(path, root), path.name, issues)

    return issues


def build_parser() -> CliParser:
    parser = CliParser(prog="skilled-lint-site", description="Lint site source conventions.")
    add_project_root(parser, "Project root containing src/, _partials/, site.config.json")
    return parser


def lint_command(args: argparse.Namespace) -> int:
    root = project_root_from(args)
    issues = lint_site(root)
    return print_report(f"skilled-lint-site - linting {root}", issues)


def main(argv: Optional[List[str]] = None) -> int:
    return run_cli(build_parser(), lint_command, argv)


if __name__ == "__main__":
    sys.exit(main())
