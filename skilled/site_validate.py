#!/usr/bin/env python3
import argparse
import re
import sys
from pathlib import Path
from typing import List, Optional

from skilled.cli import CliParser, add_project_root, project_root_from, run_cli
from skilled.site_config import SITE_CONFIG_FILE, base_url_of
from skilled.site_report import ERROR, WARN, Issue, add_issue, find_html_files, load_json, posix_relative, print_report, read_text

SEO_CHECKS = [
    (re.compile(r'<link rel="canonical" href="[^"]+">', re.IGNORECASE), "Missing canonical link"),
    (re.compile(r'<meta property="og:title" content="[^"]*">', re.IGNORECASE), "Missing og:title tag"),
    (re.compile(r'<meta property="og:description" content="[^"]*">', re.IGNORECASE), "Missing og:description tag"),
    (re.compile(r'<meta property="og:image" content="[^"]*">', re.IGNORECASE), "Missing og:image tag"),
    (re.compile(r'<meta name="twitter:card" content="summary_large_image">', re.IGNORECASE), "Missing twitter:card tag"),
]
ROOT_ABSOLUTE_REF = re.compile(r"""(?:href|src)=["']/(?!/)""")
SITEMAP_URL = re.compile(r"<url>")
SITEMAP_DIRECTIVE = re.compile(r"Sitemap:\s+", re.IGNORECASE)


def check_built_html(html: str, rel_path: str, issues: List[Issue]) -> None:
    for pattern, message in SEO_CHECKS:
        if not pattern.search(html):
            add_issue(issues, ERROR, rel_path, message)
    if ROOT_ABSOLUTE_REF.search(html):
        add_issue(issues, WARN, rel_path, "Contains root-absolute href/src paths")


def _compare_html_sets(src_dir: Path, dist_dir: Path, root: Path, issues: List[Issue]) -> None:
    src_html = find_html_files(src_dir)
    dist_html = find_html_files(dist_dir)
    dist_relative = {posix_relative(path, dist_dir) for path in dist_html}

    if not src_html:
        add_issue(issues, ERROR, src_dir, "No HTML files found under src/")
    if len(dist_html) != len(src_html):
        add_issue(
            issues,
            WARN,
            dist_dir,
            f"HTML file count differs (src: {len(src_html)}, dist: {len(dist_html)})",
        )

    for path in src_html:
        rel_path = posix_relative(path, src_dir)
        if rel_path not in dist_relative:
            add_issue(issues, ERROR, f"dist/{rel_path}", "Missing built HTML file")

    for path in dist_html:
        check_built_html(read_text(path), posix_relative(path, root), issues)


def _check_sitemap(sitemap_path: Path, issues: List[Issue]) -> None:
    if not sitemap_path.exists():
        add_issue(issues, ERROR, sitemap_path, "Missing sitemap.xml")
        return
    if not SITEMAP_URL.search(read_text(sitemap_path)):
        add_issue(issues, ERROR, sitemap_path, "No <url> entries found")


def _check_robots(robots_path: Path, base_url: Optional[str], issues: List[Issue]) -> None:
    if not robots_path.exists():
        add_issue(issues, ERROR, robots_path, "Missing robots.txt")
        return
    robots = read_text(robots_path)
    if not SITEMAP_DIRECTIVE.search(robots):
        add_issue(issues, ERROR, robots_path, "robots.txt missing Sitemap directive")
    if base_url and f"{base_url}/sitemap.xml" not in robots:
        add_issue(issues, WARN, robots_path, "Sitemap URL does not match site.config.json baseUrl")


def validate_site(project_root: str) -> List[Issue]:
    root = Path(project_root).resolve()
    src_dir = root / "src"
    dist_dir = root / "dist"
    config_path = root / SITE_CONFIG_FILE

    issues: List[Issue] = []

    if not src_dir.exists():
        add_issue(issues, ERROR, src_dir, "Missing src/ directory")
    if not dist_dir.exists():
        add_issue(issues, ERROR, dist_dir, "Missing dist/ directory. Run the build before validating the site.")
    config = None
    if not config_path.exists():
        add_issue(issues, ERROR, config_path, f"Missing {SITE_CONFIG_FILE}")
    else:
        config = load_json(config_path, issues)

    if src_dir.exists() and dist_dir.exists():
        _compare_html_sets(src_dir, dist_dir, root, issues)

    _check_sitemap(dist_dir / "sitemap.xml", issues)
    _check_robots(dist_dir / "robots.txt", base_url_of(config), issues)

    shipped_input_css = dist_dir / "css" / "input.css"
    if shipped_input_css.exists():
        add_issue(issues, WARN, posix_relative(shipped_input_css, root), "dist/css/input.css should not be shipped")

    return issues


def build_parser() -> CliParser:
    parser = CliParser(prog="skilled-validate-site", description="Validate a built site in dist/.")
    add_project_root(parser, "Project root containing src/, dist/, site.config.json")
    return parser


def validate_command(args: argparse.Namespace) -> int:
    root = project_root_from(args)
    issues = validate_site(root)
    return print_report(f"skilled-validate-site - validating {root}", issues)


def main(argv: Optional[List[str]] = None) -> int:
    return run_cli(build_parser(), validate_command, argv)


if __name__ == "__main__":
    sys.exit(main())
