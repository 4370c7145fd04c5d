import html
import json
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from skilled.site_config import DEFAULT_OG_IMAGE, SITE_CONFIG_FILE

DEFAULT_BASE_URL = "https://example.com"
DEFAULT_LOCALE = "en_US"

HEADER_MARKER = """<!-- ============================================================
     HEADER (from _partials/header.html)
     ============================================================ -->"""

FOOTER_MARKER = """<!-- ============================================================
     FOOTER (from _partials/footer.html)
     ============================================================ -->"""

DESIGN_TOKENS = """:root {
  --color-bg: #f8f6f2;
  --color-surface: #ffffff;
  --color-text: #1e2430;
  --color-muted: #5a6370;
  --color-accent: #0d7660;
  --color-border: #dfe5ee;
  --radius-md: 12px;
  --space-1: 8px;
  --space-2: 16px;
  --space-3: 24px;
  --space-4: 32px;
  --max-width: 960px;
}
"""

SITE_RULES = """
*,
*::before,
*::after {
  box-sizing: border-box;
}

body {
  margin: 0;
  font-family: "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
  background: var(--color-bg);
  color: var(--color-text);
  line-height: 1.6;
}

.container {
  width: min(100% - (2 * var(--space-2)), var(--max-width));
  margin: 0 auto;
}

.site-header,
.site-footer {
  display: flex;
  align-items: center;
  justify-content: space-between;
  gap: var(--space-2);
  padding: var(--space-3) 0;
}

.site-brand {
  color: var(--color-text);
  text-decoration: none;
  font-weight: 700;
}

nav a {
  color: var(--color-accent);
  text-decoration: none;
}

.page-main {
  background: var(--color-surface);
  border: 1px solid var(--color-border);
  border-radius: var(--radius-md);
  padding: var(--space-4);
  margin: var(--space-3) auto;
}

.site-footer {
  border-top: 1px solid var(--color-border);
}

.site-footer p {
  margin: 0;
  color: var(--color-muted);
}
"""


@dataclass
class ScaffoldResult:
    root: str
    created: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def normalize_base_url(url: Optional[str]) -> str:
    trimmed = (url or "").strip()
    if not trimmed:
        return DEFAULT_BASE_URL
    return trimmed.rstrip("/")


def escape_html(text: str) -> str:
    return html.escape(str(text))


def _indent(block: str, prefix: str) -> str:
    return "\n".join(prefix + line if line else line for line in block.splitlines())


def generate_site_config(site_name: str, description: str, base_url: str, locale: str) -> str:
    payload = {
        "siteName": site_name,
        "baseUrl": base_url,
        "defaultDescription": description,
        "defaultOgImage": DEFAULT_OG_IMAGE,
        "locale": locale,
    }
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def generate_header(site_name: str) -> str:
    return f"""<header>
  <div class="container site-header">
    <a class="site-brand" href="/">{escape_html(site_name)}</a>
    <nav aria-label="Primary">
      <a href="/">Home</a>
    </nav>
  </div>
</header>
"""


def generate_footer(site_name: str, year: int) -> str:
    return f"""<footer>
  <div class="container site-footer">
    <p>&copy; {year} {escape_html(site_name)}</p>
  </div>
</footer>
"""


def generate_index_html(site_name: str, description: str, year: int) -> str:
    safe_name = escape_html(site_name)
    safe_description = escape_html(description)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{safe_name}</title>
  <meta name="description" content="{safe_description}">
  <link rel="stylesheet" href="/css/site.css">
</head>
<body>
  <!-- meta
  title: {safe_name}
  description: {safe_description}
  og_image: {DEFAULT_OG_IMAGE}
  -->

  {HEADER_MARKER}
{_indent(generate_header(site_name), "  ")}

  <main class="container page-main">
    <h1>{safe_name}</h1>
    <p>{safe_description}</p>
  </main>

  {FOOTER_MARKER}
{_indent(generate_footer(site_name, year), "  ")}
</body>
</html>
"""


def generate_input_css() -> str:
    return DESIGN_TOKENS


def generate_site_css() -> str:
    return DESIGN_TOKENS + SITE_RULES


def write_file_safe(path: str, content: str, force: bool, result: ScaffoldResult) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    if os.path.exists(path) and not force:
        result.skipped.append(path)
        return
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(content)
    result.created.append(path)


def scaffold_files(
    root: str,
    site_name: str,
    description: str,
    base_url: str,
    locale: str,
    year: int,
) -> List[Tuple[str, str]]:
    return [
        (os.path.join(root, SITE_CONFIG_FILE), generate_site_config(site_name, description, base_url, locale)),
        (os.path.join(root, "_partials", "header.html"), generate_header(site_name)),
        (os.path.join(root, "_partials", "footer.html"), generate_footer(site_name, year)),
        (os.path.join(root, "src", "index.html"), generate_index_html(site_name, description, year)),
        (os.path.join(root, "src", "css", "input.css"), generate_input_css()),
        (os.path.join(root, "src", "css", "site.css"), generate_site_css()),
        (os.path.join(root, "src", "js", ".gitkeep"), ""),
        (os.path.join(root, "src", "images", ".gitkeep"), ""),
        (os.path.join(root, "content", ".gitkeep"), ""),
    ]


def scaffold_project(
    project_root: str,
    site_name: str,
    description: Optional[str] = None,
    base_url: Optional[str] = DEFAULT_BASE_URL,
    locale: Optional[str] = DEFAULT_LOCALE,
    force: bool = False,
    year: Optional[int] = None,
) -> ScaffoldResult:
    root = os.path.abspath(project_root)
    name = site_name.strip()
    description = (description or f"{name} official website.").strip()
    year = year or datetime.now().year

    result = ScaffoldResult(root=root)
    files = scaffold_files(
        root,
        name,
        description,
        normalize_base_url(base_url),
        (locale or DEFAULT_LOCALE).strip(),
        year,
    )
    for path, content in files:
        write_file_safe(path, content, force, result)
    return result
