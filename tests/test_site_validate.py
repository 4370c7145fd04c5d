from skilled import site_validate
from skilled.site_scaffold import scaffold_project
from skilled.site_validate import validate_site

BUILT_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <title>Site</title>
  <link rel="canonical" href="https://site.test/">
  <meta property="og:title" content="Site">
  <meta property="og:description" content="Site official website.">
  <meta property="og:image" content="https://site.test/images/og-default.png">
  <meta name="twitter:card" content="summary_large_image">
  <link rel="stylesheet" href="css/site.css">
</head>
<body></body>
</html>
"""


def make_built_site(root):
    scaffold_project(str(root), "Site", base_url="https://site.test")
    dist = root / "dist"
    dist.mkdir()
    (dist / "index.html").write_text(BUILT_PAGE, encoding="utf-8")
    (dist / "sitemap.xml").write_text(
        "<urlset><url><loc>https://site.test/</loc></url></urlset>\n", encoding="utf-8"
    )
    (dist / "robots.txt").write_text(
        "User-agent: *\nAllow: /\nSitemap: https://site.test/sitemap.xml\n", encoding="utf-8"
    )
    return dist


def found(root):
    return {(issue.level, issue.file, issue.message) for issue in validate_site(str(root))}


def test_clean_build_has_no_issues(tmp_path):
    make_built_site(tmp_path)
    assert validate_site(str(tmp_path)) == []


def test_missing_dist(tmp_path):
    scaffold_project(str(tmp_path), "Site")
    messages = {issue.message for issue in validate_site(str(tmp_path))}
    assert "Missing dist/ directory. Run the build before validating the site." in messages
    assert "Missing sitemap.xml" in messages
    assert "Missing robots.txt" in messages


def test_missing_built_page_and_count_mismatch(tmp_path):
    make_built_site(tmp_path)
    (tmp_path / "src" / "blog").mkdir()
    (tmp_path / "src" / "blog" / "post.html").write_text("<!DOCTYPE html>", encoding="utf-8")

    issues = found(tmp_path)

    assert ("error", "dist/blog/post.html", "Missing built HTML file") in issues
    assert any(level == "warn" and message == "HTML file count differs (src: 2, dist: 1)" for level, _, message in issues)


def test_seo_tags_and_root_absolute_paths(tmp_path):
    dist = make_built_site(tmp_path)
    (dist / "index.html").write_text(
        '<html><head><title>x</title><link href="/css/site.css"></head></html>', encoding="utf-8"
    )

    issues = found(tmp_path)

    for message in (
        "Missing canonical link",
        "Missing og:title tag",
        "Missing og:description tag",
        "Missing og:image tag",
        "Missing twitter:card tag",
    ):
        assert ("error", "dist/index.html", message) in issues
    assert ("warn", "dist/index.html", "Contains root-absolute href/src paths") in issues


def test_protocol_relative_urls_are_not_root_absolute(tmp_path):
    dist = make_built_site(tmp_path)
    page = BUILT_PAGE.replace('href="css/site.css"', 'href="//cdn.test/site.css"')
    (dist / "index.html").write_text(page, encoding="utf-8")
    assert validate_site(str(tmp_path)) == []


def test_sitemap_and_robots_rules(tmp_path):
    dist = make_built_site(tmp_path)
    (dist / "sitemap.xml").write_text("<urlset></urlset>", encoding="utf-8")
    (dist / "robots.txt").write_text("User-agent: *\nSitemap: https://other.test/sitemap.xml\n", encoding="utf-8")
    (dist / "css").mkdir()
    (dist / "css" / "input.css").write_text(":root {}", encoding="utf-8")

    messages = {(issue.level, issue.message) for issue in validate_site(str(tmp_path))}

    assert ("error", "No <url> entries found") in messages
    assert ("warn", "Sitemap URL does not match site.config.json baseUrl") in messages
    assert ("warn", "dist/css/input.css should not be shipped") in messages

    (dist / "robots.txt").write_text("User-agent: *\n", encoding="utf-8")
    messages = {(issue.level, issue.message) for issue in validate_site(str(tmp_path))}
    assert ("error", "robots.txt missing Sitemap directive") in messages


def test_cli_exit_codes(tmp_path, capsys):
    make_built_site(tmp_path)
    assert site_validate.main(["--project-root", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "skilled-validate-site - validating" in out
    assert "No issues found." in out

    (tmp_path / "dist" / "robots.txt").unlink()
    assert site_validate.main(["--project-root", str(tmp_path)]) == 1
    assert "Summary: 1 error(s), 0 warning(s)" in capsys.readouterr().out


def test_cli_help(capsys):
    assert site_validate.main(["-h"]) == 0
    assert "--project-root" in capsys.readouterr().out


def test_non_utf8_build_output_is_reported_not_fatal(tmp_path, capsys):
    dist = make_built_site(tmp_path)
    (dist / "index.html").write_bytes(BUILT_PAGE.replace("Site", "Café").encode("latin-1"))
    (dist / "robots.txt").write_bytes(b"# \xe9t\xe9\nUser-agent: *\n")

    messages = {(issue.level, issue.message) for issue in validate_site(str(tmp_path))}

    assert messages == {("error", "robots.txt missing Sitemap directive"), ("warn", "Sitemap URL does not match site.config.json baseUrl")}
    assert site_validate.main(["--project-root", str(tmp_path)]) == 1
    assert "Summary: 1 error(s), 1 warning(s)" in capsys.readouterr().out
