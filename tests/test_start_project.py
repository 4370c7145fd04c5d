import json
import subprocess

from skilled import start_project
from skilled.site_lint import lint_site
from skilled.site_scaffold import escape_html, normalize_base_url, scaffold_project


def test_scaffold_writes_expected_files(tmp_path):
    result = scaffold_project(str(tmp_path), "  Acme & Co ", base_url="https://acme.test///", year=2030)

    assert result.skipped == []
    assert len(result.created) == 9

    config = json.loads((tmp_path / "site.config.json").read_text(encoding="utf-8"))
    assert config == {
        "siteName": "Acme & Co",
        "baseUrl": "https://acme.test",
        "defaultDescription": "Acme & Co official website.",
        "defaultOgImage": "/images/og-default.png",
        "locale": "en_US",
    }

    index = (tmp_path / "src" / "index.html").read_text(encoding="utf-8")
    assert "<title>Acme &amp; Co</title>" in index
    assert "HEADER (from _partials/header.html)" in index
    assert "FOOTER (from _partials/footer.html)" in index
    assert "&copy; 2030 Acme &amp; Co" in index
    assert "&copy; 2030" in (tmp_path / "_partials" / "footer.html").read_text(encoding="utf-8")
    assert (tmp_path / "src" / "js" / ".gitkeep").exists()
    assert (tmp_path / "content" / ".gitkeep").exists()
    assert (tmp_path / "src" / "css" / "site.css").read_text(encoding="utf-8").startswith(
        (tmp_path / "src" / "css" / "input.css").read_text(encoding="utf-8")
    )


def test_scaffold_passes_lint(tmp_path):
    scaffold_project(str(tmp_path), "Lint Me", description="A tidy site.")
    assert lint_site(str(tmp_path)) == []


def test_existing_files_are_skipped_unless_forced(tmp_path):
    scaffold_project(str(tmp_path), "First")
    header = tmp_path / "_partials" / "header.html"
    header.write_text("<header>custom</header>\n", encoding="utf-8")

    second = scaffold_project(str(tmp_path), "Second")
    assert str(header) in second.skipped
    assert second.created == []
    assert header.read_text(encoding="utf-8") == "<header>custom</header>\n"

    forced = scaffold_project(str(tmp_path), "Second", force=True)
    assert str(header) in forced.created
    assert "Second" in header.read_text(encoding="utf-8")


def test_helpers():
    assert normalize_base_url("  ") == "https://example.com"
    assert normalize_base_url(None) == "https://example.com"
    assert normalize_base_url("https://a.b/") == "https://a.b"
    assert escape_html("<b>") == "&lt;b&gt;"


def test_cli_requires_name(tmp_path, capsys):
    code = start_project.main(["--project-root", str(tmp_path)])
    assert code == 1
    assert "--name is required." in capsys.readouterr().err
    assert list(tmp_path.iterdir()) == []


def test_cli_scaffolds_and_reports(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(start_project, "BUILD_SCRIPT", str(tmp_path / "no-build.py"))
    code = start_project.main(["-n", "Demo", "--project-root", str(tmp_path / "site")])
    assert code == 0
    out = capsys.readouterr().out
    assert "Created/updated: 9" in out
    assert "Next step: install the build skill" in out

    start_project.main(["-n", "Demo", "--project-root", str(tmp_path / "site")])
    out = capsys.readouterr().out
    assert "Skipped existing: 9" in out
    assert "Use --force to overwrite skipped files." in out


def test_cli_build_without_script_fails(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(start_project, "BUILD_SCRIPT", str(tmp_path / "no-build.py"))
    code = start_project.main(["-n", "Demo", "--project-root", str(tmp_path / "site"), "--build"])
    assert code == 1
    assert "Build skill script not found." in capsys.readouterr().err


def test_cli_build_runs_script_and_propagates_status(tmp_path, monkeypatch):
    script = tmp_path / "build.py"
    script.write_text(
        "import sys\n"
        "root = sys.argv[sys.argv.index('--project-root') + 1]\n"
        "open(root + '/built.txt', 'w').write('ok')\n"
        "sys.exit(3)\n",
        encoding="utf-8",
    )
    monkeypatch.setattr(start_project, "BUILD_SCRIPT", str(script))
    site = tmp_path / "site"

    code = start_project.main(["-n", "Demo", "--project-root", str(site), "--build"])

    assert code == 3
    assert (site / "built.txt").read_text(encoding="utf-8") == "ok"


def test_cli_build_killed_by_signal_exits_one(tmp_path, monkeypatch):
    script = tmp_path / "build.py"
    script.write_text("", encoding="utf-8")
    monkeypatch.setattr(start_project, "BUILD_SCRIPT", str(script))
    monkeypatch.setattr(
        start_project.subprocess,
        "run",
        lambda cmd, cwd: subprocess.CompletedProcess(cmd, -9),
    )

    code = start_project.main(["-n", "Demo", "--project-root", str(tmp_path / "site"), "--build"])

    assert code == 1
