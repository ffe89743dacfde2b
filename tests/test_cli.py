import stat
import subprocess
import sys
from pathlib import Path

from click.testing import CliRunner

from speckit_docs import __version__
from speckit_docs.cli import cli
from speckit_docs.hooks import render_hook


def test_cli_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_install_creates_hook(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()

    result = runner.invoke(cli, ["install"], catch_exceptions=False)

    assert result.exit_code == 0
    assert "Git hooks installed successfully!" in result.output
    hook = tmp_path / ".git" / "hooks" / "pre-commit"
    assert hook.exists()
    assert hook.read_text(encoding="utf-8") == render_hook()
    assert stat.S_IMODE(hook.stat().st_mode) & stat.S_IXUSR


def test_install_reads_speckit_yaml(tmp_path, monkeypatch):
    (tmp_path / "speckit.yaml").write_text(
        "hooks_dir: hooks\nhook_mode: '700'\nbuild_command: make docs\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli, ["install"], catch_exceptions=False)

    assert result.exit_code == 0
    hook = tmp_path / "hooks" / "pre-commit"
    assert hook.read_text(encoding="utf-8") == render_hook("make docs")
    assert stat.S_IMODE(hook.stat().st_mode) == 0o700


def test_install_option_overrides(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target_dir = tmp_path / "custom"

    result = CliRunner().invoke(
        cli,
        ["install", "--hooks-dir", str(target_dir), "--build-command", "mkdocs build"],
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert "mkdocs build" in (target_dir / "pre-commit").read_text(encoding="utf-8")


def test_install_failure_exits_non_zero(tmp_path, monkeypatch):
    (tmp_path / ".git").write_text("gitdir: elsewhere\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli, ["install"])

    assert result.exit_code != 0
    assert isinstance(result.exception, OSError)
    assert "installed successfully" not in result.output


def test_install_bad_config(tmp_path, monkeypatch):
    (tmp_path / "speckit.yaml").write_text("hook_mode: rwx\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli, ["install"])

    assert result.exit_code == 1
    assert "Invalid hook_mode" in result.output


def test_check_default_site(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["check"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "/spec-kit/" in result.output
    assert "nav entries: 5" in result.output
    assert "sidebar groups: 3 (14 pages)" in result.output
    assert "Site descriptor OK" in result.output


def test_check_invalid_site(tmp_path, monkeypatch):
    (tmp_path / "speckit.yaml").write_text(
        "site:\n  themeConfig:\n    sidebar:\n      /guide/: []\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli, ["check"])

    assert result.exit_code == 1
    assert "sidebar group /guide/ has no pages" in result.output


def test_export_default_target(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["export"], catch_exceptions=False)
    assert result.exit_code == 0
    target = tmp_path / "docs" / ".vuepress" / "config.js"
    assert target.exists()
    assert "module.exports" in target.read_text(encoding="utf-8")


def test_export_json_to_custom_path(tmp_path, monkeypatch):
    (tmp_path / "speckit.yaml").write_text("site:\n  title: My Docs\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    out = tmp_path / "build" / "site.json"

    result = CliRunner().invoke(
        cli, ["export", "--format", "json", "-o", str(out)], catch_exceptions=False
    )

    assert result.exit_code == 0
    assert '"title": "My Docs"' in out.read_text(encoding="utf-8")


def test_export_refuses_invalid_site(tmp_path, monkeypatch):
    (tmp_path / "speckit.yaml").write_text("site:\n  base: docs\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli, ["export"])

    assert result.exit_code == 1
    assert not (tmp_path / "docs").exists()


def test_module_main_entrypoint():
    project_root = Path(__file__).resolve().parents[1]
    result = subprocess.run(
        [sys.executable, "-m", "speckit_docs", "--version"],
        cwd=project_root,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert f"speckit-docs, version {__version__}" in result.stdout


def test_invalid_yaml_reports_error(tmp_path, monkeypatch):
    (tmp_path / "speckit.yaml").write_text("site: [unclosed\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    for command in ("check", "export", "install"):
        result = CliRunner().invoke(cli, [command])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "speckit.yaml" in result.output
    assert not (tmp_path / ".git").exists()


def test_install_rejects_unquoted_decimal_mode(tmp_path, monkeypatch):
    (tmp_path / "speckit.yaml").write_text("hook_mode: 755\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli, ["install"])

    assert result.exit_code == 1
    assert "write '755' or 0o755" in result.output
    assert not (tmp_path / ".git" / "hooks" / "pre-commit").exists()


def test_invalid_site_reported_once(tmp_path, monkeypatch):
    (tmp_path / "speckit.yaml").write_text("site:\n  base: docs\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli, ["check"])

    assert result.exit_code == 1
    assert result.output.count("nvalid site descriptor") == 1
def test_main_invokes_cli(monkeypatch):
    import speckit_docs.cli as cli_mod

    called = {}

    def fake_cli():
        called["ran"] = True

    monkeypatch.setattr(cli_mod, "cli", fake_cli)
    cli_mod.main()
    assert called["ran"]
