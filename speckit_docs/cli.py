"""Command-line interface for speckit-docs.

This module defines the CLI commands using Click framework.
All commands operate on the project in the current working directory.

Commands:
- install: Install the pre-commit hook that builds the docs.
- check: Validate the site descriptor.
- export: Write the site descriptor for the static-site generator.
"""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__
from .config import ConfigError, load_config
from .export import FORMATS, default_export_path, export_site
from .hooks import HookSettings, install as install_hook
from .site_config import SiteConfigError, SiteDescriptor, check_site, site_from_dict


@click.group()
@click.version_option(version=__version__, prog_name="speckit-docs")
def cli():
    """Speckit documentation site tooling."""


@cli.command()
@click.option(
    "--hooks-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to install the hook into (overrides speckit.yaml hooks_dir)",
)
@click.option(
    "--build-command",
    help="Command the hook runs to build the docs (overrides speckit.yaml)",
)
def install(hooks_dir: Path | None, build_command: str | None):
    """Install the pre-commit hook that builds the docs."""
    project_root = Path.cwd()
    config = _load_config(project_root)
    if hooks_dir is not None:
        config["hooks_dir"] = str(hooks_dir)
    if build_command:
        config["build_command"] = build_command
    settings = HookSettings.from_config(project_root, config)
    # Filesystem errors are left to abort the command with a traceback.
    target = install_hook(settings)
    click.echo(click.style("Git hooks installed successfully!", fg="green"))
    click.echo(f"  {_display_path(target, project_root)}")


@cli.command()
def check():
    """Validate the site descriptor."""
    project_root = Path.cwd()
    site = _load_site(project_root)
    sidebar_pages = sum(len(pages) for pages in site.sidebar.values())
    click.echo(click.style(f"{site.title} ({site.base})", bold=True))
    click.echo(f"  nav entries: {len(site.nav)}")
    click.echo(f"  sidebar groups: {len(site.sidebar)} ({sidebar_pages} pages)")
    click.echo(click.style("Site descriptor OK", fg="green"))


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File to write (defaults to <docs_dir>/.vuepress/config.js)",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(FORMATS),
    default="js",
    show_default=True,
    help="Output format",
)
def export(output: Path | None, fmt: str):
    """Write the site descriptor for the static-site generator."""
    project_root = Path.cwd()
    config = _load_config(project_root)
    site = _load_site(project_root, config)
    target = output or default_export_path(project_root, config["docs_dir"])
    written = export_site(site, target, fmt)
    click.echo(f"Wrote {_display_path(written, project_root)}")


def _load_config(project_root: Path) -> dict:
    try:
        return load_config(project_root)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def _load_site(project_root: Path, config: dict | None = None) -> SiteDescriptor:
    """Load and validate the site descriptor, reporting problems to the user."""
    if config is None:
        config = _load_config(project_root)
    try:
        return check_site(site_from_dict(config.get("site") or {}))
    except SiteConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def _display_path(path: Path, project_root: Path) -> str:
    """Return a project-relative path when possible."""
    try:
        return str(path.relative_to(project_root))
    except ValueError:
        return str(path)


def main():
    """Entry point for the CLI application."""
    cli()
