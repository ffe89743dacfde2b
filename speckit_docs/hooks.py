"""Git hook installation for the documentation build.

The installer materializes a pre-commit shell script that builds the docs
before each commit. It only touches the filesystem: the hooks directory is
created when missing, the script is rewritten on every run, and its mode is
set from configuration. It runs no Git commands.

Filesystem errors are not handled here and reach the caller unchanged.

Key objects:
- HookSettings: Where the hook goes, its mode and the build command it runs.
- render_hook: Produce the hook script text.
- install: Write the hook and make it executable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined

from .config import DEFAULT_CONFIG, parse_mode

DEFAULT_HOOK_NAME = DEFAULT_CONFIG["hook_name"]
DEFAULT_HOOK_MODE = DEFAULT_CONFIG["hook_mode"]
DEFAULT_BUILD_COMMAND = DEFAULT_CONFIG["build_command"]

SKIP_ENV_VAR = "SKIP_BUILD"

HOOK_TEMPLATE = """\
#!/bin/sh
# Pre-commit hook: build the documentation.
# Use SKIP_BUILD=1 to skip the build, e.g.: SKIP_BUILD=1 git commit

if [ "$SKIP_BUILD" = "1" ]; then
  echo "⏭️  Skipping build (SKIP_BUILD=1)"
  exit 0
fi

echo "🔨 Building documentation..."
{{ build_command }}
status=$?

if [ $status -ne 0 ]; then
  echo "❌ Build failed! Please fix errors before committing."
  echo "💡 Tip: Use SKIP_BUILD=1 git commit to skip build"
  exit $status
fi

echo "✅ Build successful!"
exit 0
"""

_env = Environment(keep_trailing_newline=True, undefined=StrictUndefined)


@dataclass(frozen=True)
class HookSettings:
    """Location and contents of the installed hook.

    Attributes:
        hooks_dir: Directory the hook is written into.
        name: Hook filename, which selects the lifecycle point.
        mode: Permission bits applied after writing.
        build_command: Shell command the hook runs to build the docs.
    """

    hooks_dir: Path
    name: str = DEFAULT_HOOK_NAME
    mode: int = DEFAULT_HOOK_MODE
    build_command: str = DEFAULT_BUILD_COMMAND

    @property
    def path(self) -> Path:
        return self.hooks_dir / self.name

    @classmethod
    def from_config(cls, project_root: Path, config: dict[str, Any]) -> HookSettings:
        """Build settings from a loaded speckit.yaml configuration.

        Args:
            project_root: Root directory of the project; relative hook
                directories are resolved against it.
            config: Configuration as returned by load_config.
        """
        hooks_dir = Path(config.get("hooks_dir") or DEFAULT_CONFIG["hooks_dir"])
        if not hooks_dir.is_absolute():
            hooks_dir = project_root / hooks_dir
        return cls(
            hooks_dir=hooks_dir,
            name=str(config.get("hook_name") or DEFAULT_HOOK_NAME),
            mode=parse_mode(config.get("hook_mode", DEFAULT_HOOK_MODE)),
            build_command=str(config.get("build_command") or DEFAULT_BUILD_COMMAND),
        )


def render_hook(build_command: str = DEFAULT_BUILD_COMMAND) -> str:
    """Render the pre-commit script text.

    Args:
        build_command: Command line the hook runs to build the docs.

    Returns:
        The full shell script, ending with a newline.
    """
    return _env.from_string(HOOK_TEMPLATE).render(build_command=build_command)


def install(settings: HookSettings) -> Path:
    """Write the pre-commit hook and mark it executable.

    Creates ``settings.hooks_dir`` (and parents) if needed, overwrites any
    existing hook at ``settings.path`` and applies ``settings.mode``.

    Args:
        settings: Target location, mode and build command.

    Returns:
        Path of the written hook.

    Raises:
        OSError: If the directory or file cannot be created, written or
            chmod-ed.
    """
    settings.hooks_dir.mkdir(parents=True, exist_ok=True)
    target = settings.path
    with open(target, "w", encoding="utf-8", newline="\n") as f:
        f.write(render_hook(settings.build_command))
    os.chmod(target, settings.mode)
    return target
