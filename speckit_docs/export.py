"""Write the site descriptor where the static-site generator reads it.

The generator loads a JavaScript config module, so the descriptor is
rendered through Jinja2 as ``module.exports = {...};``. A plain JSON form is
available as well.
"""

from __future__ import annotations

import json
from pathlib import Path

from jinja2 import Environment

from .site_config import SiteDescriptor

CONFIG_MODULE_TEMPLATE = """\
// Generated by speckit-docs export. Edit speckit.yaml instead.
module.exports = {{ site | tojson(indent=2) }};
"""

FORMATS = ("js", "json")

_env = Environment(keep_trailing_newline=True)
_env.policies["json.dumps_kwargs"] = {"sort_keys": False, "ensure_ascii": False}


def default_export_path(project_root: Path, docs_dir: str) -> Path:
    """Return the generator's config module path inside the docs directory."""
    return project_root / docs_dir / ".vuepress" / "config.js"


def render_site(site: SiteDescriptor, fmt: str = "js") -> str:
    """Render a descriptor as a config module or JSON document.

    Args:
        site: Descriptor to render.
        fmt: ``"js"`` for a CommonJS module, ``"json"`` for plain JSON.

    Returns:
        Rendered text ending with a newline.
    """
    if fmt == "js":
        return _env.from_string(CONFIG_MODULE_TEMPLATE).render(site=site.to_dict())
    if fmt == "json":
        return json.dumps(site.to_dict(), indent=2, ensure_ascii=False) + "\n"
    raise ValueError(f"Unknown export format: {fmt!r} (expected one of {FORMATS})")


def export_site(site: SiteDescriptor, target: Path, fmt: str = "js") -> Path:
    """Render ``site`` into ``target``, creating parent directories.

    Returns:
        The path written.
    """
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        f.write(render_site(site, fmt))
    return target
