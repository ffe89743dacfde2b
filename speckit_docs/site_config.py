"""Site descriptor for the Speckit documentation website.

The descriptor is the static configuration the external static-site
generator reads once at build time: title, description, base path, head
tags, navigation, sidebar groups and markdown rendering flags. Its field
names and nesting on the wire (see ``SiteDescriptor.to_dict``) follow the
generator's config format, so overrides in speckit.yaml use the same keys.

Key functions:
- default_site: The descriptor the Speckit docs are published with.
- site_from_dict: Build a descriptor from wire-shaped data merged over defaults.
- validate_site: Collect structural problems in a descriptor.
- check_site: Raise SiteConfigError if any problem is found.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

__all__ = [
    "DEFAULT_SITE_DATA",
    "HeadTag",
    "MarkdownOptions",
    "NavLink",
    "SiteConfigError",
    "SiteDescriptor",
    "ThemeConfig",
    "check_site",
    "default_site",
    "site_from_dict",
    "validate_site",
]


class SiteConfigError(ValueError):
    """Raised when the site descriptor is malformed or invalid."""


DEFAULT_SITE_DATA: dict[str, Any] = {
    "title": "Speckit 文档",
    "description": "Spec-Driven Development (SDD) 规范驱动开发完整指南",
    "base": "/spec-kit/",
    "head": [
        ["link", {"rel": "icon", "href": "/favicon.ico"}],
    ],
    "themeConfig": {
        "nav": [
            {"text": "首页", "link": "/"},
            {"text": "介绍", "link": "/guide/"},
            {"text": "最佳实践", "link": "/best-practices/"},
            {"text": "使用指南", "link": "/usage/"},
            {"text": "GitHub", "link": "https://github.com/github/spec-kit"},
        ],
        "sidebar": {
            "/guide/": [
                "",
                "what-is-sdd",
                "why-sdd",
                "core-concepts",
                "ai-acceleration",
            ],
            "/best-practices/": [
                "",
                "spec-writing",
                "team-collaboration",
                "implementation",
                "testing",
            ],
            "/usage/": [
                "",
                "getting-started",
                "examples",
                "tools",
            ],
        },
        "sidebarDepth": 2,
        "lastUpdated": "最后更新",
        "smoothScroll": True,
    },
    "markdown": {
        "lineNumbers": True,
    },
}


@dataclass(frozen=True)
class HeadTag:
    """A tag injected into the generated pages' ``<head>``."""

    tag: str
    attrs: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    content: str | None = None

    def to_list(self) -> list[Any]:
        item: list[Any] = [self.tag, dict(self.attrs)]
        if self.content is not None:
            item.append(self.content)
        return item


@dataclass(frozen=True)
class NavLink:
    """Top navigation entry."""

    text: str
    link: str


@dataclass(frozen=True)
class ThemeConfig:
    """Navigation and sidebar structure handed to the default theme.

    Attributes:
        nav: Ordered top navigation entries.
        sidebar: Section path (e.g. ``/guide/``) to ordered page identifiers.
            The empty identifier stands for the section's index page.
        sidebar_depth: How many heading levels the sidebar expands.
        last_updated: Label for the last-updated footer, or False to hide it.
        smooth_scroll: Whether in-page anchors scroll smoothly.
    """

    nav: tuple[NavLink, ...]
    sidebar: Mapping[str, tuple[str, ...]]
    sidebar_depth: int = 2
    last_updated: str | bool = False
    smooth_scroll: bool = False


@dataclass(frozen=True)
class MarkdownOptions:
    """Markdown rendering flags."""

    line_numbers: bool = False


@dataclass(frozen=True)
class SiteDescriptor:
    """Complete, immutable description of the documentation site."""

    title: str
    description: str
    base: str
    head: tuple[HeadTag, ...]
    theme: ThemeConfig
    markdown: MarkdownOptions

    @property
    def nav(self) -> tuple[NavLink, ...]:
        return self.theme.nav

    @property
    def sidebar(self) -> Mapping[str, tuple[str, ...]]:
        return self.theme.sidebar

    def to_dict(self) -> dict[str, Any]:
        """Return the descriptor in the generator's config shape."""
        return {
            "title": self.title,
            "description": self.description,
            "base": self.base,
            "head": [tag.to_list() for tag in self.head],
            "themeConfig": {
                "nav": [{"text": n.text, "link": n.link} for n in self.theme.nav],
                "sidebar": {
                    path: list(pages) for path, pages in self.theme.sidebar.items()
                },
                "sidebarDepth": self.theme.sidebar_depth,
                "lastUpdated": self.theme.last_updated,
                "smoothScroll": self.theme.smooth_scroll,
            },
            "markdown": {
                "lineNumbers": self.markdown.line_numbers,
            },
        }


def default_site() -> SiteDescriptor:
    """Return the descriptor the Speckit documentation is published with."""
    return site_from_dict({})


def site_from_dict(data: Mapping[str, Any] | None) -> SiteDescriptor:
    """Build a site descriptor from generator-shaped data.

    ``data`` is merged over ``DEFAULT_SITE_DATA``: top-level keys replace the
    defaults, while ``themeConfig`` and ``markdown`` are merged one level
    deep so a single theme key can be overridden on its own.

    Args:
        data: Overrides using the generator's key names, or None.

    Returns:
        The resulting SiteDescriptor.

    Raises:
        SiteConfigError: If a value has the wrong shape.
    """
    merged = _merge(DEFAULT_SITE_DATA, data or {})
    theme = _require_mapping(merged.get("themeConfig"), "themeConfig")
    markdown = _require_mapping(merged.get("markdown"), "markdown")
    return SiteDescriptor(
        title=_require_str(merged.get("title"), "title"),
        description=_require_str(merged.get("description"), "description"),
        base=_require_str(merged.get("base"), "base"),
        head=tuple(_parse_head(merged.get("head") or [])),
        theme=ThemeConfig(
            nav=tuple(_parse_nav(theme.get("nav") or [])),
            sidebar=_parse_sidebar(theme.get("sidebar") or {}),
            sidebar_depth=_require_int(theme.get("sidebarDepth", 2), "sidebarDepth"),
            last_updated=_parse_last_updated(theme.get("lastUpdated", False)),
            smooth_scroll=bool(theme.get("smoothScroll", False)),
        ),
        markdown=MarkdownOptions(line_numbers=bool(markdown.get("lineNumbers", False))),
    )


def validate_site(site: SiteDescriptor) -> list[str]:
    """Collect structural problems in a site descriptor.

    Args:
        site: Descriptor to inspect.

    Returns:
        Human-readable problems; empty when the descriptor is well-formed.
    """
    problems: list[str] = []
    if not site.title.strip():
        problems.append("title must not be empty")
    if not site.description.strip():
        problems.append("description must not be empty")
    if not _is_section_path(site.base):
        problems.append(f"base must start and end with '/': {site.base!r}")

    for index, tag in enumerate(site.head):
        if not tag.tag.strip():
            problems.append(f"head[{index}] has an empty tag name")

    for index, link in enumerate(site.theme.nav):
        if not link.text.strip():
            problems.append(f"nav[{index}] has an empty label")
        if not link.link.strip():
            problems.append(f"nav[{index}] ({link.text}) has an empty link")

    for path, pages in site.theme.sidebar.items():
        if not _is_section_path(path):
            problems.append(f"sidebar key must start and end with '/': {path!r}")
        if not pages:
            problems.append(f"sidebar group {path} has no pages")
            continue
        seen: set[str] = set()
        for page in pages:
            if page in seen:
                label = page or "(index)"
                problems.append(f"sidebar group {path} lists {label} more than once")
            seen.add(page)

    if site.theme.sidebar_depth < 0:
        problems.append("sidebarDepth must not be negative")
    return problems


def check_site(site: SiteDescriptor) -> SiteDescriptor:
    """Return ``site`` unchanged, or raise if it has problems.

    Raises:
        SiteConfigError: Listing every problem found by validate_site.
    """
    problems = validate_site(site)
    if problems:
        raise SiteConfigError("Invalid site descriptor:\n  " + "\n  ".join(problems))
    return site


def _merge(defaults: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    if not isinstance(overrides, Mapping):
        raise SiteConfigError("site overrides must be a mapping")
    merged = dict(defaults)
    for key, value in overrides.items():
        if key in ("themeConfig", "markdown") and isinstance(value, Mapping):
            nested = dict(defaults.get(key) or {})
            nested.update(value)
            merged[key] = nested
        else:
            merged[key] = value
    return merged


def _is_section_path(path: str) -> bool:
    return path.startswith("/") and path.endswith("/")


def _require_mapping(value: Any, name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise SiteConfigError(f"{name} must be a mapping, got {type(value).__name__}")
    return value


def _require_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise SiteConfigError(f"{name} must be a string, got {type(value).__name__}")
    return value


def _require_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SiteConfigError(f"{name} must be an integer, got {value!r}")
    return value


def _parse_last_updated(value: Any) -> str | bool:
    if isinstance(value, (str, bool)):
        return value
    raise SiteConfigError(f"lastUpdated must be a string or boolean, got {value!r}")


def _parse_head(items: Any) -> list[HeadTag]:
    if not isinstance(items, Sequence) or isinstance(items, str):
        raise SiteConfigError("head must be a list of [tag, attributes] entries")
    tags = []
    for index, item in enumerate(items):
        if isinstance(item, str) or not isinstance(item, Sequence) or not 1 <= len(item) <= 3:
            raise SiteConfigError(
                f"head[{index}] must be [tag, attributes] or [tag, attributes, content]"
            )
        tag = _require_str(item[0], f"head[{index}] tag")
        attrs = _require_mapping(item[1] if len(item) > 1 else None, f"head[{index}] attributes")
        content = _require_str(item[2], f"head[{index}] content") if len(item) > 2 else None
        tags.append(
            HeadTag(
                tag=tag,
                attrs=MappingProxyType({str(k): v for k, v in attrs.items()}),
                content=content,
            )
        )
    return tags


def _parse_nav(items: Any) -> list[NavLink]:
    if not isinstance(items, Sequence) or isinstance(items, str):
        raise SiteConfigError("themeConfig.nav must be a list")
    links = []
    for index, item in enumerate(items):
        entry = _require_mapping(item, f"nav[{index}]")
        links.append(
            NavLink(
                text=_require_str(entry.get("text", ""), f"nav[{index}].text"),
                link=_require_str(entry.get("link", ""), f"nav[{index}].link"),
            )
        )
    return links


def _parse_sidebar(groups: Any) -> Mapping[str, tuple[str, ...]]:
    groups = _require_mapping(groups, "themeConfig.sidebar")
    parsed: dict[str, tuple[str, ...]] = {}
    for path, pages in groups.items():
        path = _require_str(path, "sidebar key")
        if pages is None:
            pages = []
        if isinstance(pages, str) or not isinstance(pages, Sequence):
            raise SiteConfigError(f"sidebar group {path} must be a list of pages")
        parsed[path] = tuple(
            _require_str(page, f"sidebar group {path} page") for page in pages
        )
    return MappingProxyType(parsed)
