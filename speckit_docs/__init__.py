"""Speckit documentation site tooling.

This package holds the configuration of the Speckit documentation website and
the small helpers around it: the site descriptor consumed by the external
static-site generator, and an installer for the pre-commit hook that builds
the docs before every commit.

The main entry point is the CLI module, which provides commands for
installing the hook, validating the site descriptor and exporting it for the
generator.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
