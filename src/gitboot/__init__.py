"""Gitboot - interactive git installer and first-time configurator.

Installs git with the native package manager, then sets identity,
preferences, an SSH key and checks connectivity to the hosting service.
"""

from __future__ import annotations


def main() -> None:
    """Entry point for the gitboot CLI."""
    # Lazy import for faster startup
    from gitboot.cli import app

    app()


__all__ = ["main"]
