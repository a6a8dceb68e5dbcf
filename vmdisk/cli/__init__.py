"""CLI package exports for top-level command entry points."""

from __future__ import annotations

from .main import VMDiskModalCLI, main

__all__ = ['VMDiskModalCLI', 'main']
