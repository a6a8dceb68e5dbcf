"""Plan, create and resize the disks of a QEMU image build."""

from __future__ import annotations

__version__ = '0.1.0'
