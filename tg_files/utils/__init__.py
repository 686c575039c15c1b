"""Utility modules for tg-files."""

from . import cleanup
from . import retry

__all__ = ["cleanup", "retry"]
