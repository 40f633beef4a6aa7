"""Residential electrical load calculator package entry.

This lightweight package provides a stable module entrypoint
(python -m loadcalc) while the engine lives in the top-level packages
(core/, domain/, services/, storage/, infra/, app/).
"""

from loadcalc.version import __version__  # single source of truth

__all__ = ["__version__"]
