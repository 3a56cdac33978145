"""Operating-system adapters."""

from .process import ProcessError, run_live, which

__all__ = ["ProcessError", "run_live", "which"]
