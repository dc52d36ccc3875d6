"""Utility modules for logging and numeric helpers."""

from .logging import setup_logging
from .rounding import round_half_up, clamp

__all__ = ["setup_logging", "round_half_up", "clamp"]
