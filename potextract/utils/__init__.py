"""Utility modules for potextract."""

from potextract.utils.content import normalize_content
from potextract.utils.output import StatsOutput

__all__ = ["StatsOutput", "normalize_content"]
