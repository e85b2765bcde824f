"""Data cleaning modules."""

from cascowq.clean.clean_observations import (
    CleaningReport,
    clean_observations,
    clean_observations_file,
)
from cascowq.clean.parse_flags import ParsedValue, ParseSummary, parse_cell, parse_channel

__all__ = [
    "CleaningReport",
    "ParsedValue",
    "ParseSummary",
    "clean_observations",
    "clean_observations_file",
    "parse_cell",
    "parse_channel",
]
