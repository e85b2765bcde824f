"""Clean raw water-quality observation extracts.

This stage:
- Validates input structure (early fail on missing columns)
- Parses sample_date to timestamps and depth to numbers
- Splits each text channel into value, censored and flagged columns
- Counts dropped cells (ambiguous or unparseable) per channel
- Validates output schema

Design principles:
- Cell problems are counted, never fatal
- Structural problems are fatal
- Idempotent: a cleaned numeric column parses to itself
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

import pandas as pd

from cascowq.clean.parse_flags import ParseSummary, parse_channel
from cascowq.schemas.observations import (
    DEPTH_FIELD,
    OBSERVATION_KEY_FIELDS,
    output_columns,
    validate_clean_observations,
    validate_raw_observations,
)
from cascowq.schemas.qualifiers import CHANNEL_RULES, rule_for
from cascowq.utils.tables import read_table, write_table


@dataclass
class CleaningReport:
    """Row and cell counts from one cleaning run."""

    rows: int = 0
    summaries: dict[str, ParseSummary] = field(default_factory=dict)

    @property
    def dropped_cells(self) -> int:
        return sum(s.dropped for s in self.summaries.values())


def detect_channels(columns: Iterable[str]) -> list[str]:
    """Return the known channels present in a raw extract, in column order."""
    return [c for c in columns if c in CHANNEL_RULES]


def _validate_input_schema(df: pd.DataFrame, channels: list[str]) -> None:
    """Structural check only; cell contents are handled by the parser.

    Raises:
        ValueError: If key or channel columns are missing, or no channel
            was requested
    """
    if not channels:
        raise ValueError("[observations_input] No channels to clean")
    validate_raw_observations(df, channels)


def print_cleaning_stats(report: CleaningReport) -> None:
    """Print summary statistics after cleaning."""
    print("[clean] Cleaning summary:")
    print(f"  Total rows: {report.rows}")

    for channel, s in report.summaries.items():
        valid = s.total - s.missing - s.dropped
        print(
            f"  {channel}: {valid} values, {s.censored} censored, "
            f"{s.flagged} flagged, {s.missing} missing"
        )
        if s.ambiguous:
            print(f"    dropped {s.ambiguous} ambiguous multi-value cells")
        if s.unparseable:
            print(f"    dropped {s.unparseable} unparseable cells")
        if s.unknown_codes:
            codes = ", ".join(f"{c}={n}" for c, n in sorted(s.unknown_codes.items()))
            print(f"    ignored unknown qualifier codes: {codes}")

    if report.dropped_cells:
        print(f"  Dropped cells (all channels): {report.dropped_cells}")


def clean_observations(
    df: pd.DataFrame,
    channels: Iterable[str] | None = None,
    verbose: bool = True,
) -> tuple[pd.DataFrame, CleaningReport]:
    """Clean a raw observation extract.

    Cleaning steps (in order):
    1. Validate input structure (early fail)
    2. Parse sample_date and depth
    3. Parse each channel into <ch>, <ch>_cens, <ch>_flag
    4. Sort by site, sample_date and depth
    5. Validate output schema

    Args:
        df: Raw extract, one text column per channel
        channels: Channels to parse (default: every known channel present)
        verbose: If True, print cleaning statistics (default True)

    Returns:
        Tuple of (cleaned DataFrame, CleaningReport)

    Raises:
        ValueError: If input or output fails schema validation
    """
    channels = list(channels) if channels is not None else detect_channels(df.columns)
    _validate_input_schema(df, channels)

    out = df.reset_index(drop=True)
    out["sample_date"] = pd.to_datetime(out["sample_date"])
    if DEPTH_FIELD in out.columns:
        out[DEPTH_FIELD] = pd.to_numeric(out[DEPTH_FIELD], errors="coerce")

    report = CleaningReport(rows=len(out))
    for channel in channels:
        parsed, summary = parse_channel(out[channel], rule_for(channel), channel=channel)
        out = out.drop(columns=[channel]).join(parsed)
        report.summaries[channel] = summary

    sort_cols = [c for c in OBSERVATION_KEY_FIELDS + [DEPTH_FIELD] if c in out.columns]
    out = out.sort_values(sort_cols, kind="stable").reset_index(drop=True)
    out = out[output_columns(out.columns, channels)]

    validate_clean_observations(out, channels)

    if verbose:
        print_cleaning_stats(report)

    return out, report


def clean_observations_file(
    input_path: Path | str,
    output_path: Path | str,
    channels: Iterable[str] | None = None,
    verbose: bool = True,
) -> Path:
    """Read, clean, and write an observation extract.

    Args:
        input_path: Raw extract (CSV or parquet)
        output_path: Where to write the cleaned table
        channels: Channels to parse (default: every known channel present)
        verbose: If True, print cleaning statistics

    Returns:
        Path to written output file

    Raises:
        ValueError: If input or output fails schema validation
    """
    df = read_table(input_path, as_text=True)
    cleaned, _ = clean_observations(df, channels=channels, verbose=verbose)
    output_path = write_table(cleaned, output_path)

    if verbose:
        print(f"[clean] Wrote {len(cleaned)} rows to {output_path}")

    return output_path
